"""
app/core/dependencies.py

Authentication and Authorization Dependencies

Provides authentication and role-based access control (RBAC) for FastAPI routes:
- Validates JWT tokens from Bearer header OR HttpOnly cookie
- Checks against blacklisted tokens (logout protection)
- Retrieves the authenticated user and rejects suspended or banned accounts
- Restricts access by role list or by named permission

Pagination Dependency:
- Provides reusable dependency for pagination (skip, limit).
"""

import logging
from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Cookie, Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.schemas import TokenPayload
from app.core.blacklist import is_token_blacklisted
from app.core.permissions import has_permission
from app.core.tokens import decode_access_token
from app.database.enums import UserRole, UserStatus
from app.database.models import User
from app.database.session import get_db

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# OAuth2 Configuration
# ---------------------------------------------------
# auto_error=False so a missing header falls through to the cookie
oauth2_scheme: OAuth2PasswordBearer = OAuth2PasswordBearer(
    tokenUrl="/auth/login/oauth", auto_error=False
)

BLOCKED_STATUSES = (UserStatus.SUSPENDED, UserStatus.BANNED)


# ---------------------------------------------------
# Pagination Dependency
# ---------------------------------------------------
class PaginationParams:
    """
    Dependency that provides pagination parameters from query parameters.
    """

    def __init__(
        self,
        skip: int = Query(0, ge=0, description="Number of records to skip for pagination"),
        limit: int = Query(50, ge=1, le=100, description="Maximum number of records to return"),
    ):
        self.skip = skip
        self.limit = limit


# ---------------------------------------------------
# Authentication
# ---------------------------------------------------
async def get_current_user(
    token_header: Annotated[str | None, Depends(oauth2_scheme)] = None,
    token_cookie: Annotated[str | None, Cookie(alias="access_token")] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Authenticate the current user from the Bearer header, falling back to the cookie.

    Raises:
        HTTPException: 401 if the token is missing, invalid, revoked or orphaned;
                       403 if the account is suspended or banned.
    """
    token = token_header or token_cookie

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"} if token is None else None,
    )

    if token is None:
        logger.debug("[AUTH] No token found in Authorization header or access_token cookie.")
        raise credentials_exception

    try:
        payload = decode_access_token(token)
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError) as e:
        logger.warning(f"[AUTH] JWT decoding/validation failed: {e}")
        raise credentials_exception

    if token_data.jti and await is_token_blacklisted(token_data.jti):
        logger.warning(f"[AUTH] Blacklisted token detected: jti={token_data.jti}")
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == token_data.sub))
    user = result.scalar_one_or_none()

    if not user:
        logger.warning(f"[AUTH] JWT valid but no matching user found: user_id={token_data.sub}")
        raise credentials_exception

    if user.status in BLOCKED_STATUSES:
        logger.warning(f"[AUTH] Request by {user.status.value} account {user.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Your account is {user.status.value.lower()}. Please contact support.",
        )

    logger.debug(
        f"[AUTH] User {user.id} authenticated via {'Header' if token_header else 'Cookie'}."
    )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


# ---------------------------------------------------
# Authorization
# ---------------------------------------------------
def require_roles(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, User]]:
    """
    Dependency to restrict access to users having any of the specified roles.
    """

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(
                f"[RBAC] Access denied: User {user.id} with role {user.role} attempted access (allowed roles: {roles})"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role: {user.role.value}",
            )
        return user

    return checker


def require_permission(permission: str) -> Callable[..., Coroutine[Any, Any, User]]:
    """
    Dependency allowing only roles granted `permission` in the permission map.
    """

    async def checker(user: User = Depends(get_current_user)) -> User:
        if not has_permission(user.role, permission):
            logger.warning(f"[RBAC] {user.id} ({user.role.value}) lacks permission '{permission}'")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role: {user.role.value}",
            )
        return user

    return checker
