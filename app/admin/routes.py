"""
app/admin/routes.py

Admin API Routes

Defines routes for back-office account management:
- Listing regular members and staff accounts with stats
- Viewing, editing, deleting and creating accounts
- Working the phone verification queue
- Sidebar badge counts

Access is restricted by role; staff management needs a supervisor or higher.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin import schemas
from app.admin.services import AdminService, UserService
from app.core.dependencies import PaginationParams, require_roles
from app.core.limiter import limiter
from app.core.permissions import ADMIN_ROLES, SUPERVISOR_ROLES
from app.core.schemas import MessageResponse, PaginatedResponse
from app.database.enums import UserRole
from app.database.models import User
from app.database.session import get_db

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

VERIFICATION_ROLES = (
    UserRole.SUPER_ADMIN,
    UserRole.SUPERVISOR,
    UserRole.CONTENT_EDITOR,
    UserRole.SUPPORT_AGENT,
)

# ---------------------------------------------------
# Dependencies
# ---------------------------------------------------
DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedAdminDep = Annotated[User, Depends(require_roles(*ADMIN_ROLES))]
AuthenticatedSupervisorDep = Annotated[User, Depends(require_roles(*SUPERVISOR_ROLES))]
VerificationStaffDep = Annotated[User, Depends(require_roles(*VERIFICATION_ROLES))]


# ---------------------------------------------------
# Account Listings
# ---------------------------------------------------
@router.get(
    "/users/regular",
    response_model=schemas.RegularUsersResponse,
    status_code=status.HTTP_200_OK,
    summary="List Regular Members",
    description="Members with profile counts plus headline stats. Any admin role.",
)
@limiter.limit("20/minute")
async def list_regular_users(
    request: Request, db: DBDep, current_user: AuthenticatedAdminDep
) -> schemas.RegularUsersResponse:
    """Retrieve all USER accounts with stats."""
    return await UserService(db).list_regular_users()


@router.get(
    "/users/admins",
    response_model=schemas.AdminUsersResponse,
    status_code=status.HTTP_200_OK,
    summary="List Staff Accounts",
)
@limiter.limit("20/minute")
async def list_admin_users(
    request: Request, db: DBDep, current_user: AuthenticatedSupervisorDep
) -> schemas.AdminUsersResponse:
    """Retrieve all staff accounts with counts per role."""
    return await UserService(db).list_admin_users()


# ---------------------------------------------------
# Phone Verification Queue
# ---------------------------------------------------
@router.get(
    "/users/verification",
    response_model=PaginatedResponse[schemas.VerificationQueueItem],
    status_code=status.HTTP_200_OK,
    summary="Phone Verification Queue",
    description="pending: open requests; unverified: members with an unverified phone; all: members with a phone.",
)
@limiter.limit("30/minute")
async def list_verification_queue(
    request: Request,
    db: DBDep,
    current_user: VerificationStaffDep,
    pagination: PaginationParams = Depends(),
    tab: schemas.VerificationTab = Query("pending"),
    search: str | None = Query(None, description="Name, email or phone"),
) -> PaginatedResponse[schemas.VerificationQueueItem]:
    """Retrieve one tab of the verification queue."""
    items, total = await AdminService(db).list_verification_queue(
        tab, search, pagination.skip, pagination.limit
    )
    return PaginatedResponse(
        total_count=total,
        has_next_page=(pagination.skip + pagination.limit) < total,
        items=items,
    )


@router.get(
    "/users/verification/pending-count",
    response_model=schemas.CountResponse,
    status_code=status.HTTP_200_OK,
    summary="Pending Phone Verification Count",
)
@limiter.limit("60/minute")
async def get_pending_verification_count(
    request: Request, db: DBDep, current_user: VerificationStaffDep
) -> schemas.CountResponse:
    """Count open phone verification requests."""
    return schemas.CountResponse(count=await AdminService(db).count_pending_verifications())


@router.put(
    "/users/verification",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify or Reject Phone",
)
@limiter.limit("30/minute")
async def process_verification(
    request: Request,
    payload: schemas.VerificationActionRequest,
    db: DBDep,
    current_user: VerificationStaffDep,
) -> MessageResponse:
    """Verify a phone by request or user, or reject a request."""
    return MessageResponse(detail=await AdminService(db).process_verification(current_user, payload))


# ---------------------------------------------------
# Account Creation
# ---------------------------------------------------
@router.post(
    "/users/create-regular",
    response_model=schemas.CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Member Account",
    description="A strong password is generated and returned when none is supplied.",
)
@limiter.limit("10/minute")
async def create_regular_user(
    request: Request,
    payload: schemas.CreateRegularUserRequest,
    db: DBDep,
    current_user: AuthenticatedSupervisorDep,
) -> schemas.CreateUserResponse:
    """Create a USER account with free-tier wallets."""
    return await UserService(db).create_regular_user(current_user, payload)


@router.post(
    "/users/create-admin",
    response_model=schemas.CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Staff Account",
    description="The role must be one the caller is allowed to create.",
)
@limiter.limit("10/minute")
async def create_admin_user(
    request: Request,
    payload: schemas.CreateAdminRequest,
    db: DBDep,
    current_user: AuthenticatedSupervisorDep,
) -> schemas.CreateUserResponse:
    """Create a verified staff account."""
    return await UserService(db).create_admin_user(current_user, payload)


# ---------------------------------------------------
# Single Account
# ---------------------------------------------------
@router.get(
    "/users/{user_id}",
    response_model=schemas.AdminUserDetail,
    status_code=status.HTTP_200_OK,
    summary="Get User Details by ID",
)
@limiter.limit("30/minute")
async def get_user_details(
    request: Request, user_id: UUID, db: DBDep, current_user: AuthenticatedSupervisorDep
) -> schemas.AdminUserDetail:
    """Retrieve detailed information for a specific user."""
    return await UserService(db).get_user(user_id)


@router.patch(
    "/users/{user_id}",
    response_model=schemas.AdminUserUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Update User",
)
@limiter.limit("20/minute")
async def update_user(
    request: Request,
    user_id: UUID,
    payload: schemas.AdminUserUpdate,
    db: DBDep,
    current_user: AuthenticatedSupervisorDep,
) -> schemas.AdminUserUpdateResponse:
    """Edit account fields, role, status and verification flags."""
    return await UserService(db).update_user(current_user, user_id, payload)


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete User",
    description="Removes the account with its profiles, transactions and wallets.",
)
@limiter.limit("5/minute")
async def delete_user(
    request: Request, user_id: UUID, db: DBDep, current_user: AuthenticatedSupervisorDep
) -> MessageResponse:
    """Delete an account permanently."""
    return MessageResponse(detail=await UserService(db).delete_user(current_user, user_id))


# ---------------------------------------------------
# Sidebar
# ---------------------------------------------------
@router.get(
    "/sidebar-counts",
    response_model=schemas.SidebarCounts,
    status_code=status.HTTP_200_OK,
    summary="Sidebar Badge Counts",
)
@limiter.limit("60/minute")
async def get_sidebar_counts(
    request: Request, db: DBDep, current_user: AuthenticatedAdminDep
) -> schemas.SidebarCounts:
    """Counts shown next to back-office menu entries."""
    return await AdminService(db).get_sidebar_counts()
