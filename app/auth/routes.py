"""
auth/routes.py

Handles authentication routes including:
- Email OTP issue and verification
- Registration, login via JSON or OAuth2 form, and logout
- Password reset and change
- Account settings and phone verification
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import services
from app.auth.schemas import (
    AccountResponse,
    AccountUpdateRequest,
    AuthSuccessResponse,
    AuthUserResponse,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PhoneVerificationStatus,
    PhoneVerifyRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    SendOtpRequest,
    SendOtpResponse,
    VerifyOtpRequest,
)
from app.core.config import settings
from app.core.dependencies import get_current_user
from app.core.limiter import limiter
from app.core.schemas import MessageResponse
from app.database.models import User
from app.database.session import get_db

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


def _set_auth_cookie(response: Response, login_result: AuthSuccessResponse) -> LoginResponse:
    response.set_cookie(
        key="access_token",
        value=login_result.access_token,
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
        domain=None,
    )
    return LoginResponse(user=login_result.user)


# ---------------------------------------------------
# Email OTP
# ---------------------------------------------------
@router.post(
    "/send-otp",
    response_model=SendOtpResponse,
    status_code=status.HTTP_200_OK,
    summary="Send Email Verification Code",
    description="Emails a six digit code for registration, password reset or email change.",
)
@limiter.limit("5/minute")
async def send_otp(
    request: Request,
    payload: SendOtpRequest,
    db: AsyncSession = Depends(get_db),
) -> SendOtpResponse:
    """
    Issues a new code to the given address.
    """
    return await services.send_otp(payload, db)


@router.post(
    "/verify-otp",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify Email Code",
)
@limiter.limit("10/minute")
async def verify_otp(
    request: Request,
    payload: VerifyOtpRequest,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Checks a code previously sent by email.
    """
    return await services.verify_otp(payload, db)


# ---------------------------------------------------
# Registration
# ---------------------------------------------------
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register New User",
    description="Creates a member account once the email was verified with a REGISTRATION code.",
)
@limiter.limit("5/minute")
async def register(
    request: Request,
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    """
    Registers a new user.
    """
    return await services.register_user(payload, db)


# ---------------------------------------------------
# Login (JSON)
# ---------------------------------------------------
@router.post(
    "/login/json",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with JSON (Cookie Auth)",
    description="Authenticates user via JSON. Returns user info in body; sets session token in HttpOnly cookie.",
)
@limiter.limit("10/minute")
async def login_json(
    request: Request,
    payload: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticates a user using JSON payload (email and password).
    Sets the access token in an HttpOnly cookie for session management.
    """
    client_ip = request.client.host if request.client else "unknown"
    login_result = await services.login_user_json(payload, db, client_ip)
    return _set_auth_cookie(response, login_result)


# ---------------------------------------------------
# Login (OAuth2 Form)
# ---------------------------------------------------
@router.post(
    "/login/oauth",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with OAuth2 Form (Cookie Auth)",
    description="Authenticates user via form data. Returns user info in body; sets session token in HttpOnly cookie.",
)
@limiter.limit("10/minute")
async def login_oauth(
    request: Request,
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticates a user using OAuth2 form data (username and password).
    """
    client_ip = request.client.host if request.client else "unknown"
    login_result = await services.login_user_oauth(form_data, db, client_ip)
    return _set_auth_cookie(response, login_result)


# ---------------------------------------------------
# Logout
# ---------------------------------------------------
@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout User",
    description="Blacklists the current JWT access token and clears the session cookie.",
)
@limiter.limit("20/minute")
async def logout(request: Request, response: Response) -> MessageResponse:
    """
    Logs out a user by blacklisting their JWT access token (from header or cookie).
    """
    auth_header = request.headers.get("Authorization")
    token_from_cookie = request.cookies.get("access_token")
    token_to_blacklist = None
    if auth_header and auth_header.startswith("Bearer "):
        token_to_blacklist = auth_header.replace("Bearer ", "")
    elif token_from_cookie:
        token_to_blacklist = token_from_cookie

    if not token_to_blacklist:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    result = await services.logout_user_token(token_to_blacklist)
    response.delete_cookie(key="access_token", path="/")
    return result


# ---------------------------------------------------
# Current User
# ---------------------------------------------------
@router.get(
    "/me",
    response_model=AuthUserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Current User",
)
@limiter.limit("30/minute")
async def me(
    request: Request,
    current_user: User = Depends(get_current_user),
) -> AuthUserResponse:
    """
    Returns the authenticated user.
    """
    return AuthUserResponse.model_validate(current_user)


# ---------------------------------------------------
# Password Reset / Change
# ---------------------------------------------------
@router.post(
    "/reset-password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Reset Password",
    description="Sets a new password after a PASSWORD_RESET code was verified.",
)
@limiter.limit("5/minute")
async def post_reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Handles the password reset for a verified email.
    """
    return await services.reset_password(payload, db)


@router.post(
    "/change-password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Change Password (Authenticated)",
)
@limiter.limit("5/minute")
async def post_change_password(
    request: Request,
    payload: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """
    Replaces the password after checking the current one.
    """
    return await services.change_password(payload, current_user, db)


# ---------------------------------------------------
# Account Settings
# ---------------------------------------------------
@router.get(
    "/account",
    response_model=AccountResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Account Settings",
)
@limiter.limit("30/minute")
async def get_account(
    request: Request,
    current_user: User = Depends(get_current_user),
) -> AccountResponse:
    """
    Returns account details with the phone change cooldown.
    """
    return services.build_account_response(current_user)


@router.patch(
    "/account",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Update Account Settings",
    description="Updates name, email and phone. A new phone number must be verified again.",
)
@limiter.limit("10/minute")
async def patch_account(
    request: Request,
    payload: AccountUpdateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """
    Applies account changes for the authenticated user.
    """
    return await services.update_account(payload, current_user, db)


# ---------------------------------------------------
# Phone Verification
# ---------------------------------------------------
@router.get(
    "/phone-verification",
    response_model=PhoneVerificationStatus,
    status_code=status.HTTP_200_OK,
    summary="Get Phone Verification Status",
)
@limiter.limit("30/minute")
async def get_phone_verification(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PhoneVerificationStatus:
    """
    Returns the phone and whether a request is pending.
    """
    return await services.get_phone_status(current_user, db)


@router.post(
    "/phone-verification",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Request Phone Verification",
    description="Creates a code that support staff relay to the member by phone.",
)
@limiter.limit("5/minute")
async def post_phone_verification(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """
    Requests a phone verification call from support.
    """
    return await services.request_phone_verification(current_user, db)


@router.put(
    "/phone-verification",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Confirm Phone Verification",
)
@limiter.limit("10/minute")
async def put_phone_verification(
    request: Request,
    payload: PhoneVerifyRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """
    Confirms the code relayed by support.
    """
    return await services.confirm_phone_verification(payload.otp, current_user, db)
