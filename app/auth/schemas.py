"""
auth/schemas.py

Defines Pydantic models for authentication flows:
- Email OTP request and verification payloads
- Registration, login and password payloads
- JWT token payload and authenticated user responses
- Account settings and phone verification
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from app.core.validators import password_validator
from app.database.enums import SubscriptionTier, UserRole, UserStatus, VerificationType

# --------------------------------------------------
# Custom Types
# --------------------------------------------------

PasswordStr = Annotated[str, AfterValidator(password_validator)]


# --------------------------------------------------
# EMAIL OTP SCHEMAS
# --------------------------------------------------

class SendOtpRequest(BaseModel):
    """
    Request a six digit code by email.
    """
    email: EmailStr = Field(..., description="Address to send the code to")
    type: VerificationType = Field(
        VerificationType.REGISTRATION, description="REGISTRATION, PASSWORD_RESET or EMAIL_CHANGE"
    )


class SendOtpResponse(BaseModel):
    detail: str = Field(..., description="Response message detail")
    expires_in: int = Field(..., description="Seconds until the code expires")


class VerifyOtpRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6, description="Six digit code")
    type: VerificationType = VerificationType.REGISTRATION


# --------------------------------------------------
# AUTH REQUEST SCHEMAS
# --------------------------------------------------

class RegisterRequest(BaseModel):
    """
    Completes registration after the email was verified by OTP.
    """
    email: EmailStr = Field(..., description="Verified email address")
    password: PasswordStr = Field(
        ...,
        description="Password must include uppercase, lowercase, digit, special character, and only ASCII characters.",
    )
    name: str | None = Field(None, max_length=150, description="Display name")


class LoginRequest(BaseModel):
    """
    Request schema for user login using JSON payload.
    """
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, max_length=128, description="Account password")


class ResetPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Email verified with a PASSWORD_RESET code")
    new_password: PasswordStr


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: PasswordStr


# --------------------------------------------------
# AUTH TOKEN SCHEMAS
# --------------------------------------------------

class TokenPayload(BaseModel):
    """
    Decoded JWT payload structure.
    """
    sub: UUID = Field(..., description="Subject (user ID)")
    role: UserRole = Field(..., description="User role encoded in the token")
    exp: int = Field(..., description="Expiration timestamp of the token")
    jti: str = Field(..., description="JWT ID (used for token blacklist)")


# --------------------------------------------------
# AUTH RESPONSE SCHEMAS
# --------------------------------------------------

class AuthUserResponse(BaseModel):
    """
    Response schema representing authenticated user data.
    """
    id: UUID = Field(..., description="Unique identifier for the user")
    email: EmailStr = Field(..., description="User's email address")
    name: str | None = Field(None, description="Display name")
    phone: str | None = Field(None, description="Phone number")
    role: UserRole = Field(..., description="User's role in the system")
    status: UserStatus = Field(..., description="Account status")
    subscription_tier: SubscriptionTier = Field(..., description="Current plan")
    email_verified: bool
    phone_verified: bool
    is_verified: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthSuccessResponse(BaseModel):
    """
    Result of a successful credential check (token stays server side in the cookie).
    """
    access_token: str = Field(..., description="JWT access token")
    user: AuthUserResponse = Field(..., description="Details of the authenticated user")


class LoginResponse(BaseModel):
    user: AuthUserResponse


class RegisteredUser(BaseModel):
    id: UUID
    email: EmailStr


class RegisterResponse(BaseModel):
    detail: str
    user: RegisteredUser


# --------------------------------------------------
# ACCOUNT SCHEMAS
# --------------------------------------------------

class AccountResponse(AuthUserResponse):
    phone_cooldown_days: int = Field(0, description="Days until the phone may change again")
    phone_cooldown_ends_at: datetime | None = None


class AccountUpdateRequest(BaseModel):
    name: str = Field(..., description="Display name")
    email: EmailStr
    phone: str | None = Field(None, max_length=20)


class PhoneVerificationStatus(BaseModel):
    phone: str | None = None
    phone_verified: bool
    pending_verification: bool


class PhoneVerifyRequest(BaseModel):
    otp: str = Field(..., description="Six digit code relayed by support")
