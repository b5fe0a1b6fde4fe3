"""
admin/schemas.py

Defines request and response schemas for admin operations:
- Regular member and staff listings with stats
- Account detail, edit and creation
- Phone verification queue
- Sidebar badge counts
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.database.enums import SubscriptionTier, UserRole, UserStatus


# -----------------------------------------------------
# Regular Members
# -----------------------------------------------------
class RegularUserStats(BaseModel):
    total_users: int = Field(..., description="All accounts with the USER role")
    active_today: int = Field(..., description="Members who logged in since midnight (UTC)")
    premium_users: int = Field(..., description="Members on a paid tier")
    new_this_month: int


class RegularUserRow(BaseModel):
    id: UUID
    name: str | None = None
    email: EmailStr
    phone: str | None = None
    subscription_tier: SubscriptionTier
    status: UserStatus
    profile_count: int = 0
    created_at: datetime
    last_login_at: datetime | None = None


class RegularUsersResponse(BaseModel):
    stats: RegularUserStats
    users: list[RegularUserRow]


# -----------------------------------------------------
# Staff Accounts
# -----------------------------------------------------
class AdminRoleStats(BaseModel):
    super_admin_count: int
    supervisor_count: int
    content_editor_count: int
    consultant_count: int
    support_agent_count: int


class AdminUserRow(BaseModel):
    id: UUID
    name: str | None = None
    email: EmailStr
    role: UserRole
    status: UserStatus
    last_login_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminUsersResponse(BaseModel):
    stats: AdminRoleStats
    admins: list[AdminUserRow]


# -----------------------------------------------------
# Account Detail / Edit
# -----------------------------------------------------
class AdminUserDetail(BaseModel):
    """
    Full account view for supervisors.
    """

    id: UUID
    name: str | None = None
    email: EmailStr
    phone: str | None = None
    role: UserRole
    status: UserStatus
    subscription_tier: SubscriptionTier
    email_verified: bool
    phone_verified: bool
    is_verified: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AdminUserUpdate(BaseModel):
    """
    Edit an account. Name, email, role and status are always sent by the edit form.
    """

    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    role: UserRole
    status: UserStatus
    new_password: str | None = Field(None, description="Optional password reset (min 6 characters)")
    email_verified: bool | None = None
    phone_verified: bool | None = None
    is_verified: bool | None = None


class AdminUserUpdateResponse(BaseModel):
    detail: str
    user: AdminUserDetail


# -----------------------------------------------------
# Account Creation
# -----------------------------------------------------
class CreateRegularUserRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=150)
    phone: str | None = Field(None, max_length=20)
    status: UserStatus = UserStatus.ACTIVE
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    is_verified: bool = False
    email_verified: bool = False
    phone_verified: bool = False
    password: str | None = Field(None, description="Generated when omitted")


class CreateAdminRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=150)
    role: UserRole
    password: str | None = Field(None, description="Generated when omitted")


class CreateUserResponse(BaseModel):
    detail: str
    user: AdminUserDetail
    generated_password: str | None = Field(
        None, description="Only present when the password was generated"
    )


# -----------------------------------------------------
# Phone Verification Queue
# -----------------------------------------------------
VerificationTab = Literal["pending", "unverified", "all"]


class VerificationQueueItem(BaseModel):
    """
    One member in the queue; request fields are set for pending requests.
    """

    user_id: UUID
    name: str | None = None
    email: EmailStr
    phone: str | None = None
    phone_verified: bool
    created_at: datetime
    last_login_at: datetime | None = None
    verification_id: UUID | None = None
    requested_phone: str | None = None
    requested_at: datetime | None = None
    expires_at: datetime | None = None
    attempts: int | None = None


class VerificationActionRequest(BaseModel):
    action: Literal["verify", "reject"]
    verification_id: UUID | None = None
    user_id: UUID | None = None


class CountResponse(BaseModel):
    count: int


# -----------------------------------------------------
# Sidebar Badges
# -----------------------------------------------------
class SidebarCounts(BaseModel):
    regular_users: int
    admin_users: int
    pending_profiles: int
    pending_topups: int
    pending_phone_verifications: int
