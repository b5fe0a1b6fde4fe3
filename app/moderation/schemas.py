"""
moderation/schemas.py

Schemas for the profile moderation queue and admin profile edits.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.database.enums import PhotoStatus, SubscriptionTier, VisaStatus
from app.profile.schemas import PhotoRead, ProfileRead

ModerationSort = Literal["oldest", "newest", "completeness"]


class ProfileOwner(BaseModel):
    id: UUID
    name: str | None = None
    email: str
    phone: str | None = None
    subscription_tier: SubscriptionTier
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModerationProfile(ProfileRead):
    """Profile with its owner and gallery, as shown to moderators."""

    moderated_at: datetime | None = None
    banned_at: datetime | None = None
    ban_reason: str | None = None
    user: ProfileOwner
    photos: list[PhotoRead] = []


class ModerationCounts(BaseModel):
    pending: int
    approved: int
    rejected: int
    banned: int


class ModerationTodayStats(BaseModel):
    pending: int = Field(..., description="Pending profiles created today")
    approved: int
    rejected: int


class ModerationListResponse(BaseModel):
    total_count: int
    has_next_page: bool
    items: list[ModerationProfile]
    counts: ModerationCounts
    today_stats: ModerationTodayStats


class ModerationAction(BaseModel):
    action: Literal["approve", "reject", "ban"]
    feedback: str | None = Field(None, max_length=2000, description="Rejection or ban reason")


class AdminProfileUpdate(BaseModel):
    """
    Fields moderators may correct, typically mapping free-text values onto
    catalog entries. Empty strings clear a field.
    """

    country_of_origin_id: UUID | None = None
    country_living_in_id: UUID | None = None
    state_province_id: UUID | None = None
    city_id: UUID | None = None
    visa_status: VisaStatus | None = None
    suggested_location: str | None = Field(None, max_length=150)
    origin_id: UUID | None = None
    ethnicity_id: UUID | None = None
    caste_id: UUID | None = None
    custom_caste: str | None = Field(None, max_length=100)
    education_level_id: UUID | None = None
    education_field_id: UUID | None = None
    mother_tongue_id: UUID | None = None
    other_mother_tongue: str | None = Field(None, max_length=100)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AdminProfileUpdateResponse(BaseModel):
    detail: str
    profile: ModerationProfile


class PhotoModeration(BaseModel):
    action: Literal["approve", "reject", "pending"]
    reason: str | None = Field(None, max_length=500)


class PhotoModerationResponse(BaseModel):
    detail: str
    photo_id: UUID
    status: PhotoStatus
