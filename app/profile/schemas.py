"""
app/profile/schemas.py

Profile Schemas
Defines Pydantic models for matrimonial profile creation, partial updates,
owner views and photo handling.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.database.enums import (
    Complexion,
    Gender,
    MaritalStatus,
    ModerationStatus,
    OccupationType,
    OriginAudience,
    PhotoStatus,
    ProfileFor,
    ReligiousBelonging,
    SocialStatus,
    VisaStatus,
)


# -----------------------------------------------------
# Profile Creation
# -----------------------------------------------------
class ProfileCreate(BaseModel):
    """First step of the profile wizard."""

    profile_for: ProfileFor = Field(..., description="Who the profile is for")
    gender: Gender
    date_of_birth: date
    marital_status: MaritalStatus
    number_of_children: int = Field(default=0, ge=0, le=20)
    children_living_with: bool | None = None


class ProfileCreateResponse(BaseModel):
    id: UUID
    profile_completion: int
    detail: str


# -----------------------------------------------------
# Profile Update
# -----------------------------------------------------
class ProfileUpdate(BaseModel):
    """
    Partial update of a profile owned by the caller.
    Empty strings are treated as cleared values.
    """

    profile_id: UUID = Field(..., description="Profile to update")

    profile_for: ProfileFor | None = None
    gender: Gender | None = None
    date_of_birth: date | None = None
    marital_status: MaritalStatus | None = None
    number_of_children: int | None = Field(default=None, ge=0, le=20)
    children_living_with: bool | None = None

    origin_id: UUID | None = None
    ethnicity_id: UUID | None = None
    caste_id: UUID | None = None
    custom_caste: str | None = Field(default=None, max_length=100)
    country_of_origin_id: UUID | None = None
    country_living_in_id: UUID | None = None
    state_province_id: UUID | None = None
    city_id: UUID | None = None
    suggested_location: str | None = Field(default=None, max_length=150)
    visa_status: VisaStatus | None = None
    origin_audience: OriginAudience | None = None

    sect_id: UUID | None = None
    maslak_id: UUID | None = None
    religious_belonging: ReligiousBelonging | None = None
    social_status: SocialStatus | None = None
    height_id: UUID | None = None
    complexion: Complexion | None = None
    education_level_id: UUID | None = None
    education_field_id: UUID | None = None
    occupation_type: OccupationType | None = None
    occupation_detail: str | None = Field(default=None, max_length=150)
    income_range_id: UUID | None = None
    mother_tongue_id: UUID | None = None
    other_mother_tongue: str | None = Field(default=None, max_length=100)
    bio: str | None = Field(default=None, max_length=2000)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProfileUpdateResponse(BaseModel):
    id: UUID
    profile_completion: int
    credits_awarded: int = 0
    detail: str


# -----------------------------------------------------
# Profile Read Models
# -----------------------------------------------------
class ProfileRead(BaseModel):
    """Full profile as seen by its owner."""

    id: UUID
    user_id: UUID
    profile_for: ProfileFor
    gender: Gender
    date_of_birth: date
    marital_status: MaritalStatus
    number_of_children: int
    children_living_with: bool | None = None

    origin_id: UUID | None = None
    ethnicity_id: UUID | None = None
    caste_id: UUID | None = None
    custom_caste: str | None = None
    country_of_origin_id: UUID | None = None
    country_living_in_id: UUID | None = None
    state_province_id: UUID | None = None
    city_id: UUID | None = None
    suggested_location: str | None = None
    visa_status: VisaStatus | None = None
    origin_audience: OriginAudience | None = None

    sect_id: UUID | None = None
    maslak_id: UUID | None = None
    religious_belonging: ReligiousBelonging | None = None
    social_status: SocialStatus | None = None
    height_id: UUID | None = None
    complexion: Complexion | None = None
    education_level_id: UUID | None = None
    education_field_id: UUID | None = None
    occupation_type: OccupationType | None = None
    occupation_detail: str | None = None
    income_range_id: UUID | None = None
    mother_tongue_id: UUID | None = None
    other_mother_tongue: str | None = None
    bio: str | None = None

    profile_completion: int
    moderation_status: ModerationStatus
    rejection_reason: str | None = None
    is_published: bool
    is_verified: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileSummary(BaseModel):
    """Row in the owner's profile list."""

    id: UUID
    profile_for: ProfileFor
    gender: Gender
    date_of_birth: date
    marital_status: MaritalStatus
    profile_completion: int
    moderation_status: ModerationStatus
    is_published: bool
    created_at: datetime
    primary_photo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


# -----------------------------------------------------
# Photos
# -----------------------------------------------------
class PhotoRead(BaseModel):
    id: UUID
    profile_id: UUID
    url: str
    is_primary: bool
    sort_order: int
    status: PhotoStatus
    rejection_reason: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PhotoUpdate(BaseModel):
    is_primary: bool = Field(..., description="Make this the profile's primary photo")


class CurrentProfileResponse(BaseModel):
    profile: ProfileRead | None = None
