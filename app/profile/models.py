"""
profile/models.py

Matrimonial profile and its photos.

A member can own several profiles (self, son, daughter, ...) up to the
profile limit of their subscription plan. Each profile goes through admin
moderation before it is published.
"""

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.base import Base, TimestampMixin
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


def _lookup_fk(table: str) -> Mapped[uuid.UUID | None]:
    return mapped_column(
        UUID(as_uuid=True), ForeignKey(f"{table}.id", ondelete="SET NULL"), nullable=True
    )


# ---------------------------------------------------
# Profile Model
# ---------------------------------------------------


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"

    # -------------------------------------
    # Ownership & Basics
    # -------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    profile_for: Mapped[ProfileFor] = mapped_column(Enum(ProfileFor), nullable=False)
    gender: Mapped[Gender] = mapped_column(Enum(Gender), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    marital_status: Mapped[MaritalStatus] = mapped_column(Enum(MaritalStatus), nullable=False)
    number_of_children: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    children_living_with: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # -------------------------------------
    # Origin & Location
    # -------------------------------------
    origin_id: Mapped[uuid.UUID | None] = _lookup_fk("origins")
    ethnicity_id: Mapped[uuid.UUID | None] = _lookup_fk("ethnicities")
    caste_id: Mapped[uuid.UUID | None] = _lookup_fk("castes")
    custom_caste: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country_of_origin_id: Mapped[uuid.UUID | None] = _lookup_fk("countries")
    country_living_in_id: Mapped[uuid.UUID | None] = _lookup_fk("countries")
    state_province_id: Mapped[uuid.UUID | None] = _lookup_fk("state_provinces")
    city_id: Mapped[uuid.UUID | None] = _lookup_fk("cities")
    suggested_location: Mapped[str | None] = mapped_column(
        String(150), nullable=True, comment="Free-text city when not in the list"
    )
    visa_status: Mapped[VisaStatus | None] = mapped_column(Enum(VisaStatus), nullable=True)
    origin_audience: Mapped[OriginAudience | None] = mapped_column(
        Enum(OriginAudience), nullable=True
    )

    # -------------------------------------
    # Religion, Appearance, Education & Work
    # -------------------------------------
    sect_id: Mapped[uuid.UUID | None] = _lookup_fk("sects")
    maslak_id: Mapped[uuid.UUID | None] = _lookup_fk("maslaks")
    religious_belonging: Mapped[ReligiousBelonging | None] = mapped_column(
        Enum(ReligiousBelonging), nullable=True
    )
    social_status: Mapped[SocialStatus | None] = mapped_column(Enum(SocialStatus), nullable=True)
    height_id: Mapped[uuid.UUID | None] = _lookup_fk("heights")
    complexion: Mapped[Complexion | None] = mapped_column(Enum(Complexion), nullable=True)
    education_level_id: Mapped[uuid.UUID | None] = _lookup_fk("education_levels")
    education_field_id: Mapped[uuid.UUID | None] = _lookup_fk("education_fields")
    occupation_type: Mapped[OccupationType | None] = mapped_column(
        Enum(OccupationType), nullable=True
    )
    occupation_detail: Mapped[str | None] = mapped_column(String(150), nullable=True)
    income_range_id: Mapped[uuid.UUID | None] = _lookup_fk("income_ranges")
    mother_tongue_id: Mapped[uuid.UUID | None] = _lookup_fk("languages")
    other_mother_tongue: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    # -------------------------------------
    # Completion & Moderation
    # -------------------------------------
    profile_completion: Mapped[int] = mapped_column(
        Integer, default=15, nullable=False, comment="Percentage of key fields filled"
    )
    moderation_status: Mapped[ModerationStatus] = mapped_column(
        Enum(ModerationStatus), default=ModerationStatus.PENDING, index=True, nullable=False
    )
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    moderated_by_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    banned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    banned_by_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    ban_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # -------------------------------------
    # Relationships
    # -------------------------------------
    user: Mapped["User"] = relationship(  # noqa: F821
        "User", back_populates="profiles", foreign_keys=[user_id]
    )
    photos: Mapped[list["Photo"]] = relationship(
        "Photo",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="Photo.sort_order",
    )


# ---------------------------------------------------
# Photo Model
# ---------------------------------------------------


class Photo(Base):
    __tablename__ = "photos"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    url: Mapped[str] = mapped_column(String, nullable=False, comment="Public S3 URL")
    s3_key: Mapped[str] = mapped_column(String, nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[PhotoStatus] = mapped_column(
        Enum(PhotoStatus), default=PhotoStatus.PENDING, nullable=False
    )
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    moderated_by_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    profile: Mapped["Profile"] = relationship("Profile", back_populates="photos")
