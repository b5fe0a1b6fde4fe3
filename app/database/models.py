"""
app/database/models.py

Core SQLAlchemy ORM Models

Defines:
- User: Member and staff accounts with role, status and subscription tier
- EmailVerification: Emailed one-time codes (registration, reset, email change)
- PhoneVerification: Support-relayed phone verification codes

Includes relationships with:
- Profile (matrimonial profiles owned by the account)
- FundingWallet / RedeemWallet (credit balances)
- Transaction (ledger entries)
- TopUpRequest (manual payment claims)
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.base import Base, TimestampMixin
from app.database.enums import SubscriptionTier, UserRole, UserStatus, VerificationType
from app.profile.models import Profile
from app.wallet.models import FundingWallet, RedeemWallet, TopUpRequest, Transaction

# Registered for metadata (create_all / Alembic autogenerate)
import app.lookup.models  # noqa: F401,E402
import app.notifications.models  # noqa: F401,E402
import app.suggestions.models  # noqa: F401,E402

# ---------------------------------------------------
# User Model: Authenticated Platform Account
# ---------------------------------------------------


class User(TimestampMixin, Base):
    __tablename__ = "users"

    # -------------------------------------
    # Fields
    # -------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the user",
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False, comment="Normalized email address"
    )
    name: Mapped[str | None] = mapped_column(String(150), nullable=True, comment="Display name")
    phone: Mapped[str | None] = mapped_column(
        String(20), unique=True, nullable=True, comment="Phone number (optional)"
    )
    hashed_password: Mapped[str] = mapped_column(
        String, nullable=False, comment="bcrypt password hash"
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), nullable=False, default=UserRole.USER, comment="Access role"
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus), nullable=False, default=UserStatus.ACTIVE, comment="Account status"
    )
    subscription_tier: Mapped[SubscriptionTier] = mapped_column(
        Enum(SubscriptionTier),
        nullable=False,
        default=SubscriptionTier.FREE,
        comment="Active subscription plan slug",
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, comment="Whether the email address was confirmed by OTP"
    )
    phone_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, comment="Whether the phone number was confirmed by support"
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, comment="Whether the account completed onboarding verification"
    )
    phone_changed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Last time the phone number was changed"
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Last successful login"
    )

    # -------------------------------------
    # Relationships
    # -------------------------------------
    profiles: Mapped[list["Profile"]] = relationship(
        "Profile", back_populates="user", foreign_keys=[Profile.user_id]
    )
    funding_wallet: Mapped["FundingWallet | None"] = relationship(
        "FundingWallet", back_populates="user", uselist=False
    )
    redeem_wallet: Mapped["RedeemWallet | None"] = relationship(
        "RedeemWallet", back_populates="user", uselist=False
    )
    transactions: Mapped[list["Transaction"]] = relationship("Transaction", back_populates="user")
    top_up_requests: Mapped[list["TopUpRequest"]] = relationship(
        "TopUpRequest", back_populates="user", foreign_keys=[TopUpRequest.user_id]
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


# ---------------------------------------------------
# EmailVerification Model: Emailed One-Time Codes
# ---------------------------------------------------


class EmailVerification(Base):
    __tablename__ = "email_verifications"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(
        String(255), index=True, nullable=False, comment="Normalized email the code was sent to"
    )
    code: Mapped[str] = mapped_column(String(6), nullable=False, comment="Six digit code")
    type: Mapped[VerificationType] = mapped_column(
        Enum(VerificationType), nullable=False, comment="Purpose of the code"
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    attempts: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False, comment="Failed verification attempts"
    )
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# ---------------------------------------------------
# PhoneVerification Model: Support-Relayed Codes
# ---------------------------------------------------


class PhoneVerification(Base):
    __tablename__ = "phone_verifications"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    phone: Mapped[str] = mapped_column(String(20), nullable=False, comment="Phone being verified")
    code: Mapped[str] = mapped_column(String(6), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    attempts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    verified_by_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id])
