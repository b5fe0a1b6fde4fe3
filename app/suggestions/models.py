"""
suggestions/models.py

Values members typed in when the lookup list had no match (for example an
unlisted mother tongue). Super admins review them and may promote them into
the lookup tables.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.base import Base
from app.database.enums import SuggestionFieldType, SuggestionStatus


class FieldSuggestion(Base):
    __tablename__ = "field_suggestions"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    field_type: Mapped[SuggestionFieldType] = mapped_column(
        Enum(SuggestionFieldType), nullable=False
    )
    value: Mapped[str] = mapped_column(String(150), nullable=False)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    profile_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[SuggestionStatus] = mapped_column(
        Enum(SuggestionStatus), default=SuggestionStatus.PENDING, index=True, nullable=False
    )
    review_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user: Mapped["User | None"] = relationship("User", foreign_keys=[user_id])  # noqa: F821
    reviewed_by: Mapped["User | None"] = relationship(  # noqa: F821
        "User", foreign_keys=[reviewed_by_id]
    )
