"""
suggestions/schemas.py

Review queue schemas for member-typed lookup values.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.database.enums import SuggestionFieldType, SuggestionStatus


class SuggestionUser(BaseModel):
    id: UUID
    name: str | None = None
    email: str

    model_config = ConfigDict(from_attributes=True)


class SuggestionRead(BaseModel):
    id: UUID
    field_type: SuggestionFieldType
    value: str
    status: SuggestionStatus
    review_note: str | None = None
    profile_id: UUID | None = None
    user: SuggestionUser | None = None
    reviewed_by: SuggestionUser | None = None
    reviewed_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SuggestionCounts(BaseModel):
    pending: int
    approved: int
    rejected: int
    total: int


class SuggestionListResponse(BaseModel):
    suggestions: list[SuggestionRead]
    counts: SuggestionCounts


class SuggestionReview(BaseModel):
    """
    Review decision. `create_language` only applies to approved mother tongues.
    """

    status: str = Field(..., description="APPROVED, REJECTED, DUPLICATE or MERGED")
    review_note: str | None = Field(None, max_length=1000)
    create_language: bool = False


class CreatedLanguage(BaseModel):
    id: UUID
    code: str
    slug: str
    label: str
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class SuggestionReviewResponse(BaseModel):
    detail: str
    suggestion: SuggestionRead
    created_language: CreatedLanguage | None = None
