"""
app/suggestions/services.py

Field Suggestion Review

Super admins work through values members typed when a lookup list had no
match. Approving a mother tongue can promote it straight into the language
catalog.
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.validators import language_code_from_label, slug_from_label
from app.database.enums import SuggestionFieldType, SuggestionStatus
from app.database.models import User
from app.lookup.models import Language
from app.lookup.services import invalidate_lookup_cache
from app.suggestions import schemas
from app.suggestions.models import FieldSuggestion

logger = logging.getLogger(__name__)

REVIEW_STATUSES = (
    SuggestionStatus.APPROVED,
    SuggestionStatus.REJECTED,
    SuggestionStatus.DUPLICATE,
    SuggestionStatus.MERGED,
)


class SuggestionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _query(self):
        return select(FieldSuggestion).options(
            selectinload(FieldSuggestion.user), selectinload(FieldSuggestion.reviewed_by)
        )

    async def _count(self, *filters) -> int:
        return (
            await self.db.execute(select(func.count(FieldSuggestion.id)).where(*filters))
        ).scalar_one()

    async def _get_or_404(self, suggestion_id: UUID) -> FieldSuggestion:
        suggestion = (
            await self.db.execute(self._query().where(FieldSuggestion.id == suggestion_id))
        ).scalar_one_or_none()
        if not suggestion:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suggestion not found")
        return suggestion

    async def list_suggestions(
        self,
        status_filter: SuggestionStatus | None = None,
        field_type: SuggestionFieldType | None = None,
    ) -> schemas.SuggestionListResponse:
        """Newest first, with counts over the whole queue."""
        query = self._query().order_by(FieldSuggestion.created_at.desc())
        if status_filter:
            query = query.where(FieldSuggestion.status == status_filter)
        if field_type:
            query = query.where(FieldSuggestion.field_type == field_type)
        rows = (await self.db.execute(query)).scalars().all()

        counts = schemas.SuggestionCounts(
            pending=await self._count(FieldSuggestion.status == SuggestionStatus.PENDING),
            approved=await self._count(FieldSuggestion.status == SuggestionStatus.APPROVED),
            rejected=await self._count(FieldSuggestion.status == SuggestionStatus.REJECTED),
            total=await self._count(),
        )
        return schemas.SuggestionListResponse(
            suggestions=[schemas.SuggestionRead.model_validate(r) for r in rows],
            counts=counts,
        )

    async def get_suggestion(self, suggestion_id: UUID) -> schemas.SuggestionRead:
        return schemas.SuggestionRead.model_validate(await self._get_or_404(suggestion_id))

    async def _create_language(self, label: str) -> Language:
        label = label.strip()
        code = language_code_from_label(label)
        slug = slug_from_label(label)

        existing = (
            await self.db.execute(
                select(Language.id).where(
                    or_(
                        Language.code == code,
                        Language.slug == slug,
                        func.lower(Language.label) == label.lower(),
                    )
                )
            )
        ).first()
        if existing or not code:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A language with this name/code already exists",
            )

        max_order = (
            await self.db.execute(select(func.coalesce(func.max(Language.sort_order), 0)))
        ).scalar_one()
        language = Language(
            code=code,
            slug=slug,
            label=label,
            is_global=False,
            is_active=True,
            sort_order=max_order + 1,
        )
        self.db.add(language)
        await self.db.flush()
        logger.info(f"[SUGGEST] Created language '{label}' (code={code})")
        return language

    async def review_suggestion(
        self, reviewer: User, suggestion_id: UUID, data: schemas.SuggestionReview
    ) -> schemas.SuggestionReviewResponse:
        if data.status not in {s.value for s in REVIEW_STATUSES}:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid status. Must be APPROVED, REJECTED, DUPLICATE, or MERGED",
            )
        suggestion = await self._get_or_404(suggestion_id)
        new_status = SuggestionStatus(data.status)

        language = None
        if (
            new_status == SuggestionStatus.APPROVED
            and suggestion.field_type == SuggestionFieldType.MOTHER_TONGUE
            and data.create_language
        ):
            language = await self._create_language(suggestion.value)

        suggestion.status = new_status
        suggestion.review_note = data.review_note
        suggestion.reviewed_by_id = reviewer.id
        suggestion.reviewed_at = datetime.now(timezone.utc)
        await self.db.commit()

        if language:
            await invalidate_lookup_cache()

        logger.info(f"[SUGGEST] {reviewer.id} marked suggestion {suggestion_id} as {new_status.value}")
        suggestion = await self._get_or_404(suggestion_id)
        return schemas.SuggestionReviewResponse(
            detail="Suggestion updated successfully",
            suggestion=schemas.SuggestionRead.model_validate(suggestion),
            created_language=schemas.CreatedLanguage.model_validate(language) if language else None,
        )

    async def delete_suggestion(self, suggestion_id: UUID) -> None:
        suggestion = await self._get_or_404(suggestion_id)
        await self.db.delete(suggestion)
        await self.db.commit()
        logger.info(f"[SUGGEST] Deleted suggestion {suggestion_id}")
