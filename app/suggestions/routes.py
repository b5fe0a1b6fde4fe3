"""
app/suggestions/routes.py

Field Suggestion Review Routes (super admin only)

- GET    /admin/suggestions: queue with status counts
- GET    /admin/suggestions/{id}
- PATCH  /admin/suggestions/{id}: record a review decision
- DELETE /admin/suggestions/{id}
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import require_roles
from app.core.limiter import limiter
from app.core.schemas import MessageResponse
from app.database.enums import SuggestionFieldType, SuggestionStatus, UserRole
from app.database.models import User
from app.database.session import get_db
from app.suggestions import schemas
from app.suggestions.services import SuggestionService

router = APIRouter(prefix="/admin/suggestions", tags=["Admin Suggestions"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
SuperAdminDep = Annotated[User, Depends(require_roles(UserRole.SUPER_ADMIN))]


@router.get(
    "",
    response_model=schemas.SuggestionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Field Suggestions",
)
@limiter.limit("30/minute")
async def list_suggestions(
    request: Request,
    db: DBDep,
    current_user: SuperAdminDep,
    status_filter: SuggestionStatus | None = Query(None, alias="status"),
    field_type: SuggestionFieldType | None = Query(None),
) -> schemas.SuggestionListResponse:
    """Suggestions newest first, optionally filtered."""
    return await SuggestionService(db).list_suggestions(status_filter, field_type)


@router.get(
    "/{suggestion_id}",
    response_model=schemas.SuggestionRead,
    status_code=status.HTTP_200_OK,
    summary="Get Field Suggestion",
)
@limiter.limit("30/minute")
async def get_suggestion(
    request: Request, suggestion_id: UUID, db: DBDep, current_user: SuperAdminDep
) -> schemas.SuggestionRead:
    return await SuggestionService(db).get_suggestion(suggestion_id)


@router.patch(
    "/{suggestion_id}",
    response_model=schemas.SuggestionReviewResponse,
    status_code=status.HTTP_200_OK,
    summary="Review Field Suggestion",
    description="Approving a MOTHER_TONGUE suggestion with create_language adds it to the language catalog.",
)
@limiter.limit("20/minute")
async def review_suggestion(
    request: Request,
    suggestion_id: UUID,
    payload: schemas.SuggestionReview,
    db: DBDep,
    current_user: SuperAdminDep,
) -> schemas.SuggestionReviewResponse:
    """Record a review decision."""
    return await SuggestionService(db).review_suggestion(current_user, suggestion_id, payload)


@router.delete(
    "/{suggestion_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Field Suggestion",
)
@limiter.limit("10/minute")
async def delete_suggestion(
    request: Request, suggestion_id: UUID, db: DBDep, current_user: SuperAdminDep
) -> MessageResponse:
    await SuggestionService(db).delete_suggestion(suggestion_id)
    return MessageResponse(detail="Suggestion deleted successfully")
