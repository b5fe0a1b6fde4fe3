"""
app/moderation/routes.py

Profile Moderation Routes

Content editors, supervisors and super admins review member profiles and
photos. Deleting profiles or photos needs a supervisor or super admin.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import PaginationParams, require_permission
from app.core.limiter import limiter
from app.core.schemas import MessageResponse
from app.database.enums import ModerationStatus
from app.database.models import User
from app.database.session import get_db
from app.moderation import schemas
from app.moderation.services import ModerationService

router = APIRouter(prefix="/admin/profiles", tags=["Admin Profile Moderation"])

# ---------------------------------------------------
# Dependencies
# ---------------------------------------------------
DBDep = Annotated[AsyncSession, Depends(get_db)]
ModeratorDep = Annotated[User, Depends(require_permission("approve_profiles"))]
EditorDep = Annotated[User, Depends(require_permission("edit_profiles"))]
ProfileDeleterDep = Annotated[User, Depends(require_permission("delete_profiles"))]


@router.get(
    "",
    response_model=schemas.ModerationListResponse,
    status_code=status.HTTP_200_OK,
    summary="Profile Moderation Queue",
    description="Oldest first by default; also sortable by newest or completeness.",
)
@limiter.limit("30/minute")
async def list_profiles(
    request: Request,
    db: DBDep,
    current_user: ModeratorDep,
    pagination: PaginationParams = Depends(),
    status_filter: ModerationStatus | None = Query(None, alias="status"),
    sort: schemas.ModerationSort = Query("oldest"),
) -> schemas.ModerationListResponse:
    """List profiles with moderation counts."""
    return await ModerationService(db).list_profiles(
        status_filter, sort, pagination.skip, pagination.limit
    )


@router.get(
    "/{profile_id}",
    response_model=schemas.ModerationProfile,
    status_code=status.HTTP_200_OK,
    summary="Get Profile for Review",
)
@limiter.limit("60/minute")
async def get_profile(
    request: Request, profile_id: UUID, db: DBDep, current_user: ModeratorDep
) -> schemas.ModerationProfile:
    return await ModerationService(db).get_profile(profile_id)


@router.post(
    "/{profile_id}/moderate",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Approve, Reject or Ban Profile",
)
@limiter.limit("30/minute")
async def moderate_profile(
    request: Request,
    profile_id: UUID,
    payload: schemas.ModerationAction,
    db: DBDep,
    current_user: ModeratorDep,
) -> MessageResponse:
    """Record a moderation decision."""
    return MessageResponse(
        detail=await ModerationService(db).moderate(current_user, profile_id, payload)
    )


@router.patch(
    "/{profile_id}",
    response_model=schemas.AdminProfileUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Correct Profile Fields",
    description="Location, origin, education and language fields only.",
)
@limiter.limit("20/minute")
async def update_profile(
    request: Request,
    profile_id: UUID,
    payload: schemas.AdminProfileUpdate,
    db: DBDep,
    current_user: EditorDep,
) -> schemas.AdminProfileUpdateResponse:
    """Map member-entered values onto catalog entries."""
    return await ModerationService(db).update_profile(current_user, profile_id, payload)


@router.delete(
    "/{profile_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Profile",
)
@limiter.limit("10/minute")
async def delete_profile(
    request: Request, profile_id: UUID, db: DBDep, current_user: ProfileDeleterDep
) -> MessageResponse:
    """Delete a profile; the owner's account is kept."""
    return MessageResponse(detail=await ModerationService(db).delete_profile(current_user, profile_id))


@router.patch(
    "/{profile_id}/photos/{photo_id}",
    response_model=schemas.PhotoModerationResponse,
    status_code=status.HTTP_200_OK,
    summary="Moderate Photo",
)
@limiter.limit("60/minute")
async def moderate_photo(
    request: Request,
    profile_id: UUID,
    photo_id: UUID,
    payload: schemas.PhotoModeration,
    db: DBDep,
    current_user: ModeratorDep,
) -> schemas.PhotoModerationResponse:
    return await ModerationService(db).moderate_photo(current_user, profile_id, photo_id, payload)


@router.delete(
    "/{profile_id}/photos/{photo_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Photo",
)
@limiter.limit("20/minute")
async def delete_photo(
    request: Request,
    profile_id: UUID,
    photo_id: UUID,
    db: DBDep,
    current_user: ProfileDeleterDep,
) -> MessageResponse:
    return MessageResponse(
        detail=await ModerationService(db).delete_photo(current_user, profile_id, photo_id)
    )
