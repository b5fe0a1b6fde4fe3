"""
app/profile/routes.py

Profile Routes
Defines authenticated endpoints for the member's matrimonial profiles
(creation wizard, listing, detail, deletion) and their photo galleries.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user
from app.core.limiter import limiter
from app.core.schemas import MessageResponse
from app.database.models import User
from app.database.session import get_db
from app.profile import schemas
from app.profile.services import PhotoService, ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])
photos_router = APIRouter(prefix="/photos", tags=["Photos"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]


# ----------------------------------------------------
# Profile Wizard
# ----------------------------------------------------
@router.post(
    "",
    response_model=schemas.ProfileCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Profile",
    description="First step of the profile wizard. Limited by the member's plan.",
)
@limiter.limit("10/minute")
async def create_profile(
    request: Request,
    data: schemas.ProfileCreate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.ProfileCreateResponse:
    """
    Create a new draft profile for the authenticated member.
    """
    return await ProfileService(db).create_profile(current_user, data)


@router.patch(
    "",
    response_model=schemas.ProfileUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Update Profile",
    description="Saves any wizard step. Completing every scored field awards the completion bonus once.",
)
@limiter.limit("30/minute")
async def update_profile(
    request: Request,
    data: schemas.ProfileUpdate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.ProfileUpdateResponse:
    """
    Update one of the authenticated member's profiles.
    """
    return await ProfileService(db).update_profile(current_user, data)


@router.get(
    "",
    response_model=schemas.CurrentProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Draft Profile",
    description="Latest incomplete profile, or the latest profile of any completion with include_completed.",
)
@limiter.limit("30/minute")
async def get_current_profile(
    request: Request,
    db: DBDep,
    current_user: CurrentUserDep,
    include_completed: bool = Query(False, description="Also consider completed profiles"),
) -> schemas.CurrentProfileResponse:
    """
    Return the profile the wizard should resume.
    """
    profile = await ProfileService(db).get_current_profile(current_user.id, include_completed)
    return schemas.CurrentProfileResponse(profile=profile)


@router.get(
    "/list",
    response_model=list[schemas.ProfileSummary],
    status_code=status.HTTP_200_OK,
    summary="List My Profiles",
)
@limiter.limit("30/minute")
async def list_my_profiles(
    request: Request, db: DBDep, current_user: CurrentUserDep
) -> list[schemas.ProfileSummary]:
    """
    List all profiles owned by the authenticated member.
    """
    return await ProfileService(db).list_profiles(current_user.id)


@router.get(
    "/{profile_id}",
    response_model=schemas.ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Get My Profile",
)
@limiter.limit("30/minute")
async def get_my_profile(
    request: Request, profile_id: UUID, db: DBDep, current_user: CurrentUserDep
) -> schemas.ProfileRead:
    """
    Retrieve one profile owned by the authenticated member.
    """
    return await ProfileService(db).get_profile(current_user.id, profile_id)


@router.delete(
    "/{profile_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete My Profile",
)
@limiter.limit("5/minute")
async def delete_my_profile(
    request: Request, profile_id: UUID, db: DBDep, current_user: CurrentUserDep
) -> MessageResponse:
    """
    Delete one profile together with its photos.
    """
    return MessageResponse(detail=await ProfileService(db).delete_profile(current_user.id, profile_id))


# ----------------------------------------------------
# Photos
# ----------------------------------------------------
@photos_router.post(
    "",
    response_model=schemas.PhotoRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Profile Photo",
    description="JPEG, PNG or WEBP. Photos are reviewed by moderators before they are shown.",
)
@limiter.limit("10/minute")
async def upload_photo(
    request: Request,
    db: DBDep,
    current_user: CurrentUserDep,
    profile_id: UUID = Form(..., description="Profile the photo belongs to"),
    is_primary: bool = Form(False, description="Make this the primary photo"),
    file: UploadFile = File(..., description="Image file"),
) -> schemas.PhotoRead:
    """
    Upload a photo to one of the member's profiles.
    """
    logger.info(f"[PHOTO] {current_user.id} uploading photo to profile {profile_id}")
    return await PhotoService(db).upload_photo(current_user.id, profile_id, file, is_primary)


@photos_router.get(
    "",
    response_model=list[schemas.PhotoRead],
    status_code=status.HTTP_200_OK,
    summary="List Profile Photos",
)
@limiter.limit("30/minute")
async def list_photos(
    request: Request,
    db: DBDep,
    current_user: CurrentUserDep,
    profile_id: UUID = Query(..., description="Profile whose photos to list"),
) -> list[schemas.PhotoRead]:
    """
    List a profile's photos in display order.
    """
    return await PhotoService(db).list_photos(current_user.id, profile_id)


@photos_router.patch(
    "/{photo_id}",
    response_model=schemas.PhotoRead,
    status_code=status.HTTP_200_OK,
    summary="Update Photo",
)
@limiter.limit("20/minute")
async def update_photo(
    request: Request,
    photo_id: UUID,
    data: schemas.PhotoUpdate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.PhotoRead:
    """
    Set or clear the primary flag.
    """
    return await PhotoService(db).update_photo(current_user.id, photo_id, data)


@photos_router.delete(
    "/{photo_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Photo",
)
@limiter.limit("10/minute")
async def delete_photo(
    request: Request, photo_id: UUID, db: DBDep, current_user: CurrentUserDep
) -> MessageResponse:
    """
    Delete a photo; the next photo becomes primary when needed.
    """
    return MessageResponse(detail=await PhotoService(db).delete_photo(current_user.id, photo_id))
