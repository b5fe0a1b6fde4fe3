"""
app/moderation/services.py

Profile Moderation Service

Back-office review of member profiles:
- Queue listing with status counts and today's activity
- Approve / reject / ban decisions
- Moderator corrections of catalog-mapped fields
- Per-photo review and removal
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.upload import delete_file_from_s3
from app.database.enums import ModerationStatus, PhotoStatus
from app.database.models import User
from app.moderation import schemas
from app.profile.models import Photo, Profile
from app.profile.services import promote_next_primary

logger = logging.getLogger(__name__)

SORT_ORDERS = {
    "oldest": Profile.created_at.asc(),
    "newest": Profile.created_at.desc(),
    "completeness": Profile.profile_completion.desc(),
}

PHOTO_ACTIONS = {
    "approve": (PhotoStatus.APPROVED, "Photo approved successfully"),
    "reject": (PhotoStatus.REJECTED, "Photo rejected"),
    "pending": (PhotoStatus.PENDING, "Photo set to pending"),
}


def _start_of_today() -> datetime:
    return datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


class ModerationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, *filters) -> int:
        return (await self.db.execute(select(func.count(Profile.id)).where(*filters))).scalar_one()

    async def _get_profile(self, profile_id: UUID) -> Profile:
        profile = (
            await self.db.execute(
                select(Profile)
                .options(selectinload(Profile.user), selectinload(Profile.photos))
                .where(Profile.id == profile_id)
            )
        ).scalar_one_or_none()
        if not profile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
        return profile

    async def _get_profile_photo(self, profile_id: UUID, photo_id: UUID) -> Photo:
        photo = (
            await self.db.execute(
                select(Photo).where(Photo.id == photo_id, Photo.profile_id == profile_id)
            )
        ).scalar_one_or_none()
        if not photo:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
        return photo

    async def list_profiles(
        self,
        status_filter: ModerationStatus | None,
        sort: str,
        skip: int,
        limit: int,
    ) -> schemas.ModerationListResponse:
        filters = [Profile.moderation_status == status_filter] if status_filter else []
        rows = (
            (
                await self.db.execute(
                    select(Profile)
                    .options(selectinload(Profile.user), selectinload(Profile.photos))
                    .where(*filters)
                    .order_by(SORT_ORDERS.get(sort, SORT_ORDERS["oldest"]))
                    .offset(skip)
                    .limit(limit)
                )
            )
            .scalars()
            .all()
        )
        total = await self._count(*filters)

        today = _start_of_today()
        counts = schemas.ModerationCounts(
            pending=await self._count(Profile.moderation_status == ModerationStatus.PENDING),
            approved=await self._count(Profile.moderation_status == ModerationStatus.APPROVED),
            rejected=await self._count(Profile.moderation_status == ModerationStatus.REJECTED),
            banned=await self._count(Profile.moderation_status == ModerationStatus.BANNED),
        )
        today_stats = schemas.ModerationTodayStats(
            pending=await self._count(
                Profile.moderation_status == ModerationStatus.PENDING, Profile.created_at >= today
            ),
            approved=await self._count(
                Profile.moderation_status == ModerationStatus.APPROVED, Profile.moderated_at >= today
            ),
            rejected=await self._count(
                Profile.moderation_status == ModerationStatus.REJECTED, Profile.moderated_at >= today
            ),
        )
        return schemas.ModerationListResponse(
            total_count=total,
            has_next_page=(skip + limit) < total,
            items=[schemas.ModerationProfile.model_validate(p) for p in rows],
            counts=counts,
            today_stats=today_stats,
        )

    async def get_profile(self, profile_id: UUID) -> schemas.ModerationProfile:
        return schemas.ModerationProfile.model_validate(await self._get_profile(profile_id))

    async def moderate(
        self, moderator: User, profile_id: UUID, data: schemas.ModerationAction
    ) -> str:
        """
        approve: publish and verify; reject: unpublish with feedback;
        ban: unpublish, deactivate and record the ban.
        """
        profile = await self._get_profile(profile_id)
        now = datetime.now(timezone.utc)

        if data.action == "approve":
            profile.moderation_status = ModerationStatus.APPROVED
            profile.moderated_at = now
            profile.moderated_by_id = moderator.id
            profile.rejection_reason = None
            profile.is_published = True
            profile.is_verified = True
            message = "Profile approved successfully"
        elif data.action == "reject":
            profile.moderation_status = ModerationStatus.REJECTED
            profile.moderated_at = now
            profile.moderated_by_id = moderator.id
            profile.rejection_reason = data.feedback
            profile.is_published = False
            message = "Profile rejected with feedback"
        else:
            profile.moderation_status = ModerationStatus.BANNED
            profile.banned_at = now
            profile.banned_by_id = moderator.id
            profile.ban_reason = data.feedback
            profile.is_published = False
            profile.is_active = False
            message = "Profile banned successfully"

        await self.db.commit()
        logger.info(f"[MODERATION] {moderator.id} -> {data.action} profile {profile_id}")
        return message

    async def update_profile(
        self, moderator: User, profile_id: UUID, data: schemas.AdminProfileUpdate
    ) -> schemas.AdminProfileUpdateResponse:
        profile = await self._get_profile(profile_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(profile, field, value)
        await self.db.commit()

        logger.info(
            f"[MODERATION] Profile {profile_id} edited by {moderator.id} ({moderator.email}). "
            f"Updated fields: {', '.join(changes) or 'none'}"
        )
        self.db.expire(profile)
        return schemas.AdminProfileUpdateResponse(
            detail="Profile updated successfully",
            profile=schemas.ModerationProfile.model_validate(await self._get_profile(profile_id)),
        )

    async def delete_profile(self, moderator: User, profile_id: UUID) -> str:
        """Removes the profile and its photos; the owner's account is kept."""
        profile = await self._get_profile(profile_id)
        keys = [photo.s3_key for photo in profile.photos]
        owner_email = profile.user.email

        await self.db.delete(profile)
        await self.db.commit()
        for key in keys:
            delete_file_from_s3(key)

        logger.info(
            f"[MODERATION] Profile {profile_id} deleted by {moderator.id}. User {owner_email} account kept intact."
        )
        return "Profile deleted successfully. User account remains active."

    async def moderate_photo(
        self, moderator: User, profile_id: UUID, photo_id: UUID, data: schemas.PhotoModeration
    ) -> schemas.PhotoModerationResponse:
        photo = await self._get_profile_photo(profile_id, photo_id)
        new_status, message = PHOTO_ACTIONS[data.action]

        photo.status = new_status
        photo.moderated_at = datetime.now(timezone.utc)
        photo.moderated_by_id = moderator.id
        photo.rejection_reason = data.reason if data.action == "reject" else None
        await self.db.commit()

        logger.info(f"[MODERATION] Photo {photo_id} set to {new_status.value} by {moderator.id}")
        return schemas.PhotoModerationResponse(detail=message, photo_id=photo_id, status=new_status)

    async def delete_photo(self, moderator: User, profile_id: UUID, photo_id: UUID) -> str:
        photo = await self._get_profile_photo(profile_id, photo_id)
        s3_key, was_primary = photo.s3_key, photo.is_primary
        await self.db.delete(photo)
        await self.db.flush()
        if was_primary:
            await promote_next_primary(self.db, profile_id)
        await self.db.commit()
        if not delete_file_from_s3(s3_key):
            logger.warning(f"[MODERATION] S3 object {s3_key} could not be removed")
        logger.info(f"[MODERATION] Photo {photo_id} deleted by admin {moderator.id} from profile {profile_id}")
        return "Photo deleted successfully"
