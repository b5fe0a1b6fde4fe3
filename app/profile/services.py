"""
app/profile/services.py

Profile Service Layer

Handles the member-side profile wizard and photo gallery:
- Profile creation within the plan's profile limit
- Partial updates with completion scoring and the completion bonus
- Mother tongue suggestions for values missing from the language list
- Photo upload to S3, primary photo selection and removal
"""

import logging
from uuid import UUID

from fastapi import HTTPException, UploadFile, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.upload import delete_file_from_s3, upload_file_to_s3
from app.database.enums import ModerationStatus, OriginAudience, PhotoStatus, SuggestionFieldType
from app.database.models import User
from app.profile import schemas
from app.profile.models import Photo, Profile
from app.suggestions.models import FieldSuggestion
from app.users.services import PlanService
from app.wallet.models import RedeemAction
from app.wallet.services import RedeemAward, WalletService

logger = logging.getLogger(__name__)

COMPLETION_FIELDS: tuple[str, ...] = (
    "profile_for",
    "gender",
    "date_of_birth",
    "marital_status",
    "origin_id",
    "ethnicity_id",
    "country_of_origin_id",
    "country_living_in_id",
    "state_province_id",
    "city_id",
    "sect_id",
    "religious_belonging",
    "social_status",
    "height_id",
    "complexion",
    "education_level_id",
    "education_field_id",
    "occupation_type",
    "income_range_id",
    "bio",
)
INITIAL_COMPLETION = 15
PROFILE_COMPLETION_ACTION = "PROFILE_COMPLETION"


# ---------------------------------------------------
# Pure Helpers
# ---------------------------------------------------
def calculate_completion(values: dict) -> int:
    """Percentage of the scored fields that hold a non-empty value."""
    filled = sum(1 for field in COMPLETION_FIELDS if values.get(field) not in (None, ""))
    return round(filled / len(COMPLETION_FIELDS) * 100)


def _credits(count: int) -> str:
    return "credit" if count == 1 else "credits"


def completion_message(award: RedeemAward | None) -> str:
    """User-facing message after an update, given the bonus outcome (if any)."""
    if award is not None and award.awarded > 0:
        message = f"Profile complete! You earned {award.awarded} bonus {_credits(award.awarded)}."
        if award.wasted > 0:
            message += f" ({award.wasted} {_credits(award.wasted)} could not be added - wallet limit reached)"
        return message
    if award is not None and award.limit_reached:
        return "Profile complete! Bonus credits could not be added - your redeem wallet is at its limit."
    return "Profile updated successfully!"


def _profile_values(profile: Profile) -> dict:
    return {field: getattr(profile, field) for field in COMPLETION_FIELDS}


async def promote_next_primary(db: AsyncSession, profile_id: UUID) -> Photo | None:
    """Marks the first remaining photo (by sort order) as primary. Caller commits."""
    successor = (
        await db.execute(
            select(Photo).where(Photo.profile_id == profile_id).order_by(Photo.sort_order).limit(1)
        )
    ).scalar_one_or_none()
    if successor:
        successor.is_primary = True
    return successor


# ---------------------------------------------------
# ProfileService
# ---------------------------------------------------
class ProfileService:
    """Member-owned matrimonial profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_owned_profile(self, user_id: UUID, profile_id: UUID) -> Profile:
        profile = (
            await self.db.execute(
                select(Profile).where(Profile.id == profile_id, Profile.user_id == user_id)
            )
        ).scalar_one_or_none()
        if not profile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
        return profile

    async def create_profile(
        self, user: User, data: schemas.ProfileCreate
    ) -> schemas.ProfileCreateResponse:
        limit = await PlanService(self.db).get_profile_limit(user)
        if not limit.can_create:
            logger.warning(f"[PROFILE] {user.id} hit profile limit {limit.profile_limit}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You have reached the limit of {limit.profile_limit} profile(s) on the {limit.plan_name}. Upgrade your plan to create more profiles.",
            )

        profile = Profile(
            user_id=user.id,
            profile_for=data.profile_for,
            gender=data.gender,
            date_of_birth=data.date_of_birth,
            marital_status=data.marital_status,
            number_of_children=data.number_of_children,
            children_living_with=data.children_living_with,
            profile_completion=INITIAL_COMPLETION,
            moderation_status=ModerationStatus.PENDING,
        )
        self.db.add(profile)
        await self.db.commit()
        await self.db.refresh(profile)
        logger.info(f"[PROFILE] Profile {profile.id} created by {user.id}")
        return schemas.ProfileCreateResponse(
            id=profile.id,
            profile_completion=profile.profile_completion,
            detail="Profile created! Continue to add more details.",
        )

    async def _suggest_mother_tongue(self, user_id: UUID, profile_id: UUID, value: str) -> None:
        value = value.strip()
        exists = (
            await self.db.execute(
                select(FieldSuggestion.id).where(
                    FieldSuggestion.user_id == user_id,
                    FieldSuggestion.field_type == SuggestionFieldType.MOTHER_TONGUE,
                    FieldSuggestion.value == value,
                )
            )
        ).first()
        if exists:
            return
        self.db.add(
            FieldSuggestion(
                field_type=SuggestionFieldType.MOTHER_TONGUE,
                value=value,
                user_id=user_id,
                profile_id=profile_id,
            )
        )
        logger.info(f"[PROFILE] Mother tongue suggestion '{value}' recorded for {user_id}")

    async def _completion_bonus(self, user_id: UUID) -> RedeemAward | None:
        action = (
            await self.db.execute(
                select(RedeemAction).where(RedeemAction.slug == PROFILE_COMPLETION_ACTION)
            )
        ).scalar_one_or_none()
        if not action or not action.is_active or action.credits_awarded <= 0:
            return None
        return await WalletService(self.db).award_redeem_credits(user_id, action.credits_awarded)

    async def update_profile(
        self, user: User, data: schemas.ProfileUpdate
    ) -> schemas.ProfileUpdateResponse:
        """
        Applies the provided fields, recomputes completion and awards the
        completion bonus the first time the profile reaches 100%.
        """
        profile = await self.get_owned_profile(user.id, data.profile_id)
        previous_completion = profile.profile_completion

        changes = data.model_dump(exclude_unset=True, exclude={"profile_id"})
        if "origin_audience" in changes and changes["origin_audience"] is None:
            changes["origin_audience"] = OriginAudience.SAME_ORIGIN
        for field in ("profile_for", "gender", "date_of_birth", "marital_status"):
            if field in changes and changes[field] is None:
                changes.pop(field)
        if "number_of_children" in changes and changes["number_of_children"] is None:
            changes["number_of_children"] = 0

        for field, value in changes.items():
            setattr(profile, field, value)

        if changes.get("other_mother_tongue"):
            await self._suggest_mother_tongue(user.id, profile.id, changes["other_mother_tongue"])

        completion = calculate_completion(_profile_values(profile))
        profile.profile_completion = completion

        award = None
        if completion == 100 and previous_completion < 100:
            award = await self._completion_bonus(user.id)

        await self.db.commit()
        logger.info(f"[PROFILE] Profile {profile.id} updated; completion {previous_completion} -> {completion}")
        return schemas.ProfileUpdateResponse(
            id=profile.id,
            profile_completion=completion,
            credits_awarded=award.awarded if award else 0,
            detail=completion_message(award),
        )

    async def get_current_profile(
        self, user_id: UUID, include_completed: bool = False
    ) -> schemas.ProfileRead | None:
        """The most recently updated draft (or any profile when `include_completed`)."""
        query = select(Profile).where(Profile.user_id == user_id)
        if not include_completed:
            query = query.where(Profile.profile_completion < 100)
        profile = (
            await self.db.execute(query.order_by(Profile.updated_at.desc()).limit(1))
        ).scalar_one_or_none()
        return schemas.ProfileRead.model_validate(profile) if profile else None

    async def list_profiles(self, user_id: UUID) -> list[schemas.ProfileSummary]:
        profiles = (
            (
                await self.db.execute(
                    select(Profile)
                    .where(Profile.user_id == user_id)
                    .order_by(Profile.created_at.desc())
                )
            )
            .scalars()
            .all()
        )
        primary_urls = {}
        if profiles:
            rows = await self.db.execute(
                select(Photo.profile_id, Photo.url).where(
                    Photo.profile_id.in_([p.id for p in profiles]), Photo.is_primary.is_(True)
                )
            )
            primary_urls = {profile_id: url for profile_id, url in rows.all()}

        summaries = []
        for profile in profiles:
            summary = schemas.ProfileSummary.model_validate(profile)
            summary.primary_photo_url = primary_urls.get(profile.id)
            summaries.append(summary)
        return summaries

    async def get_profile(self, user_id: UUID, profile_id: UUID) -> schemas.ProfileRead:
        return schemas.ProfileRead.model_validate(await self.get_owned_profile(user_id, profile_id))

    async def delete_profile(self, user_id: UUID, profile_id: UUID) -> str:
        profile = await self.get_owned_profile(user_id, profile_id)
        keys = (
            (await self.db.execute(select(Photo.s3_key).where(Photo.profile_id == profile.id)))
            .scalars()
            .all()
        )
        await self.db.delete(profile)
        await self.db.commit()
        for key in keys:
            delete_file_from_s3(key)
        logger.info(f"[PROFILE] Profile {profile_id} deleted by {user_id}")
        return "Profile deleted successfully"


# ---------------------------------------------------
# PhotoService
# ---------------------------------------------------
class PhotoService:
    """Photo gallery of a member's profile."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned_photo(self, user_id: UUID, photo_id: UUID) -> Photo:
        photo = await self.db.get(Photo, photo_id)
        if not photo:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
        owner_id = (
            await self.db.execute(select(Profile.user_id).where(Profile.id == photo.profile_id))
        ).scalar_one_or_none()
        if owner_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to modify this photo")
        return photo

    async def _unset_primary(self, profile_id: UUID) -> None:
        await self.db.execute(
            update(Photo).where(Photo.profile_id == profile_id).values(is_primary=False)
        )

    async def list_photos(self, user_id: UUID, profile_id: UUID) -> list[schemas.PhotoRead]:
        await ProfileService(self.db).get_owned_profile(user_id, profile_id)
        photos = (
            (
                await self.db.execute(
                    select(Photo).where(Photo.profile_id == profile_id).order_by(Photo.sort_order)
                )
            )
            .scalars()
            .all()
        )
        return [schemas.PhotoRead.model_validate(p) for p in photos]

    async def upload_photo(
        self, user_id: UUID, profile_id: UUID, file: UploadFile, is_primary: bool = False
    ) -> schemas.PhotoRead:
        await ProfileService(self.db).get_owned_profile(user_id, profile_id)

        count, max_order = (
            await self.db.execute(
                select(func.count(Photo.id), func.max(Photo.sort_order)).where(
                    Photo.profile_id == profile_id
                )
            )
        ).one()
        if count >= settings.PHOTO_MAX_PER_PROFILE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Maximum {settings.PHOTO_MAX_PER_PROFILE} photos allowed per profile",
            )

        url, s3_key = await upload_file_to_s3(file, subfolder="photos")

        make_primary = is_primary or count == 0
        if make_primary and count:
            await self._unset_primary(profile_id)

        photo = Photo(
            profile_id=profile_id,
            url=url,
            s3_key=s3_key,
            is_primary=make_primary,
            sort_order=(max_order if max_order is not None else -1) + 1,
            status=PhotoStatus.PENDING,
        )
        self.db.add(photo)
        await self.db.commit()
        await self.db.refresh(photo)
        logger.info(f"[PHOTO] Photo {photo.id} uploaded to profile {profile_id} (primary={make_primary})")
        return schemas.PhotoRead.model_validate(photo)

    async def update_photo(
        self, user_id: UUID, photo_id: UUID, data: schemas.PhotoUpdate
    ) -> schemas.PhotoRead:
        photo = await self._get_owned_photo(user_id, photo_id)
        if data.is_primary and not photo.is_primary:
            await self._unset_primary(photo.profile_id)
        photo.is_primary = data.is_primary
        await self.db.commit()
        await self.db.refresh(photo)
        return schemas.PhotoRead.model_validate(photo)

    async def delete_photo(self, user_id: UUID, photo_id: UUID) -> str:
        photo = await self._get_owned_photo(user_id, photo_id)
        profile_id, was_primary, s3_key = photo.profile_id, photo.is_primary, photo.s3_key

        await self.db.delete(photo)
        await self.db.flush()
        if was_primary:
            await promote_next_primary(self.db, profile_id)
        await self.db.commit()

        if not delete_file_from_s3(s3_key):
            logger.warning(f"[PHOTO] S3 object {s3_key} could not be removed")
        logger.info(f"[PHOTO] Photo {photo_id} deleted by {user_id}")
        return "Photo deleted successfully"
