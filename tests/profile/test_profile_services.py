"""
tests/profile/test_profile_services.py

Profile completion scoring and the one-time completion bonus, plus primary
photo handover, against a real (in-memory) database.
"""

from datetime import date
from unittest.mock import patch
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.enums import (
    Complexion,
    Gender,
    MaritalStatus,
    OccupationType,
    PhotoStatus,
    ProfileFor,
    ReligiousBelonging,
    SocialStatus,
    TransactionType,
    WalletType,
)
from app.database.models import User
from app.moderation.services import ModerationService
from app.profile import schemas
from app.profile.models import Photo, Profile
from app.profile.services import (
    COMPLETION_FIELDS,
    PROFILE_COMPLETION_ACTION,
    PhotoService,
    ProfileService,
    calculate_completion,
)
from app.wallet.models import RedeemAction, RedeemWallet, Transaction

REMAINING_FIELDS = {
    "origin_id": uuid4(),
    "ethnicity_id": uuid4(),
    "country_of_origin_id": uuid4(),
    "country_living_in_id": uuid4(),
    "state_province_id": uuid4(),
    "city_id": uuid4(),
    "sect_id": uuid4(),
    "religious_belonging": ReligiousBelonging.MODERATE,
    "social_status": SocialStatus.ESTABLISHED_MIDDLE,
    "height_id": uuid4(),
    "complexion": Complexion.MEDIUM_FAIR,
    "education_level_id": uuid4(),
    "education_field_id": uuid4(),
    "occupation_type": OccupationType.PRIVATE_JOB,
    "income_range_id": uuid4(),
    "bio": "Practising, family-oriented and working in Lahore.",
}


async def _profile(db: AsyncSession, user: User) -> Profile:
    profile = Profile(
        user_id=user.id,
        profile_for=ProfileFor.SELF,
        gender=Gender.MALE,
        date_of_birth=date(1994, 6, 1),
        marital_status=MaritalStatus.NEVER_MARRIED,
        profile_completion=15,
    )
    db.add(profile)
    await db.commit()
    return profile


async def _bonus_setup(db: AsyncSession, user: User, balance: int, limit: int, credits: int) -> RedeemWallet:
    wallet = RedeemWallet(user_id=user.id, balance=balance, limit=limit, total_earned=balance)
    db.add_all(
        [
            wallet,
            RedeemAction(slug=PROFILE_COMPLETION_ACTION, name="Complete your profile", credits_awarded=credits),
        ]
    )
    await db.commit()
    return wallet


async def _bonus_rows(db: AsyncSession, user: User) -> list[Transaction]:
    return list(
        (
            await db.execute(
                select(Transaction).where(
                    Transaction.user_id == user.id, Transaction.type == TransactionType.BONUS
                )
            )
        )
        .scalars()
        .all()
    )


# ---------------------------------------------------
# Completion Scoring
# ---------------------------------------------------
def test_calculate_completion_counts_basics_only() -> None:
    values = {"profile_for": "SELF", "gender": "MALE", "date_of_birth": date(1994, 6, 1), "marital_status": "X"}
    assert calculate_completion(values) == 20


def test_calculate_completion_ignores_blank_strings() -> None:
    values = {field: "x" for field in COMPLETION_FIELDS}
    values["bio"] = ""
    assert calculate_completion(values) == 95


@pytest.mark.asyncio
async def test_partial_update_recomputes_completion_without_bonus(
    db_session: AsyncSession, db_member: User
) -> None:
    profile = await _profile(db_session, db_member)
    wallet = await _bonus_setup(db_session, db_member, balance=0, limit=5, credits=2)

    result = await ProfileService(db_session).update_profile(
        db_member, schemas.ProfileUpdate(profile_id=profile.id, bio="Hello")
    )

    assert result.profile_completion == 25
    assert result.credits_awarded == 0
    assert result.detail == "Profile updated successfully!"
    assert wallet.balance == 0


# ---------------------------------------------------
# Completion Bonus
# ---------------------------------------------------
@pytest.mark.asyncio
async def test_reaching_full_completion_awards_bonus_once(
    db_session: AsyncSession, db_member: User
) -> None:
    profile = await _profile(db_session, db_member)
    wallet = await _bonus_setup(db_session, db_member, balance=0, limit=5, credits=2)
    service = ProfileService(db_session)

    first = await service.update_profile(
        db_member, schemas.ProfileUpdate(profile_id=profile.id, **REMAINING_FIELDS)
    )
    second = await service.update_profile(
        db_member, schemas.ProfileUpdate(profile_id=profile.id, bio="Updated bio")
    )

    assert first.profile_completion == 100
    assert first.credits_awarded == 2
    assert first.detail == "Profile complete! You earned 2 bonus credits."
    assert second.profile_completion == 100
    assert second.credits_awarded == 0
    assert wallet.balance == 2

    [entry] = await _bonus_rows(db_session, db_member)
    assert (entry.wallet_type, entry.amount) == (WalletType.REDEEM, 2)


@pytest.mark.asyncio
async def test_completion_bonus_overflow_reported(db_session: AsyncSession, db_member: User) -> None:
    profile = await _profile(db_session, db_member)
    wallet = await _bonus_setup(db_session, db_member, balance=4, limit=5, credits=3)

    result = await ProfileService(db_session).update_profile(
        db_member, schemas.ProfileUpdate(profile_id=profile.id, **REMAINING_FIELDS)
    )

    assert result.credits_awarded == 1
    assert result.detail == (
        "Profile complete! You earned 1 bonus credit. (2 credits could not be added - wallet limit reached)"
    )
    assert (wallet.balance, wallet.credits_wasted) == (5, 2)


@pytest.mark.asyncio
async def test_completion_bonus_on_full_wallet(db_session: AsyncSession, db_member: User) -> None:
    profile = await _profile(db_session, db_member)
    await _bonus_setup(db_session, db_member, balance=5, limit=5, credits=2)

    result = await ProfileService(db_session).update_profile(
        db_member, schemas.ProfileUpdate(profile_id=profile.id, **REMAINING_FIELDS)
    )

    assert result.credits_awarded == 0
    assert "your redeem wallet is at its limit" in result.detail
    assert await _bonus_rows(db_session, db_member) == []


# ---------------------------------------------------
# Primary Photo Handover
# ---------------------------------------------------
async def _photos(db: AsyncSession, profile: Profile) -> tuple[Photo, Photo]:
    primary = Photo(
        profile_id=profile.id, url="https://cdn/1.jpg", s3_key="photos/1.jpg",
        is_primary=True, sort_order=0, status=PhotoStatus.APPROVED,
    )
    second = Photo(
        profile_id=profile.id, url="https://cdn/2.jpg", s3_key="photos/2.jpg",
        is_primary=False, sort_order=1, status=PhotoStatus.PENDING,
    )
    db.add_all([primary, second])
    await db.commit()
    return primary, second


@pytest.mark.asyncio
@patch("app.profile.services.delete_file_from_s3", return_value=True)
async def test_member_deleting_primary_photo_promotes_next(
    mock_s3_delete, db_session: AsyncSession, db_member: User
) -> None:
    profile = await _profile(db_session, db_member)
    primary, second = await _photos(db_session, profile)

    await PhotoService(db_session).delete_photo(db_member.id, primary.id)

    assert second.is_primary is True
    mock_s3_delete.assert_called_once_with("photos/1.jpg")


@pytest.mark.asyncio
@patch("app.moderation.services.delete_file_from_s3", return_value=True)
async def test_moderator_deleting_primary_photo_promotes_next(
    mock_s3_delete, db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    profile = await _profile(db_session, db_member)
    primary, second = await _photos(db_session, profile)

    message = await ModerationService(db_session).delete_photo(db_super_admin, profile.id, primary.id)

    assert message == "Photo deleted successfully"
    assert second.is_primary is True
    remaining = (await db_session.execute(select(Photo).where(Photo.profile_id == profile.id))).scalars().all()
    assert remaining == [second]
