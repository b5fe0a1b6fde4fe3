"""
tests/profile/test_profile_routes.py

Tests for the profile wizard and photo gallery routes, plus the
completion scoring helpers.
"""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient

from app.database.enums import (
    Gender,
    MaritalStatus,
    ModerationStatus,
    PhotoStatus,
    ProfileFor,
)
from app.database.models import User
from app.profile import routes as profile_routes
from app.profile import schemas
from app.profile.services import COMPLETION_FIELDS, calculate_completion, completion_message
from app.wallet.services import RedeemAward


def _profile_read(user_id, **overrides) -> schemas.ProfileRead:
    now = datetime.now(timezone.utc)
    data = {
        "id": uuid4(),
        "user_id": user_id,
        "profile_for": ProfileFor.SELF,
        "gender": Gender.MALE,
        "date_of_birth": date(1995, 5, 17),
        "marital_status": MaritalStatus.NEVER_MARRIED,
        "number_of_children": 0,
        "profile_completion": 20,
        "moderation_status": ModerationStatus.PENDING,
        "is_published": False,
        "is_verified": False,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return schemas.ProfileRead(**data)


def _photo_read(profile_id, **overrides) -> schemas.PhotoRead:
    data = {
        "id": uuid4(),
        "profile_id": profile_id,
        "url": "https://bucket.s3.amazonaws.com/photos/a.jpg",
        "is_primary": True,
        "sort_order": 0,
        "status": PhotoStatus.PENDING,
        "created_at": datetime.now(timezone.utc),
    }
    data.update(overrides)
    return schemas.PhotoRead(**data)


# ---------------------------------------------------
# Completion Scoring
# ---------------------------------------------------
def test_calculate_completion_empty() -> None:
    assert calculate_completion({}) == 0


def test_calculate_completion_basics_only() -> None:
    values = {
        "profile_for": ProfileFor.SELF,
        "gender": Gender.FEMALE,
        "date_of_birth": date(1998, 1, 1),
        "marital_status": MaritalStatus.NEVER_MARRIED,
    }
    assert calculate_completion(values) == round(4 / len(COMPLETION_FIELDS) * 100)


def test_calculate_completion_ignores_blank_strings() -> None:
    values = {field: "x" for field in COMPLETION_FIELDS}
    values["bio"] = ""
    assert calculate_completion(values) < 100


def test_calculate_completion_full() -> None:
    assert calculate_completion({field: "x" for field in COMPLETION_FIELDS}) == 100


def test_completion_message_without_award() -> None:
    assert completion_message(None) == "Profile updated successfully!"


def test_completion_message_full_award() -> None:
    message = completion_message(RedeemAward(awarded=2, wasted=0, limit_reached=False))
    assert message == "Profile complete! You earned 2 bonus credits."


def test_completion_message_partial_award() -> None:
    message = completion_message(RedeemAward(awarded=1, wasted=1, limit_reached=True))
    assert message.startswith("Profile complete! You earned 1 bonus credit.")
    assert "1 credit could not be added" in message


def test_completion_message_wallet_full() -> None:
    message = completion_message(RedeemAward(awarded=0, wasted=2, limit_reached=True))
    assert "at its limit" in message


# ---------------------------------------------------
# Profile Wizard
# ---------------------------------------------------
@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "create_profile", new_callable=AsyncMock)
async def test_create_profile(
    mock_create: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    profile_id = uuid4()
    mock_create.return_value = schemas.ProfileCreateResponse(
        id=profile_id, profile_completion=15, detail="Profile created successfully"
    )
    response = await async_client.post(
        "/profile",
        json={
            "profile_for": "SELF",
            "gender": "MALE",
            "date_of_birth": "1995-05-17",
            "marital_status": "NEVER_MARRIED",
        },
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["id"] == str(profile_id)
    user, data = mock_create.call_args[0]
    assert user is mock_current_member
    assert data.number_of_children == 0


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "create_profile", new_callable=AsyncMock)
async def test_create_profile_plan_limit(
    mock_create: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_create.side_effect = HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Your Free Plan allows 1 profile. Upgrade to create more.",
    )
    response = await async_client.post(
        "/profile",
        json={
            "profile_for": "SON",
            "gender": "MALE",
            "date_of_birth": "1999-02-01",
            "marital_status": "NEVER_MARRIED",
        },
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_create_profile_invalid_enum(
    async_client: AsyncClient, override_get_db: None, mock_current_member: User
) -> None:
    response = await async_client.post(
        "/profile",
        json={
            "profile_for": "COUSIN",
            "gender": "MALE",
            "date_of_birth": "1995-05-17",
            "marital_status": "NEVER_MARRIED",
        },
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "update_profile", new_callable=AsyncMock)
async def test_update_profile_returns_bonus_response(
    mock_update: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    profile_id = uuid4()
    mock_update.return_value = schemas.ProfileUpdateResponse(
        id=profile_id,
        profile_completion=100,
        credits_awarded=2,
        detail="Profile complete! You earned 2 bonus credits.",
    )
    response = await async_client.patch(
        "/profile", json={"profile_id": str(profile_id), "bio": "Looking for a kind partner."}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["credits_awarded"] == 2
    data = mock_update.call_args[0][1]
    assert data.profile_id == profile_id


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "update_profile", new_callable=AsyncMock)
async def test_update_profile_blank_strings_become_none(
    mock_update: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    profile_id = uuid4()
    mock_update.return_value = schemas.ProfileUpdateResponse(
        id=profile_id, profile_completion=20, detail="Profile updated successfully!"
    )
    response = await async_client.patch(
        "/profile", json={"profile_id": str(profile_id), "bio": "   "}
    )
    assert response.status_code == status.HTTP_200_OK
    assert mock_update.call_args[0][1].bio is None


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "get_current_profile", new_callable=AsyncMock)
async def test_get_current_profile_none(
    mock_current: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_current.return_value = None
    response = await async_client.get("/profile")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"profile": None}
    mock_current.assert_awaited_once_with(mock_current_member.id, False)


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "get_current_profile", new_callable=AsyncMock)
async def test_get_current_profile_include_completed(
    mock_current: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_current.return_value = _profile_read(mock_current_member.id, profile_completion=100)
    response = await async_client.get("/profile", params={"include_completed": "true"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["profile"]["profile_completion"] == 100
    mock_current.assert_awaited_once_with(mock_current_member.id, True)


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "list_profiles", new_callable=AsyncMock)
async def test_list_my_profiles(
    mock_list: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_list.return_value = [
        schemas.ProfileSummary(
            id=uuid4(),
            profile_for=ProfileFor.DAUGHTER,
            gender=Gender.FEMALE,
            date_of_birth=date(2000, 3, 3),
            marital_status=MaritalStatus.NEVER_MARRIED,
            profile_completion=60,
            moderation_status=ModerationStatus.APPROVED,
            is_published=True,
            created_at=datetime.now(timezone.utc),
        )
    ]
    response = await async_client.get("/profile/list")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()[0]["profile_for"] == "DAUGHTER"


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "get_profile", new_callable=AsyncMock)
async def test_get_profile_not_owned(
    mock_get: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_get.side_effect = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    response = await async_client.get(f"/profile/{uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Profile not found"


@pytest.mark.asyncio
@patch.object(profile_routes.ProfileService, "delete_profile", new_callable=AsyncMock)
async def test_delete_profile(
    mock_delete: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_delete.return_value = "Profile deleted successfully"
    profile_id = uuid4()
    response = await async_client.delete(f"/profile/{profile_id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["detail"] == "Profile deleted successfully"
    mock_delete.assert_awaited_once_with(mock_current_member.id, profile_id)


# ---------------------------------------------------
# Photos
# ---------------------------------------------------
@pytest.mark.asyncio
@patch.object(profile_routes.PhotoService, "upload_photo", new_callable=AsyncMock)
async def test_upload_photo(
    mock_upload: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    profile_id = uuid4()
    mock_upload.return_value = _photo_read(profile_id)
    response = await async_client.post(
        "/photos",
        data={"profile_id": str(profile_id), "is_primary": "true"},
        files={"file": ("photo.jpg", b"\xff\xd8\xff\xe0fakejpeg", "image/jpeg")},
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "PENDING"
    args = mock_upload.call_args[0]
    assert args[0] == mock_current_member.id
    assert args[1] == profile_id
    assert args[3] is True


@pytest.mark.asyncio
@patch.object(profile_routes.PhotoService, "upload_photo", new_callable=AsyncMock)
async def test_upload_photo_gallery_full(
    mock_upload: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_upload.side_effect = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="Maximum 6 photos allowed per profile"
    )
    response = await async_client.post(
        "/photos",
        data={"profile_id": str(uuid4())},
        files={"file": ("photo.jpg", b"\xff\xd8\xff\xe0fakejpeg", "image/jpeg")},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_list_photos_requires_profile_id(
    async_client: AsyncClient, override_get_db: None, mock_current_member: User
) -> None:
    response = await async_client.get("/photos")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(profile_routes.PhotoService, "list_photos", new_callable=AsyncMock)
async def test_list_photos(
    mock_list: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    profile_id = uuid4()
    mock_list.return_value = [
        _photo_read(profile_id),
        _photo_read(profile_id, is_primary=False, sort_order=1),
    ]
    response = await async_client.get("/photos", params={"profile_id": str(profile_id)})
    assert response.status_code == status.HTTP_200_OK
    assert [p["sort_order"] for p in response.json()] == [0, 1]


@pytest.mark.asyncio
@patch.object(profile_routes.PhotoService, "update_photo", new_callable=AsyncMock)
async def test_update_photo_primary(
    mock_update: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    photo = _photo_read(uuid4())
    mock_update.return_value = photo
    response = await async_client.patch(f"/photos/{photo.id}", json={"is_primary": True})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_primary"] is True


@pytest.mark.asyncio
@patch.object(profile_routes.PhotoService, "delete_photo", new_callable=AsyncMock)
async def test_delete_photo(
    mock_delete: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_member: User,
) -> None:
    mock_delete.return_value = "Photo deleted successfully"
    response = await async_client.delete(f"/photos/{uuid4()}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["detail"] == "Photo deleted successfully"
