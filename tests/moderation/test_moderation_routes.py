"""
tests/moderation/test_moderation_routes.py

Tests for profile and photo moderation routes and their permission guards.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient

from app.database.enums import PhotoStatus
from app.database.models import User
from app.moderation import routes as moderation_routes
from app.moderation import schemas


@pytest.mark.asyncio
async def test_moderation_queue_forbidden_for_support_agent(
    async_client: AsyncClient, override_get_db: None, mock_current_support_agent: User
) -> None:
    response = await async_client.get("/admin/profiles")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
@patch.object(moderation_routes.ModerationService, "list_profiles", new_callable=AsyncMock)
async def test_moderation_queue_as_content_editor(
    mock_list: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_content_editor: User,
) -> None:
    mock_list.return_value = schemas.ModerationListResponse(
        total_count=0,
        has_next_page=False,
        items=[],
        counts=schemas.ModerationCounts(pending=3, approved=5, rejected=1, banned=0),
        today_stats=schemas.ModerationTodayStats(pending=1, approved=2, rejected=0),
    )
    response = await async_client.get(
        "/admin/profiles", params={"status": "PENDING", "sort": "completeness", "limit": 10}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["counts"]["pending"] == 3
    mock_list.assert_awaited_once()
    assert mock_list.call_args[0][1:] == ("completeness", 0, 10)


@pytest.mark.asyncio
async def test_moderation_queue_invalid_sort(
    async_client: AsyncClient, override_get_db: None, mock_current_content_editor: User
) -> None:
    response = await async_client.get("/admin/profiles", params={"sort": "random"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(moderation_routes.ModerationService, "moderate", new_callable=AsyncMock)
async def test_approve_profile(
    mock_moderate: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
) -> None:
    mock_moderate.return_value = "Profile approved successfully"
    profile_id = uuid4()
    response = await async_client.post(
        f"/admin/profiles/{profile_id}/moderate", json={"action": "approve"}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["detail"] == "Profile approved successfully"
    moderator, called_id, payload = mock_moderate.call_args[0]
    assert moderator is mock_current_supervisor
    assert called_id == profile_id
    assert payload.action == "approve"


@pytest.mark.asyncio
async def test_moderate_profile_unknown_action(
    async_client: AsyncClient, override_get_db: None, mock_current_supervisor: User
) -> None:
    response = await async_client.post(
        f"/admin/profiles/{uuid4()}/moderate", json={"action": "archive"}
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(moderation_routes.ModerationService, "moderate", new_callable=AsyncMock)
async def test_moderate_missing_profile(
    mock_moderate: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_content_editor: User,
) -> None:
    mock_moderate.side_effect = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    response = await async_client.post(
        f"/admin/profiles/{uuid4()}/moderate", json={"action": "reject", "feedback": "Blurry photo"}
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_content_editor_cannot_delete_profile(
    async_client: AsyncClient, override_get_db: None, mock_current_content_editor: User
) -> None:
    response = await async_client.delete(f"/admin/profiles/{uuid4()}")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
@patch.object(moderation_routes.ModerationService, "delete_profile", new_callable=AsyncMock)
async def test_supervisor_deletes_profile(
    mock_delete: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
) -> None:
    mock_delete.return_value = "Profile deleted successfully"
    response = await async_client.delete(f"/admin/profiles/{uuid4()}")
    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
@patch.object(moderation_routes.ModerationService, "moderate_photo", new_callable=AsyncMock)
async def test_reject_photo(
    mock_photo: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_content_editor: User,
) -> None:
    photo_id = uuid4()
    mock_photo.return_value = schemas.PhotoModerationResponse(
        detail="Photo rejected", photo_id=photo_id, status=PhotoStatus.REJECTED
    )
    response = await async_client.patch(
        f"/admin/profiles/{uuid4()}/photos/{photo_id}",
        json={"action": "reject", "reason": "Face not visible"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "REJECTED"


@pytest.mark.asyncio
async def test_content_editor_cannot_delete_photo(
    async_client: AsyncClient, override_get_db: None, mock_current_content_editor: User
) -> None:
    response = await async_client.delete(f"/admin/profiles/{uuid4()}/photos/{uuid4()}")
    assert response.status_code == status.HTTP_403_FORBIDDEN
