"""
tests/suggestions/test_suggestions_routes.py

Tests for the field suggestion review routes.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient

from app.database.enums import SuggestionFieldType, SuggestionStatus
from app.database.models import User
from app.suggestions import routes as suggestion_routes
from app.suggestions import schemas


def _suggestion(**overrides: object) -> schemas.SuggestionRead:
    data = {
        "id": uuid4(),
        "field_type": SuggestionFieldType.MOTHER_TONGUE,
        "value": "Shina (Gilgiti)",
        "status": SuggestionStatus.PENDING,
        "user": schemas.SuggestionUser(id=uuid4(), name="Member Test", email="member.test@example.com"),
        "created_at": datetime.now(timezone.utc),
    }
    data.update(overrides)
    return schemas.SuggestionRead(**data)


@pytest.mark.asyncio
async def test_suggestions_forbidden_for_supervisor(
    async_client: AsyncClient, override_get_db: None, mock_current_supervisor: User
) -> None:
    response = await async_client.get("/admin/suggestions")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
@patch.object(suggestion_routes.SuggestionService, "list_suggestions", new_callable=AsyncMock)
async def test_list_suggestions_filtered(
    mock_list: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_super_admin: User,
) -> None:
    mock_list.return_value = schemas.SuggestionListResponse(
        suggestions=[_suggestion()],
        counts=schemas.SuggestionCounts(pending=1, approved=0, rejected=0, total=1),
    )
    response = await async_client.get(
        "/admin/suggestions", params={"status": "PENDING", "field_type": "MOTHER_TONGUE"}
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["counts"]["pending"] == 1
    assert data["suggestions"][0]["value"] == "Shina (Gilgiti)"
    mock_list.assert_awaited_once_with(SuggestionStatus.PENDING, SuggestionFieldType.MOTHER_TONGUE)


@pytest.mark.asyncio
@patch.object(suggestion_routes.SuggestionService, "get_suggestion", new_callable=AsyncMock)
async def test_get_suggestion_not_found(
    mock_get: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_super_admin: User,
) -> None:
    mock_get.side_effect = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suggestion not found")
    response = await async_client.get(f"/admin/suggestions/{uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
@patch.object(suggestion_routes.SuggestionService, "review_suggestion", new_callable=AsyncMock)
async def test_approve_suggestion_creates_language(
    mock_review: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_super_admin: User,
) -> None:
    suggestion = _suggestion(status=SuggestionStatus.APPROVED)
    mock_review.return_value = schemas.SuggestionReviewResponse(
        detail="Suggestion approved",
        suggestion=suggestion,
        created_language=schemas.CreatedLanguage(
            id=uuid4(), code="shinagilgi", slug="shina_gilgiti", label="Shina (Gilgiti)", sort_order=98
        ),
    )
    response = await async_client.patch(
        f"/admin/suggestions/{suggestion.id}",
        json={"status": "APPROVED", "create_language": True},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["created_language"]["code"] == "shinagilgi"
    reviewer, suggestion_id, payload = mock_review.call_args[0]
    assert reviewer is mock_current_super_admin
    assert suggestion_id == suggestion.id
    assert payload.create_language is True


@pytest.mark.asyncio
async def test_review_suggestion_invalid_status(
    async_client: AsyncClient, override_get_db: None, mock_current_super_admin: User
) -> None:
    response = await async_client.patch(f"/admin/suggestions/{uuid4()}", json={"status": "PENDING"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"].startswith("Invalid status")


@pytest.mark.asyncio
@patch.object(suggestion_routes.SuggestionService, "delete_suggestion", new_callable=AsyncMock)
async def test_delete_suggestion(
    mock_delete: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_super_admin: User,
) -> None:
    suggestion_id = uuid4()
    response = await async_client.delete(f"/admin/suggestions/{suggestion_id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["detail"] == "Suggestion deleted successfully"
    mock_delete.assert_awaited_once_with(suggestion_id)
