"""
tests/lookup/test_lookup_routes.py

Tests for the public lookup and subscription plan routes.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from app.lookup import routes as lookup_routes
from app.lookup.schemas import LookupOption, SubscriptionPlanRead


@pytest.mark.asyncio
@patch.object(lookup_routes.LookupService, "get_options", new_callable=AsyncMock)
async def test_get_lookup_with_parent(
    mock_options: AsyncMock, async_client: AsyncClient, override_get_db: None
) -> None:
    parent_id = uuid4()
    option = LookupOption(id=uuid4(), name="Punjabi", slug="punjabi", is_popular=True)
    mock_options.return_value = [option]
    response = await async_client.get(
        "/lookup", params={"table": "ethnicity", "parent_id": str(parent_id)}
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data == [{"id": str(option.id), "name": "Punjabi", "slug": "punjabi", "is_popular": True}]
    mock_options.assert_awaited_once_with("ethnicity", parent_id)


@pytest.mark.asyncio
async def test_get_lookup_requires_table(async_client: AsyncClient, override_get_db: None) -> None:
    response = await async_client.get("/lookup")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_get_lookup_invalid_table(async_client: AsyncClient, override_get_db: None) -> None:
    response = await async_client.get("/lookup", params={"table": "planets"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Invalid table name"


@pytest.mark.asyncio
@patch.object(lookup_routes.LookupService, "list_subscription_plans", new_callable=AsyncMock)
async def test_list_subscription_plans(
    mock_plans: AsyncMock, async_client: AsyncClient, override_get_db: None
) -> None:
    mock_plans.return_value = [
        SubscriptionPlanRead(
            id=uuid4(),
            slug="FREE",
            name="Free Plan",
            free_credits=0,
            wallet_limit=50,
            redeem_credits=2,
            redeem_cycle_days=7,
            profile_limit=1,
            price_monthly=Decimal("0"),
            price_yearly=Decimal("0"),
            yearly_discount_pct=0,
            sort_order=1,
            is_default=True,
            features=["1 profile"],
        )
    ]
    response = await async_client.get("/subscription-plans")
    assert response.status_code == status.HTTP_200_OK
    plans = response.json()["data"]
    assert plans[0]["slug"] == "FREE"
    assert plans[0]["is_default"] is True
