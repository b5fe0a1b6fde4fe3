"""
tests/finance/test_finance_routes.py

Tests for back-office credit, top-up and ledger routes.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient

from app.database.enums import PaymentMethod, TopUpStatus, TransactionType, WalletType
from app.database.models import User
from app.finance import routes as finance_routes
from app.finance import schemas


def _admin_topup(user: User, **overrides: object) -> schemas.AdminTopUpRead:
    data = {
        "id": uuid4(),
        "request_number": "TXN-2025-00007",
        "credits": 25,
        "bonus_credits": 5,
        "amount": Decimal("2500.00"),
        "payment_method": PaymentMethod.JAZZCASH,
        "status": TopUpStatus.PENDING,
        "created_at": datetime.now(timezone.utc),
        "user": schemas.UserBrief(id=user.id, name=user.name, email=user.email),
    }
    data.update(overrides)
    return schemas.AdminTopUpRead(**data)


# ---------------------------------------------------
# Credits
# ---------------------------------------------------
@pytest.mark.asyncio
async def test_add_credits_forbidden_for_content_editor(
    async_client: AsyncClient, override_get_db: None, mock_current_content_editor: User
) -> None:
    response = await async_client.post(
        "/admin/credits/add", json={"user_id": str(uuid4()), "amount": 10}
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "add_credits", new_callable=AsyncMock)
async def test_add_credits(
    mock_add: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
    fake_member_user: User,
) -> None:
    mock_add.return_value = schemas.AddCreditsResponse(
        detail="Added 10 credits",
        user_id=fake_member_user.id,
        new_balance=15,
        credits_added=10,
        transaction_id=uuid4(),
    )
    response = await async_client.post(
        "/admin/credits/add",
        json={"user_id": str(fake_member_user.id), "amount": 10, "reason": "Goodwill"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["new_balance"] == 15


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, 10001])
async def test_add_credits_amount_bounds(
    amount: int, async_client: AsyncClient, override_get_db: None, mock_current_supervisor: User
) -> None:
    response = await async_client.post(
        "/admin/credits/add", json={"user_id": str(uuid4()), "amount": amount}
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "adjust_wallet", new_callable=AsyncMock)
async def test_adjust_redeem_wallet_limit(
    mock_adjust: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_super_admin: User,
) -> None:
    mock_adjust.return_value = schemas.AdjustWalletResponse(
        detail="Redeem wallet updated",
        wallet_type=WalletType.REDEEM,
        previous_balance=4,
        new_balance=4,
        previous_limit=50,
        new_limit=100,
    )
    response = await async_client.post(
        "/admin/credits/adjust",
        json={"user_id": str(uuid4()), "wallet_type": "REDEEM", "new_limit": 100},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["new_limit"] == 100


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "get_credits_overview", new_callable=AsyncMock)
async def test_credits_overview(
    mock_overview: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
) -> None:
    mock_overview.return_value = schemas.CreditsOverviewResponse(
        stats=schemas.CreditsOverviewStats(
            total_users=2, total_funding_credits=30, total_redeem_credits=4, users_with_credits=1
        ),
        users=[],
    )
    response = await async_client.get("/admin/credits/overview")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["stats"]["total_funding_credits"] == 30


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "get_user_credits", new_callable=AsyncMock)
async def test_user_credits_not_found(
    mock_credits: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
) -> None:
    mock_credits.side_effect = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    response = await async_client.get(f"/admin/credits/user/{uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


# ---------------------------------------------------
# Top-up Requests
# ---------------------------------------------------
@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "list_topups", new_callable=AsyncMock)
async def test_list_topup_requests(
    mock_list: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
    fake_member_user: User,
) -> None:
    mock_list.return_value = schemas.TopUpListResponse(
        requests=[_admin_topup(fake_member_user)],
        stats=schemas.TopUpStats(pending=1, total=1),
    )
    response = await async_client.get("/admin/topup-requests", params={"status": "PENDING"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["stats"]["pending"] == 1
    assert data["requests"][0]["user"]["email"] == fake_member_user.email
    mock_list.assert_awaited_once_with(TopUpStatus.PENDING)


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "count_pending_topups", new_callable=AsyncMock)
async def test_pending_topup_count(
    mock_count: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_super_admin: User,
) -> None:
    mock_count.return_value = 2
    response = await async_client.get("/admin/topup-requests/pending-count")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"count": 2}


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "process_topup", new_callable=AsyncMock)
async def test_approve_topup_route(
    mock_process: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
    fake_member_user: User,
) -> None:
    topup = _admin_topup(fake_member_user, status=TopUpStatus.COMPLETED)
    mock_process.return_value = schemas.TopUpProcessResponse(
        detail="Top-up approved. 30 credits added.", request=topup, new_balance=30
    )
    response = await async_client.put(
        f"/admin/topup-requests/{topup.id}", json={"action": "approve", "admin_notes": "Receipt checked"}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["new_balance"] == 30
    actor, request_id, payload = mock_process.call_args[0]
    assert actor is mock_current_supervisor
    assert request_id == topup.id
    assert payload.action == "approve"


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "process_topup", new_callable=AsyncMock)
async def test_process_topup_already_processed(
    mock_process: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_supervisor: User,
) -> None:
    mock_process.side_effect = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="This request has already been processed"
    )
    response = await async_client.put(
        f"/admin/topup-requests/{uuid4()}", json={"action": "reject", "rejection_reason": "No payment"}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


# ---------------------------------------------------
# Transactions
# ---------------------------------------------------
@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "list_transactions", new_callable=AsyncMock)
async def test_list_transactions_filters(
    mock_list: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_support_agent: User,
) -> None:
    mock_list.return_value = schemas.AdminTransactionListResponse(
        total_count=0,
        has_next_page=False,
        items=[],
        stats=schemas.TransactionStats(total=0, by_type={}, by_wallet_type={}),
    )
    response = await async_client.get(
        "/admin/transactions",
        params={
            "type": "TOP_UP",
            "wallet_type": "FUNDING",
            "start_date": "2025-01-01",
            "end_date": "2025-01-31",
            "skip": 20,
            "limit": 10,
        },
    )
    assert response.status_code == status.HTTP_200_OK
    filters, skip, limit = mock_list.call_args[0]
    assert filters.type == TransactionType.TOP_UP
    assert filters.wallet_type == WalletType.FUNDING
    assert filters.end_date == date(2025, 1, 31)
    assert (skip, limit) == (20, 10)


@pytest.mark.asyncio
async def test_list_transactions_forbidden_for_member(
    async_client: AsyncClient, override_get_db: None, mock_current_member: User
) -> None:
    response = await async_client.get("/admin/transactions")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_delete_transaction_requires_super_admin(
    async_client: AsyncClient, override_get_db: None, mock_current_supervisor: User
) -> None:
    response = await async_client.delete(f"/admin/transactions/{uuid4()}")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
@patch.object(finance_routes.FinanceService, "delete_transaction", new_callable=AsyncMock)
async def test_delete_transaction(
    mock_delete: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
    mock_current_super_admin: User,
) -> None:
    mock_delete.return_value = "Transaction deleted successfully"
    response = await async_client.delete(f"/admin/transactions/{uuid4()}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["detail"] == "Transaction deleted successfully"
