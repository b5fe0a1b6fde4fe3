"""
tests/finance/test_finance_services.py

Top-up processing and manual wallet adjustments against a real (in-memory)
database, checking balances and the ledger rows each change writes.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.enums import PaymentMethod, TopUpStatus, TransactionType, WalletType
from app.database.models import User
from app.finance.schemas import AdjustWalletRequest, TopUpProcessRequest
from app.finance.services import DEFAULT_ADJUSTED_REDEEM_LIMIT, FinanceService
from app.wallet.models import CreditPackage, FundingWallet, RedeemWallet, TopUpRequest, Transaction


async def _pending_topup(db: AsyncSession, user: User, credits: int = 100, bonus: int = 10) -> TopUpRequest:
    package = CreditPackage(
        slug="value-pack", name="Value Pack", credits=credits, price=Decimal("4500.00"), bonus_credits=bonus
    )
    db.add(package)
    await db.flush()
    request = TopUpRequest(
        request_number="TXN-2025-00007",
        user_id=user.id,
        package_id=package.id,
        credits=credits,
        bonus_credits=bonus,
        amount=Decimal("4500.00"),
        payment_method=PaymentMethod.EASYPAISA,
        status=TopUpStatus.PENDING,
    )
    db.add(request)
    await db.commit()
    return request


async def _transactions(db: AsyncSession, user: User) -> list[Transaction]:
    return list(
        (await db.execute(select(Transaction).where(Transaction.user_id == user.id))).scalars().all()
    )


# ---------------------------------------------------
# Top-up Processing
# ---------------------------------------------------
@pytest.mark.asyncio
async def test_approve_topup_credits_wallet_and_writes_ledger(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    db_session.add(FundingWallet(user_id=db_member.id, balance=5, total_purchased=5, total_spent=0))
    request = await _pending_topup(db_session, db_member)

    result = await FinanceService(db_session).process_topup(
        db_super_admin, request.id, TopUpProcessRequest(action="approve", admin_notes="Receipt checked")
    )

    assert result.new_balance == 115
    assert result.request.status == TopUpStatus.COMPLETED
    assert result.request.processed_by is not None
    assert result.request.processed_by.id == db_super_admin.id
    assert result.detail == "Top-up approved. 110 credits added to user's wallet."

    wallet = (
        await db_session.execute(select(FundingWallet).where(FundingWallet.user_id == db_member.id))
    ).scalar_one()
    assert (wallet.balance, wallet.total_purchased) == (115, 115)

    [entry] = await _transactions(db_session, db_member)
    assert entry.type == TransactionType.TOP_UP
    assert entry.wallet_type == WalletType.FUNDING
    assert entry.amount == 110
    assert entry.payment_method == PaymentMethod.EASYPAISA.value
    assert entry.reference_type == "TOP_UP_REQUEST"
    assert entry.reference_id == str(request.id)


@pytest.mark.asyncio
async def test_approve_topup_creates_missing_funding_wallet(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    request = await _pending_topup(db_session, db_member, credits=20, bonus=0)

    result = await FinanceService(db_session).process_topup(
        db_super_admin, request.id, TopUpProcessRequest(action="approve")
    )

    assert result.new_balance == 20


@pytest.mark.asyncio
async def test_processed_topup_cannot_be_processed_again(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    request = await _pending_topup(db_session, db_member)
    service = FinanceService(db_session)
    await service.process_topup(db_super_admin, request.id, TopUpProcessRequest(action="approve"))

    with pytest.raises(HTTPException) as exc:
        await service.process_topup(db_super_admin, request.id, TopUpProcessRequest(action="approve"))

    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert exc.value.detail == "This request has already been processed"
    assert len(await _transactions(db_session, db_member)) == 1


@pytest.mark.asyncio
async def test_reject_topup_requires_reason(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    request = await _pending_topup(db_session, db_member)

    with pytest.raises(HTTPException) as exc:
        await FinanceService(db_session).process_topup(
            db_super_admin, request.id, TopUpProcessRequest(action="reject")
        )

    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert request.status == TopUpStatus.PENDING


@pytest.mark.asyncio
async def test_reject_topup_leaves_wallet_untouched(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    request = await _pending_topup(db_session, db_member)

    result = await FinanceService(db_session).process_topup(
        db_super_admin,
        request.id,
        TopUpProcessRequest(action="reject", rejection_reason="Payment not received"),
    )

    assert result.request.status == TopUpStatus.REJECTED
    assert result.request.rejection_reason == "Payment not received"
    assert result.new_balance is None
    assert await _transactions(db_session, db_member) == []


# ---------------------------------------------------
# Wallet Adjustments
# ---------------------------------------------------
@pytest.mark.asyncio
async def test_adjust_missing_redeem_wallet_uses_default_limit(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    result = await FinanceService(db_session).adjust_wallet(
        db_super_admin,
        AdjustWalletRequest(user_id=db_member.id, wallet_type=WalletType.REDEEM, new_balance=20),
    )

    assert (result.previous_balance, result.new_balance) == (0, 20)
    assert (result.previous_limit, result.new_limit) == (0, DEFAULT_ADJUSTED_REDEEM_LIMIT)
    wallet = (
        await db_session.execute(select(RedeemWallet).where(RedeemWallet.user_id == db_member.id))
    ).scalar_one()
    assert wallet.limit == 50

    [entry] = await _transactions(db_session, db_member)
    assert (entry.type, entry.wallet_type, entry.amount) == (TransactionType.CREDIT, WalletType.REDEEM, 20)


@pytest.mark.asyncio
async def test_adjust_funding_wallet_down_records_debit(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    db_session.add(FundingWallet(user_id=db_member.id, balance=30, total_purchased=30, total_spent=0))
    await db_session.commit()

    result = await FinanceService(db_session).adjust_wallet(
        db_super_admin,
        AdjustWalletRequest(
            user_id=db_member.id, wallet_type=WalletType.FUNDING, new_balance=10, reason="Duplicate top-up"
        ),
    )

    assert (result.previous_balance, result.new_balance) == (30, 10)
    assert result.new_limit is None
    [entry] = await _transactions(db_session, db_member)
    assert (entry.type, entry.amount) == (TransactionType.DEBIT, 20)
    assert entry.description == "Admin adjustment: Duplicate top-up (by Stored Root)"


@pytest.mark.asyncio
async def test_adjust_redeem_limit_only_writes_no_ledger_row(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    db_session.add(RedeemWallet(user_id=db_member.id, balance=4, limit=5))
    await db_session.commit()

    result = await FinanceService(db_session).adjust_wallet(
        db_super_admin,
        AdjustWalletRequest(user_id=db_member.id, wallet_type=WalletType.REDEEM, new_limit=12),
    )

    assert (result.previous_limit, result.new_limit) == (5, 12)
    assert result.new_balance == 4
    assert await _transactions(db_session, db_member) == []


@pytest.mark.asyncio
async def test_adjust_wallet_unknown_user(db_session: AsyncSession, db_super_admin: User) -> None:
    with pytest.raises(HTTPException) as exc:
        await FinanceService(db_session).adjust_wallet(
            db_super_admin,
            AdjustWalletRequest(user_id=uuid4(), wallet_type=WalletType.FUNDING, new_balance=1),
        )
    assert exc.value.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize("field", ["new_balance", "new_limit"])
def test_adjust_wallet_rejects_negative_values(field: str) -> None:
    with pytest.raises(ValidationError):
        AdjustWalletRequest(user_id=uuid4(), wallet_type=WalletType.REDEEM, **{field: -1})
