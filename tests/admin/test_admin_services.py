"""
tests/admin/test_admin_services.py

Account deletion against a real (in-memory) database, with the member's
wallets, ledger, top-up requests and phone verifications in place.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin.services import UserService
from app.database.enums import (
    PaymentMethod,
    TopUpStatus,
    TransactionType,
    UserRole,
    WalletType,
)
from app.database.models import PhoneVerification, User
from app.wallet.models import FundingWallet, RedeemWallet, TopUpRequest, Transaction
from app.wallet.services import create_default_wallets, record_transaction


async def _count(db: AsyncSession, model: type) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_delete_user_with_topup_history(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    create_default_wallets(db_session, db_member.id)
    record_transaction(
        db_session, db_member.id, TransactionType.CREDIT, WalletType.FUNDING, 10, "Admin credit"
    )
    db_session.add_all(
        [
            TopUpRequest(
                request_number="TXN-2025-00001",
                user_id=db_member.id,
                credits=10,
                bonus_credits=0,
                amount=Decimal("1000.00"),
                payment_method=PaymentMethod.BANK_TRANSFER,
                status=TopUpStatus.CANCELLED,
            ),
            PhoneVerification(
                user_id=db_member.id,
                phone="+923001234567",
                code="123456",
                expires_at=datetime.now(timezone.utc) + timedelta(hours=24),
            ),
        ]
    )
    await db_session.commit()
    member_id = db_member.id

    message = await UserService(db_session).delete_user(db_super_admin, member_id)

    assert message == "User Stored Member (stored.member@example.com) deleted successfully"
    assert await db_session.get(User, member_id) is None
    assert await _count(db_session, TopUpRequest) == 0
    assert await _count(db_session, PhoneVerification) == 0
    assert await _count(db_session, Transaction) == 0
    assert await _count(db_session, FundingWallet) == 0
    assert await _count(db_session, RedeemWallet) == 0


@pytest.mark.asyncio
async def test_delete_user_keeps_other_members_topups(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    other = User(
        email="other.member@example.com",
        name="Other Member",
        hashed_password="fakehashedpassword",
        role=UserRole.USER,
    )
    db_session.add(other)
    await db_session.flush()
    db_session.add(
        TopUpRequest(
            request_number="TXN-2025-00002",
            user_id=other.id,
            credits=25,
            amount=Decimal("2000.00"),
            payment_method=PaymentMethod.JAZZCASH,
            status=TopUpStatus.PENDING,
        )
    )
    await db_session.commit()

    await UserService(db_session).delete_user(db_super_admin, db_member.id)

    remaining = (await db_session.execute(select(TopUpRequest))).scalars().all()
    assert [r.user_id for r in remaining] == [other.id]


@pytest.mark.asyncio
async def test_supervisor_cannot_delete_super_admin(
    db_session: AsyncSession, db_super_admin: User, fake_supervisor_user: User
) -> None:
    with pytest.raises(HTTPException) as exc:
        await UserService(db_session).delete_user(fake_supervisor_user, db_super_admin.id)

    assert exc.value.status_code == status.HTTP_403_FORBIDDEN
    assert await db_session.get(User, db_super_admin.id) is not None
