"""
app/wallet/services.py

Wallet Service Layer

Member-facing credit operations:
- Default wallet provisioning for new accounts
- Redeem credit awards bounded by the wallet limit
- Balance and ledger queries with summary totals
- Top-up request creation and cancellation

Ledger writes are shared with the admin finance service through
`record_transaction` and `get_or_create_funding_wallet`.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.database.enums import PaymentMethod, TopUpStatus, TransactionType, WalletType
from app.database.models import User
from app.wallet import schemas
from app.wallet.models import (
    CreditPackage,
    FundingWallet,
    PaymentSetting,
    RedeemWallet,
    TopUpRequest,
    Transaction,
)

logger = logging.getLogger(__name__)

CREDIT_TYPES = (
    TransactionType.CREDIT,
    TransactionType.TOP_UP,
    TransactionType.BONUS,
    TransactionType.REFUND,
)
DEBIT_TYPES = (TransactionType.DEBIT, TransactionType.PURCHASE)
REQUEST_NUMBER_RE = re.compile(r"^TXN-(\d{4})-(\d+)$")


@dataclass(frozen=True)
class RedeemAward:
    """Outcome of awarding redeem credits against the wallet limit."""

    awarded: int
    wasted: int
    limit_reached: bool


# ---------------------------------------------------
# Pure Helpers
# ---------------------------------------------------
def split_award(balance: int, limit: int, amount: int) -> RedeemAward:
    """
    Splits `amount` into what fits under `limit` and what overflows.

    >>> split_award(4, 5, 2)
    RedeemAward(awarded=1, wasted=1, limit_reached=True)
    """
    space = max(0, limit - balance)
    awarded = min(amount, space)
    return RedeemAward(
        awarded=awarded,
        wasted=amount - awarded,
        limit_reached=space == 0 or awarded < amount,
    )


def format_request_number(year: int, last_number: str | None) -> str:
    """Next `TXN-<year>-<nnnnn>` after `last_number` (sequence restarts each year)."""
    sequence = 1
    if last_number:
        match = REQUEST_NUMBER_RE.match(last_number)
        if match and int(match.group(1)) == year:
            sequence = int(match.group(2)) + 1
    return f"TXN-{year}-{sequence:05d}"


def topup_to_read(request: TopUpRequest) -> schemas.TopUpRequestRead:
    read = schemas.TopUpRequestRead.model_validate(request)
    if request.package is not None:
        read.package_name = request.package.name
    return read


# ---------------------------------------------------
# Shared Ledger Helpers
# ---------------------------------------------------
def create_default_wallets(db: AsyncSession, user_id: UUID) -> tuple[FundingWallet, RedeemWallet]:
    """
    Adds the free-tier wallet pair for a new account to the session (no commit).
    """
    funding = FundingWallet(user_id=user_id, balance=0, total_purchased=0, total_spent=0)
    redeem = RedeemWallet(
        user_id=user_id,
        balance=settings.FREE_TIER_INITIAL_CREDITS,
        limit=settings.FREE_TIER_CREDIT_LIMIT,
        total_earned=settings.FREE_TIER_INITIAL_CREDITS,
        total_spent=0,
        credits_wasted=0,
        next_redemption=datetime.now(timezone.utc)
        + timedelta(days=settings.FREE_TIER_REDEMPTION_WINDOW_DAYS),
    )
    db.add_all([funding, redeem])
    logger.info(f"[WALLET] Default wallets provisioned for user {user_id}")
    return funding, redeem


async def get_or_create_funding_wallet(db: AsyncSession, user_id: UUID) -> FundingWallet:
    wallet = (
        await db.execute(select(FundingWallet).where(FundingWallet.user_id == user_id))
    ).scalar_one_or_none()
    if wallet is None:
        wallet = FundingWallet(user_id=user_id, balance=0, total_purchased=0, total_spent=0)
        db.add(wallet)
        logger.info(f"[WALLET] Funding wallet created on demand for user {user_id}")
    return wallet


def record_transaction(
    db: AsyncSession,
    user_id: UUID,
    type_: TransactionType,
    wallet_type: WalletType,
    amount: int,
    description: str | None = None,
    payment_method: str | None = None,
    reference_type: str | None = None,
    reference_id: str | None = None,
) -> Transaction:
    transaction = Transaction(
        user_id=user_id,
        type=type_,
        wallet_type=wallet_type,
        amount=amount,
        description=description,
        payment_method=payment_method,
        reference_type=reference_type,
        reference_id=reference_id,
    )
    db.add(transaction)
    logger.info(f"[WALLET] {type_.value} {amount} on {wallet_type.value} for user {user_id}")
    return transaction


# ---------------------------------------------------
# WalletService
# ---------------------------------------------------
class WalletService:
    """Member wallet, ledger and top-up operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # --- Redeem Awards ---
    async def award_redeem_credits(self, user_id: UUID, amount: int) -> RedeemAward:
        """
        Adds up to `amount` redeem credits without exceeding the wallet limit.
        The overflow is tracked in `credits_wasted`. Caller commits.
        """
        wallet = (
            await self.db.execute(select(RedeemWallet).where(RedeemWallet.user_id == user_id))
        ).scalar_one_or_none()
        if wallet is None:
            logger.warning(f"[WALLET] No redeem wallet for user {user_id}; award of {amount} dropped")
            return RedeemAward(awarded=0, wasted=amount, limit_reached=False)

        award = split_award(wallet.balance, wallet.limit, amount)
        wallet.balance += award.awarded
        wallet.total_earned += award.awarded
        wallet.credits_wasted += award.wasted
        if award.awarded:
            record_transaction(
                self.db,
                user_id,
                TransactionType.BONUS,
                WalletType.REDEEM,
                award.awarded,
                description="Profile completion bonus",
                reference_type="REDEEM_ACTION",
            )
        logger.info(
            f"[WALLET] Redeem award for {user_id}: +{award.awarded}, wasted {award.wasted}"
        )
        return award

    # --- Balance ---
    async def get_balance(self, user_id: UUID) -> schemas.WalletBalanceResponse:
        funding = (
            await self.db.execute(select(FundingWallet).where(FundingWallet.user_id == user_id))
        ).scalar_one_or_none()
        redeem = (
            await self.db.execute(select(RedeemWallet).where(RedeemWallet.user_id == user_id))
        ).scalar_one_or_none()
        funding_balance = funding.balance if funding else 0
        redeem_balance = redeem.balance if redeem else 0
        return schemas.WalletBalanceResponse(
            funding_balance=funding_balance,
            redeem_balance=redeem_balance,
            total_credits=funding_balance + redeem_balance,
            funding_wallet=schemas.FundingWalletRead.model_validate(funding) if funding else None,
            redeem_wallet=schemas.RedeemWalletRead.model_validate(redeem) if redeem else None,
        )

    # --- Ledger ---
    async def list_transactions(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 20,
        type_: TransactionType | None = None,
        wallet_type: WalletType | None = None,
    ) -> tuple[list[schemas.TransactionRead], int, schemas.TransactionSummary]:
        filters = [Transaction.user_id == user_id]
        if type_:
            filters.append(Transaction.type == type_)
        if wallet_type:
            filters.append(Transaction.wallet_type == wallet_type)

        rows = (
            (
                await self.db.execute(
                    select(Transaction)
                    .where(*filters)
                    .order_by(Transaction.created_at.desc())
                    .offset(skip)
                    .limit(limit)
                )
            )
            .scalars()
            .all()
        )
        total = (
            await self.db.execute(select(func.count(Transaction.id)).where(*filters))
        ).scalar_one()

        summary_row = (
            await self.db.execute(
                select(
                    func.coalesce(
                        func.sum(case((Transaction.type.in_(CREDIT_TYPES), Transaction.amount), else_=0)), 0
                    ),
                    func.coalesce(
                        func.sum(case((Transaction.type.in_(DEBIT_TYPES), Transaction.amount), else_=0)), 0
                    ),
                    func.count(case((Transaction.type == TransactionType.TOP_UP, 1))),
                    func.count(case((Transaction.type == TransactionType.PURCHASE, 1))),
                    func.count(case((Transaction.type == TransactionType.REDEMPTION, 1))),
                ).where(Transaction.user_id == user_id)
            )
        ).one()
        summary = schemas.TransactionSummary(
            total_credits=int(summary_row[0]),
            total_debits=int(summary_row[1]),
            total_top_ups=int(summary_row[2]),
            total_purchases=int(summary_row[3]),
            total_redemptions=int(summary_row[4]),
        )
        return [schemas.TransactionRead.model_validate(r) for r in rows], total, summary

    # --- Top-up ---
    async def get_topup_options(self) -> schemas.TopUpOptionsResponse:
        packages = (
            (
                await self.db.execute(
                    select(CreditPackage)
                    .where(CreditPackage.is_active.is_(True))
                    .order_by(CreditPackage.sort_order)
                )
            )
            .scalars()
            .all()
        )
        methods = (
            (
                await self.db.execute(
                    select(PaymentSetting)
                    .where(PaymentSetting.is_active.is_(True))
                    .order_by(PaymentSetting.sort_order)
                )
            )
            .scalars()
            .all()
        )
        return schemas.TopUpOptionsResponse(
            packages=[schemas.CreditPackageRead.model_validate(p) for p in packages],
            payment_methods=[schemas.PaymentMethodRead.model_validate(m) for m in methods],
        )

    async def list_topups(self, user_id: UUID) -> list[schemas.TopUpRequestRead]:
        rows = (
            (
                await self.db.execute(
                    select(TopUpRequest)
                    .options(selectinload(TopUpRequest.package))
                    .where(TopUpRequest.user_id == user_id)
                    .order_by(TopUpRequest.created_at.desc())
                )
            )
            .scalars()
            .all()
        )
        return [topup_to_read(r) for r in rows]

    async def generate_request_number(self) -> str:
        year = datetime.now(timezone.utc).year
        last = (
            await self.db.execute(
                select(TopUpRequest.request_number)
                .where(TopUpRequest.request_number.like(f"TXN-{year}-%"))
                .order_by(TopUpRequest.request_number.desc())
                .limit(1)
            )
        ).scalar_one_or_none()
        return format_request_number(year, last)

    async def create_topup(
        self, user: User, payload: schemas.TopUpCreateRequest
    ) -> schemas.TopUpCreateResponse:
        if not payload.package_id or not payload.payment_method:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Package and payment method are required",
            )

        package = await self.db.get(CreditPackage, payload.package_id)
        if not package:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid package selected")
        if not package.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="This package is no longer available"
            )

        payment = (
            await self.db.execute(
                select(PaymentSetting).where(
                    PaymentSetting.method == payload.payment_method,
                    PaymentSetting.is_active.is_(True),
                )
            )
        ).scalar_one_or_none()
        if not payment:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or inactive payment method"
            )

        pending = (
            await self.db.execute(
                select(TopUpRequest.id).where(
                    TopUpRequest.user_id == user.id, TopUpRequest.status == TopUpStatus.PENDING
                )
            )
        ).first()
        if pending:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You already have a pending top-up request. Please wait for it to be processed or cancel it.",
            )

        request = TopUpRequest(
            request_number=await self.generate_request_number(),
            user_id=user.id,
            package_id=package.id,
            credits=package.credits,
            bonus_credits=package.bonus_credits,
            amount=package.price,
            payment_method=PaymentMethod(payload.payment_method),
            status=TopUpStatus.PENDING,
        )
        self.db.add(request)
        await self.db.commit()
        await self.db.refresh(request)
        request.package = package
        logger.info(f"[TOPUP] {request.request_number} created by {user.id} for {package.slug}")

        return schemas.TopUpCreateResponse(
            request=topup_to_read(request),
            payment_instructions=payment.instructions,
            payment_details=schemas.PaymentMethodRead.model_validate(payment),
        )

    async def cancel_topup(self, user: User, request_id: UUID) -> str:
        request = await self.db.get(TopUpRequest, request_id)
        if not request:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Top-up request not found")
        if request.user_id != user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only cancel your own top-up requests",
            )
        if request.status != TopUpStatus.PENDING:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Only pending requests can be cancelled"
            )
        request.status = TopUpStatus.CANCELLED
        await self.db.commit()
        logger.info(f"[TOPUP] {request.request_number} cancelled by {user.id}")
        return "Top-up request cancelled successfully"
