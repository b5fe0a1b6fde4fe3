"""
app/finance/services.py

Admin Finance Service

Back-office credit operations:
- Manual credit additions and wallet adjustments
- Credit overview across members
- Processing member top-up requests
- Platform-wide transaction ledger with filters and stats

Every balance change writes a ledger row through `record_transaction`.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database.enums import TopUpStatus, TransactionType, UserRole, WalletType
from app.database.models import User
from app.finance import schemas
from app.wallet.models import FundingWallet, RedeemWallet, TopUpRequest, Transaction
from app.wallet.schemas import FundingWalletRead, RedeemWalletRead, TransactionRead
from app.wallet.services import get_or_create_funding_wallet, record_transaction

logger = logging.getLogger(__name__)

DEFAULT_ADJUSTED_REDEEM_LIMIT = 50
RECENT_CREDIT_TYPES = (TransactionType.CREDIT, TransactionType.BONUS, TransactionType.PURCHASE)


def _actor_name(admin: User) -> str:
    return admin.name or admin.email


def _admin_topup(request: TopUpRequest) -> schemas.AdminTopUpRead:
    read = schemas.AdminTopUpRead.model_validate(request)
    if request.package is not None:
        read.package_name = request.package.name
    return read


def _day_bounds(start: date | None, end: date | None) -> list:
    """created_at filters; the end date is inclusive of the whole day (UTC)."""
    filters = []
    if start:
        filters.append(Transaction.created_at >= datetime.combine(start, time.min, tzinfo=timezone.utc))
    if end:
        next_day = datetime.combine(end, time.min, tzinfo=timezone.utc) + timedelta(days=1)
        filters.append(Transaction.created_at < next_day)
    return filters


class FinanceService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_user_or_404(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    async def _wallets(self, user_id: UUID) -> tuple[FundingWallet | None, RedeemWallet | None]:
        funding = (
            await self.db.execute(select(FundingWallet).where(FundingWallet.user_id == user_id))
        ).scalar_one_or_none()
        redeem = (
            await self.db.execute(select(RedeemWallet).where(RedeemWallet.user_id == user_id))
        ).scalar_one_or_none()
        return funding, redeem

    # ---------------------------------------------------
    # Credits
    # ---------------------------------------------------
    async def add_credits(self, admin: User, data: schemas.AddCreditsRequest) -> schemas.AddCreditsResponse:
        user = await self._get_user_or_404(data.user_id)
        wallet = await get_or_create_funding_wallet(self.db, user.id)
        wallet.balance += data.amount
        wallet.total_purchased += data.amount

        description = (
            f"Admin credit: {data.reason} (by {_actor_name(admin)})"
            if data.reason
            else f"Admin credit addition (by {_actor_name(admin)})"
        )
        transaction = record_transaction(
            self.db, user.id, TransactionType.CREDIT, WalletType.FUNDING, data.amount, description
        )
        await self.db.commit()
        await self.db.refresh(transaction)

        logger.info(f"[CREDITS] {admin.id} added {data.amount} credits to {user.id}")
        return schemas.AddCreditsResponse(
            detail=f"Successfully added {data.amount} credits to {user.name or user.email}'s funding wallet",
            user_id=user.id,
            new_balance=wallet.balance,
            credits_added=data.amount,
            transaction_id=transaction.id,
        )

    async def adjust_wallet(
        self, admin: User, data: schemas.AdjustWalletRequest
    ) -> schemas.AdjustWalletResponse:
        """
        Sets a wallet balance (and, for REDEEM, its limit). The difference is
        recorded as a CREDIT or DEBIT. Missing wallets are created.
        """
        user = await self._get_user_or_404(data.user_id)
        funding, redeem = await self._wallets(user.id)
        description = (
            f"Admin adjustment: {data.reason} (by {_actor_name(admin)})"
            if data.reason
            else f"Admin balance adjustment (by {_actor_name(admin)})"
        )

        if data.wallet_type == WalletType.FUNDING:
            previous = funding.balance if funding else 0
            if data.new_balance is not None:
                if funding is None:
                    funding = FundingWallet(user_id=user.id, balance=0, total_purchased=0, total_spent=0)
                    self.db.add(funding)
                funding.balance = data.new_balance
            previous_limit = new_limit = None
            new_balance = funding.balance if funding else 0
        else:
            previous = redeem.balance if redeem else 0
            previous_limit = redeem.limit if redeem else 0
            if redeem is None:
                redeem = RedeemWallet(
                    user_id=user.id,
                    balance=0,
                    limit=DEFAULT_ADJUSTED_REDEEM_LIMIT,
                    total_earned=0,
                    total_spent=0,
                    credits_wasted=0,
                    last_reset_at=datetime.now(timezone.utc),
                )
                self.db.add(redeem)
            if data.new_balance is not None:
                redeem.balance = data.new_balance
            if data.new_limit is not None:
                redeem.limit = data.new_limit
            new_balance, new_limit = redeem.balance, redeem.limit

        difference = new_balance - previous
        if difference:
            record_transaction(
                self.db,
                user.id,
                TransactionType.CREDIT if difference > 0 else TransactionType.DEBIT,
                data.wallet_type,
                abs(difference),
                description,
            )
        await self.db.commit()

        logger.info(
            f"[CREDITS] {admin.id} adjusted {data.wallet_type.value} wallet of {user.id}: {previous} -> {new_balance}"
        )
        return schemas.AdjustWalletResponse(
            detail=f"Successfully adjusted {user.name or user.email}'s {data.wallet_type.value.lower()} wallet",
            wallet_type=data.wallet_type,
            previous_balance=previous,
            new_balance=new_balance,
            previous_limit=previous_limit,
            new_limit=new_limit,
        )

    async def get_credits_overview(self) -> schemas.CreditsOverviewResponse:
        rows = (
            await self.db.execute(
                select(User, FundingWallet.balance, RedeemWallet.balance)
                .outerjoin(FundingWallet, FundingWallet.user_id == User.id)
                .outerjoin(RedeemWallet, RedeemWallet.user_id == User.id)
                .where(User.role == UserRole.USER)
                .order_by(User.created_at.desc())
                .limit(100)
            )
        ).all()
        users = [
            schemas.CreditsOverviewRow(
                id=user.id,
                name=user.name,
                email=user.email,
                phone=user.phone,
                subscription_tier=user.subscription_tier,
                funding_balance=funding_balance or 0,
                redeem_balance=redeem_balance or 0,
            )
            for user, funding_balance, redeem_balance in rows
        ]

        total_users = (
            await self.db.execute(select(func.count(User.id)).where(User.role == UserRole.USER))
        ).scalar_one()
        total_funding = (
            await self.db.execute(select(func.coalesce(func.sum(FundingWallet.balance), 0)))
        ).scalar_one()
        total_redeem = (
            await self.db.execute(select(func.coalesce(func.sum(RedeemWallet.balance), 0)))
        ).scalar_one()
        with_funding = (
            await self.db.execute(select(func.count(FundingWallet.id)).where(FundingWallet.balance > 0))
        ).scalar_one()
        with_redeem = (
            await self.db.execute(select(func.count(RedeemWallet.id)).where(RedeemWallet.balance > 0))
        ).scalar_one()

        return schemas.CreditsOverviewResponse(
            stats=schemas.CreditsOverviewStats(
                total_users=total_users,
                total_funding_credits=int(total_funding),
                total_redeem_credits=int(total_redeem),
                users_with_credits=max(with_funding, with_redeem),
            ),
            users=users,
        )

    async def get_user_credits(self, user_id: UUID) -> schemas.UserCreditsResponse:
        user = await self._get_user_or_404(user_id)
        funding, redeem = await self._wallets(user.id)
        transactions = (
            (
                await self.db.execute(
                    select(Transaction)
                    .where(Transaction.user_id == user.id, Transaction.type.in_(RECENT_CREDIT_TYPES))
                    .order_by(Transaction.created_at.desc())
                    .limit(10)
                )
            )
            .scalars()
            .all()
        )
        return schemas.UserCreditsResponse(
            user=schemas.UserBrief.model_validate(user),
            subscription_tier=user.subscription_tier,
            funding_wallet=FundingWalletRead.model_validate(funding) if funding else None,
            redeem_wallet=RedeemWalletRead.model_validate(redeem) if redeem else None,
            recent_transactions=[TransactionRead.model_validate(t) for t in transactions],
        )

    # ---------------------------------------------------
    # Top-up Requests
    # ---------------------------------------------------
    def _topup_query(self):
        return select(TopUpRequest).options(
            selectinload(TopUpRequest.user),
            selectinload(TopUpRequest.package),
            selectinload(TopUpRequest.processed_by),
        )

    async def _get_topup_or_404(self, request_id: UUID) -> TopUpRequest:
        request = (
            await self.db.execute(self._topup_query().where(TopUpRequest.id == request_id))
        ).scalar_one_or_none()
        if not request:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Top-up request not found")
        return request

    async def list_topups(self, status_filter: TopUpStatus | None = None) -> schemas.TopUpListResponse:
        query = self._topup_query().order_by(TopUpRequest.created_at.desc())
        if status_filter:
            query = query.where(TopUpRequest.status == status_filter)
        rows = (await self.db.execute(query)).scalars().all()

        stats = schemas.TopUpStats()
        grouped = await self.db.execute(
            select(TopUpRequest.status, func.count(TopUpRequest.id)).group_by(TopUpRequest.status)
        )
        for request_status, count in grouped.all():
            setattr(stats, request_status.value.lower(), count)
            stats.total += count
        return schemas.TopUpListResponse(requests=[_admin_topup(r) for r in rows], stats=stats)

    async def count_pending_topups(self) -> int:
        return (
            await self.db.execute(
                select(func.count(TopUpRequest.id)).where(TopUpRequest.status == TopUpStatus.PENDING)
            )
        ).scalar_one()

    async def get_topup(self, request_id: UUID) -> schemas.AdminTopUpDetail:
        request = await self._get_topup_or_404(request_id)
        funding, _ = await self._wallets(request.user_id)
        detail = schemas.AdminTopUpDetail.model_validate(request)
        if request.package is not None:
            detail.package_name = request.package.name
        detail.current_balance = funding.balance if funding else 0
        return detail

    async def process_topup(
        self, admin: User, request_id: UUID, data: schemas.TopUpProcessRequest
    ) -> schemas.TopUpProcessResponse:
        request = await self._get_topup_or_404(request_id)
        if request.status != TopUpStatus.PENDING:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This request has already been processed",
            )

        now = datetime.now(timezone.utc)
        if data.action == "reject":
            if not data.rejection_reason:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail="Rejection reason is required"
                )
            request.status = TopUpStatus.REJECTED
            request.processed_by_id = admin.id
            request.processed_at = now
            request.admin_notes = data.admin_notes
            request.rejection_reason = data.rejection_reason
            await self.db.commit()
            logger.info(f"[TOPUP] {request.request_number} rejected by {admin.id}")
            request = await self._get_topup_or_404(request_id)
            return schemas.TopUpProcessResponse(
                detail="Top-up request rejected.", request=_admin_topup(request)
            )

        total_credits = request.credits + request.bonus_credits
        request.status = TopUpStatus.COMPLETED
        request.processed_by_id = admin.id
        request.processed_at = now
        request.admin_notes = data.admin_notes

        wallet = await get_or_create_funding_wallet(self.db, request.user_id)
        wallet.balance += total_credits
        wallet.total_purchased += total_credits
        package_name = request.package.name if request.package else "Credit Package"
        record_transaction(
            self.db,
            request.user_id,
            TransactionType.TOP_UP,
            WalletType.FUNDING,
            total_credits,
            description=f"Top-up: {package_name} ({total_credits} credits)",
            payment_method=request.payment_method.value,
            reference_type="TOP_UP_REQUEST",
            reference_id=str(request.id),
        )
        await self.db.commit()

        logger.info(f"[TOPUP] {request.request_number} approved by {admin.id}: +{total_credits} credits")
        new_balance = wallet.balance
        request = await self._get_topup_or_404(request_id)
        return schemas.TopUpProcessResponse(
            detail=f"Top-up approved. {total_credits} credits added to user's wallet.",
            request=_admin_topup(request),
            new_balance=new_balance,
        )

    # ---------------------------------------------------
    # Transactions
    # ---------------------------------------------------
    async def _grouped_stats(self, column) -> dict[str, schemas.AmountStat]:
        rows = await self.db.execute(
            select(column, func.count(Transaction.id), func.coalesce(func.sum(Transaction.amount), 0))
            .group_by(column)
        )
        return {
            key.value: schemas.AmountStat(count=count, total_amount=int(amount))
            for key, count, amount in rows.all()
        }

    async def list_transactions(
        self, filters: schemas.TransactionFilters, skip: int, limit: int
    ) -> schemas.AdminTransactionListResponse:
        conditions = []
        if filters.type:
            conditions.append(Transaction.type == filters.type)
        if filters.wallet_type:
            conditions.append(Transaction.wallet_type == filters.wallet_type)
        if filters.user_id:
            conditions.append(Transaction.user_id == filters.user_id)
        conditions.extend(_day_bounds(filters.start_date, filters.end_date))
        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            conditions.append(
                or_(
                    Transaction.description.ilike(pattern),
                    Transaction.reference_type.ilike(pattern),
                    User.name.ilike(pattern),
                    User.email.ilike(pattern),
                )
            )

        rows = (
            (
                await self.db.execute(
                    select(Transaction)
                    .join(User, User.id == Transaction.user_id)
                    .options(selectinload(Transaction.user))
                    .where(*conditions)
                    .order_by(Transaction.created_at.desc())
                    .offset(skip)
                    .limit(limit)
                )
            )
            .scalars()
            .all()
        )
        total = (
            await self.db.execute(
                select(func.count(Transaction.id))
                .join(User, User.id == Transaction.user_id)
                .where(*conditions)
            )
        ).scalar_one()

        stats = schemas.TransactionStats(
            total=total,
            by_type=await self._grouped_stats(Transaction.type),
            by_wallet_type=await self._grouped_stats(Transaction.wallet_type),
        )
        return schemas.AdminTransactionListResponse(
            total_count=total,
            has_next_page=(skip + limit) < total,
            items=[schemas.AdminTransactionRead.model_validate(r) for r in rows],
            stats=stats,
        )

    async def _get_transaction_or_404(self, transaction_id: UUID) -> Transaction:
        transaction = (
            await self.db.execute(
                select(Transaction)
                .options(selectinload(Transaction.user))
                .where(Transaction.id == transaction_id)
            )
        ).scalar_one_or_none()
        if not transaction:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
        return transaction

    async def get_transaction(self, transaction_id: UUID) -> schemas.AdminTransactionDetail:
        transaction = await self._get_transaction_or_404(transaction_id)
        related = (
            (
                await self.db.execute(
                    select(Transaction)
                    .where(Transaction.user_id == transaction.user_id, Transaction.id != transaction.id)
                    .order_by(Transaction.created_at.desc())
                    .limit(5)
                )
            )
            .scalars()
            .all()
        )
        funding, redeem = await self._wallets(transaction.user_id)
        return schemas.AdminTransactionDetail(
            transaction=schemas.AdminTransactionRead.model_validate(transaction),
            related_transactions=[TransactionRead.model_validate(t) for t in related],
            funding_wallet=FundingWalletRead.model_validate(funding) if funding else None,
            redeem_wallet=RedeemWalletRead.model_validate(redeem) if redeem else None,
        )

    async def delete_transaction(self, admin: User, transaction_id: UUID) -> str:
        """Removes the ledger row only; wallet balances are not reversed."""
        transaction = await self._get_transaction_or_404(transaction_id)
        await self.db.execute(delete(Transaction).where(Transaction.id == transaction.id))
        await self.db.commit()
        logger.warning(
            f"[CREDITS] Transaction {transaction_id} ({transaction.type.value} {transaction.amount}) "
            f"deleted by {admin.id}"
        )
        return "Transaction deleted successfully"
