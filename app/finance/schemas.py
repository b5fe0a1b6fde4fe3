"""
finance/schemas.py

Schemas for back-office credit management, top-up processing and the
platform-wide transaction ledger.
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.schemas import ORMModel
from app.database.enums import SubscriptionTier, TransactionType, WalletType
from app.wallet.schemas import (
    CreditPackageRead,
    FundingWalletRead,
    RedeemWalletRead,
    TopUpRequestRead,
    TransactionRead,
)


class UserBrief(ORMModel):
    id: UUID
    name: str | None = None
    email: str
    phone: str | None = None


# -----------------------------------------------------
# Credits
# -----------------------------------------------------
class AddCreditsRequest(BaseModel):
    user_id: UUID
    amount: int = Field(..., ge=1, le=10000, description="Credits to add (max 10,000 per call)")
    reason: str | None = Field(None, max_length=300)


class AddCreditsResponse(BaseModel):
    detail: str
    user_id: UUID
    new_balance: int
    credits_added: int
    transaction_id: UUID


class AdjustWalletRequest(BaseModel):
    user_id: UUID
    wallet_type: WalletType
    new_balance: int | None = Field(None, ge=0)
    new_limit: int | None = Field(None, ge=0, description="Redeem wallet only")
    reason: str | None = Field(None, max_length=300)


class AdjustWalletResponse(BaseModel):
    detail: str
    wallet_type: WalletType
    previous_balance: int
    new_balance: int
    previous_limit: int | None = None
    new_limit: int | None = None


class CreditsOverviewRow(BaseModel):
    id: UUID
    name: str | None = None
    email: str
    phone: str | None = None
    subscription_tier: SubscriptionTier
    funding_balance: int
    redeem_balance: int


class CreditsOverviewStats(BaseModel):
    total_users: int
    total_funding_credits: int
    total_redeem_credits: int
    users_with_credits: int


class CreditsOverviewResponse(BaseModel):
    stats: CreditsOverviewStats
    users: list[CreditsOverviewRow]


class UserCreditsResponse(BaseModel):
    user: UserBrief
    subscription_tier: SubscriptionTier
    funding_wallet: FundingWalletRead | None = None
    redeem_wallet: RedeemWalletRead | None = None
    recent_transactions: list[TransactionRead]


# -----------------------------------------------------
# Top-up Requests
# -----------------------------------------------------
class AdminTopUpRead(TopUpRequestRead):
    user: UserBrief
    processed_by: UserBrief | None = None


class AdminTopUpDetail(AdminTopUpRead):
    package: CreditPackageRead | None = None
    current_balance: int = 0


class TopUpStats(BaseModel):
    pending: int = 0
    completed: int = 0
    rejected: int = 0
    cancelled: int = 0
    total: int = 0


class TopUpListResponse(BaseModel):
    requests: list[AdminTopUpRead]
    stats: TopUpStats


class TopUpProcessRequest(BaseModel):
    action: Literal["approve", "reject"]
    admin_notes: str | None = Field(None, max_length=1000)
    rejection_reason: str | None = Field(None, max_length=1000)


class TopUpProcessResponse(BaseModel):
    detail: str
    request: AdminTopUpRead
    new_balance: int | None = None


# -----------------------------------------------------
# Transactions
# -----------------------------------------------------
class AdminTransactionRead(TransactionRead):
    user: UserBrief


class AmountStat(BaseModel):
    count: int
    total_amount: int


class TransactionStats(BaseModel):
    total: int
    by_type: dict[str, AmountStat]
    by_wallet_type: dict[str, AmountStat]


class AdminTransactionListResponse(BaseModel):
    total_count: int
    has_next_page: bool
    items: list[AdminTransactionRead]
    stats: TransactionStats


class TransactionFilters(BaseModel):
    type: TransactionType | None = None
    wallet_type: WalletType | None = None
    user_id: UUID | None = None
    search: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class AdminTransactionDetail(BaseModel):
    transaction: AdminTransactionRead
    related_transactions: list[TransactionRead]
    funding_wallet: FundingWalletRead | None = None
    redeem_wallet: RedeemWalletRead | None = None


