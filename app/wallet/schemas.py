"""
wallet/schemas.py

Request and response models for member wallets, the ledger and top-ups.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.schemas import ORMModel, PaginatedResponse
from app.database.enums import PaymentMethod, TopUpStatus, TransactionType, WalletType


# -----------------------------------------------------
# Balances
# -----------------------------------------------------
class FundingWalletRead(ORMModel):
    balance: int
    total_purchased: int
    total_spent: int


class RedeemWalletRead(ORMModel):
    balance: int
    limit: int
    next_redemption: datetime | None = None


class WalletBalanceResponse(BaseModel):
    funding_balance: int = Field(..., description="Purchased credits available")
    redeem_balance: int = Field(..., description="Earned credits available")
    total_credits: int
    funding_wallet: FundingWalletRead | None = None
    redeem_wallet: RedeemWalletRead | None = None


# -----------------------------------------------------
# Ledger
# -----------------------------------------------------
class TransactionRead(ORMModel):
    id: UUID
    type: TransactionType
    wallet_type: WalletType
    amount: int
    description: str | None = None
    payment_method: str | None = None
    reference_type: str | None = None
    reference_id: str | None = None
    created_at: datetime


class TransactionSummary(BaseModel):
    total_credits: int = Field(0, description="Sum of CREDIT, TOP_UP, BONUS and REFUND amounts")
    total_debits: int = Field(0, description="Sum of DEBIT and PURCHASE amounts")
    total_top_ups: int = Field(0, description="Number of TOP_UP rows")
    total_purchases: int = Field(0, description="Number of PURCHASE rows")
    total_redemptions: int = Field(0, description="Number of REDEMPTION rows")


class TransactionListResponse(PaginatedResponse[TransactionRead]):
    summary: TransactionSummary


# -----------------------------------------------------
# Top-up
# -----------------------------------------------------
class CreditPackageRead(ORMModel):
    id: UUID
    slug: str
    name: str
    credits: int
    price: Decimal
    bonus_credits: int
    savings_percent: int | None = None
    is_popular: bool


class PaymentMethodRead(ORMModel):
    id: UUID
    method: PaymentMethod
    label: str
    instructions: str | None = None
    account_title: str | None = None
    account_number: str | None = None
    bank_name: str | None = None
    iban: str | None = None
    mobile_number: str | None = None


class TopUpOptionsResponse(BaseModel):
    packages: list[CreditPackageRead]
    payment_methods: list[PaymentMethodRead]


class TopUpCreateRequest(BaseModel):
    package_id: UUID | None = Field(None, description="Credit package to buy")
    payment_method: PaymentMethod | None = Field(None, description="How the member paid")


class TopUpRequestRead(ORMModel):
    id: UUID
    request_number: str
    package_id: UUID | None = None
    package_name: str | None = None
    credits: int
    bonus_credits: int
    amount: Decimal
    payment_method: PaymentMethod
    status: TopUpStatus
    admin_notes: str | None = None
    rejection_reason: str | None = None
    processed_at: datetime | None = None
    created_at: datetime


class TopUpCreateResponse(BaseModel):
    request: TopUpRequestRead
    payment_instructions: str | None = None
    payment_details: PaymentMethodRead
