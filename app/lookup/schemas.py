"""
lookup/schemas.py

Response schemas for public dropdown data and subscription plans.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.schemas import ORMModel
from app.database.enums import IncomePeriod


class LookupOption(BaseModel):
    """
    One dropdown option. Only `id` and `name` are always present; the
    remaining fields depend on the table (unset fields are omitted).
    """

    id: UUID
    name: str
    slug: str | None = None
    name_native: str | None = None
    code: str | None = None
    emoji: str | None = None
    is_popular: bool | None = None
    # origin
    level1_label: str | None = None
    level1_label_plural: str | None = None
    level2_label: str | None = None
    level2_label_plural: str | None = None
    level2_enabled: bool | None = None
    # country
    phone_code: str | None = None
    currency: str | None = None
    # height / income
    display: str | None = None
    centimeters: int | None = None
    period: IncomePeriod | None = None
    # education
    category: str | None = None
    level: int | None = None
    # language
    is_other: bool | None = None


class LookupResponse(BaseModel):
    data: list[LookupOption] = Field(..., description="Active options ordered by sort order")


class SubscriptionPlanRead(ORMModel):
    id: UUID
    slug: str
    name: str
    description: str | None = None
    free_credits: int
    wallet_limit: int
    redeem_credits: int
    redeem_cycle_days: int
    profile_limit: int
    price_monthly: Decimal
    price_yearly: Decimal
    yearly_discount_pct: int
    sort_order: int
    is_default: bool
    color: str | None = None
    features: list[str] = Field(default_factory=list)


class SubscriptionPlanListResponse(BaseModel):
    data: list[SubscriptionPlanRead]
