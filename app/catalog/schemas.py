"""
catalog/schemas.py

Create / read schemas for every global-settings catalog. Update schemas are
derived from the create schemas with every field optional.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, create_model

from app.core.schemas import ORMModel
from app.database.enums import IncomePeriod, PaymentMethod


def partial_model(model: type[BaseModel]) -> type[BaseModel]:
    """Copy of `model` where every field is optional and defaults to None."""
    fields = {
        name: (Optional[info.annotation], None) for name, info in model.model_fields.items()
    }
    return create_model(model.__name__.replace("Create", "Update"), **fields)


class Ordered(BaseModel):
    sort_order: int = Field(0, ge=0)
    is_active: bool = True


class Stamped(ORMModel):
    id: UUID
    created_at: datetime
    updated_at: datetime


# -----------------------------------------------------
# Origins > Ethnicities > Castes
# -----------------------------------------------------
class OriginCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    label_native: str | None = Field(None, max_length=100)
    emoji: str | None = Field(None, max_length=16)
    description: str | None = None
    level1_label: str = "Ethnicity"
    level1_label_plural: str = "Ethnicities"
    level2_label: str = "Caste"
    level2_label_plural: str = "Castes"
    level2_enabled: bool = True


class OriginRead(OriginCreate, Stamped):
    pass


class EthnicityCreate(Ordered):
    origin_id: UUID
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    label_native: str | None = Field(None, max_length=100)
    is_popular: bool = False


class EthnicityRead(EthnicityCreate, Stamped):
    pass


class CasteCreate(Ordered):
    ethnicity_id: UUID
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    label_native: str | None = Field(None, max_length=100)


class CasteRead(CasteCreate, Stamped):
    pass


# -----------------------------------------------------
# Countries > States > Cities, Country Languages
# -----------------------------------------------------
class CountryCreate(Ordered):
    code: str = Field(..., min_length=2, max_length=3)
    name: str = Field(..., min_length=1, max_length=100)
    phone_code: str | None = Field(None, max_length=10)
    currency: str | None = Field(None, max_length=3)


class CountryRead(CountryCreate, Stamped):
    pass


class StateCreate(Ordered):
    country_id: UUID
    code: str | None = Field(None, max_length=10)
    name: str = Field(..., min_length=1, max_length=100)


class StateRead(StateCreate, Stamped):
    pass


class CityCreate(Ordered):
    state_province_id: UUID
    name: str = Field(..., min_length=1, max_length=100)
    is_popular: bool = False


class CityRead(CityCreate, Stamped):
    pass


class CountryLanguageCreate(BaseModel):
    country_id: UUID
    language_id: UUID
    sort_order: int = Field(0, ge=0)
    is_primary: bool = False


class LanguageBrief(ORMModel):
    id: UUID
    code: str
    label: str
    label_native: str | None = None
    is_active: bool


class CountryLanguageRead(CountryLanguageCreate, Stamped):
    language: LanguageBrief


# -----------------------------------------------------
# Sects > Maslaks
# -----------------------------------------------------
class SectCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    label_native: str | None = Field(None, max_length=100)


class SectRead(SectCreate, Stamped):
    pass


class MaslakCreate(Ordered):
    sect_id: UUID
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    label_native: str | None = Field(None, max_length=100)


class MaslakRead(MaslakCreate, Stamped):
    pass


# -----------------------------------------------------
# Flat Lookups
# -----------------------------------------------------
class HeightCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=20)
    label_imperial: str = Field(..., max_length=20)
    label_metric: str = Field(..., max_length=20)
    centimeters: int = Field(..., ge=50, le=300)


class HeightRead(HeightCreate, Stamped):
    pass


class EducationLevelCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    level: int = 0
    years_of_education: int | None = Field(None, ge=0, le=30)
    tags: list[str] = []


class EducationLevelRead(EducationLevelCreate, Stamped):
    pass


class EducationFieldCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    category: str | None = Field(None, max_length=100)
    tags: list[str] = []


class EducationFieldRead(EducationFieldCreate, Stamped):
    pass


class IncomeRangeCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    currency: str = Field("USD", min_length=3, max_length=3)
    period: IncomePeriod = IncomePeriod.ANNUAL
    min_value: Decimal | None = None
    max_value: Decimal | None = None
    origin_id: UUID | None = None
    country_id: UUID | None = Field(None, description="NULL means a global range")


class IncomeRangeRead(IncomeRangeCreate, Stamped):
    pass


class LanguageCreate(Ordered):
    code: str = Field(..., min_length=1, max_length=10)
    slug: str | None = Field(None, max_length=50, description="Generated from the label when omitted")
    label: str = Field(..., min_length=1, max_length=100)
    label_native: str | None = Field(None, max_length=100)
    is_global: bool = True


class LanguageRead(LanguageCreate, Stamped):
    slug: str


# -----------------------------------------------------
# Commercial Settings
# -----------------------------------------------------
class SubscriptionPlanCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=30)
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    free_credits: int = Field(0, ge=0)
    wallet_limit: int = Field(5, ge=0)
    redeem_credits: int = Field(0, ge=0)
    redeem_cycle_days: int = Field(15, ge=1)
    profile_limit: int = Field(1, ge=1)
    price_monthly: Decimal = Field(Decimal("0"), ge=0)
    price_yearly: Decimal = Field(Decimal("0"), ge=0)
    yearly_discount_pct: int = Field(0, ge=0, le=100)
    color: str | None = Field(None, max_length=20)
    features: list[str] = []
    is_default: bool = False


class SubscriptionPlanRead(SubscriptionPlanCreate, Stamped):
    pass


class CreditActionCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    category: str = Field(..., max_length=30, description="connection, access or boost")
    credit_cost: int = Field(..., ge=0)
    duration_days: int | None = Field(None, ge=1)


class CreditActionRead(CreditActionCreate, Stamped):
    pass


class CreditPackageCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    credits: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)
    bonus_credits: int = Field(0, ge=0)
    savings_percent: int | None = Field(None, ge=0, le=100)
    is_popular: bool = False


class CreditPackageRead(CreditPackageCreate, Stamped):
    pass


class PaymentSettingCreate(Ordered):
    method: PaymentMethod
    label: str = Field(..., min_length=1, max_length=100)
    instructions: str | None = None
    account_title: str | None = Field(None, max_length=150)
    account_number: str | None = Field(None, max_length=50)
    bank_name: str | None = Field(None, max_length=150)
    iban: str | None = Field(None, max_length=50)
    mobile_number: str | None = Field(None, max_length=20)


class PaymentSettingRead(PaymentSettingCreate, Stamped):
    pass


class RedeemActionCreate(Ordered):
    slug: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    credits_awarded: int = Field(..., ge=0)
    is_one_time: bool = True


class RedeemActionRead(RedeemActionCreate, Stamped):
    pass


# -----------------------------------------------------
# Envelopes
# -----------------------------------------------------
class CatalogListResponse(BaseModel):
    catalog: str
    total_count: int
    items: list[dict[str, Any]]


class CatalogItemResponse(BaseModel):
    detail: str | None = None
    item: dict[str, Any]


class ReorderRequest(BaseModel):
    ordered_ids: list[UUID] = Field(..., min_length=1)
