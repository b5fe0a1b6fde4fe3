"""
app/lookup/services.py

Lookup Service

Serves active reference data for profile forms, filtered by an optional
parent (origin > ethnicity > caste, country > state > city, sect > maslak),
and the public list of subscription plans. Results are cached in Redis and
invalidated by the global-settings admin on every write.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cache import CACHE_PREFIX, cache_key, get_cached_json, invalidate_pattern, set_cached_json
from app.lookup import models
from app.lookup.schemas import LookupOption, SubscriptionPlanRead
from app.wallet.models import SubscriptionPlan

logger = logging.getLogger(__name__)

LOOKUP_NS = "lookup"
PLANS_NS = "subscription_plans"
OTHER_LANGUAGE_SLUG = "other_language"


# ---------------------------------------------------
# Serializers
# ---------------------------------------------------
def _origin(row: models.Origin) -> LookupOption:
    return LookupOption(
        id=row.id,
        name=row.label,
        slug=row.slug,
        name_native=row.label_native,
        emoji=row.emoji,
        level1_label=row.level1_label,
        level1_label_plural=row.level1_label_plural,
        level2_label=row.level2_label,
        level2_label_plural=row.level2_label_plural,
        level2_enabled=row.level2_enabled,
    )


def _labelled(row: Any) -> LookupOption:
    return LookupOption(
        id=row.id,
        name=row.label,
        slug=getattr(row, "slug", None),
        name_native=getattr(row, "label_native", None),
        is_popular=getattr(row, "is_popular", None),
    )


def _country(row: models.Country) -> LookupOption:
    return LookupOption(
        id=row.id, name=row.name, code=row.code, phone_code=row.phone_code, currency=row.currency
    )


def _state(row: models.StateProvince) -> LookupOption:
    return LookupOption(id=row.id, name=row.name, code=row.code)


def _city(row: models.City) -> LookupOption:
    return LookupOption(id=row.id, name=row.name, is_popular=row.is_popular)


def _height(row: models.Height) -> LookupOption:
    return LookupOption(
        id=row.id,
        name=row.label_imperial,
        slug=row.slug,
        display=f"{row.label_imperial} ({row.label_metric})",
        centimeters=row.centimeters,
    )


def _education_level(row: models.EducationLevel) -> LookupOption:
    return LookupOption(id=row.id, name=row.label, slug=row.slug, level=row.level)


def _education_field(row: models.EducationField) -> LookupOption:
    return LookupOption(id=row.id, name=row.label, slug=row.slug, category=row.category)


def _income(row: models.IncomeRange) -> LookupOption:
    return LookupOption(
        id=row.id,
        name=row.label,
        slug=row.slug,
        display=row.label,
        currency=row.currency,
        period=row.period,
    )


def _language(row: models.Language) -> LookupOption:
    return LookupOption(
        id=row.id,
        name=row.label,
        slug=row.slug,
        code=row.code,
        name_native=row.label_native,
        is_other=row.slug == OTHER_LANGUAGE_SLUG,
    )


@dataclass(frozen=True)
class LookupTable:
    model: type
    serializer: Callable[[Any], LookupOption]
    parent_column: str | None = None


LOOKUP_TABLES: dict[str, LookupTable] = {
    "origin": LookupTable(models.Origin, _origin),
    "ethnicity": LookupTable(models.Ethnicity, _labelled, "origin_id"),
    "caste": LookupTable(models.Caste, _labelled, "ethnicity_id"),
    "country": LookupTable(models.Country, _country),
    "stateProvince": LookupTable(models.StateProvince, _state, "country_id"),
    "city": LookupTable(models.City, _city, "state_province_id"),
    "sect": LookupTable(models.Sect, _labelled),
    "maslak": LookupTable(models.Maslak, _labelled, "sect_id"),
    "height": LookupTable(models.Height, _height),
    "educationLevel": LookupTable(models.EducationLevel, _education_level),
    "educationField": LookupTable(models.EducationField, _education_field),
    "incomeRange": LookupTable(models.IncomeRange, _income),
    "language": LookupTable(models.Language, _language),
}


async def invalidate_lookup_cache() -> None:
    """Drops every cached lookup and plan response."""
    await invalidate_pattern(f"{CACHE_PREFIX}{LOOKUP_NS}:*")
    await invalidate_pattern(f"{CACHE_PREFIX}{PLANS_NS}*")


# ---------------------------------------------------
# LookupService
# ---------------------------------------------------
class LookupService:
    """Read-only access to reference data for public forms."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_options(self, table: str, parent_id: UUID | None = None) -> list[LookupOption]:
        spec = LOOKUP_TABLES.get(table)
        if spec is None:
            logger.warning(f"[LOOKUP] Invalid table requested: {table}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid table name")

        key = cache_key(LOOKUP_NS, table, parent_id)
        cached = await get_cached_json(key)
        if cached is not None:
            return [LookupOption.model_validate(item) for item in cached]

        if table == "incomeRange":
            options = await self._income_ranges(parent_id)
        elif table == "language":
            options = await self._languages(parent_id)
        else:
            stmt = select(spec.model).where(spec.model.is_active.is_(True))
            if parent_id and spec.parent_column:
                stmt = stmt.where(getattr(spec.model, spec.parent_column) == parent_id)
            rows = (await self.db.execute(stmt.order_by(spec.model.sort_order))).scalars().all()
            options = [spec.serializer(row) for row in rows]

        await set_cached_json(key, [o.model_dump(mode="json", exclude_none=True) for o in options])
        logger.debug(f"[LOOKUP] {table} parent={parent_id}: {len(options)} options")
        return options

    async def _income_ranges(self, country_id: UUID | None) -> list[LookupOption]:
        """Country-specific ranges when any exist, otherwise the global (country-less) ranges."""
        base = select(models.IncomeRange).where(models.IncomeRange.is_active.is_(True))
        rows: list[models.IncomeRange] = []
        if country_id:
            rows = list(
                (
                    await self.db.execute(
                        base.where(models.IncomeRange.country_id == country_id).order_by(
                            models.IncomeRange.sort_order
                        )
                    )
                )
                .scalars()
                .all()
            )
        if not rows:
            rows = list(
                (
                    await self.db.execute(
                        base.where(models.IncomeRange.country_id.is_(None)).order_by(
                            models.IncomeRange.sort_order
                        )
                    )
                )
                .scalars()
                .all()
            )
        return [_income(row) for row in rows]

    async def _languages(self, country_id: UUID | None) -> list[LookupOption]:
        """A country's own languages first, then global languages not already listed."""
        active = models.Language.is_active.is_(True)
        if not country_id:
            rows = (
                (await self.db.execute(select(models.Language).where(active).order_by(models.Language.sort_order)))
                .scalars()
                .all()
            )
            return [_language(row) for row in rows]

        country_rows = (
            (
                await self.db.execute(
                    select(models.Language)
                    .join(models.CountryLanguage, models.CountryLanguage.language_id == models.Language.id)
                    .where(models.CountryLanguage.country_id == country_id, active)
                    .order_by(models.CountryLanguage.sort_order)
                )
            )
            .scalars()
            .all()
        )
        global_rows = (
            (
                await self.db.execute(
                    select(models.Language)
                    .where(models.Language.is_global.is_(True), active)
                    .order_by(models.Language.sort_order)
                )
            )
            .scalars()
            .all()
        )
        seen: set[UUID] = set()
        options: list[LookupOption] = []
        for row in [*country_rows, *global_rows]:
            if row.id in seen:
                continue
            seen.add(row.id)
            options.append(_language(row))
        return options

    async def list_subscription_plans(self) -> list[SubscriptionPlanRead]:
        key = cache_key(PLANS_NS)
        cached = await get_cached_json(key)
        if cached is not None:
            return [SubscriptionPlanRead.model_validate(item) for item in cached]

        rows = (
            (
                await self.db.execute(
                    select(SubscriptionPlan)
                    .where(SubscriptionPlan.is_active.is_(True))
                    .order_by(SubscriptionPlan.sort_order)
                )
            )
            .scalars()
            .all()
        )
        plans = [SubscriptionPlanRead.model_validate(row) for row in rows]
        await set_cached_json(key, [p.model_dump(mode="json") for p in plans])
        return plans
