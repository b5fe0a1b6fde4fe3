"""
[seed] seed.py

Loads the reference data the platform needs to run and bootstraps the first
super admin:
- Subscription plans, credit actions, credit packages, payment settings and
  the PROFILE_COMPLETION redeem action
- Origins > ethnicities, sects > maslaks
- Countries with states and cities for the main markets
- Heights, education levels/fields, income ranges and languages
- A super admin account from SUPER_ADMIN_* settings (created once)

Every row is upserted by its natural key, so the seeder can be re-run safely.

Usage:
    python -m app.database.seed
"""

import asyncio
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import init_logging
from app.core.security import get_password_hash
from app.database import seed_data
from app.database.enums import UserRole, UserStatus
from app.database.models import User
from app.database.session import AsyncSessionLocal
from app.lookup.models import (
    City,
    Country,
    EducationField,
    EducationLevel,
    Ethnicity,
    Height,
    IncomeRange,
    Language,
    Maslak,
    Origin,
    Sect,
    StateProvince,
)
from app.wallet.models import (
    CreditAction,
    CreditPackage,
    PaymentSetting,
    RedeemAction,
    SubscriptionPlan,
)
from app.wallet.services import create_default_wallets

logger = logging.getLogger(__name__)


class Seeder:
    def __init__(self, db: AsyncSession | None = None):
        self.db: AsyncSession = db or AsyncSessionLocal()

    async def upsert(self, model: type, key: dict[str, Any], values: dict[str, Any]):
        """Update the row matching `key` or insert a new one; returns the row with its id."""
        row = (await self.db.execute(select(model).filter_by(**key))).scalar_one_or_none()
        if row is None:
            row = model(**key, **values)
            self.db.add(row)
            await self.db.flush()
        else:
            for field, value in values.items():
                setattr(row, field, value)
        return row

    # ---------------------------------------------------
    # Commercial Configuration
    # ---------------------------------------------------
    async def seed_subscription_plans(self):
        for order, plan in enumerate(seed_data.SUBSCRIPTION_PLANS):
            values = {k: v for k, v in plan.items() if k != "slug"}
            values.setdefault("is_default", False)
            await self.upsert(
                SubscriptionPlan,
                {"slug": plan["slug"]},
                {**values, "sort_order": order, "is_active": True},
            )
        logger.info(f"[SEED] {len(seed_data.SUBSCRIPTION_PLANS)} subscription plans")

    async def seed_credit_actions(self):
        for order, (slug, name, description, category, cost, days) in enumerate(
            seed_data.CREDIT_ACTIONS
        ):
            await self.upsert(
                CreditAction,
                {"slug": slug},
                {
                    "name": name,
                    "description": description,
                    "category": category,
                    "credit_cost": cost,
                    "duration_days": days,
                    "sort_order": order,
                    "is_active": True,
                },
            )
        logger.info(f"[SEED] {len(seed_data.CREDIT_ACTIONS)} credit actions")

    async def seed_credit_packages(self):
        for order, (slug, name, credits, price, savings, popular) in enumerate(
            seed_data.CREDIT_PACKAGES
        ):
            await self.upsert(
                CreditPackage,
                {"slug": slug},
                {
                    "name": name,
                    "credits": credits,
                    "price": price,
                    "bonus_credits": 0,
                    "savings_percent": savings,
                    "is_popular": popular,
                    "sort_order": order,
                    "is_active": True,
                },
            )
        logger.info(f"[SEED] {len(seed_data.CREDIT_PACKAGES)} credit packages")

    async def seed_payment_settings(self):
        for order, setting in enumerate(seed_data.PAYMENT_SETTINGS):
            values = {k: v for k, v in setting.items() if k != "method"}
            await self.upsert(
                PaymentSetting,
                {"method": setting["method"]},
                {**values, "sort_order": order, "is_active": True},
            )
        logger.info(f"[SEED] {len(seed_data.PAYMENT_SETTINGS)} payment settings")

    async def seed_redeem_actions(self):
        for order, action in enumerate(seed_data.REDEEM_ACTIONS):
            values = {k: v for k, v in action.items() if k != "slug"}
            await self.upsert(
                RedeemAction,
                {"slug": action["slug"]},
                {**values, "sort_order": order, "is_active": True},
            )
        logger.info(f"[SEED] {len(seed_data.REDEEM_ACTIONS)} redeem actions")

    # ---------------------------------------------------
    # Origins and Sects
    # ---------------------------------------------------
    async def seed_origins(self):
        for order, (slug, label, native, emoji, ethnicities) in enumerate(seed_data.ORIGINS):
            origin = await self.upsert(
                Origin,
                {"slug": slug},
                {"label": label, "label_native": native, "emoji": emoji, "sort_order": order, "is_active": True},
            )
            for eth_order, (eth_slug, eth_label, eth_native, popular) in enumerate(ethnicities):
                await self.upsert(
                    Ethnicity,
                    {"origin_id": origin.id, "slug": eth_slug},
                    {
                        "label": eth_label,
                        "label_native": eth_native,
                        "is_popular": popular,
                        # "Other" entries sort last
                        "sort_order": 99 if eth_label == "Other" else eth_order,
                        "is_active": True,
                    },
                )

        first = len(seed_data.ORIGINS)
        for offset, (slug, label, emoji) in enumerate(seed_data.SINGLE_LEVEL_ORIGINS):
            origin = await self.upsert(
                Origin,
                {"slug": slug},
                {
                    "label": label,
                    "emoji": emoji,
                    "sort_order": 99 if slug == "other" else first + offset,
                    "is_active": True,
                },
            )
            await self.upsert(
                Ethnicity,
                {"origin_id": origin.id, "slug": f"{slug}_default"},
                {"label": label, "sort_order": 0, "is_active": True},
            )
        logger.info(
            f"[SEED] {len(seed_data.ORIGINS) + len(seed_data.SINGLE_LEVEL_ORIGINS)} origins with ethnicities"
        )

    async def seed_sects(self):
        for order, (slug, label, maslaks) in enumerate(seed_data.SECTS):
            sect = await self.upsert(
                Sect, {"slug": slug}, {"label": label, "sort_order": order, "is_active": True}
            )
            for m_order, (m_slug, m_label) in enumerate(maslaks):
                await self.upsert(
                    Maslak,
                    {"sect_id": sect.id, "slug": m_slug},
                    {
                        "label": m_label,
                        "sort_order": 99 if m_label.startswith("Other") else m_order,
                        "is_active": True,
                    },
                )

        first = len(seed_data.SECTS)
        for offset, (slug, label) in enumerate(seed_data.SINGLE_LEVEL_SECTS):
            sect = await self.upsert(
                Sect,
                {"slug": slug},
                {"label": label, "sort_order": 99 if slug == "other_sect" else first + offset, "is_active": True},
            )
            await self.upsert(
                Maslak,
                {"sect_id": sect.id, "slug": f"{slug}_default"},
                {"label": label, "sort_order": 0, "is_active": True},
            )
        logger.info(f"[SEED] {len(seed_data.SECTS) + len(seed_data.SINGLE_LEVEL_SECTS)} sects with maslaks")

    # ---------------------------------------------------
    # Geography
    # ---------------------------------------------------
    async def seed_countries(self) -> dict[str, Country]:
        countries = {}
        for order, (code, name, phone_code, currency) in enumerate(seed_data.COUNTRIES):
            countries[code] = await self.upsert(
                Country,
                {"code": code},
                {
                    "name": name,
                    "phone_code": phone_code,
                    "currency": currency,
                    "sort_order": order,
                    "is_active": True,
                },
            )
        logger.info(f"[SEED] {len(countries)} countries")
        return countries

    async def seed_states_and_cities(self, countries: dict[str, Country]):
        for code, (popular_count, states) in seed_data.REGIONS.items():
            country = countries[code]
            for state_order, (state_code, state_name, cities) in enumerate(states):
                state = await self.upsert(
                    StateProvince,
                    {"country_id": country.id, "name": state_name},
                    {"code": state_code, "sort_order": state_order, "is_active": True},
                )
                for city_order, city_name in enumerate(cities):
                    await self.upsert(
                        City,
                        {"state_province_id": state.id, "name": city_name},
                        {
                            "sort_order": city_order,
                            "is_popular": city_order < popular_count,
                            "is_active": True,
                        },
                    )
            logger.info(f"[SEED] {code}: {len(states)} states/provinces with cities")

    # ---------------------------------------------------
    # Flat Lookups
    # ---------------------------------------------------
    async def seed_heights(self):
        heights = seed_data.build_heights()
        for height in heights:
            values = {k: v for k, v in height.items() if k != "slug"}
            await self.upsert(Height, {"slug": height["slug"]}, {**values, "is_active": True})
        logger.info(f"[SEED] {len(heights)} heights")

    async def seed_education(self):
        for order, (slug, label, level, years, tags) in enumerate(seed_data.EDUCATION_LEVELS):
            await self.upsert(
                EducationLevel,
                {"slug": slug},
                {
                    "label": label,
                    "level": level,
                    "years_of_education": years,
                    "tags": tags,
                    "sort_order": order,
                    "is_active": True,
                },
            )

        fields = [
            (slug, label, category, start + offset)
            for category, (start, entries) in seed_data.EDUCATION_FIELDS.items()
            for offset, (slug, label) in enumerate(entries)
        ]
        fields.append(seed_data.OTHER_EDUCATION_FIELD)
        for slug, label, category, order in fields:
            await self.upsert(
                EducationField,
                {"slug": slug},
                {"label": label, "category": category, "tags": [], "sort_order": order, "is_active": True},
            )
        logger.info(
            f"[SEED] {len(seed_data.EDUCATION_LEVELS)} education levels, {len(fields)} education fields"
        )

    async def seed_income_ranges(self):
        for currency, (period, ranges, origin_slug) in seed_data.INCOME_RANGES.items():
            origin_id = None
            if origin_slug:
                origin = (
                    await self.db.execute(select(Origin).where(Origin.slug == origin_slug))
                ).scalar_one_or_none()
                if origin is None:
                    logger.warning(f"[SEED] Origin {origin_slug} missing, skipping {currency} ranges")
                    continue
                origin_id = origin.id

            entries = [(slug, label, low, high, order) for order, (slug, label, low, high) in enumerate(ranges)]
            entries.append((f"{currency.lower()}_prefer_not", "Prefer not to say", None, None, 99))
            for slug, label, low, high, order in entries:
                await self.upsert(
                    IncomeRange,
                    {"slug": slug},
                    {
                        "label": label,
                        "currency": currency,
                        "period": period,
                        "min_value": low,
                        "max_value": high,
                        "origin_id": origin_id,
                        "sort_order": order,
                        "is_active": True,
                    },
                )
            logger.info(f"[SEED] {len(entries)} {currency} income ranges")

    async def seed_languages(self):
        languages = [(*lang, order) for order, lang in enumerate(seed_data.LANGUAGES)]
        languages.append((*seed_data.OTHER_LANGUAGE, 99))
        for code, slug, label, native, order in languages:
            await self.upsert(
                Language,
                {"code": code},
                {
                    "slug": slug,
                    "label": label,
                    "label_native": native,
                    "is_global": True,
                    "sort_order": order,
                    "is_active": True,
                },
            )
        logger.info(f"[SEED] {len(languages)} languages")

    # ---------------------------------------------------
    # Super Admin
    # ---------------------------------------------------
    async def bootstrap_super_admin(self) -> User | None:
        """Create the configured super admin once; an existing account is left as is."""
        if not settings.SUPER_ADMIN_EMAIL or not settings.SUPER_ADMIN_PASSWORD:
            logger.warning("[SEED] SUPER_ADMIN_EMAIL/SUPER_ADMIN_PASSWORD not set, skipping bootstrap")
            return None

        email = settings.SUPER_ADMIN_EMAIL.strip().lower()
        existing = (await self.db.execute(select(User).where(User.email == email))).scalar_one_or_none()
        if existing:
            logger.info(f"[SEED] Super admin {email} already exists")
            return existing

        admin = User(
            email=email,
            name=settings.SUPER_ADMIN_NAME,
            hashed_password=get_password_hash(settings.SUPER_ADMIN_PASSWORD),
            role=UserRole.SUPER_ADMIN,
            status=UserStatus.ACTIVE,
            email_verified=True,
            is_verified=True,
        )
        self.db.add(admin)
        await self.db.flush()
        create_default_wallets(self.db, admin.id)
        logger.info(f"[SEED] Super admin {email} created")
        return admin

    async def run(self):
        try:
            logger.info("Starting database seeding...")
            await self.seed_subscription_plans()
            await self.seed_credit_actions()
            await self.seed_credit_packages()
            await self.seed_payment_settings()
            await self.seed_redeem_actions()
            await self.seed_origins()
            await self.seed_sects()
            countries = await self.seed_countries()
            await self.seed_states_and_cities(countries)
            await self.seed_heights()
            await self.seed_education()
            await self.seed_income_ranges()
            await self.seed_languages()
            await self.bootstrap_super_admin()
            await self.db.commit()
            logger.info("Seeding complete.")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Seeding failed: {e}")
            raise
        finally:
            await self.db.close()


if __name__ == "__main__":
    init_logging()
    asyncio.run(Seeder().run())
