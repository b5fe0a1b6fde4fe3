"""
app/catalog/services.py

Global Settings Service

Super-admin maintenance of every reference and commercial catalog behind the
public lookups: create, update, delete and reorder rows, with unique-key,
parent-reference and in-use checks. Each write clears the public lookup cache.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog import schemas
from app.core.validators import normalize_slug, slug_from_label
from app.database.enums import SubscriptionTier
from app.database.models import User
from app.lookup import models as lookup
from app.lookup.services import OTHER_LANGUAGE_SLUG, invalidate_lookup_cache
from app.profile.models import Profile
from app.wallet import models as wallet

logger = logging.getLogger(__name__)

Guard = Callable[[AsyncSession, Any], Awaitable[None]]


@dataclass(frozen=True)
class Reference:
    """A foreign key that must point at an existing row."""

    field: str
    model: type
    name: str


@dataclass(frozen=True)
class Children:
    model: type
    field: str
    name: str


@dataclass(frozen=True)
class Catalog:
    name: str
    item: str
    model: type
    create_schema: type[BaseModel]
    read_schema: type[BaseModel]
    unique: tuple[tuple[str, ...], ...] = (("slug",),)
    references: tuple[Reference, ...] = ()
    profile_columns: tuple[str, ...] = ()
    children: tuple[Children, ...] = ()
    guard: Guard | None = None
    update_schema: type[BaseModel] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "update_schema", schemas.partial_model(self.create_schema))

    @property
    def parent(self) -> Reference | None:
        return self.references[0] if self.references else None


# ---------------------------------------------------
# Delete Guards
# ---------------------------------------------------
async def _guard_language(db: AsyncSession, row: lookup.Language) -> None:
    if row.slug == OTHER_LANGUAGE_SLUG:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete the 'Other' language option",
        )


async def _guard_plan(db: AsyncSession, row: wallet.SubscriptionPlan) -> None:
    if row.is_default:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete the default plan. Set another plan as default first.",
        )
    tiers = {tier.value for tier in SubscriptionTier}
    subscribers = 0
    if row.slug.upper() in tiers:
        subscribers = (
            await db.execute(
                select(func.count(User.id)).where(
                    User.subscription_tier == SubscriptionTier(row.slug.upper())
                )
            )
        ).scalar_one()
    if subscribers:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete plan. {subscribers} users are currently on this plan.",
        )


# ---------------------------------------------------
# Catalog Registry
# ---------------------------------------------------
ORIGIN = Reference("origin_id", lookup.Origin, "Origin")
ETHNICITY = Reference("ethnicity_id", lookup.Ethnicity, "Ethnicity")
COUNTRY = Reference("country_id", lookup.Country, "Country")
STATE = Reference("state_province_id", lookup.StateProvince, "State")
SECT = Reference("sect_id", lookup.Sect, "Sect")
LANGUAGE = Reference("language_id", lookup.Language, "Language")

CATALOGS: dict[str, Catalog] = {
    "origins": Catalog(
        "Origin", "origin", lookup.Origin, schemas.OriginCreate, schemas.OriginRead,
        profile_columns=("origin_id",),
        children=(Children(lookup.Ethnicity, "origin_id", "ethnicities"),),
    ),
    "ethnicities": Catalog(
        "Ethnicity", "ethnicity", lookup.Ethnicity, schemas.EthnicityCreate, schemas.EthnicityRead,
        unique=(("origin_id", "slug"),),
        references=(ORIGIN,),
        profile_columns=("ethnicity_id",),
        children=(Children(lookup.Caste, "ethnicity_id", "castes"),),
    ),
    "castes": Catalog(
        "Caste", "caste", lookup.Caste, schemas.CasteCreate, schemas.CasteRead,
        unique=(("ethnicity_id", "slug"),),
        references=(ETHNICITY,),
        profile_columns=("caste_id",),
    ),
    "countries": Catalog(
        "Country", "country", lookup.Country, schemas.CountryCreate, schemas.CountryRead,
        unique=(("code",),),
        profile_columns=("country_of_origin_id", "country_living_in_id"),
        children=(
            Children(lookup.StateProvince, "country_id", "states"),
            Children(lookup.CountryLanguage, "country_id", "language mappings"),
        ),
    ),
    "states": Catalog(
        "State", "state", lookup.StateProvince, schemas.StateCreate, schemas.StateRead,
        unique=(("country_id", "name"),),
        references=(COUNTRY,),
        profile_columns=("state_province_id",),
        children=(Children(lookup.City, "state_province_id", "cities"),),
    ),
    "cities": Catalog(
        "City", "city", lookup.City, schemas.CityCreate, schemas.CityRead,
        unique=(("state_province_id", "name"),),
        references=(STATE,),
        profile_columns=("city_id",),
    ),
    "country-languages": Catalog(
        "Country language", "country language", lookup.CountryLanguage,
        schemas.CountryLanguageCreate, schemas.CountryLanguageRead,
        unique=(("country_id", "language_id"),),
        references=(COUNTRY, LANGUAGE),
    ),
    "sects": Catalog(
        "Sect", "sect", lookup.Sect, schemas.SectCreate, schemas.SectRead,
        profile_columns=("sect_id",),
        children=(Children(lookup.Maslak, "sect_id", "maslaks"),),
    ),
    "maslaks": Catalog(
        "Maslak", "maslak", lookup.Maslak, schemas.MaslakCreate, schemas.MaslakRead,
        unique=(("sect_id", "slug"),),
        references=(SECT,),
        profile_columns=("maslak_id",),
    ),
    "heights": Catalog(
        "Height", "height", lookup.Height, schemas.HeightCreate, schemas.HeightRead,
        profile_columns=("height_id",),
    ),
    "education-levels": Catalog(
        "Education level", "education level", lookup.EducationLevel,
        schemas.EducationLevelCreate, schemas.EducationLevelRead,
        profile_columns=("education_level_id",),
    ),
    "education-fields": Catalog(
        "Education field", "education field", lookup.EducationField,
        schemas.EducationFieldCreate, schemas.EducationFieldRead,
        profile_columns=("education_field_id",),
    ),
    "income-ranges": Catalog(
        "Income range", "income range", lookup.IncomeRange,
        schemas.IncomeRangeCreate, schemas.IncomeRangeRead,
        references=(COUNTRY, ORIGIN),
        profile_columns=("income_range_id",),
    ),
    "languages": Catalog(
        "Language", "language", lookup.Language, schemas.LanguageCreate, schemas.LanguageRead,
        unique=(("code",), ("slug",)),
        profile_columns=("mother_tongue_id",),
        children=(Children(lookup.CountryLanguage, "language_id", "country mappings"),),
        guard=_guard_language,
    ),
    "subscription-plans": Catalog(
        "Plan", "plan", wallet.SubscriptionPlan,
        schemas.SubscriptionPlanCreate, schemas.SubscriptionPlanRead,
        guard=_guard_plan,
    ),
    "credit-actions": Catalog(
        "Action", "action", wallet.CreditAction, schemas.CreditActionCreate, schemas.CreditActionRead
    ),
    "credit-packages": Catalog(
        "Package", "package", wallet.CreditPackage,
        schemas.CreditPackageCreate, schemas.CreditPackageRead,
    ),
    "payment-settings": Catalog(
        "Setting", "setting", wallet.PaymentSetting,
        schemas.PaymentSettingCreate, schemas.PaymentSettingRead,
        unique=(("method",),),
    ),
    "redeem-actions": Catalog(
        "Action", "action", wallet.RedeemAction, schemas.RedeemActionCreate, schemas.RedeemActionRead
    ),
}


def get_catalog(name: str) -> Catalog:
    catalog = CATALOGS.get(name)
    if catalog is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown catalog: {name}")
    return catalog


def normalize_values(catalog: Catalog, values: dict[str, Any], creating: bool) -> dict[str, Any]:
    """Slugs are normalized; languages derive theirs from the label; country codes are upper-cased."""
    if catalog.model is lookup.Language:
        if values.get("slug"):
            values["slug"] = normalize_slug(values["slug"])
        elif creating or "slug" in values:
            values["slug"] = slug_from_label(values.get("label") or "")
        if values.get("code"):
            values["code"] = values["code"].strip().lower()
    elif values.get("slug"):
        values["slug"] = normalize_slug(values["slug"])
    if catalog.model is lookup.Country and values.get("code"):
        values["code"] = values["code"].strip().upper()
    return values


def _reject_nulls(model: type, changes: dict[str, Any]) -> None:
    """Update schemas make every field optional; NOT NULL columns still refuse an explicit null."""
    columns = model.__table__.columns
    errors = [
        {"type": "null_not_allowed", "loc": ("body", name), "msg": "Field cannot be null", "input": None}
        for name, value in changes.items()
        if value is None and name in columns and not columns[name].nullable
    ]
    if errors:
        raise RequestValidationError(errors)


def _validate(schema: type[BaseModel], payload: dict[str, Any]) -> BaseModel:
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


# ---------------------------------------------------
# CatalogService
# ---------------------------------------------------
class CatalogService:
    def __init__(self, db: AsyncSession, catalog: Catalog):
        self.db = db
        self.catalog = catalog
        self.model = catalog.model

    def _serialize(self, row: Any) -> dict[str, Any]:
        return self.catalog.read_schema.model_validate(row).model_dump()

    async def _get_or_404(self, item_id: UUID) -> Any:
        row = await self.db.get(self.model, item_id)
        if not row:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"{self.catalog.name} not found"
            )
        return row

    async def _check_references(self, values: dict[str, Any]) -> None:
        for reference in self.catalog.references:
            ref_id = values.get(reference.field)
            if ref_id is not None and not await self.db.get(reference.model, ref_id):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND, detail=f"{reference.name} not found"
                )

    async def _check_unique(self, values: dict[str, Any], exclude_id: UUID | None = None) -> None:
        for key in self.catalog.unique:
            if any(values.get(column) is None for column in key):
                continue
            conditions = [getattr(self.model, column) == values[column] for column in key]
            if exclude_id is not None:
                conditions.append(self.model.id != exclude_id)
            if (await self.db.execute(select(self.model.id).where(*conditions))).first():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{self.catalog.name} with this {key[-1]} already exists",
                )

    async def _check_deletable(self, row: Any) -> None:
        if self.catalog.guard:
            await self.catalog.guard(self.db, row)

        if self.catalog.profile_columns:
            in_use = (
                await self.db.execute(
                    select(func.count(Profile.id)).where(
                        or_(*(getattr(Profile, column) == row.id for column in self.catalog.profile_columns))
                    )
                )
            ).scalar_one()
            if in_use:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Cannot delete {self.catalog.item} that is in use by profiles. "
                    "Consider deactivating it instead.",
                )

        for child in self.catalog.children:
            count = (
                await self.db.execute(
                    select(func.count()).select_from(child.model).where(getattr(child.model, child.field) == row.id)
                )
            ).scalar_one()
            if count:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Cannot delete {self.catalog.item} that has {count} {child.name}. Remove them first.",
                )

    # --- Reads ---
    async def list_items(self, parent_id: UUID | None = None) -> schemas.CatalogListResponse:
        """All rows, inactive included, in display order."""
        query = select(self.model).order_by(self.model.sort_order)
        parent = self.catalog.parent
        if parent_id and parent:
            query = query.where(getattr(self.model, parent.field) == parent_id)
        rows = (await self.db.execute(query)).unique().scalars().all()
        return schemas.CatalogListResponse(
            catalog=self.model.__tablename__,
            total_count=len(rows),
            items=[self._serialize(row) for row in rows],
        )

    async def get_item(self, item_id: UUID) -> dict[str, Any]:
        return self._serialize(await self._get_or_404(item_id))

    # --- Writes ---
    async def create_item(self, admin: User, payload: dict[str, Any]) -> dict[str, Any]:
        data = _validate(self.catalog.create_schema, payload)
        values = normalize_values(self.catalog, data.model_dump(), creating=True)
        await self._check_references(values)
        await self._check_unique(values)

        row = self.model(**values)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        await invalidate_lookup_cache()
        logger.info(f"[SETTINGS] {admin.id} created {self.catalog.item} {row.id}")
        return self._serialize(row)

    async def update_item(self, admin: User, item_id: UUID, payload: dict[str, Any]) -> dict[str, Any]:
        row = await self._get_or_404(item_id)
        data = _validate(self.catalog.update_schema, payload)
        changes = normalize_values(self.catalog, data.model_dump(exclude_unset=True), creating=False)
        _reject_nulls(self.model, changes)

        merged = {column: getattr(row, column) for key in self.catalog.unique for column in key}
        merged.update(changes)
        await self._check_references(changes)
        await self._check_unique(merged, exclude_id=row.id)

        for column, value in changes.items():
            setattr(row, column, value)
        await self.db.commit()
        await self.db.refresh(row)
        await invalidate_lookup_cache()
        logger.info(f"[SETTINGS] {admin.id} updated {self.catalog.item} {item_id}: {', '.join(changes) or 'no changes'}")
        return self._serialize(row)

    async def delete_item(self, admin: User, item_id: UUID) -> str:
        row = await self._get_or_404(item_id)
        await self._check_deletable(row)
        await self.db.delete(row)
        await self.db.commit()
        await invalidate_lookup_cache()
        logger.info(f"[SETTINGS] {admin.id} deleted {self.catalog.item} {item_id}")
        return f"{self.catalog.name} deleted successfully"

    async def reorder(self, admin: User, ordered_ids: list[UUID]) -> str:
        """sort_order becomes each id's position in `ordered_ids`."""
        rows = (
            (await self.db.execute(select(self.model).where(self.model.id.in_(ordered_ids))))
            .unique()
            .scalars()
            .all()
        )
        by_id = {row.id: row for row in rows}
        missing = [str(i) for i in ordered_ids if i not in by_id]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.catalog.name} not found: {', '.join(missing)}",
            )
        for position, item_id in enumerate(ordered_ids):
            by_id[item_id].sort_order = position
        await self.db.commit()
        await invalidate_lookup_cache()
        logger.info(f"[SETTINGS] {admin.id} reordered {len(ordered_ids)} {self.model.__tablename__}")
        return "Order updated successfully"
