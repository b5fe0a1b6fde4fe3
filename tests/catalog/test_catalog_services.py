"""
tests/catalog/test_catalog_services.py

Global settings service against a real (in-memory) database: delete guards
for dependent rows and profile usage, and null handling on partial updates.
"""

from datetime import date
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.services import CatalogService, get_catalog
from app.database.enums import Gender, MaritalStatus, ProfileFor
from app.database.models import User
from app.lookup.models import Country, CountryLanguage, Language, StateProvince
from app.profile.models import Profile


async def _country(db: AsyncSession, code: str = "PK", name: str = "Pakistan") -> Country:
    country = Country(code=code, name=name)
    db.add(country)
    await db.commit()
    return country


async def _language(db: AsyncSession, code: str = "ur", slug: str = "urdu") -> Language:
    language = Language(code=code, slug=slug, label=slug.title())
    db.add(language)
    await db.commit()
    return language


def _service(db: AsyncSession, name: str) -> CatalogService:
    return CatalogService(db, get_catalog(name))


# ---------------------------------------------------
# Delete Guards
# ---------------------------------------------------
@pytest.mark.asyncio
async def test_delete_country_with_language_mapping_is_rejected(
    db_session: AsyncSession, db_super_admin: User
) -> None:
    country = await _country(db_session)
    language = await _language(db_session)
    db_session.add(CountryLanguage(country_id=country.id, language_id=language.id, is_primary=True))
    await db_session.commit()

    with pytest.raises(HTTPException) as exc:
        await _service(db_session, "countries").delete_item(db_super_admin, country.id)

    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert exc.value.detail == "Cannot delete country that has 1 language mappings. Remove them first."
    assert await db_session.get(Country, country.id) is not None


@pytest.mark.asyncio
async def test_delete_country_with_states_is_rejected(
    db_session: AsyncSession, db_super_admin: User
) -> None:
    country = await _country(db_session)
    db_session.add_all(
        [StateProvince(country_id=country.id, name="Punjab"), StateProvince(country_id=country.id, name="Sindh")]
    )
    await db_session.commit()

    with pytest.raises(HTTPException) as exc:
        await _service(db_session, "countries").delete_item(db_super_admin, country.id)

    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert "2 states" in exc.value.detail


@pytest.mark.asyncio
async def test_delete_language_with_country_mapping_is_rejected(
    db_session: AsyncSession, db_super_admin: User
) -> None:
    country = await _country(db_session)
    language = await _language(db_session, code="pa", slug="punjabi")
    db_session.add(CountryLanguage(country_id=country.id, language_id=language.id))
    await db_session.commit()

    with pytest.raises(HTTPException) as exc:
        await _service(db_session, "languages").delete_item(db_super_admin, language.id)

    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert "1 country mappings" in exc.value.detail


@pytest.mark.asyncio
async def test_delete_country_in_use_by_profile_is_rejected(
    db_session: AsyncSession, db_member: User, db_super_admin: User
) -> None:
    country = await _country(db_session)
    db_session.add(
        Profile(
            user_id=db_member.id,
            profile_for=ProfileFor.SELF,
            gender=Gender.FEMALE,
            date_of_birth=date(1997, 3, 14),
            marital_status=MaritalStatus.NEVER_MARRIED,
            country_living_in_id=country.id,
        )
    )
    await db_session.commit()

    with pytest.raises(HTTPException) as exc:
        await _service(db_session, "countries").delete_item(db_super_admin, country.id)

    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert "in use by profiles" in exc.value.detail


@pytest.mark.asyncio
@patch("app.catalog.services.invalidate_lookup_cache", new_callable=AsyncMock)
async def test_delete_country_without_dependents(
    mock_invalidate: AsyncMock, db_session: AsyncSession, db_super_admin: User
) -> None:
    country = await _country(db_session)

    message = await _service(db_session, "countries").delete_item(db_super_admin, country.id)

    assert message == "Country deleted successfully"
    assert (await db_session.execute(select(Country))).scalars().all() == []
    mock_invalidate.assert_awaited_once()


# ---------------------------------------------------
# Partial Updates
# ---------------------------------------------------
@pytest.mark.asyncio
async def test_update_rejects_null_for_required_column(
    db_session: AsyncSession, db_super_admin: User
) -> None:
    country = await _country(db_session)

    with pytest.raises(RequestValidationError) as exc:
        await _service(db_session, "countries").update_item(db_super_admin, country.id, {"name": None})

    assert exc.value.errors()[0]["loc"] == ("body", "name")
    assert country.name == "Pakistan"


@pytest.mark.asyncio
@patch("app.catalog.services.invalidate_lookup_cache", new_callable=AsyncMock)
async def test_update_allows_null_for_optional_column(
    mock_invalidate: AsyncMock, db_session: AsyncSession, db_super_admin: User
) -> None:
    country = Country(code="GB", name="United Kingdom", phone_code="+44")
    db_session.add(country)
    await db_session.commit()

    item = await _service(db_session, "countries").update_item(
        db_super_admin, country.id, {"phone_code": None}
    )

    assert item["phone_code"] is None
    assert item["name"] == "United Kingdom"


@pytest.mark.asyncio
async def test_patch_with_null_name_returns_422(
    async_client: AsyncClient, override_get_db: None, mock_current_super_admin: User
) -> None:
    response = await async_client.patch(
        f"/admin/global-settings/countries/{uuid4()}", json={"name": None}
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"][0]["loc"] == ["body", "name"]
