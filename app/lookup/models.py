"""
lookup/models.py

Reference data used by profiles and search filters:
- Origin > Ethnicity > Caste
- Country > StateProvince > City, plus CountryLanguage
- Sect > Maslak
- Height, EducationLevel, EducationField, IncomeRange, Language

Every table carries `sort_order` and `is_active`; inactive rows stay in the
database for existing profiles but disappear from public dropdowns.
"""

import uuid

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.base import Base, StringArray, TimestampMixin
from app.database.enums import IncomePeriod


class LookupMixin(TimestampMixin):
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


# ---------------------------------------------------
# Origin > Ethnicity > Caste
# ---------------------------------------------------


class Origin(LookupMixin, Base):
    __tablename__ = "origins"

    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    label_native: Mapped[str | None] = mapped_column(String(100), nullable=True)
    emoji: Mapped[str | None] = mapped_column(String(16), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    level1_label: Mapped[str] = mapped_column(
        String(50), default="Ethnicity", comment="Singular label of the first sub-level"
    )
    level1_label_plural: Mapped[str] = mapped_column(String(50), default="Ethnicities")
    level2_label: Mapped[str] = mapped_column(String(50), default="Caste")
    level2_label_plural: Mapped[str] = mapped_column(String(50), default="Castes")
    level2_enabled: Mapped[bool] = mapped_column(Boolean, default=True)

    ethnicities: Mapped[list["Ethnicity"]] = relationship("Ethnicity", back_populates="origin")


class Ethnicity(LookupMixin, Base):
    __tablename__ = "ethnicities"
    __table_args__ = (UniqueConstraint("origin_id", "slug"),)

    origin_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("origins.id", ondelete="CASCADE"), nullable=False
    )
    slug: Mapped[str] = mapped_column(String(50), nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    label_native: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_popular: Mapped[bool] = mapped_column(Boolean, default=False)

    origin: Mapped["Origin"] = relationship("Origin", back_populates="ethnicities")
    castes: Mapped[list["Caste"]] = relationship("Caste", back_populates="ethnicity")


class Caste(LookupMixin, Base):
    __tablename__ = "castes"
    __table_args__ = (UniqueConstraint("ethnicity_id", "slug"),)

    ethnicity_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("ethnicities.id", ondelete="CASCADE"), nullable=False
    )
    slug: Mapped[str] = mapped_column(String(50), nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    label_native: Mapped[str | None] = mapped_column(String(100), nullable=True)

    ethnicity: Mapped["Ethnicity"] = relationship("Ethnicity", back_populates="castes")


# ---------------------------------------------------
# Country > StateProvince > City
# ---------------------------------------------------


class Country(LookupMixin, Base):
    __tablename__ = "countries"

    code: Mapped[str] = mapped_column(String(3), unique=True, nullable=False, comment="ISO 3166 alpha-2")
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)

    states: Mapped[list["StateProvince"]] = relationship("StateProvince", back_populates="country")
    languages: Mapped[list["CountryLanguage"]] = relationship(
        "CountryLanguage", back_populates="country"
    )


class StateProvince(LookupMixin, Base):
    __tablename__ = "state_provinces"
    __table_args__ = (UniqueConstraint("country_id", "name"),)

    country_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("countries.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    country: Mapped["Country"] = relationship("Country", back_populates="states")
    cities: Mapped[list["City"]] = relationship("City", back_populates="state_province")


class City(LookupMixin, Base):
    __tablename__ = "cities"
    __table_args__ = (UniqueConstraint("state_province_id", "name"),)

    state_province_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("state_provinces.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_popular: Mapped[bool] = mapped_column(Boolean, default=False)

    state_province: Mapped["StateProvince"] = relationship("StateProvince", back_populates="cities")


class CountryLanguage(TimestampMixin, Base):
    """Languages spoken in a country, used to order mother-tongue choices."""

    __tablename__ = "country_languages"
    __table_args__ = (UniqueConstraint("country_id", "language_id"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    country_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("countries.id", ondelete="CASCADE"), nullable=False
    )
    language_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("languages.id", ondelete="CASCADE"), nullable=False
    )
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)

    country: Mapped["Country"] = relationship("Country", back_populates="languages")
    language: Mapped["Language"] = relationship("Language", lazy="joined")


# ---------------------------------------------------
# Sect > Maslak
# ---------------------------------------------------


class Sect(LookupMixin, Base):
    __tablename__ = "sects"

    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    label_native: Mapped[str | None] = mapped_column(String(100), nullable=True)

    maslaks: Mapped[list["Maslak"]] = relationship("Maslak", back_populates="sect")


class Maslak(LookupMixin, Base):
    __tablename__ = "maslaks"
    __table_args__ = (UniqueConstraint("sect_id", "slug"),)

    sect_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("sects.id", ondelete="CASCADE"), nullable=False
    )
    slug: Mapped[str] = mapped_column(String(50), nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    label_native: Mapped[str | None] = mapped_column(String(100), nullable=True)

    sect: Mapped["Sect"] = relationship("Sect", back_populates="maslaks")


# ---------------------------------------------------
# Flat Lookups
# ---------------------------------------------------


class Height(LookupMixin, Base):
    __tablename__ = "heights"

    slug: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    label_imperial: Mapped[str] = mapped_column(String(20), nullable=False, comment="e.g. 5'4\"")
    label_metric: Mapped[str] = mapped_column(String(20), nullable=False, comment="e.g. 163 cm")
    centimeters: Mapped[int] = mapped_column(Integer, nullable=False)


class EducationLevel(LookupMixin, Base):
    __tablename__ = "education_levels"

    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=0, comment="Relative ranking")
    years_of_education: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tags: Mapped[list[str]] = mapped_column(StringArray, default=list)


class EducationField(LookupMixin, Base):
    __tablename__ = "education_fields"

    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list[str]] = mapped_column(StringArray, default=list)


class IncomeRange(LookupMixin, Base):
    __tablename__ = "income_ranges"

    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    period: Mapped[IncomePeriod] = mapped_column(
        Enum(IncomePeriod), default=IncomePeriod.ANNUAL, nullable=False
    )
    min_value: Mapped[float | None] = mapped_column(Numeric(14, 2), nullable=True)
    max_value: Mapped[float | None] = mapped_column(Numeric(14, 2), nullable=True)
    origin_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("origins.id", ondelete="SET NULL"), nullable=True
    )
    country_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("countries.id", ondelete="SET NULL"),
        nullable=True,
        comment="Country-specific range; NULL means global",
    )


class Language(LookupMixin, Base):
    __tablename__ = "languages"

    code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    label_native: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_global: Mapped[bool] = mapped_column(
        Boolean, default=True, comment="Offered for every country"
    )
