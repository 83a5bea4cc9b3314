"""Country data-access layer.

Pure query functions without business logic or HTTP concerns.
Each function takes a session and returns models or scalars. Writes are only
staged here; services commit them with ``save_changes``.
"""

import uuid

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from geoapi.models import Country
from geoapi.pagination import COUNTRY_SORTING, PagedList, PageSpec
from geoapi.repositories.base import paginate
from geoapi.repositories.filters import country_predicates
from geoapi.schemas.country import ListCountriesQuery


async def get_country(db: AsyncSession, country_id: uuid.UUID) -> Country | None:
    return await db.get(Country, country_id)


async def get_country_by_name(db: AsyncSession, name: str) -> Country | None:
    """Exact, case-sensitive lookup used for the duplicate-name check."""
    result = await db.execute(select(Country).where(Country.name == name))
    return result.scalar_one_or_none()


async def country_exists(db: AsyncSession, country_id: uuid.UUID) -> bool:
    result = await db.execute(select(exists().where(Country.id == country_id)))
    return bool(result.scalar())


async def country_exists_by_iso(db: AsyncSession, iso_code: str) -> bool:
    result = await db.execute(select(exists().where(Country.iso_code == iso_code)))
    return bool(result.scalar())


async def list_countries(
    db: AsyncSession, query: ListCountriesQuery, spec: PageSpec
) -> PagedList[Country]:
    """Return a filtered, sorted page of countries."""
    stmt = select(Country).where(*country_predicates(query))
    return await paginate(db, stmt, Country, spec, COUNTRY_SORTING)


def add_country(db: AsyncSession, country: Country) -> uuid.UUID:
    if country.id is None:
        country.id = uuid.uuid4()
    db.add(country)
    return country.id


def update_country(db: AsyncSession, country: Country) -> None:
    db.add(country)


async def delete_country(db: AsyncSession, country_id: uuid.UUID) -> bool:
    """Stage deletion of a country and, through the cascade, its cities."""
    country = await db.get(Country, country_id)
    if country is None:
        return False
    await db.delete(country)
    return True
