"""City data-access layer.

Every lookup is scoped to the owning country: a city id under the wrong
country is treated as missing.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geoapi.models import City
from geoapi.pagination import CITY_SORTING, PagedList, PageSpec
from geoapi.repositories.base import paginate
from geoapi.repositories.filters import city_predicates
from geoapi.schemas.city import ListCitiesQuery


async def get_city(db: AsyncSession, country_id: uuid.UUID, city_id: uuid.UUID) -> City | None:
    city = await db.get(City, city_id)
    if city is None or city.country_id != country_id:
        return None
    return city


async def get_city_by_name(db: AsyncSession, country_id: uuid.UUID, name: str) -> City | None:
    result = await db.execute(
        select(City).where(City.country_id == country_id, City.name == name)
    )
    return result.scalar_one_or_none()


async def list_cities(
    db: AsyncSession, country_id: uuid.UUID, query: ListCitiesQuery, spec: PageSpec
) -> PagedList[City]:
    """Return a filtered, sorted page of one country's cities."""
    stmt = select(City).where(*city_predicates(country_id, query))
    return await paginate(db, stmt, City, spec, CITY_SORTING)


def add_city(db: AsyncSession, city: City) -> uuid.UUID:
    if city.id is None:
        city.id = uuid.uuid4()
    db.add(city)
    return city.id


def update_city(db: AsyncSession, city: City) -> None:
    db.add(city)


async def delete_city(db: AsyncSession, country_id: uuid.UUID, city_id: uuid.UUID) -> bool:
    city = await get_city(db, country_id, city_id)
    if city is None:
        return False
    await db.delete(city)
    return True
