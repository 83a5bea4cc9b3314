"""City business logic.

Every operation is scoped to a parent country. A missing country is reported
before anything else is looked up or written.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from geoapi import errors
from geoapi.logging import get_logger
from geoapi.models import City
from geoapi.pagination import CITY_SORTING, PagedList, normalize_page
from geoapi.repositories import city as city_repo
from geoapi.repositories.base import save_changes
from geoapi.repositories.country import country_exists
from geoapi.results import Failure, Result, fail, fail_all, ok
from geoapi.schemas.city import CreateCityRequest, ListCitiesQuery, UpdateCityRequest
from geoapi.validation.city import validate_city, validate_list_cities

logger = get_logger(__name__)


async def get_city(db: AsyncSession, country_id: uuid.UUID, city_id: uuid.UUID) -> Result[City]:
    city = await city_repo.get_city(db, country_id, city_id)
    if city is None:
        return fail(errors.CITY_NOT_FOUND)
    return ok(city)


async def get_cities(
    db: AsyncSession, country_id: uuid.UUID, query: ListCitiesQuery
) -> Result[PagedList[City]]:
    if invalid := validate_list_cities(query):
        return fail_all(invalid)

    if not await country_exists(db, country_id):
        return fail(errors.COUNTRY_NOT_FOUND)

    spec = normalize_page(query.paging, CITY_SORTING)
    return ok(await city_repo.list_cities(db, country_id, query, spec))


async def create_city(
    db: AsyncSession, country_id: uuid.UUID, request: CreateCityRequest
) -> Result[City]:
    if invalid := validate_city(request):
        return fail_all(invalid)

    if not await country_exists(db, country_id):
        return fail(errors.COUNTRY_NOT_FOUND)

    if await city_repo.get_city_by_name(db, country_id, request.name) is not None:
        return fail(errors.CITY_CONFLICT)

    city = City(
        name=request.name,
        latitude=request.latitude,
        longitude=request.longitude,
        country_id=country_id,
    )
    city_repo.add_city(db, city)

    saved = await save_changes(db, "City")
    if isinstance(saved, Failure):
        return saved

    logger.info("city_created", city_id=str(city.id), country_id=str(country_id))
    return ok(city)


async def update_city(
    db: AsyncSession, country_id: uuid.UUID, city_id: uuid.UUID, request: UpdateCityRequest
) -> Result[None]:
    if invalid := validate_city(request):
        return fail_all(invalid)

    city = await city_repo.get_city(db, country_id, city_id)
    if city is None:
        return fail(errors.CITY_NOT_FOUND)

    same_name = await city_repo.get_city_by_name(db, country_id, request.name)
    if same_name is not None and same_name.id != city.id:
        return fail(errors.CITY_CONFLICT)

    city.name = request.name
    city.latitude = request.latitude
    city.longitude = request.longitude
    city_repo.update_city(db, city)

    saved = await save_changes(db, "City")
    if isinstance(saved, Failure):
        return saved

    logger.info("city_updated", city_id=str(city_id))
    return ok()


async def delete_city(db: AsyncSession, country_id: uuid.UUID, city_id: uuid.UUID) -> Result[None]:
    if not await city_repo.delete_city(db, country_id, city_id):
        return fail(errors.CITY_NOT_FOUND)

    saved = await save_changes(db, "City")
    if isinstance(saved, Failure):
        return saved

    logger.info("city_deleted", city_id=str(city_id))
    return ok()
