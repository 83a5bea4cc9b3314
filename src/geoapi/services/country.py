"""Country business logic.

Validates requests, checks existence and uniqueness, and stages writes
through the repository. Every function returns a ``Result``; nothing here
raises for an expected failure.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from geoapi import errors
from geoapi.logging import get_logger
from geoapi.models import Country
from geoapi.pagination import COUNTRY_SORTING, PagedList, normalize_page
from geoapi.repositories import country as country_repo
from geoapi.repositories.base import save_changes
from geoapi.results import Failure, Result, fail, fail_all, ok
from geoapi.schemas.country import CreateCountryRequest, ListCountriesQuery, UpdateCountryRequest
from geoapi.validation.country import validate_country, validate_list_countries

logger = get_logger(__name__)


async def get_country(db: AsyncSession, country_id: uuid.UUID) -> Result[Country]:
    country = await country_repo.get_country(db, country_id)
    if country is None:
        return fail(errors.COUNTRY_NOT_FOUND)
    return ok(country)


async def get_countries(db: AsyncSession, query: ListCountriesQuery) -> Result[PagedList[Country]]:
    if invalid := validate_list_countries(query):
        return fail_all(invalid)

    spec = normalize_page(query.paging, COUNTRY_SORTING)
    return ok(await country_repo.list_countries(db, query, spec))


async def create_country(db: AsyncSession, request: CreateCountryRequest) -> Result[Country]:
    if invalid := validate_country(request):
        return fail_all(invalid)

    if await country_repo.get_country_by_name(db, request.name) is not None:
        return fail(errors.COUNTRY_CONFLICT)

    country = Country(name=request.name, iso_code=request.iso_code)
    country_repo.add_country(db, country)

    saved = await save_changes(db, "Country")
    if isinstance(saved, Failure):
        return saved

    logger.info("country_created", country_id=str(country.id), name=country.name)
    return ok(country)


async def update_country(
    db: AsyncSession, country_id: uuid.UUID, request: UpdateCountryRequest
) -> Result[None]:
    if invalid := validate_country(request):
        return fail_all(invalid)

    country = await country_repo.get_country(db, country_id)
    if country is None:
        return fail(errors.COUNTRY_NOT_FOUND)

    same_name = await country_repo.get_country_by_name(db, request.name)
    if same_name is not None and same_name.id != country.id:
        return fail(errors.COUNTRY_CONFLICT)

    country.name = request.name
    country.iso_code = request.iso_code
    country_repo.update_country(db, country)

    saved = await save_changes(db, "Country")
    if isinstance(saved, Failure):
        return saved

    logger.info("country_updated", country_id=str(country_id))
    return ok()


async def delete_country(db: AsyncSession, country_id: uuid.UUID) -> Result[None]:
    """Delete a country together with all of its cities."""
    if not await country_repo.delete_country(db, country_id):
        return fail(errors.COUNTRY_NOT_FOUND)

    saved = await save_changes(db, "Country")
    if isinstance(saved, Failure):
        return saved

    logger.info("country_deleted", country_id=str(country_id))
    return ok()
