"""Country endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from geoapi.dependencies import DB, require_admin, require_user
from geoapi.models import Country
from geoapi.pagination import PagedList, PagedRequest
from geoapi.problems import to_created, to_no_content, to_response
from geoapi.schemas.country import (
    CountryResponse,
    CreateCountryRequest,
    ListCountriesQuery,
    UpdateCountryRequest,
)
from geoapi.schemas.error import ProblemDetails, ValidationProblemDetails
from geoapi.schemas.pagination import PagedListResponse
from geoapi.services import country as country_service

router = APIRouter(prefix="/countries", tags=["countries"])

VALIDATION = {400: {"model": ValidationProblemDetails}}
NOT_FOUND = {404: {"model": ProblemDetails}}
CONFLICT = {409: {"model": ProblemDetails}}


def list_countries_query(
    page: int | None = None,
    page_size: Annotated[int | None, Query(alias="pageSize")] = None,
    sort_column: Annotated[str | None, Query(alias="sortColumn")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
    name: str | None = None,
    iso_code: Annotated[str | None, Query(alias="isoCode")] = None,
) -> ListCountriesQuery:
    return ListCountriesQuery(
        paging=PagedRequest(
            page=page, page_size=page_size, sort_column=sort_column, sort_order=sort_order
        ),
        name=name,
        iso_code=iso_code,
    )


def _page(page: PagedList[Country]) -> PagedListResponse[CountryResponse]:
    return PagedListResponse[CountryResponse].model_validate(
        page.map(CountryResponse.model_validate)
    )


@router.get(
    "",
    response_model=PagedListResponse[CountryResponse],
    responses=VALIDATION,
    dependencies=[Depends(require_user)],
)
async def list_countries(
    db: DB, query: Annotated[ListCountriesQuery, Depends(list_countries_query)]
) -> Response:
    """List countries, filtered by name and ISO code substrings."""
    return to_response(await country_service.get_countries(db, query), _page)


@router.get(
    "/{id}",
    response_model=CountryResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_user)],
)
async def get_country(db: DB, id: uuid.UUID) -> Response:
    result = await country_service.get_country(db, id)
    return to_response(result, CountryResponse.model_validate)


@router.post(
    "",
    response_model=CountryResponse,
    status_code=201,
    responses=VALIDATION | CONFLICT,
    dependencies=[Depends(require_admin)],
)
async def create_country(db: DB, request: Request, body: CreateCountryRequest) -> Response:
    result = await country_service.create_country(db, body)
    return to_created(
        result,
        CountryResponse.model_validate,
        lambda country: str(request.url_for("get_country", id=country.id)),
    )


@router.put(
    "/{id}",
    status_code=204,
    responses=VALIDATION | NOT_FOUND | CONFLICT,
    dependencies=[Depends(require_admin)],
)
async def update_country(db: DB, id: uuid.UUID, body: UpdateCountryRequest) -> Response:
    return to_no_content(await country_service.update_country(db, id, body))


@router.delete(
    "/{id}",
    status_code=204,
    responses=NOT_FOUND,
    dependencies=[Depends(require_admin)],
)
async def delete_country(db: DB, id: uuid.UUID) -> Response:
    """Delete a country and every city it owns."""
    return to_no_content(await country_service.delete_country(db, id))
