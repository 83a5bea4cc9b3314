"""City endpoints, nested under their country."""

import uuid
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from geoapi.dependencies import DB, require_admin, require_user
from geoapi.models import City
from geoapi.pagination import PagedList, PagedRequest
from geoapi.problems import to_created, to_no_content, to_response
from geoapi.schemas.city import (
    CityResponse,
    CreateCityRequest,
    ListCitiesQuery,
    UpdateCityRequest,
)
from geoapi.schemas.error import ProblemDetails, ValidationProblemDetails
from geoapi.schemas.pagination import PagedListResponse
from geoapi.services import city as city_service

router = APIRouter(prefix="/countries/{country_id}/cities", tags=["cities"])

VALIDATION = {400: {"model": ValidationProblemDetails}}
NOT_FOUND = {404: {"model": ProblemDetails}}
CONFLICT = {409: {"model": ProblemDetails}}


def list_cities_query(
    page: int | None = None,
    page_size: Annotated[int | None, Query(alias="pageSize")] = None,
    sort_column: Annotated[str | None, Query(alias="sortColumn")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
    name: str | None = None,
    latitude: Decimal | None = None,
    longitude: Decimal | None = None,
) -> ListCitiesQuery:
    return ListCitiesQuery(
        paging=PagedRequest(
            page=page, page_size=page_size, sort_column=sort_column, sort_order=sort_order
        ),
        name=name,
        latitude=latitude,
        longitude=longitude,
    )


def _page(page: PagedList[City]) -> PagedListResponse[CityResponse]:
    return PagedListResponse[CityResponse].model_validate(page.map(CityResponse.model_validate))


@router.get(
    "",
    response_model=PagedListResponse[CityResponse],
    responses=VALIDATION | NOT_FOUND,
    dependencies=[Depends(require_user)],
)
async def list_cities(
    db: DB,
    country_id: uuid.UUID,
    query: Annotated[ListCitiesQuery, Depends(list_cities_query)],
) -> Response:
    """List the cities of one country.

    ``latitude`` and ``longitude`` match exactly; ``name`` is a
    case-insensitive substring.
    """
    return to_response(await city_service.get_cities(db, country_id, query), _page)


@router.get(
    "/{id}",
    response_model=CityResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_user)],
)
async def get_city(db: DB, country_id: uuid.UUID, id: uuid.UUID) -> Response:
    result = await city_service.get_city(db, country_id, id)
    return to_response(result, CityResponse.model_validate)


@router.post(
    "",
    response_model=CityResponse,
    status_code=201,
    responses=VALIDATION | NOT_FOUND | CONFLICT,
    dependencies=[Depends(require_admin)],
)
async def create_city(
    db: DB, request: Request, country_id: uuid.UUID, body: CreateCityRequest
) -> Response:
    result = await city_service.create_city(db, country_id, body)
    return to_created(
        result,
        CityResponse.model_validate,
        lambda city: str(request.url_for("get_city", country_id=country_id, id=city.id)),
    )


@router.put(
    "/{id}",
    status_code=204,
    responses=VALIDATION | NOT_FOUND | CONFLICT,
    dependencies=[Depends(require_admin)],
)
async def update_city(
    db: DB, country_id: uuid.UUID, id: uuid.UUID, body: UpdateCityRequest
) -> Response:
    return to_no_content(await city_service.update_city(db, country_id, id, body))


@router.delete(
    "/{id}",
    status_code=204,
    responses=NOT_FOUND,
    dependencies=[Depends(require_admin)],
)
async def delete_city(db: DB, country_id: uuid.UUID, id: uuid.UUID) -> Response:
    return to_no_content(await city_service.delete_city(db, country_id, id))
