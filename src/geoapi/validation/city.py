from geoapi.pagination import CITY_SORTING
from geoapi.results import Error
from geoapi.schemas.city import CreateCityRequest, ListCitiesQuery, UpdateCityRequest
from geoapi.validation.paging import validate_paging
from geoapi.validation.rules import between, collect, max_length, not_empty

NAME_MAX_LENGTH = 100
LATITUDE_RANGE = (-90, 90)
LONGITUDE_RANGE = (-180, 180)


def validate_city(request: CreateCityRequest | UpdateCityRequest) -> list[Error]:
    return collect(
        not_empty("Name", request.name),
        max_length("Name", request.name, NAME_MAX_LENGTH),
        not_empty("Latitude", request.latitude),
        between("Latitude", request.latitude, *LATITUDE_RANGE),
        not_empty("Longitude", request.longitude),
        between("Longitude", request.longitude, *LONGITUDE_RANGE),
    )


def validate_list_cities(query: ListCitiesQuery) -> list[Error]:
    return validate_paging(query.paging, CITY_SORTING) + collect(
        max_length("Name", query.name, NAME_MAX_LENGTH),
        between("Latitude", query.latitude, *LATITUDE_RANGE),
        between("Longitude", query.longitude, *LONGITUDE_RANGE),
    )
