from geoapi.pagination import COUNTRY_SORTING
from geoapi.results import Error
from geoapi.schemas.country import CreateCountryRequest, ListCountriesQuery, UpdateCountryRequest
from geoapi.validation.paging import validate_paging
from geoapi.validation.rules import collect, exact_length, max_length, not_empty

NAME_MAX_LENGTH = 100
ISO_CODE_LENGTH = 3


def validate_country(request: CreateCountryRequest | UpdateCountryRequest) -> list[Error]:
    return collect(
        not_empty("Name", request.name),
        max_length("Name", request.name, NAME_MAX_LENGTH),
        not_empty("IsoCode", request.iso_code),
        exact_length("IsoCode", request.iso_code, ISO_CODE_LENGTH),
    )


def validate_list_countries(query: ListCountriesQuery) -> list[Error]:
    return validate_paging(query.paging, COUNTRY_SORTING) + collect(
        max_length("Name", query.name, NAME_MAX_LENGTH),
        max_length("IsoCode", query.iso_code, ISO_CODE_LENGTH),
    )
