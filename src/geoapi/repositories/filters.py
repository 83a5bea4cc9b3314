"""Filter predicates for list queries.

Each builder turns the optional filter fields of a list request into a list of
predicates that the repository ANDs together. A field that is ``None`` or empty
adds no predicate. Names and ISO codes match as case-insensitive substrings
(LIKE wildcards in the input are escaped); coordinates match exactly.
"""

import uuid

from sqlalchemy import ColumnElement

from geoapi.models import City, Country
from geoapi.schemas.city import ListCitiesQuery
from geoapi.schemas.country import ListCountriesQuery


def country_predicates(query: ListCountriesQuery) -> list[ColumnElement[bool]]:
    predicates: list[ColumnElement[bool]] = []
    if query.name:
        predicates.append(Country.name.icontains(query.name, autoescape=True))
    if query.iso_code:
        predicates.append(Country.iso_code.icontains(query.iso_code, autoescape=True))
    return predicates


def city_predicates(country_id: uuid.UUID, query: ListCitiesQuery) -> list[ColumnElement[bool]]:
    # Cities are always scoped to their country before any other filter.
    predicates: list[ColumnElement[bool]] = [City.country_id == country_id]
    if query.name:
        predicates.append(City.name.icontains(query.name, autoescape=True))
    if query.latitude is not None:
        predicates.append(City.latitude == query.latitude)
    if query.longitude is not None:
        predicates.append(City.longitude == query.longitude)
    return predicates
