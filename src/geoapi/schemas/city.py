"""City request and response schemas.

Coordinates are ``Decimal`` end to end (the columns are ``Numeric(9, 6)``) and
rendered as JSON numbers.
"""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer

from geoapi.pagination import PagedRequest
from geoapi.schemas.base import ApiModel

Coordinate = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CityResponse(ApiModel):
    id: uuid.UUID
    name: str = Field(examples=["New York"])
    latitude: Coordinate = Field(examples=[40.7128])
    longitude: Coordinate = Field(examples=[-74.006])
    country_id: uuid.UUID


class CreateCityRequest(ApiModel):
    name: str | None = Field(default=None, examples=["Porto"])
    latitude: Decimal | None = Field(default=None, examples=[41.1579])
    longitude: Decimal | None = Field(default=None, examples=[-8.6291])


class UpdateCityRequest(ApiModel):
    name: str | None = Field(default=None, examples=["Porto"])
    latitude: Decimal | None = Field(default=None, examples=[41.1579])
    longitude: Decimal | None = Field(default=None, examples=[-8.6291])


@dataclass(frozen=True)
class ListCitiesQuery:
    """Query string of GET /countries/{countryId}/cities."""

    paging: PagedRequest = field(default_factory=PagedRequest)
    name: str | None = None
    latitude: Decimal | None = None
    longitude: Decimal | None = None
