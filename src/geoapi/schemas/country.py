"""Country request and response schemas."""

import uuid
from dataclasses import dataclass, field

from pydantic import Field

from geoapi.pagination import PagedRequest
from geoapi.schemas.base import ApiModel


class CountryResponse(ApiModel):
    id: uuid.UUID
    name: str = Field(examples=["USA"])
    iso_code: str = Field(examples=["USA"])


class CreateCountryRequest(ApiModel):
    # Optional at parse time so that missing fields are reported by the
    # validators with the same messages as empty ones.
    name: str | None = Field(default=None, examples=["Portugal"])
    iso_code: str | None = Field(default=None, examples=["PRT"])


class UpdateCountryRequest(ApiModel):
    name: str | None = Field(default=None, examples=["Portugal"])
    iso_code: str | None = Field(default=None, examples=["PRT"])


@dataclass(frozen=True)
class ListCountriesQuery:
    """Query string of GET /countries."""

    paging: PagedRequest = field(default_factory=PagedRequest)
    name: str | None = None
    iso_code: str | None = None
