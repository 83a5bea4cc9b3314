"""Pagination envelope returned by all list endpoints.

PagedListResponse[T] — Pydantic model for HTTP responses (serializable).
The service-layer counterpart is ``geoapi.pagination.PagedList``.
"""

from pydantic import Field

from geoapi.schemas.base import ApiModel


class PagedListResponse[T](ApiModel):
    """Pydantic model for paginated HTTP responses.

    ``from_attributes`` is inherited from ``ApiModel`` so ``model_validate`` can
    read a ``PagedList`` dataclass directly, including its derived
    ``has_next_page``/``has_previous_page`` properties::

        # routers/country.py
        PagedListResponse[CountryResponse].model_validate(page.map(CountryResponse.model_validate))

    Use this in **routers** (the HTTP boundary). Don't use it inside services
    or repositories — those layers shouldn't depend on Pydantic.
    """

    items: list[T]
    page: int = Field(examples=[1])
    page_size: int = Field(examples=[10])
    total_count: int = Field(examples=[100])
    has_next_page: bool
    has_previous_page: bool
