"""Paged query contract shared by every list endpoint.

PagedRequest — raw paging/sorting input as received from the client.
SortTable    — per-resource allow-list of sortable columns plus the default.
PageSpec     — normalized paging parameters the repositories consume.
PagedList[T] — one page of results plus the counts needed by clients.

Plain dataclasses: services and repositories use these without depending on
Pydantic. The HTTP counterpart is ``geoapi.schemas.pagination.PagedListResponse``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORT_ORDERS = ("ASC", "DESC")

type SortOrder = Literal["ASC", "DESC"]


@dataclass(frozen=True)
class PagedRequest:
    """Optional paging and sorting parameters of a list request."""

    page: int | None = None
    page_size: int | None = None
    sort_column: str | None = None
    sort_order: str | None = None


@dataclass(frozen=True)
class SortTable:
    """Sortable columns of one resource.

    ``columns`` maps the public, case-insensitive column name to the model
    attribute it sorts by. Declaration order is kept for error messages.
    """

    columns: dict[str, str]
    default: str

    def __post_init__(self) -> None:
        if self.default not in self.columns:
            raise ValueError(f"default sort column {self.default!r} is not sortable")

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.columns)

    def canonical(self, name: str) -> str | None:
        """Return the declared spelling of ``name`` or None if it is not sortable."""
        folded = name.casefold()
        for declared in self.columns:
            if declared.casefold() == folded:
                return declared
        return None

    def attribute(self, name: str) -> str:
        return self.columns[name]


COUNTRY_SORTING = SortTable(
    columns={"Id": "id", "Name": "name", "IsoCode": "iso_code"},
    default="Name",
)

CITY_SORTING = SortTable(
    columns={
        "Id": "id",
        "Name": "name",
        "Country": "country_id",
        "Latitude": "latitude",
        "Longitude": "longitude",
    },
    default="Name",
)


@dataclass(frozen=True)
class PageSpec:
    page_number: int
    page_size: int
    sort_column: str
    sort_order: SortOrder

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def descending(self) -> bool:
        return self.sort_order == "DESC"


def normalize_page(request: PagedRequest, table: SortTable) -> PageSpec:
    """Apply defaults and the page size cap to a validated request.

    Bounds are checked by ``geoapi.validation.paging`` before this runs; here a
    page size above the cap is clamped and any sort order other than DESC
    becomes ASC. A page past the end is allowed and yields no items.
    """
    page_size = request.page_size if request.page_size is not None else DEFAULT_PAGE_SIZE

    sort_column = table.default
    if request.sort_column:
        canonical = table.canonical(request.sort_column)
        if canonical is None:
            raise ValueError(f"unsupported sort column {request.sort_column!r}")
        sort_column = canonical

    sort_order: SortOrder = (
        "DESC" if request.sort_order and request.sort_order.upper() == "DESC" else "ASC"
    )

    return PageSpec(
        page_number=request.page if request.page is not None else DEFAULT_PAGE,
        page_size=min(page_size, MAX_PAGE_SIZE),
        sort_column=sort_column,
        sort_order=sort_order,
    )


@dataclass
class PagedList[T]:
    """One page of results inside the service layer.

    ``total_count`` counts every row matching the filters, ignoring paging::

        page = await list_countries(db, filters, spec)
        return ok(page)

    The router converts it to ``PagedListResponse`` for the response body.
    """

    items: list[T]
    page: int
    page_size: int
    total_count: int

    @property
    def has_next_page(self) -> bool:
        return self.page * self.page_size < self.total_count

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    def map[R](self, mapper: Callable[[T], R]) -> "PagedList[R]":
        """Return the same page with every item converted by ``mapper``."""
        return PagedList(
            items=[mapper(item) for item in self.items],
            page=self.page,
            page_size=self.page_size,
            total_count=self.total_count,
        )
