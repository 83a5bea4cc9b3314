"""Paging and sorting checks shared by every list request.

The four checks are independent: a request with a bad page, page size,
sort order and sort column reports all four fields at once.
"""

from geoapi.errors import invalid
from geoapi.pagination import MAX_PAGE_SIZE, SORT_ORDERS, PagedRequest, SortTable
from geoapi.results import Error

MIN_PAGE = 1
MIN_PAGE_SIZE = 1


def validate_paging(request: PagedRequest, table: SortTable) -> list[Error]:
    errors: list[Error] = []

    if request.page is not None and request.page < MIN_PAGE:
        errors.append(invalid("Page", f"Page must be greater than or equal to {MIN_PAGE}."))

    if request.page_size is not None and not MIN_PAGE_SIZE <= request.page_size <= MAX_PAGE_SIZE:
        errors.append(
            invalid("PageSize", f"PageSize must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}.")
        )

    if request.sort_order and request.sort_order.upper() not in SORT_ORDERS:
        errors.append(invalid("SortOrder", "SortOrder must be 'ASC' or 'DESC'."))

    if request.sort_column and table.canonical(request.sort_column) is None:
        errors.append(
            invalid("SortColumn", f"SortColumn must be one of: {', '.join(table.names)}")
        )

    return errors
