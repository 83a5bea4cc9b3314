import pytest

from geoapi.pagination import (
    CITY_SORTING,
    COUNTRY_SORTING,
    PagedList,
    PagedRequest,
    SortTable,
    normalize_page,
)


@pytest.mark.parametrize("requested", [101, 500, 10_000])
def test_page_size_above_limit_is_clamped(requested: int) -> None:
    spec = normalize_page(PagedRequest(page_size=requested), CITY_SORTING)
    assert spec.page_size == 100


def test_defaults() -> None:
    spec = normalize_page(PagedRequest(), CITY_SORTING)

    assert spec.page_number == 1
    assert spec.page_size == 10
    assert spec.sort_column == "Name"
    assert spec.sort_order == "ASC"
    assert spec.offset == 0


def test_large_page_is_not_bounded() -> None:
    spec = normalize_page(PagedRequest(page=1_000, page_size=20), COUNTRY_SORTING)
    assert spec.offset == 999 * 20


@pytest.mark.parametrize(
    "order, expected",
    [("desc", "DESC"), ("DESC", "DESC"), ("asc", "ASC"), ("sideways", "ASC"), (None, "ASC")],
)
def test_sort_order_normalization(order: str | None, expected: str) -> None:
    spec = normalize_page(PagedRequest(sort_order=order), COUNTRY_SORTING)
    assert spec.sort_order == expected


def test_sort_column_takes_declared_spelling() -> None:
    spec = normalize_page(PagedRequest(sort_column="LATITUDE"), CITY_SORTING)

    assert spec.sort_column == "Latitude"
    assert CITY_SORTING.attribute(spec.sort_column) == "latitude"


def test_unknown_sort_column_is_rejected() -> None:
    with pytest.raises(ValueError):
        normalize_page(PagedRequest(sort_column="Population"), COUNTRY_SORTING)


def test_sort_table_default_must_be_sortable() -> None:
    with pytest.raises(ValueError):
        SortTable(columns={"Id": "id"}, default="Name")


def test_country_sort_column_maps_to_foreign_key() -> None:
    assert CITY_SORTING.names == ("Id", "Name", "Country", "Latitude", "Longitude")
    assert CITY_SORTING.attribute("Country") == "country_id"


@pytest.mark.parametrize(
    "page, total, has_next, has_previous",
    [(1, 0, False, False), (1, 25, True, False), (2, 25, True, True), (3, 25, False, True)],
)
def test_paged_list_navigation(page: int, total: int, has_next: bool, has_previous: bool) -> None:
    paged = PagedList(items=[], page=page, page_size=10, total_count=total)

    assert paged.has_next_page is has_next
    assert paged.has_previous_page is has_previous


def test_paged_list_map_keeps_counts() -> None:
    paged = PagedList(items=[1, 2], page=2, page_size=2, total_count=5)

    mapped = paged.map(str)

    assert mapped.items == ["1", "2"]
    assert (mapped.page, mapped.page_size, mapped.total_count) == (2, 2, 5)
