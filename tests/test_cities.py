"""Integration tests for the /countries/{countryId}/cities endpoints."""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from geoapi.models import City, Country


async def cities_url(db: AsyncSession, iso_code: str) -> str:
    country_id = (
        await db.execute(select(Country.id).where(Country.iso_code == iso_code))
    ).scalar_one()
    return f"/api/v1/countries/{country_id}/cities"


async def city_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(City))).scalar_one()


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_list_sorted_by_name_by_default(
    user_client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await user_client.get(await cities_url(seeded_db, "USA"))

    assert resp.status_code == 200
    body = resp.json()
    assert body["totalCount"] == 5
    assert [c["name"] for c in body["items"]] == [
        "Chicago",
        "Houston",
        "Los Angeles",
        "New York",
        "Phoenix",
    ]
    assert set(body["items"][0]) == {"id", "name", "latitude", "longitude", "countryId"}


@pytest.mark.asyncio
async def test_list_sorted_by_latitude_descending(
    user_client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await user_client.get(
        await cities_url(seeded_db, "USA"),
        params={"sortColumn": "latitude", "sortOrder": "DESC"},
    )

    items = resp.json()["items"]
    assert items[0]["name"] == "Chicago"
    assert items[0]["latitude"] == pytest.approx(41.8781)
    assert items[-1]["name"] == "Houston"


@pytest.mark.asyncio
async def test_list_sort_by_country_is_allowed(
    user_client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await user_client.get(
        await cities_url(seeded_db, "USA"), params={"sortColumn": "Country"}
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_list_unknown_sort_column(user_client: AsyncClient, seeded_db: AsyncSession) -> None:
    resp = await user_client.get(
        await cities_url(seeded_db, "USA"), params={"sortColumn": "Population"}
    )

    assert resp.status_code == 400
    assert resp.json()["errors"] == {
        "SortColumn": ["SortColumn must be one of: Id, Name, Country, Latitude, Longitude"]
    }


@pytest.mark.asyncio
async def test_list_filter_by_coordinates(
    user_client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await user_client.get(
        await cities_url(seeded_db, "USA"),
        params={"latitude": "40.7128", "longitude": "-74.0060"},
    )

    body = resp.json()
    assert body["totalCount"] == 1
    assert [c["name"] for c in body["items"]] == ["New York"]


@pytest.mark.asyncio
async def test_list_filter_by_name_substring(
    user_client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await user_client.get(await cities_url(seeded_db, "USA"), params={"name": "NEW"})
    assert [c["name"] for c in resp.json()["items"]] == ["New York"]


@pytest.mark.asyncio
async def test_list_only_returns_cities_of_the_country(
    user_client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await user_client.get(await cities_url(seeded_db, "FRA"))

    names = {c["name"] for c in resp.json()["items"]}
    assert names == {"Paris", "Marseille"}


@pytest.mark.asyncio
async def test_list_filter_latitude_out_of_range(
    user_client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await user_client.get(await cities_url(seeded_db, "USA"), params={"latitude": 100})

    assert resp.status_code == 400
    assert resp.json()["errors"] == {
        "Latitude": ["'Latitude' must be between -90 and 90. You entered 100."]
    }


@pytest.mark.asyncio
async def test_list_second_page(user_client: AsyncClient, portugal: Country) -> None:
    resp = await user_client.get(
        f"/api/v1/countries/{portugal.id}/cities", params={"page": 2, "pageSize": 2}
    )

    body = resp.json()
    assert body["page"] == 2
    assert body["totalCount"] == 3
    assert [c["name"] for c in body["items"]] == ["Porto"]
    assert body["hasNextPage"] is False
    assert body["hasPreviousPage"] is True


@pytest.mark.asyncio
async def test_list_unknown_country(user_client: AsyncClient, seeded_db: None) -> None:
    resp = await user_client.get(f"/api/v1/countries/{uuid.uuid4()}/cities")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Country not found."


@pytest.mark.asyncio
async def test_list_validates_before_country_lookup(
    user_client: AsyncClient, seeded_db: None
) -> None:
    resp = await user_client.get(
        f"/api/v1/countries/{uuid.uuid4()}/cities", params={"sortColumn": "Population"}
    )
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Get
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_get_city(user_client: AsyncClient, portugal: Country) -> None:
    porto = next(c for c in portugal.cities if c.name == "Porto")

    resp = await user_client.get(f"/api/v1/countries/{portugal.id}/cities/{porto.id}")

    assert resp.status_code == 200
    assert resp.json() == {
        "id": str(porto.id),
        "name": "Porto",
        "latitude": pytest.approx(41.1579),
        "longitude": pytest.approx(-8.6291),
        "countryId": str(portugal.id),
    }


@pytest.mark.asyncio
async def test_get_city_through_another_country(
    user_client: AsyncClient, seeded_db: AsyncSession, portugal: Country
) -> None:
    porto = next(c for c in portugal.cities if c.name == "Porto")
    url = await cities_url(seeded_db, "USA")

    resp = await user_client.get(f"{url}/{porto.id}")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "City not found."


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_create_city(admin_client: AsyncClient, portugal: Country) -> None:
    url = f"/api/v1/countries/{portugal.id}/cities"

    resp = await admin_client.post(
        url, json={"name": "Coimbra", "latitude": 40.2033, "longitude": -8.4103}
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["countryId"] == str(portugal.id)
    assert body["latitude"] == pytest.approx(40.2033)
    assert resp.headers["location"] == f"http://test{url}/{body['id']}"


@pytest.mark.asyncio
async def test_user_cannot_create_city(
    user_client: AsyncClient, db: AsyncSession, portugal: Country
) -> None:
    resp = await user_client.post(
        f"/api/v1/countries/{portugal.id}/cities",
        json={"name": "Coimbra", "latitude": 40.2033, "longitude": -8.4103},
    )

    assert resp.status_code == 403
    assert await city_count(db) == 3


@pytest.mark.asyncio
async def test_create_city_in_unknown_country(admin_client: AsyncClient, db: AsyncSession) -> None:
    resp = await admin_client.post(
        f"/api/v1/countries/{uuid.uuid4()}/cities",
        json={"name": "Nowhere", "latitude": 0, "longitude": 0},
    )

    assert resp.status_code == 404
    assert await city_count(db) == 0


@pytest.mark.asyncio
async def test_create_duplicate_city_conflicts(
    admin_client: AsyncClient, db: AsyncSession, portugal: Country
) -> None:
    resp = await admin_client.post(
        f"/api/v1/countries/{portugal.id}/cities",
        json={"name": "Porto", "latitude": 41.1, "longitude": -8.6},
    )

    assert resp.status_code == 409
    assert resp.json()["detail"] == "City with this name already exists in this country."
    assert await city_count(db) == 3


@pytest.mark.asyncio
async def test_create_invalid_city(admin_client: AsyncClient, portugal: Country) -> None:
    resp = await admin_client.post(
        f"/api/v1/countries/{portugal.id}/cities",
        json={"name": "Faro", "latitude": -200},
    )

    assert resp.status_code == 400
    assert resp.json()["errors"] == {
        "Latitude": ["'Latitude' must be between -90 and 90. You entered -200."],
        "Longitude": ["'Longitude' must not be empty."],
    }


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_update_city(admin_client: AsyncClient, portugal: Country) -> None:
    porto = next(c for c in portugal.cities if c.name == "Porto")
    url = f"/api/v1/countries/{portugal.id}/cities/{porto.id}"

    resp = await admin_client.put(
        url, json={"name": "Oporto", "latitude": 41.15, "longitude": -8.61}
    )

    assert resp.status_code == 204
    fetched = (await admin_client.get(url)).json()
    assert fetched["name"] == "Oporto"
    assert fetched["latitude"] == pytest.approx(41.15)


@pytest.mark.asyncio
async def test_update_unknown_city(admin_client: AsyncClient, portugal: Country) -> None:
    resp = await admin_client.put(
        f"/api/v1/countries/{portugal.id}/cities/{uuid.uuid4()}",
        json={"name": "Faro", "latitude": 37.0194, "longitude": -7.9304},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_city(admin_client: AsyncClient, db: AsyncSession, portugal: Country) -> None:
    braga = next(c for c in portugal.cities if c.name == "Braga")
    url = f"/api/v1/countries/{portugal.id}/cities/{braga.id}"

    resp = await admin_client.delete(url)

    assert resp.status_code == 204
    assert await city_count(db) == 2
    assert (await admin_client.delete(url)).status_code == 404
