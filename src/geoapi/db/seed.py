"""Reference data: roles, default accounts and a set of real countries.

Safe to run repeatedly; anything already present is left alone.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from geoapi.logging import get_logger
from geoapi.models import City, Country
from geoapi.repositories import user as user_repo
from geoapi.repositories.country import country_exists_by_iso
from geoapi.results import Failure
from geoapi.security import ROLE_ADMIN, ROLE_USER

logger = get_logger(__name__)

DEFAULT_USERS: list[tuple[user_repo.UserProfile, str, str]] = [
    (user_repo.UserProfile("Admin", "User", "admin", "admin@geoapi.com"), "Admin123!", ROLE_ADMIN),
    (user_repo.UserProfile("Regular", "User", "user", "user@geoapi.com"), "User123!", ROLE_USER),
]

# name, ISO code, [(city, latitude, longitude)]
COUNTRIES: list[tuple[str, str, list[tuple[str, str, str]]]] = [
    (
        "USA",
        "USA",
        [
            ("New York", "40.7128", "-74.0060"),
            ("Los Angeles", "34.0522", "-118.2437"),
            ("Chicago", "41.8781", "-87.6298"),
            ("Houston", "29.7604", "-95.3698"),
            ("Phoenix", "33.4484", "-112.0740"),
        ],
    ),
    (
        "Canada",
        "CAN",
        [
            ("Toronto", "43.6532", "-79.3832"),
            ("Vancouver", "49.2827", "-123.1207"),
            ("Montreal", "45.5017", "-73.5673"),
        ],
    ),
    (
        "Brazil",
        "BRA",
        [
            ("São Paulo", "-23.5505", "-46.6333"),
            ("Rio de Janeiro", "-22.9068", "-43.1729"),
            ("Brasília", "-15.8267", "-47.9218"),
        ],
    ),
    (
        "Germany",
        "DEU",
        [
            ("Berlin", "52.5200", "13.4050"),
            ("Hamburg", "53.5511", "9.9937"),
            ("Munich", "48.1351", "11.5820"),
        ],
    ),
    (
        "France",
        "FRA",
        [
            ("Paris", "48.8566", "2.3522"),
            ("Marseille", "43.2965", "5.3698"),
        ],
    ),
    (
        "Japan",
        "JPN",
        [
            ("Tokyo", "35.6895", "139.6917"),
            ("Osaka", "34.6937", "135.5023"),
            ("Kyoto", "35.0116", "135.7681"),
        ],
    ),
    (
        "Australia",
        "AUS",
        [
            ("Sydney", "-33.8688", "151.2093"),
            ("Melbourne", "-37.8136", "144.9631"),
        ],
    ),
    (
        "India",
        "IND",
        [
            ("Delhi", "28.7041", "77.1025"),
            ("Mumbai", "19.0760", "72.8777"),
            ("Bangalore", "12.9716", "77.5946"),
        ],
    ),
    (
        "United Kingdom",
        "GBR",
        [
            ("London", "51.5074", "-0.1278"),
            ("Manchester", "53.4808", "-2.2426"),
        ],
    ),
    (
        "South Africa",
        "ZAF",
        [
            ("Johannesburg", "-26.2041", "28.0473"),
            ("Cape Town", "-33.9249", "18.4241"),
        ],
    ),
]


async def seed_identity(session: AsyncSession) -> None:
    for role_name in (ROLE_ADMIN, ROLE_USER):
        await user_repo.get_or_create_role(session, role_name)

    for profile, password, role_name in DEFAULT_USERS:
        if await user_repo.get_user_by_username(session, profile.username) is not None:
            continue
        created = await user_repo.create_user(session, profile, password)
        if isinstance(created, Failure):
            messages = "; ".join(error.message for error in created.errors)
            raise RuntimeError(f"cannot seed user {profile.username!r}: {messages}")
        await user_repo.add_to_role(session, created.value, role_name)


def build_countries() -> list[Country]:
    return [
        Country(
            name=name,
            iso_code=iso_code,
            cities=[
                City(name=city, latitude=Decimal(lat), longitude=Decimal(lon))
                for city, lat, lon in cities
            ],
        )
        for name, iso_code, cities in COUNTRIES
    ]


async def seed_database(session: AsyncSession, include_geo: bool = True) -> None:
    """Create roles, the admin and user accounts and, unless disabled, the countries.

    Countries are skipped as a whole once ``USA`` exists.
    """
    await seed_identity(session)

    if include_geo and not await country_exists_by_iso(session, "USA"):
        session.add_all(build_countries())
        logger.info("countries_seeded", count=len(COUNTRIES))

    await session.commit()
    logger.info("database_seeded")

