"""Integration tests for /auth/register and /auth/login, and bearer tokens."""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geoapi.models import User
from geoapi.security import TokenClaims, decode_token, issue_token

REGISTER = "/api/v1/auth/register"
LOGIN = "/api/v1/auth/login"

ADA = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "userName": "ada",
    "email": "ada@example.com",
    "password": "Analytical1!",
}


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_register_returns_token_for_user_role(
    app: FastAPI, client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await client.post(REGISTER, json=ADA)

    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "ada@example.com"
    assert body["userName"] == "ada"

    claims = decode_token(body["token"], app.state.settings)
    assert claims.subject == "ada"
    assert claims.email == "ada@example.com"
    assert claims.roles == ("User",)

    user = (await seeded_db.execute(select(User).where(User.username == "ada"))).scalar_one()
    assert claims.user_id == str(user.id)
    assert user.password_hash != ADA["password"]


@pytest.mark.asyncio
async def test_register_creates_user_role_when_missing(
    client: AsyncClient, db: AsyncSession
) -> None:
    resp = await client.post(REGISTER, json=ADA)

    assert resp.status_code == 200
    user = (await db.execute(select(User))).scalar_one()
    assert [r.name for r in user.roles] == ["User"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, seeded_db: None) -> None:
    duplicate = {**ADA, "userName": "other", "email": "user@geoapi.com"}
    resp = await client.post(REGISTER, json=duplicate)

    assert resp.status_code == 409
    assert resp.json()["detail"] == "User with this email already exists."


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, seeded_db: None) -> None:
    resp = await client.post(REGISTER, json={**ADA, "userName": "admin"})

    assert resp.status_code == 400
    assert resp.json()["errors"] == {"DuplicateUserName": ["Username 'admin' is already taken."]}


@pytest.mark.asyncio
async def test_register_weak_password(client: AsyncClient, seeded_db: AsyncSession) -> None:
    resp = await client.post(REGISTER, json={**ADA, "password": "password"})

    assert resp.status_code == 400
    messages = resp.json()["errors"]["Password"]
    assert "Password must contain one uppercase letter." in messages
    assert "Password must contain one number." in messages
    assert (await seeded_db.execute(select(User).where(User.username == "ada"))).first() is None


@pytest.mark.asyncio
async def test_register_password_without_symbol(client: AsyncClient, seeded_db: None) -> None:
    resp = await client.post(REGISTER, json={**ADA, "password": "Analytical1"})

    assert resp.status_code == 400
    assert list(resp.json()["errors"]) == ["PasswordRequiresNonAlphanumeric"]


@pytest.mark.asyncio
async def test_register_reports_every_invalid_field(client: AsyncClient, seeded_db: None) -> None:
    resp = await client.post(REGISTER, json={"email": "not-an-email"})

    errors = resp.json()["errors"]
    assert resp.status_code == 400
    assert list(errors) == ["FirstName", "LastName", "UserName", "Email", "Password"]
    assert errors["FirstName"] == ["'First Name' must not be empty."]
    assert errors["Email"] == ["'Email' is not a valid email address."]


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_login_admin(app: FastAPI, client: AsyncClient, seeded_db: None) -> None:
    resp = await client.post(LOGIN, json={"userName": "admin", "password": "Admin123!"})

    assert resp.status_code == 200
    body = resp.json()
    assert body == {"email": "admin@geoapi.com", "userName": "admin", "token": body["token"]}
    assert decode_token(body["token"], app.state.settings).roles == ("Admin",)

    created = await client.post(
        "/api/v1/countries",
        json={"name": "Portugal", "isoCode": "PRT"},
        headers={"Authorization": f"Bearer {body['token']}"},
    )
    assert created.status_code == 201


@pytest.mark.asyncio
async def test_login_user_can_read_but_not_write(client: AsyncClient, seeded_db: None) -> None:
    token = (await client.post(LOGIN, json={"userName": "user", "password": "User123!"})).json()[
        "token"
    ]
    headers = {"Authorization": f"Bearer {token}"}

    assert (await client.get("/api/v1/countries", headers=headers)).status_code == 200
    written = await client.post(
        "/api/v1/countries", json={"name": "Portugal", "isoCode": "PRT"}, headers=headers
    )
    assert written.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "credentials",
    [
        {"userName": "admin", "password": "wrong-password"},
        {"userName": "nobody", "password": "Admin123!"},
    ],
    ids=["wrong_password", "unknown_user"],
)
async def test_login_failure_is_generic(
    client: AsyncClient, seeded_db: None, credentials: dict[str, str]
) -> None:
    resp = await client.post(LOGIN, json=credentials)

    assert resp.status_code == 401
    assert resp.json() == {
        "type": "about:blank",
        "title": "Unauthorized",
        "status": 401,
        "detail": "Invalid username or password.",
        "errors": ["Invalid username or password."],
    }


@pytest.mark.asyncio
async def test_login_requires_both_fields(client: AsyncClient, seeded_db: None) -> None:
    resp = await client.post(LOGIN, json={"userName": " "})

    assert resp.status_code == 400
    assert resp.json()["errors"] == {
        "UserName": ["'User Name' must not be empty."],
        "Password": ["'Password' must not be empty."],
    }


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [{"jwt_duration_hours": -1}, {"jwt_audience": "someone-else"}, {"jwt_issuer": "someone-else"}],
    ids=["expired", "wrong_audience", "wrong_issuer"],
)
async def test_rejected_tokens(
    app: FastAPI, client: AsyncClient, seeded_db: None, override: dict[str, object]
) -> None:
    settings = app.state.settings.model_copy(update=override)
    claims = TokenClaims(subject="admin", email="admin@geoapi.com", user_id="x", roles=("Admin",))
    token = issue_token(claims, settings)

    resp = await client.get("/api/v1/countries", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
