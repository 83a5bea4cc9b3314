"""Registration and login.

Both flows end by issuing a bearer token for the user. Login failures never
say whether the username or the password was wrong.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from geoapi import errors
from geoapi.config import Settings
from geoapi.logging import get_logger
from geoapi.models import User
from geoapi.repositories import user as user_repo
from geoapi.repositories.base import save_changes
from geoapi.results import Failure, Result, fail, fail_all, ok
from geoapi.schemas.auth import LoginRequest, RegisterRequest
from geoapi.security import ROLE_USER, TokenClaims, issue_token
from geoapi.validation.auth import validate_login, validate_register

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthSession:
    email: str
    user_name: str
    token: str


def _session_for(user: User, settings: Settings) -> AuthSession:
    claims = TokenClaims(
        subject=user.username,
        email=user.email,
        user_id=str(user.id),
        roles=tuple(user_repo.get_roles(user)),
    )
    return AuthSession(
        email=user.email, user_name=user.username, token=issue_token(claims, settings)
    )


async def register_user(
    db: AsyncSession, request: RegisterRequest, settings: Settings
) -> Result[AuthSession]:
    """Create a user in the default ``User`` role and sign them in."""
    if invalid := validate_register(request):
        return fail_all(invalid)

    if await user_repo.get_user_by_email(db, request.email) is not None:
        return fail(errors.EMAIL_CONFLICT)

    profile = user_repo.UserProfile(
        first_name=request.first_name or "",
        last_name=request.last_name or "",
        username=request.user_name or "",
        email=request.email,
    )
    created = await user_repo.create_user(db, profile, request.password)
    if isinstance(created, Failure):
        return created
    user = created.value

    await user_repo.add_to_role(db, user, ROLE_USER)

    saved = await save_changes(db, "User")
    if isinstance(saved, Failure):
        return saved

    logger.info("user_registered", user_id=str(user.id), username=user.username)
    return ok(_session_for(user, settings))


async def login_user(
    db: AsyncSession, request: LoginRequest, settings: Settings
) -> Result[AuthSession]:
    if invalid := validate_login(request):
        return fail_all(invalid)

    user = await user_repo.get_user_by_username(db, request.user_name)
    if user is None or not user_repo.check_password(user, request.password):
        logger.info("login_failed", username=request.user_name)
        return fail(errors.INVALID_CREDENTIALS)

    logger.info("login_succeeded", user_id=str(user.id))
    return ok(_session_for(user, settings))
