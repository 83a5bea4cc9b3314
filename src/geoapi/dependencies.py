"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.

Authorization:
    require_user:  any authenticated caller in the User or Admin role
    require_admin: authenticated caller in the Admin role

A missing or invalid bearer token is a 401; a valid token without the
required role is a 403.
"""

from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from geoapi.config import Settings
from geoapi.db.session import get_db
from geoapi.logging import get_logger
from geoapi.security import ROLE_ADMIN, ROLE_USER, InvalidTokenError, TokenClaims, decode_token

logger = get_logger(__name__)

DB = Annotated[AsyncSession, Depends(get_db)]

# auto_error=False: a missing header must produce our 401 problem, not
# FastAPI's default 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    settings: AppSettings,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenClaims:
    if credentials is None:
        raise _unauthorized("Authentication is required.")

    try:
        return decode_token(credentials.credentials, settings)
    except InvalidTokenError as exc:
        logger.info("token_rejected", reason=str(exc))
        raise _unauthorized("The bearer token is invalid or has expired.") from exc


CurrentUser = Annotated[TokenClaims, Depends(get_current_user)]


def require_roles(*roles: str) -> Callable[[TokenClaims], Coroutine[Any, Any, TokenClaims]]:
    """Dependency factory: the caller must hold at least one of ``roles``."""

    async def dependency(user: CurrentUser) -> TokenClaims:
        if not set(roles).intersection(user.roles):
            logger.info("access_denied", subject=user.subject, required=list(roles))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action.",
            )
        return user

    return dependency


require_user = require_roles(ROLE_USER, ROLE_ADMIN)
require_admin = require_roles(ROLE_ADMIN)
