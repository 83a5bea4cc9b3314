"""Password hashing and JWT bearer tokens.

Hashing uses passlib's bcrypt context; tokens are HS256 JWTs signed with
python-jose. Neither concern leaks beyond this module: the identity store
hashes and verifies through ``hash_password``/``verify_password``, the auth
service issues tokens through ``issue_token`` and the authorization
dependencies read them back through ``decode_token``.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from geoapi.config import Settings

ALGORITHM = "HS256"

ROLE_ADMIN = "Admin"
ROLE_USER = "User"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be decoded or fails validation."""


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: str
    user_id: str
    roles: tuple[str, ...]


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def issue_token(claims: TokenClaims, settings: Settings) -> str:
    """Create a signed access token valid for ``settings.jwt_duration_hours``."""
    now = datetime.now(UTC)
    payload = {
        "sub": claims.subject,
        "email": claims.email,
        "jti": str(uuid.uuid4()),
        "nameid": claims.user_id,
        "role": list(claims.roles),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_duration_hours),
    }
    return jwt.encode(payload, settings.jwt_key, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> TokenClaims:
    """Validate signature, issuer, audience and lifetime, and return the claims."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_key,
            algorithms=[ALGORITHM],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("token has no subject")

    roles = payload.get("role", [])
    if isinstance(roles, str):
        roles = [roles]

    return TokenClaims(
        subject=subject,
        email=payload.get("email", ""),
        user_id=payload.get("nameid", ""),
        roles=tuple(roles),
    )
