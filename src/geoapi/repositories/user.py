"""Identity store: users, roles and credentials.

Besides plain lookups this module enforces the store's own password policy
and username uniqueness when a user is created, and reports violations as
validation errors keyed by rule code (``PasswordRequiresDigit``,
``DuplicateUserName``, ...).
"""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geoapi.errors import invalid
from geoapi.models import Role, User
from geoapi.results import Error, Result, fail_all, ok
from geoapi.security import hash_password, verify_password

PASSWORD_REQUIRED_LENGTH = 6


@dataclass(frozen=True)
class UserProfile:
    first_name: str
    last_name: str
    username: str
    email: str


def password_policy_errors(password: str) -> list[Error]:
    errors: list[Error] = []
    if len(password) < PASSWORD_REQUIRED_LENGTH:
        errors.append(
            invalid(
                "PasswordTooShort",
                f"Passwords must be at least {PASSWORD_REQUIRED_LENGTH} characters.",
            )
        )
    if all(ch.isalnum() for ch in password):
        errors.append(
            invalid(
                "PasswordRequiresNonAlphanumeric",
                "Passwords must have at least one non alphanumeric character.",
            )
        )
    if not any(ch.isdigit() for ch in password):
        errors.append(
            invalid("PasswordRequiresDigit", "Passwords must have at least one digit ('0'-'9').")
        )
    if not any(ch.islower() for ch in password):
        errors.append(
            invalid(
                "PasswordRequiresLower",
                "Passwords must have at least one lowercase ('a'-'z').",
            )
        )
    if not any(ch.isupper() for ch in password):
        errors.append(
            invalid(
                "PasswordRequiresUpper",
                "Passwords must have at least one uppercase ('A'-'Z').",
            )
        )
    return errors


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, profile: UserProfile, password: str) -> Result[User]:
    """Stage a new user, or return the policy violations that prevent it."""
    errors = password_policy_errors(password)
    if await get_user_by_username(db, profile.username) is not None:
        errors.append(
            invalid("DuplicateUserName", f"Username '{profile.username}' is already taken.")
        )
    if errors:
        return fail_all(errors)

    user = User(
        first_name=profile.first_name,
        last_name=profile.last_name,
        username=profile.username,
        email=profile.email,
        password_hash=hash_password(password),
        roles=[],
    )
    db.add(user)
    return ok(user)


def check_password(user: User, password: str) -> bool:
    return verify_password(password, user.password_hash)


def get_roles(user: User) -> list[str]:
    return sorted(role.name for role in user.roles)


async def get_or_create_role(db: AsyncSession, name: str) -> Role:
    result = await db.execute(select(Role).where(Role.name == name))
    role = result.scalar_one_or_none()
    if role is None:
        role = Role(name=name)
        db.add(role)
    return role


async def add_to_role(db: AsyncSession, user: User, role_name: str) -> None:
    role = await get_or_create_role(db, role_name)
    if role not in user.roles:
        user.roles.append(role)
