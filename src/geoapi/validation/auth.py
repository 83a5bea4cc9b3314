"""Checks for the anonymous auth requests.

The password rules here run before the identity store's own password policy
(see ``geoapi.repositories.user.password_policy_errors``).
"""

from geoapi.results import Error
from geoapi.schemas.auth import LoginRequest, RegisterRequest
from geoapi.validation.rules import (
    collect,
    email_address,
    matches,
    max_length,
    min_length,
    not_empty,
)

NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8

UPPERCASE_MESSAGE = "Password must contain one uppercase letter."
LOWERCASE_MESSAGE = "Password must contain one lowercase letter."
DIGIT_MESSAGE = "Password must contain one number."


def validate_register(request: RegisterRequest) -> list[Error]:
    return collect(
        not_empty("FirstName", request.first_name),
        max_length("FirstName", request.first_name, NAME_MAX_LENGTH),
        not_empty("LastName", request.last_name),
        max_length("LastName", request.last_name, NAME_MAX_LENGTH),
        not_empty("UserName", request.user_name),
        max_length("UserName", request.user_name, NAME_MAX_LENGTH),
        not_empty("Email", request.email),
        email_address("Email", request.email),
        not_empty("Password", request.password),
        min_length("Password", request.password, PASSWORD_MIN_LENGTH),
        matches("Password", request.password, "[A-Z]", UPPERCASE_MESSAGE),
        matches("Password", request.password, "[a-z]", LOWERCASE_MESSAGE),
        matches("Password", request.password, "[0-9]", DIGIT_MESSAGE),
    )


def validate_login(request: LoginRequest) -> list[Error]:
    return collect(
        not_empty("UserName", request.user_name),
        not_empty("Password", request.password),
    )
