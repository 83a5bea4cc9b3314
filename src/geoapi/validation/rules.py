"""Reusable field rules.

Each rule inspects one value and returns an ``Error`` tagged with the field
name, or ``None`` when the value passes. Rules skip ``None`` values except
``not_empty``, so optional filters only get checked when supplied. Request
validators list the rules per field and keep every failure::

    errors = collect(
        not_empty("Name", request.name),
        max_length("Name", request.name, 100),
    )
"""

import re
from decimal import Decimal

from geoapi.errors import invalid
from geoapi.results import Error

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+$")

type Number = int | float | Decimal


def display_name(field_name: str) -> str:
    """``"FirstName"`` -> ``"First Name"``."""
    return _WORD_BOUNDARY.sub(" ", field_name)


def collect(*checks: Error | None) -> list[Error]:
    return [error for error in checks if error is not None]


def not_empty(field_name: str, value: object) -> Error | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return invalid(field_name, f"'{display_name(field_name)}' must not be empty.")
    return None


def max_length(field_name: str, value: str | None, limit: int) -> Error | None:
    if value is None or len(value) <= limit:
        return None
    return invalid(
        field_name,
        f"The length of '{display_name(field_name)}' must be {limit} characters or fewer. "
        f"You entered {len(value)} characters.",
    )


def min_length(field_name: str, value: str | None, limit: int) -> Error | None:
    if value is None or len(value) >= limit:
        return None
    return invalid(
        field_name,
        f"The length of '{display_name(field_name)}' must be at least {limit} characters. "
        f"You entered {len(value)} characters.",
    )


def exact_length(field_name: str, value: str | None, length: int) -> Error | None:
    if value is None or not value or len(value) == length:
        return None
    return invalid(
        field_name,
        f"'{display_name(field_name)}' must be {length} characters in length. "
        f"You entered {len(value)} characters.",
    )


def between(field_name: str, value: Number | None, low: Number, high: Number) -> Error | None:
    if value is None or low <= value <= high:
        return None
    return invalid(
        field_name,
        f"'{display_name(field_name)}' must be between {low} and {high}. You entered {value}.",
    )


def matches(field_name: str, value: str | None, pattern: str, message: str) -> Error | None:
    if value is None or re.search(pattern, value):
        return None
    return invalid(field_name, message)


def email_address(field_name: str, value: str | None) -> Error | None:
    if not value or _EMAIL.match(value):
        return None
    return invalid(field_name, f"'{display_name(field_name)}' is not a valid email address.")
