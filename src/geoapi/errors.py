"""Domain errors returned by services and repositories.

Services return these inside a ``Failure`` to signal business-rule violations.
``geoapi.problems`` translates them into the standard problem body at the
HTTP boundary. Nothing here is raised.
"""

from geoapi.results import Error, ErrorKind


def not_found(resource: str) -> Error:
    return Error(f"{resource} not found.", ErrorKind.NOT_FOUND)


def conflict(message: str) -> Error:
    return Error(message, ErrorKind.CONFLICT)


def unauthorized(message: str) -> Error:
    return Error(message, ErrorKind.UNAUTHORIZED)


def invalid(field_name: str, message: str) -> Error:
    """Validation error attached to a single request field."""
    return Error(message, ErrorKind.VALIDATION, field_name)


COUNTRY_NOT_FOUND = not_found("Country")
CITY_NOT_FOUND = not_found("City")

COUNTRY_CONFLICT = conflict("Country with this name already exists.")
CITY_CONFLICT = conflict("City with this name already exists in this country.")
EMAIL_CONFLICT = conflict("User with this email already exists.")

# Same message for unknown user and wrong password
INVALID_CREDENTIALS = unauthorized("Invalid username or password.")


def unique_violation(resource: str) -> Error:
    """Conflict raised when the database rejects a write on a unique constraint."""
    return conflict(f"{resource} conflicts with an existing record.")
