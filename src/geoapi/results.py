"""Result type for expected failures.

Services and repositories return ``Result`` values instead of raising for
failures the caller is expected to handle (missing rows, duplicates, bad
input, bad credentials). A result is either ``Success`` carrying a value or
``Failure`` carrying an ordered tuple of ``Error`` objects. Results are
passed up unchanged; the HTTP layer turns them into responses via
``geoapi.problems``.

Usage::

    async def get_country(db, country_id) -> Result[Country]:
        country = await repo.get_country(db, country_id)
        if country is None:
            return fail(errors.COUNTRY_NOT_FOUND)
        return ok(country)

    match result:
        case Success(value=country): ...
        case Failure(errors=errs): ...
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    UNAUTHORIZED = "Unauthorized"
    VALIDATION = "Validation"
    FAILURE = "Failure"


@dataclass(frozen=True, slots=True)
class Error:
    """A single classified failure.

    ``field_name`` is only set for ``ErrorKind.VALIDATION`` errors and names the
    request field the message belongs to (e.g. ``"SortColumn"``).
    """

    message: str
    kind: ErrorKind = ErrorKind.FAILURE
    field_name: str | None = None


@dataclass(frozen=True, slots=True)
class Success[T]:
    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    errors: tuple[Error, ...] = ()

    @property
    def is_success(self) -> bool:
        return False


type Result[T] = Success[T] | Failure


def ok[T](value: T = None) -> Success[T]:  # type: ignore[assignment]
    """Wrap a value (or nothing, for commands) in a ``Success``."""
    return Success(value)


def fail(*errors: Error) -> Failure:
    return Failure(tuple(errors))


def fail_all(errors: Iterable[Error]) -> Failure:
    """Build one ``Failure`` from an already collected list of errors."""
    return Failure(tuple(errors))
