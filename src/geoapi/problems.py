"""Result-to-response mapping.

The one place where ``Result`` values become HTTP responses. Routers call
``to_response`` for queries, ``to_created`` for creates and ``to_no_content``
for updates and deletes; failures go through ``problem_response``:

* any field-tagged error  -> 400 validation problem (field -> messages)
* otherwise one representative error, NotFound > Unauthorized > Conflict >
  first, decides the status; every message is listed under ``errors``
* a failure without errors -> 500 with a generic title
"""

from collections.abc import Callable, Sequence
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from geoapi.results import Error, ErrorKind, Failure, Result, Success
from geoapi.schemas.error import PROBLEM_MEDIA_TYPE, ProblemDetails, ValidationProblemDetails

UNEXPECTED_TITLE = "An unexpected error occurred"

# Order matters: the first kind present picks the representative error.
_REPRESENTATIVE_PRIORITY = (ErrorKind.NOT_FOUND, ErrorKind.UNAUTHORIZED, ErrorKind.CONFLICT)

_STATUS_BY_KIND: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Resource Not Found"),
    ErrorKind.UNAUTHORIZED: (status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    ErrorKind.CONFLICT: (status.HTTP_409_CONFLICT, "Conflict"),
}


class ProblemResponse(JSONResponse):
    media_type = PROBLEM_MEDIA_TYPE


def group_field_errors(errors: Sequence[Error]) -> dict[str, list[str]]:
    """Group field-tagged messages by field, keeping first-seen field order."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        if error.field_name is not None:
            grouped.setdefault(error.field_name, []).append(error.message)
    return grouped


def representative_error(errors: Sequence[Error]) -> Error | None:
    for kind in _REPRESENTATIVE_PRIORITY:
        for error in errors:
            if error.kind == kind:
                return error
    return errors[0] if errors else None


def status_for(error: Error) -> tuple[int, str]:
    """Status code and problem title for the representative error."""
    return _STATUS_BY_KIND.get(
        error.kind, (status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_TITLE)
    )


def validation_problem(errors: dict[str, list[str]]) -> ProblemResponse:
    problem = ValidationProblemDetails(errors=errors)
    return ProblemResponse(status_code=problem.status, content=problem.to_content())


def problem_response(failure: Failure) -> ProblemResponse:
    field_errors = group_field_errors(failure.errors)
    if field_errors:
        return validation_problem(field_errors)

    error = representative_error(failure.errors)
    if error is None:
        problem = ProblemDetails(
            status=status.HTTP_500_INTERNAL_SERVER_ERROR, title=f"{UNEXPECTED_TITLE}."
        )
        return ProblemResponse(status_code=problem.status, content=problem.to_content())

    status_code, title = status_for(error)
    problem = ProblemDetails(
        status=status_code,
        title=title,
        detail=error.message,
        errors=[e.message for e in failure.errors],
    )
    return ProblemResponse(status_code=status_code, content=problem.to_content())


def _render(value: Any, render: Callable[[Any], BaseModel] | None) -> Any:
    body = render(value) if render is not None else value
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True)
    return body


def to_response[T](
    result: Result[T],
    render: Callable[[T], BaseModel] | None = None,
    *,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """200 with the rendered value, or the problem response for a failure."""
    match result:
        case Success(value=value):
            return JSONResponse(status_code=status_code, content=_render(value, render))
        case Failure() as failure:
            return problem_response(failure)


def to_created[T](
    result: Result[T],
    render: Callable[[T], BaseModel],
    location: Callable[[T], str],
) -> Response:
    """201 with the rendered value and a Location header pointing at it."""
    match result:
        case Success(value=value):
            return JSONResponse(
                status_code=status.HTTP_201_CREATED,
                content=_render(value, render),
                headers={"Location": location(value)},
            )
        case Failure() as failure:
            return problem_response(failure)


def to_no_content(result: Result[Any]) -> Response:
    """204 with an empty body, or the problem response for a failure."""
    match result:
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure() as failure:
            return problem_response(failure)
