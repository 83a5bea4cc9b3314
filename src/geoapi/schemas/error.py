"""Error response schemas.

Every error response is a problem body (RFC 9457 shape) served as
``application/problem+json``. Two variants exist:

ProblemDetails            — one representative error plus every message in ``errors``.
ValidationProblemDetails  — field name -> ordered messages for that field.

``geoapi.problems`` builds these from ``Failure`` results and the exception
handlers in ``geoapi.main`` build them from unexpected exceptions.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemDetails(BaseModel):
    """Problem body for non-field errors (404, 401, 403, 409, 500)."""

    # Development-only extensions such as ``stackTrace`` are carried as extras.
    model_config = ConfigDict(extra="allow")

    type: str = "about:blank"
    title: str
    status: int
    detail: str | None = None
    errors: list[str] | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ValidationProblemDetails(BaseModel):
    """Problem body for 400 responses caused by invalid request fields."""

    type: str = "https://tools.ietf.org/html/rfc9110#section-15.5.1"
    title: str = "One or more validation errors occurred."
    status: int = 400
    errors: dict[str, list[str]]

    def to_content(self) -> dict[str, Any]:
        return self.model_dump()
