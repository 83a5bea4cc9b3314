import traceback
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from geoapi.config import Settings, get_settings
from geoapi.db.seed import seed_database
from geoapi.db.session import build_engine, build_sessionmaker, shutdown
from geoapi.dependencies import DB
from geoapi.logging import configure_logging, get_logger
from geoapi.middleware import REQUEST_ID_HEADER, RequestIDMiddleware
from geoapi.problems import ProblemResponse, validation_problem
from geoapi.routers import auth, city, country
from geoapi.schemas.error import ProblemDetails

logger = get_logger(__name__)

UNEXPECTED_DETAIL = "An unexpected error occurred. Please try again later."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager — code before yield runs on startup, after yield on shutdown.

    Startup: seed reference data when ``seed_on_startup`` is set.
    Shutdown: close database connections gracefully.
    """
    settings: Settings = app.state.settings
    if settings.seed_on_startup:
        async with app.state.sessionmaker() as session:
            await seed_database(session)
    yield
    await shutdown(app.state.engine)


def _field_name(loc: Sequence[Any]) -> str:
    """``("query", "pageSize")`` -> ``"PageSize"``; ``("body", "isoCode")`` -> ``"IsoCode"``."""
    names = [part for part in loc if isinstance(part, str)]
    name = names[-1] if names else "request"
    return name[:1].upper() + name[1:]


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    """Malformed bodies and unparseable query values become a 400 validation problem."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(error.get("loc", ())), []).append(error["msg"])
    return validation_problem(errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render framework HTTP errors (401, 403, unknown routes) as problem bodies."""
    problem = ProblemDetails(
        status=exc.status_code,
        title=HTTPStatus(exc.status_code).phrase,
        detail=exc.detail if isinstance(exc.detail, str) else None,
    )
    return ProblemResponse(
        status_code=exc.status_code, content=problem.to_content(), headers=exc.headers
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Log unhandled exceptions and return a problem body.

    - Logs full exception with traceback (includes request_id from context)
    - Production responses are generic; development and test responses carry
      the exception type, message and stack trace
    - Echoes X-Request-ID, since the 500 is sent after the middleware has unwound
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)

    settings: Settings = request.app.state.settings
    if settings.verbose_errors:
        problem = ProblemDetails(
            status=500,
            title=type(exc).__name__,
            detail=str(exc),
            stackTrace="".join(traceback.format_exception(exc)),
        )
    else:
        problem = ProblemDetails(
            status=500, title="Internal Server Error", detail=UNEXPECTED_DETAIL
        )
    request_id = getattr(request.state, "request_id", None)
    headers = {REQUEST_ID_HEADER: request_id} if request_id else None
    return ProblemResponse(status_code=500, content=problem.to_content(), headers=headers)


async def health(db: DB) -> dict[str, str]:
    """Health check endpoint — verifies database connectivity.

    Returns 200 OK only if the database responds to a ping query.
    Used by load balancers and container orchestrators to detect unhealthy instances.
    """
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one frozen ``Settings`` instance.

    The engine and session factory live on ``app.state`` so tests can build
    isolated apps against their own database.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="GeoAPI", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.sessionmaker = build_sessionmaker(app.state.engine)

    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(
        RequestValidationError, request_validation_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        StarletteHTTPException, http_exception_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_api_route("/health", health, methods=["GET"])
    for module in (auth, country, city):
        app.include_router(module.router, prefix=settings.api_prefix)

    logger.info("app_created", environment=settings.environment)
    return app

