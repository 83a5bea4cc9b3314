"""Registration and login endpoints. Both are anonymous."""

from fastapi import APIRouter, Response

from geoapi.dependencies import DB, AppSettings
from geoapi.problems import to_response
from geoapi.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from geoapi.schemas.error import ProblemDetails, ValidationProblemDetails
from geoapi.services.auth import login_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    responses={400: {"model": ValidationProblemDetails}, 409: {"model": ProblemDetails}},
)
async def register(db: DB, settings: AppSettings, body: RegisterRequest) -> Response:
    """Create an account in the User role and return a bearer token for it."""
    result = await register_user(db, body, settings)
    return to_response(result, AuthResponse.model_validate)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ValidationProblemDetails}, 401: {"model": ProblemDetails}},
)
async def login(db: DB, settings: AppSettings, body: LoginRequest) -> Response:
    result = await login_user(db, body, settings)
    return to_response(result, AuthResponse.model_validate)
