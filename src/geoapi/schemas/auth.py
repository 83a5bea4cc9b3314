"""Auth request and response schemas."""

from pydantic import Field

from geoapi.schemas.base import ApiModel


class RegisterRequest(ApiModel):
    first_name: str | None = Field(default=None, examples=["Ada"])
    last_name: str | None = Field(default=None, examples=["Lovelace"])
    user_name: str | None = Field(default=None, examples=["ada"])
    email: str | None = Field(default=None, examples=["ada@example.com"])
    password: str | None = Field(default=None, examples=["Analytical1!"])


class LoginRequest(ApiModel):
    user_name: str | None = Field(default=None, examples=["ada"])
    password: str | None = Field(default=None, examples=["Analytical1!"])


class AuthResponse(ApiModel):
    email: str
    user_name: str
    token: str
