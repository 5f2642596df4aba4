"""Request/response schemas for auth endpoints."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from larder.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _require_email(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Oops, email can't be empty")
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Oops, email is invalid")
    return value.lower()


class SignInRequest(BaseModel):
    """Credentials for sign-in."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=PASSWORD_MAX_LEN)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _require_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Oops, password can't be empty")
        return v


class SignUpRequest(BaseModel):
    """New account; password_confirmation is checked here and never stored."""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=PASSWORD_MAX_LEN)
    password_confirmation: str = Field(..., max_length=PASSWORD_MAX_LEN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Oops, name can't be empty")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _require_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LEN:
            raise ValueError("Oops, password must be at least 8 characters long")
        return v

    @field_validator("password_confirmation")
    @classmethod
    def validate_password_confirmation(cls, v: str, info: ValidationInfo) -> str:
        if len(v) < PASSWORD_MIN_LEN:
            raise ValueError(
                "Oops, password confirmation must be at least 8 characters long"
            )
        # password is absent from info.data when it already failed validation
        if "password" in info.data and info.data["password"] != v:
            raise ValueError("Oops, password confirmation doesn't match")
        return v


class RefreshTokenRequest(BaseModel):
    refresh_token: str

    @field_validator("refresh_token")
    @classmethod
    def validate_refresh_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Oops, refresh token can't be empty")
        return v.strip()


class SignOutRequest(BaseModel):
    access_token: str
    refresh_token: str

    @field_validator("access_token")
    @classmethod
    def validate_access_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Oops, access token can't be empty")
        return v.strip()

    @field_validator("refresh_token")
    @classmethod
    def validate_refresh_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Oops, refresh token can't be empty")
        return v.strip()


class RoleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class UserOut(BaseModel):
    """Public profile (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    roles: list[RoleOut]


class TokenOut(BaseModel):
    """Signed token and the expiry embedded in it."""

    token: str
    expired_at: datetime


class TokenPair(BaseModel):
    access_token: TokenOut
    refresh_token: TokenOut


class SignInData(TokenPair):
    user: UserOut


class UserData(BaseModel):
    user: UserOut


class AuthenticatedUser(BaseModel):
    """Identity established by the bearer token for the current request."""

    id: str
