"""Typed application errors. Services raise these; the API boundary maps them to HTTP."""

from typing import Any

INTERNAL_ERROR_MESSAGE = "Oops, Internal Server Error. Please try again later"
UNAUTHORIZED_MESSAGE = "Oops, your not authorized to access this resource"
INVALID_TOKEN_MESSAGE = (
    "Oops, your token is invalid. Please refresh your token or log in again"
)


class AppError(Exception):
    """Base class for errors that carry a user-safe message and an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    @property
    def errors(self) -> Any:
        return self.message


class AuthenticationError(AppError):
    """Missing, invalid, expired or revoked credential."""

    status_code = 401


class AuthorizationError(AppError):
    """Identity is known but lacks the required role."""

    status_code = 403


class NotFoundError(AppError):
    """Referenced record does not exist."""

    status_code = 404


class ConflictError(AppError):
    """Business-rule violation such as a duplicate unique field."""

    status_code = 400


class InvalidCredentialsError(AppError):
    """Email/password pair does not match; deliberately not a 401 nor field-specific."""

    status_code = 400
