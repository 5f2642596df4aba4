"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class MessageResponse(BaseModel):
    """Success envelope for endpoints that return no payload."""

    success: bool = True
    status_code: int = 200
    message: str


class ApiResponse(MessageResponse, Generic[DataT]):
    """Success envelope carrying a typed payload."""

    data: DataT


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope: a message, or one entry per invalid field."""

    success: bool = False
    status_code: int
    errors: str | list[FieldError] = Field(description="Error message or field errors")
