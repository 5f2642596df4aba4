"""Error envelope builder used by the exception handlers."""

from typing import Any

from fastapi.responses import JSONResponse

from larder.schemas.common import ErrorResponse


def error_response(
    status_code: int, errors: Any, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Wrap a message or a list of field errors in the failure envelope."""
    body = ErrorResponse(status_code=status_code, errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )
