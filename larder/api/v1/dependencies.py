"""Request authorization pipeline: API key gate, bearer session check, role check."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from larder.core.config import get_settings
from larder.core.database import get_db
from larder.core.errors import (
    AuthenticationError,
    AuthorizationError,
    UNAUTHORIZED_MESSAGE,
)
from larder.core.security import decode_token
from larder.models import ROLE_ADMIN, TokenType
from larder.repositories import api_keys as api_key_store
from larder.repositories import tokens as token_store
from larder.repositories import users as user_store
from larder.schemas.auth import AuthenticatedUser

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = "Oops, you need to provide an API key!"
INVALID_API_KEY_MESSAGE = "Oops, invalid API key!"
FORBIDDEN_MESSAGE = "Oops, you are not authorized to access this resource"

security = HTTPBearer(auto_error=False)


def require_api_key(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    """Dependency: every v1 route needs an ACTIVE key in the API key header."""
    key = request.headers.get(get_settings().API_KEY_HEADER, "").strip()
    if not key:
        raise AuthenticationError(MISSING_API_KEY_MESSAGE)
    if not api_key_store.is_active_key(db, key):
        logger.info("Rejected request with unknown or inactive API key")
        raise AuthenticationError(INVALID_API_KEY_MESSAGE)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthenticatedUser:
    """
    Dependency: require `Authorization: Bearer <access token>`.

    The token must verify against the access secret and must still have a live
    ACCESS row; a signed-out token fails the second check even before it expires.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)
    token = credentials.credentials
    payload = decode_token(token, TokenType.ACCESS)
    user_id = payload["id"]
    live = token_store.find_live_token(
        db, user_id, TokenType.ACCESS, token, datetime.now(UTC)
    )
    if live is None:
        logger.info("Rejected revoked access token for user_id=%s", user_id)
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)
    return AuthenticatedUser(id=user_id)


def require_role(role: str) -> Callable[..., AuthenticatedUser]:
    """Dependency factory: the authenticated user must hold role (403 otherwise)."""

    def check_role(
        current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
        db: Annotated[Session, Depends(get_db)],
    ) -> AuthenticatedUser:
        user = user_store.get_user_with_roles(db, current_user.id)
        if user is None:
            raise AuthenticationError(UNAUTHORIZED_MESSAGE)
        if role not in user.role_names:
            logger.info("Forbidden: user_id=%s lacks role %s", current_user.id, role)
            raise AuthorizationError(FORBIDDEN_MESSAGE)
        return current_user

    return check_role


require_admin = require_role(ROLE_ADMIN)

CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
AdminUser = Annotated[AuthenticatedUser, Depends(require_admin)]
DbSession = Annotated[Session, Depends(get_db)]
