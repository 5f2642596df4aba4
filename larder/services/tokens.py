"""Access/refresh token issuance, persistence and refresh rotation."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from larder.core.errors import AuthenticationError, INVALID_TOKEN_MESSAGE
from larder.core.security import decode_token, encode_token, token_expiry
from larder.models import TokenType
from larder.repositories import tokens as token_store
from larder.schemas.auth import RefreshTokenRequest, TokenOut, TokenPair

if TYPE_CHECKING:
    from larder.core.config import Settings

logger = logging.getLogger(__name__)


def generate_token(
    token_type: TokenType, user_id: str, settings: "Settings | None" = None
) -> TokenOut:
    """
    Sign a token for user_id. expired_at is read back from the token's own exp
    claim, so the stored expiry always matches what the token reports.
    """
    token = encode_token(token_type, user_id, settings)
    return TokenOut(token=token, expired_at=token_expiry(token))


def issue_token_pair(user_id: str, settings: "Settings | None" = None) -> TokenPair:
    return TokenPair(
        access_token=generate_token(TokenType.ACCESS, user_id, settings),
        refresh_token=generate_token(TokenType.REFRESH, user_id, settings),
    )


def insert_token(
    db: Session, user_id: str, access_token: TokenOut, refresh_token: TokenOut
) -> None:
    """Persist both tokens in one transaction; on failure neither row is written."""
    try:
        token_store.add_token_pair(
            db,
            user_id,
            access_token.token,
            access_token.expired_at,
            refresh_token.token,
            refresh_token.expired_at,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise


def refresh_token(
    db: Session, body: RefreshTokenRequest, settings: "Settings | None" = None
) -> TokenPair:
    """
    Rotate a refresh token: verify it, confirm it is still live, revoke it, and
    issue a new pair.

    The old row is deleted and committed before the new pair is inserted. If the
    insert fails the caller is left without a refresh token (must sign in again)
    instead of holding two valid ones. The delete doubles as a claim: when a
    concurrent request already consumed the token, zero rows are deleted and this
    call is rejected, so a refresh token can be redeemed at most once.
    """
    payload = decode_token(body.refresh_token, TokenType.REFRESH, settings)
    user_id = payload["id"]

    now = datetime.now(UTC)
    live = token_store.find_live_token(
        db, user_id, TokenType.REFRESH, body.refresh_token, now
    )
    if live is None:
        logger.info("Refresh rejected: token not live for user_id=%s", user_id)
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    new_pair = issue_token_pair(user_id, settings)

    try:
        claimed = token_store.delete_token(
            db, user_id, TokenType.REFRESH, body.refresh_token
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    if claimed == 0:
        logger.info("Refresh rejected: token already rotated for user_id=%s", user_id)
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    insert_token(db, user_id, new_pair.access_token, new_pair.refresh_token)
    logger.info("Refresh token rotated for user_id=%s", user_id)
    return new_pair
