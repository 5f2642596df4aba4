"""Token store: persisted access/refresh tokens keyed by (user, type, token)."""

from datetime import datetime

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.orm import Session

from larder.models import TokenType, UserToken


def add_token_pair(
    db: Session,
    user_id: str,
    access_token: str,
    access_expired_at: datetime,
    refresh_token: str,
    refresh_expired_at: datetime,
) -> None:
    db.add_all(
        [
            UserToken(
                user_id=user_id,
                type=TokenType.ACCESS,
                token=access_token,
                expired_at=access_expired_at,
            ),
            UserToken(
                user_id=user_id,
                type=TokenType.REFRESH,
                token=refresh_token,
                expired_at=refresh_expired_at,
            ),
        ]
    )


def find_live_token(
    db: Session,
    user_id: str,
    token_type: TokenType,
    token: str,
    now: datetime,
) -> UserToken | None:
    """Row for this exact token if it has not been revoked and has not expired."""
    return db.execute(
        select(UserToken).where(
            UserToken.user_id == user_id,
            UserToken.type == token_type,
            UserToken.token == token,
            UserToken.expired_at > now,
        )
    ).scalar_one_or_none()


def delete_token(db: Session, user_id: str, token_type: TokenType, token: str) -> int:
    result = db.execute(
        delete(UserToken).where(
            UserToken.user_id == user_id,
            UserToken.type == token_type,
            UserToken.token == token,
        )
    )
    return result.rowcount or 0


def delete_token_pair(
    db: Session, user_id: str, access_token: str, refresh_token: str
) -> int:
    result = db.execute(
        delete(UserToken).where(
            UserToken.user_id == user_id,
            or_(
                and_(UserToken.type == TokenType.ACCESS, UserToken.token == access_token),
                and_(UserToken.type == TokenType.REFRESH, UserToken.token == refresh_token),
            ),
        )
    )
    return result.rowcount or 0


def delete_expired_tokens(db: Session, now: datetime) -> int:
    result = db.execute(delete(UserToken).where(UserToken.expired_at <= now))
    return result.rowcount or 0
