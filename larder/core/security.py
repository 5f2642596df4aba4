"""Password hashing and JWT signing/verification for access and refresh tokens."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from larder.core.config import Settings, get_settings
from larder.core.errors import AuthenticationError, UNAUTHORIZED_MESSAGE
from larder.models.token import TokenType

# Min/max lengths for password validation (bcrypt only reads the first 72 bytes).
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 72


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    cost = rounds or get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _signing_params(token_type: TokenType, settings: Settings) -> tuple[str, int]:
    if token_type is TokenType.ACCESS:
        return (
            settings.JWT_ACCESS_SECRET.get_secret_value(),
            settings.JWT_ACCESS_EXPIRE_MINUTES,
        )
    return (
        settings.JWT_REFRESH_SECRET.get_secret_value(),
        settings.JWT_REFRESH_EXPIRE_MINUTES,
    )


def encode_token(
    token_type: TokenType,
    user_id: str,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token for user_id with the secret and TTL of its type."""
    settings = settings or get_settings()
    secret, expire_minutes = _signing_params(token_type, settings)
    now = datetime.now(UTC)
    expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=expire_minutes))
    payload: dict[str, Any] = {
        "id": str(user_id),
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_token(
    token: str,
    token_type: TokenType,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Verify signature and expiry with the secret of token_type; return the payload.

    Every failure (bad signature, malformed, expired, missing id) raises the same
    AuthenticationError so callers cannot tell why a token was rejected.
    """
    settings = settings or get_settings()
    secret, _ = _signing_params(token_type, settings)
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "id"]},
        )
    except jwt.PyJWTError:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE) from None
    if not isinstance(payload.get("id"), str) or not payload["id"]:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)
    return payload


def token_expiry(token: str) -> datetime:
    """Read the embedded exp claim (without verification) as an aware UTC datetime."""
    claims = jwt.decode(token, options={"verify_signature": False})
    return datetime.fromtimestamp(claims["exp"], tz=UTC)
