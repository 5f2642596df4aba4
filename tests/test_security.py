"""Unit tests for larder.core.security: password hashing and token signing."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from larder.core.config import get_settings
from larder.core.errors import AuthenticationError, UNAUTHORIZED_MESSAGE
from larder.core.security import (
    decode_token,
    encode_token,
    hash_password,
    token_expiry,
    verify_password,
)
from larder.models import TokenType


class TestPasswordHashing(unittest.TestCase):
    """hash_password stores a salted bcrypt hash; verify_password checks it."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("correct horse battery")
        self.assertNotEqual(hashed, "correct horse battery")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("correct horse battery", hashed))
        self.assertFalse(verify_password("wrong password", hashed))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("same-password"), hash_password("same-password"))

    def test_uses_requested_cost(self) -> None:
        hashed = hash_password("cost-check-pw", rounds=5)
        self.assertEqual(hashed.split("$")[2], "05")

    def test_malformed_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestTokenSigning(unittest.TestCase):
    """Tokens embed {id} and are verifiable only with the secret of their type."""

    def test_decode_returns_user_id(self) -> None:
        token = encode_token(TokenType.ACCESS, "user-1")
        payload = decode_token(token, TokenType.ACCESS)
        self.assertEqual(payload["id"], "user-1")

    def test_each_token_is_unique(self) -> None:
        first = encode_token(TokenType.REFRESH, "user-1")
        second = encode_token(TokenType.REFRESH, "user-1")
        self.assertNotEqual(first, second)

    def test_access_and_refresh_use_different_secrets(self) -> None:
        refresh = encode_token(TokenType.REFRESH, "user-1")
        with self.assertRaises(AuthenticationError):
            decode_token(refresh, TokenType.ACCESS)

    def test_expiry_follows_ttl_of_type(self) -> None:
        settings = get_settings()
        before = datetime.now(UTC)
        access_exp = token_expiry(encode_token(TokenType.ACCESS, "user-1"))
        refresh_exp = token_expiry(encode_token(TokenType.REFRESH, "user-1"))
        self.assertAlmostEqual(
            (access_exp - before).total_seconds(),
            settings.JWT_ACCESS_EXPIRE_MINUTES * 60,
            delta=5,
        )
        self.assertAlmostEqual(
            (refresh_exp - before).total_seconds(),
            settings.JWT_REFRESH_EXPIRE_MINUTES * 60,
            delta=5,
        )

    def test_token_expiry_matches_exp_claim(self) -> None:
        token = encode_token(TokenType.ACCESS, "user-1")
        claims = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(int(token_expiry(token).timestamp()), claims["exp"])


class TestUniformTokenFailures(unittest.TestCase):
    """Expired, malformed and forged tokens all fail with one message."""

    def _message_for(self, token: str) -> str:
        with self.assertRaises(AuthenticationError) as ctx:
            decode_token(token, TokenType.ACCESS)
        self.assertEqual(ctx.exception.status_code, 401)
        return ctx.exception.message

    def test_expired(self) -> None:
        token = encode_token(TokenType.ACCESS, "user-1", expires_delta=timedelta(hours=-1))
        self.assertEqual(self._message_for(token), UNAUTHORIZED_MESSAGE)

    def test_malformed(self) -> None:
        self.assertEqual(self._message_for("not.a.jwt"), UNAUTHORIZED_MESSAGE)

    def test_bad_signature(self) -> None:
        forged = jwt.encode(
            {"id": "user-1", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "anonymous_secret",
            algorithm="HS256",
        )
        self.assertEqual(self._message_for(forged), UNAUTHORIZED_MESSAGE)

    def test_missing_id_claim(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"sub": "user-1", "exp": datetime.now(UTC) + timedelta(hours=1)},
            settings.JWT_ACCESS_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertEqual(self._message_for(token), UNAUTHORIZED_MESSAGE)


if __name__ == "__main__":
    unittest.main()
