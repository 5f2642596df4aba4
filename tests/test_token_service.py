"""Token persistence and refresh rotation against the real token store."""

import unittest
from unittest import mock

from larder.core.errors import AuthenticationError, INVALID_TOKEN_MESSAGE
from larder.models import ROLE_USER, TokenType
from larder.repositories import tokens as token_store
from larder.schemas.auth import RefreshTokenRequest
from larder.services import tokens as token_service
from tests.support import DatabaseTestCase


class TestInsertToken(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.create_user("Token Owner", "owner@example.com", "password123", ROLE_USER)

    def test_pair_is_persisted(self) -> None:
        pair = token_service.issue_token_pair(self.user_id)
        token_service.insert_token(self.db, self.user_id, pair.access_token, pair.refresh_token)
        self.assertEqual(self.live_token_count(self.user_id, TokenType.ACCESS), 1)
        self.assertEqual(self.live_token_count(self.user_id, TokenType.REFRESH), 1)

    def test_failed_commit_rolls_back(self) -> None:
        pair = token_service.issue_token_pair(self.user_id)
        db = mock.MagicMock()
        db.commit.side_effect = RuntimeError("database went away")
        with self.assertRaises(RuntimeError):
            token_service.insert_token(db, self.user_id, pair.access_token, pair.refresh_token)
        db.rollback.assert_called_once()

    def test_expired_at_matches_token(self) -> None:
        out = token_service.generate_token(TokenType.ACCESS, self.user_id)
        self.assertIsNotNone(out.expired_at.tzinfo)


class TestRefreshRotation(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.create_user("Token Owner", "owner@example.com", "password123", ROLE_USER)
        self.pair = token_service.issue_token_pair(self.user_id)
        token_service.insert_token(
            self.db, self.user_id, self.pair.access_token, self.pair.refresh_token
        )

    def _refresh(self, token: str):
        return token_service.refresh_token(self.db, RefreshTokenRequest(refresh_token=token))

    def test_rotation_issues_new_pair_and_revokes_old(self) -> None:
        new_pair = self._refresh(self.pair.refresh_token.token)
        self.assertNotEqual(new_pair.refresh_token.token, self.pair.refresh_token.token)
        self.assertNotEqual(new_pair.access_token.token, self.pair.access_token.token)
        # Old access token stays until expiry or sign-out; old refresh token is gone.
        self.assertEqual(self.live_token_count(self.user_id, TokenType.REFRESH), 1)
        self.assertEqual(self.live_token_count(self.user_id, TokenType.ACCESS), 2)

    def test_refresh_token_is_single_use(self) -> None:
        self._refresh(self.pair.refresh_token.token)
        with self.assertRaises(AuthenticationError) as ctx:
            self._refresh(self.pair.refresh_token.token)
        self.assertEqual(ctx.exception.message, INVALID_TOKEN_MESSAGE)

    def test_new_refresh_token_works(self) -> None:
        new_pair = self._refresh(self.pair.refresh_token.token)
        newer = self._refresh(new_pair.refresh_token.token)
        self.assertNotEqual(newer.refresh_token.token, new_pair.refresh_token.token)

    def test_access_token_is_not_a_refresh_token(self) -> None:
        with self.assertRaises(AuthenticationError):
            self._refresh(self.pair.access_token.token)
        self.assertEqual(self.live_token_count(self.user_id, TokenType.REFRESH), 1)

    def test_concurrent_redemption_loses_the_claim(self) -> None:
        # Another request deleted the row between the live check and the delete.
        token_store.delete_token(
            self.db, self.user_id, TokenType.REFRESH, self.pair.refresh_token.token
        )
        self.db.commit()
        stale_row = object()
        with mock.patch.object(token_store, "find_live_token", return_value=stale_row):
            with self.assertRaises(AuthenticationError):
                self._refresh(self.pair.refresh_token.token)
        self.assertEqual(self.live_token_count(self.user_id, TokenType.REFRESH), 0)
        self.assertEqual(self.live_token_count(self.user_id, TokenType.ACCESS), 1)


if __name__ == "__main__":
    unittest.main()
