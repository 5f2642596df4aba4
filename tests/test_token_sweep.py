"""Expired-token sweep: removes only rows past their expiry."""

import asyncio
import unittest
from datetime import UTC, datetime, timedelta
from unittest import mock

from sqlalchemy import func, select

from larder.core.database import SessionLocal
from larder.models import ROLE_USER, TokenType, UserToken
from larder.services import token_sweep
from tests.support import DatabaseTestCase


class TestTokenSweep(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.create_user("Sweep Owner", "sweep@example.com", "password123", ROLE_USER)
        now = datetime.now(UTC)
        self.db.add_all(
            [
                UserToken(user_id=self.user_id, type=TokenType.ACCESS, token="expired-access", expired_at=now - timedelta(hours=2)),
                UserToken(user_id=self.user_id, type=TokenType.REFRESH, token="expired-refresh", expired_at=now - timedelta(minutes=1)),
                UserToken(user_id=self.user_id, type=TokenType.ACCESS, token="live-access", expired_at=now + timedelta(hours=1)),
                UserToken(user_id=self.user_id, type=TokenType.REFRESH, token="live-refresh", expired_at=now + timedelta(days=7)),
            ]
        )
        self.db.commit()

    def _remaining_tokens(self) -> set[str]:
        return set(self.db.execute(select(UserToken.token)).scalars())

    def test_deletes_only_expired_rows(self) -> None:
        deleted = token_sweep.sweep_expired_tokens(self.db)
        self.assertEqual(deleted, 2)
        self.assertEqual(self._remaining_tokens(), {"live-access", "live-refresh"})

    def test_is_idempotent(self) -> None:
        token_sweep.sweep_expired_tokens(self.db)
        self.assertEqual(token_sweep.sweep_expired_tokens(self.db), 0)
        self.assertEqual(self.db.execute(select(func.count(UserToken.id))).scalar_one(), 2)

    def test_explicit_cutoff(self) -> None:
        later = datetime.now(UTC) + timedelta(days=30)
        self.assertEqual(token_sweep.sweep_expired_tokens(self.db, now=later), 4)

    def test_run_token_sweep_uses_own_session(self) -> None:
        self.assertEqual(token_sweep.run_token_sweep(SessionLocal), 2)

    def test_run_token_sweep_never_raises(self) -> None:
        with mock.patch.object(
            token_sweep.token_store,
            "delete_expired_tokens",
            side_effect=RuntimeError("database went away"),
        ):
            self.assertEqual(token_sweep.run_token_sweep(SessionLocal), 0)
        self.assertEqual(len(self._remaining_tokens()), 4)


class TestTokenSweepLoop(unittest.TestCase):
    def test_loop_runs_until_cancelled(self) -> None:
        calls: list[object] = []

        def fake_sweep(factory: object) -> int:
            calls.append(factory)
            return 0

        async def run_briefly() -> None:
            task = asyncio.create_task(token_sweep.token_sweep_loop(SessionLocal, 0))
            while len(calls) < 2:
                await asyncio.sleep(0.01)
            task.cancel()
            with self.assertRaises(asyncio.CancelledError):
                await task

        with mock.patch.object(token_sweep, "run_token_sweep", side_effect=fake_sweep):
            asyncio.run(run_briefly())
        self.assertGreaterEqual(len(calls), 2)
        self.assertIs(calls[0], SessionLocal)


if __name__ == "__main__":
    unittest.main()
