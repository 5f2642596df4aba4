"""Expired-token sweep: delete token rows whose expired_at has passed."""

import asyncio
import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session, sessionmaker

from larder.core.database import session_scope
from larder.repositories import tokens as token_store

logger = logging.getLogger(__name__)


def sweep_expired_tokens(session: Session, now: datetime | None = None) -> int:
    """
    Delete every token with expired_at <= now in one transaction; return the count.

    Idempotent: a second run right after deletes nothing. Rows already removed by a
    concurrent sign-out or refresh are simply not counted.
    """
    cutoff = now or datetime.now(UTC)
    try:
        deleted_count = token_store.delete_expired_tokens(session, cutoff)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Token sweep: cutoff=%s, tokens_deleted=%s", cutoff.isoformat(), deleted_count)
    return deleted_count


def run_token_sweep(session_factory: sessionmaker) -> int:
    """Run one sweep with its own session. Never raises; a failed run returns 0."""
    try:
        with session_scope(session_factory) as session:
            return sweep_expired_tokens(session)
    except Exception as e:
        logger.exception("Token sweep failed: %s", e)
        return 0


async def token_sweep_loop(session_factory: sessionmaker, interval_seconds: int) -> None:
    """Run the sweep every interval_seconds until cancelled."""
    try:
        while True:
            await asyncio.to_thread(run_token_sweep, session_factory)
            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        logger.info("Token sweep task cancelled")
        raise
