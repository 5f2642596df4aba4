"""
CLI entrypoint for the expired-token sweep. The API process already runs it on a
timer (TOKEN_SWEEP_ENABLED); use this for cron when that is disabled:

  python -m larder.sweep

Or hourly: 0 * * * * cd /path/to/larder && .venv/bin/python -m larder.sweep
"""

import logging
import sys

from larder.core.database import session_scope
from larder.core.logging import configure_logging
from larder.services.token_sweep import sweep_expired_tokens

logger = logging.getLogger(__name__)


def main() -> int:
    """Run one sweep: delete tokens whose expired_at has passed."""
    configure_logging()
    try:
        with session_scope() as db:
            tokens_deleted = sweep_expired_tokens(db)
        logger.info("Sweep completed: tokens_deleted=%s", tokens_deleted)
        return 0
    except Exception as e:
        logger.exception("Sweep job failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
