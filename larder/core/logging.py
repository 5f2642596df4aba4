"""Process-wide logging setup shared by the API and the CLI entrypoints."""

import logging

from larder.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(level: str | None = None) -> None:
    """Install the root handler once; later calls only adjust the level."""
    logging.basicConfig(
        level=level or get_settings().LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    logging.getLogger().setLevel(level or get_settings().LOG_LEVEL)
