"""
Logging Configuration

Root logger setup shared by ingestion and answering entry points.
"""

import logging
import sys

from slidesage.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every request, query, or batch at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "sentence_transformers")


def setup_logging(level: str | None = None) -> None:
    """
    Configure application logging on stdout.

    Args:
        level: Level name overriding settings.LOG_LEVEL (e.g. "DEBUG" to
            trace per-paragraph chunk counts).
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
