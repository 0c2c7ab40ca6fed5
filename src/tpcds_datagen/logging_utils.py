from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

LOGGER_NAME = "tpcds_datagen"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
LOG_LEVEL_ENV = "TPCDS_LOG_LEVEL"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def apply_log_level(logger: logging.Logger) -> None:
    """Set the level from TPCDS_LOG_LEVEL, if present.

    Call after .env has been loaded. Unknown level names are reported and ignored.
    """
    level = os.environ.get(LOG_LEVEL_ENV)
    if not level:
        return
    try:
        logger.setLevel(level.strip().upper())
    except ValueError:
        logger.warning(f"Ignoring unknown {LOG_LEVEL_ENV}={level!r}")


@contextmanager
def timed(logger: logging.Logger, label: str) -> Iterator[Dict[str, Any]]:
    """Log START/END around a step.

    Yields a dict; whatever the step puts in it is appended to the END line
    as key=value pairs (table count, database, ...).
    """
    details: Dict[str, Any] = {}
    start = time.time()
    logger.info(f"START {label}")
    try:
        yield details
    finally:
        summary = "".join(f" {k}={v}" for k, v in details.items())
        logger.info(f"END {label} - {time.time() - start:.2f}s{summary}")
