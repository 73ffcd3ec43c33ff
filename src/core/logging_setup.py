"""Log file setup.

The log is an append-only side channel opened once per process and held for
its lifetime. Everything logs under the `sysreboot` logger tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import APP_NAME, EnvironmentSetupError

LOG_FORMAT = APP_NAME + ": %(asctime)s %(filename)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{APP_NAME}.{name}" if name else APP_NAME)


def setup_logging(log_file: Path, *, verbose: bool = False) -> logging.Handler:
    """Attach an append-mode file handler to the application logger.

    Verbose-only detail is logged at DEBUG and only reaches the file when
    `verbose` is set.

    Raises `EnvironmentSetupError` if the file cannot be opened.
    """

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as exc:
        raise EnvironmentSetupError(f"Error opening log file: {exc}") from exc

    handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = get_logger()
    for existing in list(logger.handlers):
        if isinstance(existing, logging.FileHandler):
            logger.removeHandler(existing)
            existing.close()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return handler
