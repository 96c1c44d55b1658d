"""
Logging for the API server and the register ingest command.

Everything logs under the ``sponsorscope`` namespace. ``setup_logging`` may
be called more than once (server reloads, repeated CLI runs in one process);
each call replaces the handlers installed by the previous one.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "sponsorscope"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

# Third-party loggers that flood the console at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "httpx", "httpcore")

_INSTALLED = "_sponsorscope_handler"


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _INSTALLED, True)
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/sponsorscope.log",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Attach console and (optionally) rotating file handlers.

    Args:
        level: Console threshold; unknown names fall back to INFO.
        log_file: Destination for DEBUG-and-up records. None disables it.
        max_bytes: Rotate the file once it reaches this size.
        backup_count: Rotated files to keep.

    Returns:
        The ``sponsorscope`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG)

    for handler in [h for h in logger.handlers if getattr(h, _INSTALLED, False)]:
        logger.removeHandler(handler)
        handler.close()

    console = _mark(logging.StreamHandler(sys.stdout))
    console.setLevel(getattr(logging, level.upper(), logging.INFO))
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = _mark(RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
        ))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging ready (console=%s, file=%s)", level.upper(), log_file or "off")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``sponsorscope`` namespace; module ``__name__`` values pass through."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
