"""Logging for facetcrawl.

Every ``facetcrawl.*`` logger writes to a colored console stream and to
``<log dir>/facetcrawl.log`` (rotated at 10 MB, five backups). The log dir
is ``FACETCRAWL_LOG_DIR`` when set, ``./logs`` otherwise.
"""

import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, List, Optional

import colorlog


LOG_DIR_ENV_VAR = "FACETCRAWL_LOG_DIR"
LOG_FILENAME = "facetcrawl.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

CONSOLE_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _build_handlers(log_dir: Optional[Path]) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(colorlog.ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LEVEL_COLORS))

    directory = Path(log_dir or os.environ.get(LOG_DIR_ENV_VAR, "logs"))
    directory.mkdir(parents=True, exist_ok=True)
    rotating = RotatingFileHandler(
        directory / LOG_FILENAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    rotating.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))

    return [console, rotating]


def get_logger(name: str, log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Return the logger ``name``, attaching handlers on first use.

    ``level`` falls back to the ``LOG_LEVEL`` env var, then INFO. Loggers
    do not propagate, so records are emitted once.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)
    for handler in _build_handlers(log_dir):
        handler.setLevel(numeric_level)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


@contextmanager
def log_execution_time(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log how long the wrapped block took, even when it raises.

    Example:
        >>> with log_execution_time(logger, "catalog crawl"):
        ...     document = await crawler.run()
    """
    logger.debug(f"{operation} started")
    started = time.perf_counter()
    try:
        yield
    finally:
        logger.info(f"{operation} took {time.perf_counter() - started:.3f}s")


def set_log_level(logger: logging.Logger, level: str) -> None:
    """Apply ``level`` to ``logger`` and each of its handlers."""
    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)


def configure_logging(level: str, package: str = "facetcrawl") -> None:
    """Apply a log level to every logger already created under ``package``."""
    for name in list(logging.Logger.manager.loggerDict):
        if name == package or name.startswith(f"{package}."):
            logger = logging.getLogger(name)
            if logger.handlers:
                set_log_level(logger, level)


def log_exception(logger: logging.Logger, operation: str, exception: Exception) -> None:
    """Log a failed operation with its traceback and any error context."""
    context = getattr(exception, "context", None)
    suffix = f" {context}" if context else ""
    logger.error(f"{operation} failed: {exception}{suffix}", exc_info=True)
