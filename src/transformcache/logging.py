"""Logging setup for transformcache runs.

Every component logs through `logging.getLogger(__name__)`, so all records end
up under the `transformcache` logger configured here. Records go to a rotating
file in the project's build directory, and to stderr when running verbosely.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transformcache.config import ProjectPaths

LOG_DIR_ENV = "TRANSFORMCACHE_LOG_DIR"
LOG_LEVEL_ENV = "TRANSFORMCACHE_LOG_LEVEL"

DEFAULT_LOG_FILE = "transformcache.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "transformcache"

# Observer threads log every inotify/kqueue event at DEBUG
QUIET_LOGGERS = ("watchdog",)


def project_log_dir(paths: ProjectPaths) -> Path:
    """Directory for a project's log files.

    `TRANSFORMCACHE_LOG_DIR` wins over the default `<build>/logs`, which keeps
    logs next to the manifest.
    """
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return Path(override)
    return paths.build / "logs"


def _resolve_level(level: str | None, verbose: bool) -> int:
    if level is None:
        level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    log_dir: str | Path,
    level: str | None = None,
    verbose: bool = False,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Configure the `transformcache` logger.

    Calling this again replaces the handlers of the previous call, so a
    long-running watch process and repeated CLI invocations in one interpreter
    never log twice.

    Args:
        log_dir: Directory for the rotating log file. Created if missing.
        level: Log level name. Defaults to DEBUG when verbose, otherwise to
               `TRANSFORMCACHE_LOG_LEVEL` or INFO.
        verbose: Also log to stderr.
        log_file: Log file name.
        max_bytes: Size at which the log file rotates.
        backup_count: Number of rotated files kept.

    Returns:
        The `transformcache` logger.
    """
    log_path = Path(log_dir) / log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_level = _resolve_level(level, verbose)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logger.debug("Logging to %s at %s", log_path, logging.getLevelName(log_level))
    return logger
