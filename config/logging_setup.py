"""
Logging Setup

Console + rotating file logging for command-line entry points.
Library modules only call logging.getLogger(__name__); handlers are
configured once, here, by whoever owns the process.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from config.settings import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_FALLBACK_DIR,
    LOG_FILE,
    LOG_FORMAT,
)

CONSOLE_HANDLER_NAME = "publisher-console"
FILE_HANDLER_NAME = "publisher-file"


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Setup logging with rotation.

    Logs to console and (optionally) to file:
    - Daily rotation
    - Keep LOG_BACKUP_COUNT days of logs
    - Falls back to ./logs when the log directory is not writable,
      and to console only when ./logs is not writable either
    - Calling it again does not duplicate handlers

    Args:
        level: Root log level
        log_to_file: Also write to a rotating log file
        log_dir: Override LOG_DIR from settings
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler (stdout), installed once per process
    console_handler = _find_handler(logger, CONSOLE_HANDLER_NAME)
    if console_handler is None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
    console_handler.setLevel(level)

    if not log_to_file or _find_handler(logger, FILE_HANDLER_NAME) is not None:
        return

    target_dir = log_dir or LOG_DIR
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        file_handler = _create_file_handler(target_dir / LOG_FILE, level, formatter)
    except OSError:
        fallback_log = LOG_FALLBACK_DIR / LOG_FILE
        try:
            LOG_FALLBACK_DIR.mkdir(exist_ok=True)
            file_handler = _create_file_handler(fallback_log, level, formatter)
        except OSError as e:
            logger.warning(
                f"Cannot write to {target_dir / LOG_FILE} or {fallback_log} ({e}), "
                f"logging to console only",
            )
            return
        logger.warning(
            f"Cannot write to {target_dir / LOG_FILE}, using fallback: {fallback_log}",
        )

    file_handler.set_name(FILE_HANDLER_NAME)
    logger.addHandler(file_handler)


def _find_handler(logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def _create_file_handler(
    path: Path,
    level: int,
    formatter: logging.Formatter,
) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        str(path),
        when="midnight",
        interval=1,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler
