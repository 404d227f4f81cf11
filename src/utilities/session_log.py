"""
Session Log Sink

Creates the timestamped transcript for a repair run and guarantees it is
flushed and closed again. Every operator-facing message goes both to the
console for real-time monitoring and to the transcript file for auditing.

Author: Ashiq Gazi
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from config import (
    LOG_FORMAT,
    LOG_LEVEL,
    LOGGER_NAME,
    SESSION_LOG_FILE_PREFIX,
    SESSION_TIMESTAMP_FORMAT,
)
from src.utilities.errors import SessionLogError


def session_timestamp(moment: Optional[datetime] = None) -> str:
    return (moment or datetime.now()).strftime(SESSION_TIMESTAMP_FORMAT)


def open_session_log(
    log_dir: Path,
    timestamp: str,
    level: str = LOG_LEVEL,
) -> logging.Logger:
    """
    Attach console and transcript handlers to the application logger.

    The transcript is named {SESSION_LOG_FILE_PREFIX}-{timestamp}.log and is
    written into log_dir, which must already exist.

    Args:
        log_dir: Directory that receives the transcript file
        timestamp: Session timestamp shared with the run summary
        level: Minimum logging level name (INFO, DEBUG, ...)

    Returns:
        The configured application logger

    Raises:
        SessionLogError: If the directory is missing or the file cannot be created
    """
    if not log_dir.is_dir():
        raise SessionLogError(f"Log directory does not exist: {log_dir}")

    log_path: Path = log_dir / f"{SESSION_LOG_FILE_PREFIX}-{timestamp}.log"

    try:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        raise SessionLogError(f"Unable to create log file {log_path}: {e}") from e

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler(), file_handler]

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # Messages go to these two handlers only, never to root handlers
    logger.propagate = False
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Session transcript: {log_path}")
    return logger


def close_session_log(logger: logging.Logger) -> None:
    """Flush, close and detach every handler attached by open_session_log."""
    for handler in list(logger.handlers):
        handler.flush()
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
