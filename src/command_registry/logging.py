"""Logging configuration for the command registry.

Provides optional file logging for the ``command_registry`` logger and a
helper that logs a full traceback while handing back a clean message for
callers at the request boundary.
"""
from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Optional

LOGGER_NAME = "command_registry"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Module-level state
_file_handler: Optional[logging.FileHandler] = None
_log_path: Optional[Path] = None


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Configure console logging, plus file logging when log_file is given.

    Args:
        verbose: If True, log at DEBUG. Otherwise WARNING.
        log_file: Optional path for a log file (always at DEBUG)

    Returns:
        The package logger
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    if log_file:
        configure_file_logging(Path(log_file))
    return logging.getLogger(LOGGER_NAME)


def configure_file_logging(path: Path, level: int = logging.DEBUG) -> Path:
    """Attach a file handler to the package logger.

    Any handler attached by a previous call is closed first.

    Args:
        path: Log file path; parent directories are created
        level: Logging level for file output (default DEBUG)

    Returns:
        Path to the log file
    """
    global _file_handler, _log_path

    close_file_logging()

    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    _file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(_file_handler)
    logger.setLevel(min(logger.level or logging.DEBUG, level))

    _log_path = path
    return path


def close_file_logging() -> None:
    """Flush and detach the file handler, if any."""
    global _file_handler, _log_path

    if _file_handler is not None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
        _log_path = None


def get_current_log_path() -> Optional[Path]:
    """Path of the active log file, or None."""
    return _log_path


def log_exception(error: Exception, context: str = "", include_traceback: bool = True) -> str:
    """Log an exception with full details.

    Args:
        error: The exception to log
        context: What was happening when it was raised
        include_traceback: Whether to include the traceback in the log

    Returns:
        User-facing message without the traceback
    """
    logger = logging.getLogger(LOGGER_NAME)

    error_type = type(error).__name__
    error_msg = str(error)

    if context:
        user_msg = f"{context}: {error_msg}"
    else:
        user_msg = f"{error_type}: {error_msg}"

    if include_traceback:
        tb_str = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        log_msg = f"{context}\n{error_type}: {error_msg}\n\nTraceback:\n{tb_str}"
    else:
        log_msg = f"{context} - {error_type}: {error_msg}"

    logger.error(log_msg)
    return user_msg
