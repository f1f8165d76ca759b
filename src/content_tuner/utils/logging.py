"""
Logging setup for content-tuner.

Every module logs through a child of the "content_tuner" logger, so one
call to setup_logging() decides where all output goes. Log records go to
stderr, leaving stdout to the score report.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from content_tuner.config.settings import LoggingSettings

ROOT_LOGGER_NAME = "content_tuner"

_logging_configured = False


def _build_handlers(settings: LoggingSettings, level: int) -> list[logging.Handler]:
    """Create the console and rotating file handlers the settings ask for."""
    handlers: list[logging.Handler] = []

    if settings.log_to_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if settings.file_path is not None:
        settings.file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            filename=str(settings.file_path),
            maxBytes=settings.max_file_size_mb * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8",
        ))

    formatter = logging.Formatter(fmt=settings.format, datefmt=settings.date_format)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    settings: LoggingSettings | None = None,
    level: str | None = None,
) -> logging.Logger:
    """
    Configure the application logger.

    Only the first call has any effect until reset_logging() is called.

    Args:
        settings: Logging configuration; LoggingSettings() defaults if None
        level: Level name taking precedence over settings.level, e.g. "DEBUG"
            for --verbose

    Returns:
        The application root logger
    """
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _logging_configured:
        return logger

    settings = settings or LoggingSettings()
    numeric_level = getattr(logging, (level or settings.level).upper())

    logger.handlers.clear()
    logger.setLevel(numeric_level)
    for handler in _build_handlers(settings, numeric_level):
        logger.addHandler(handler)

    # Handlers live on our root only; don't also print through logging's root
    logger.propagate = False

    _logging_configured = True
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return a logger under the application root.

    Module names inside the package are used as they are; anything else
    is nested under "content_tuner.".

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Tuning started")
    """
    if name is None or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Close and detach all handlers so the next setup_logging() applies."""
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    _logging_configured = False
