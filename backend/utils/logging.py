"""Centralized logging configuration for the Starter API."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from ..core.config import settings
from ..core.correlation import CorrelationLogFilter

DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] "
    "%(funcName)s:%(lineno)d - %(message)s"
)
SIMPLE_FORMAT = "%(levelname)s - %(name)s - [%(request_id)s] - %(message)s"


def setup_logging(
    name: str | None = None, log_level: str | None = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting and handlers.

    Args:
        name: Logger name (defaults to the ``backend`` package logger)
        log_level: Log level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    logger_name = name or "backend"
    level = log_level or settings.LOG_LEVEL

    # Get or create logger
    logger = logging.getLogger(logger_name)

    # Only configure if not already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    # Create formatters
    detailed_formatter = logging.Formatter(
        fmt=DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"
    )
    simple_formatter = logging.Formatter(fmt=SIMPLE_FORMAT)
    correlation_filter = CorrelationLogFilter()

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        simple_formatter if settings.is_production else detailed_formatter
    )
    console_handler.addFilter(correlation_filter)
    logger.addHandler(console_handler)

    if not settings.LOG_TO_FILE:
        return logger

    # Ensure log directory exists
    settings.LOG_DIR.mkdir(parents=True, exist_ok=True)

    # File handler with rotation (all logs)
    try:
        file_handler = RotatingFileHandler(
            settings.LOG_DIR / settings.LOG_FILE,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(correlation_filter)
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Could not create file handler: {e}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
