"""
Centralized logging configuration for Manu-shop.

This module provides a standardized logging setup for the entire application,
logging to both file and console and including a correlation ID per
Streamlit session. Error reporting to Sentry is enabled when a DSN is
configured.
"""

import logging
import logging.handlers
import os
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Optional, Union

import sentry_sdk

from .config import get_project_root, get_settings

# Constants
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | [%(correlation_id)s] | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_DIR = get_project_root() / "logs"

NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "urllib3", "websockets", "streamlit")


# One value per thread or asyncio task; each Streamlit session runs in its own thread
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


class CorrelationIDFilter(logging.Filter):
    """Filter that adds correlation ID to log records."""

    def filter(self, record):
        """Add correlation_id to the record."""
        if not hasattr(record, 'correlation_id'):
            record.correlation_id = _correlation_id.get() or 'no_correlation_id'
        return True

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get the current correlation ID."""
        return _correlation_id.get()

    @classmethod
    def set_correlation_id(cls, correlation_id: Optional[str] = None) -> str:
        """Set the correlation ID for the current context."""
        correlation_id = correlation_id or str(uuid.uuid4())
        _correlation_id.set(correlation_id)
        return correlation_id

    @classmethod
    def reset_correlation_id(cls) -> None:
        """Reset the correlation ID."""
        _correlation_id.set("")


def get_log_level() -> int:
    """Get the log level from configuration."""
    log_level_name = get_settings().application.log_level.value
    return getattr(logging, log_level_name)


def configure_logging(level: Optional[Union[int, str]] = None,
                      correlation_id: Optional[str] = None,
                      log_to_file: bool = True) -> None:
    """
    Configure logging for the application.

    Args:
        level: Override the log level from settings if provided
        correlation_id: Set a correlation ID for this logging session
        log_to_file: Also write to the daily rotating file under ``logs/``
    """
    if correlation_id:
        CorrelationIDFilter.set_correlation_id(correlation_id)

    if level is None:
        level = get_log_level()
    elif isinstance(level, str):
        level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)
    correlation_filter = CorrelationIDFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    console_handler.addFilter(correlation_filter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        os.makedirs(LOG_DIR, exist_ok=True)
        log_file = LOG_DIR / f"manu_shop_{time.strftime('%Y%m%d')}.log"
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file, when='midnight', backupCount=14
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        file_handler.addFilter(correlation_filter)
        root_logger.addHandler(file_handler)

    if level <= logging.INFO:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(
        f"Logging configured with level={logging.getLevelName(level)}, "
        f"correlation_id={CorrelationIDFilter.get_correlation_id()}"
    )


def init_sentry() -> bool:
    """Initialize Sentry error reporting if a DSN is configured."""
    app_settings = get_settings().application
    if not app_settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment.value,
        traces_sample_rate=0.0,
    )
    logging.getLogger(__name__).info("Sentry error reporting enabled")
    return True

