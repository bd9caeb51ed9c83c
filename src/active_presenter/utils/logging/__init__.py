# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sinks and structlog loggers bound with presenter context

from .config import (
    LoggingMode,
    configure_logging,
    configure_logging_from_config,
    detect_logging_mode,
    get_logging_status,
)
from .utils import LogContext, get_logger, with_presenter_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "configure_logging_from_config",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "LogContext",
    "get_logger",
    "with_presenter_context",
]
