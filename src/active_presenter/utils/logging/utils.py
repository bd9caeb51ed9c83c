# ABOUTME: Logger utilities with context binding and operation ids
# ABOUTME: Provides get_logger plus presenter-aware logging contexts

import inspect
import uuid
from typing import Any

import structlog


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance with automatic module detection.

    Args:
        name: Logger name, auto-detected from caller if None

    Returns:
        Configured structlog logger instance
    """
    if name is None:
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")

    return structlog.get_logger(name or "active_presenter")


def generate_operation_id() -> str:
    """Generate a unique operation ID for tracking requests."""
    return str(uuid.uuid4())[:8]


class LogContext:
    """Context manager for binding logger context."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context):
        self.logger = logger
        self.context = context
        self.bound_logger = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and self.bound_logger is not None:
            self.bound_logger.error("Context operation failed", error=str(exc_val), error_type=exc_type.__name__)


def with_presenter_context(presenter: Any, **context) -> LogContext:
    """Create a logging context bound to a presenter and its composed types.

    Args:
        presenter: Presenter instance (or class) being operated on
        **context: Additional context to bind

    Returns:
        LogContext manager with presenter context
    """
    presenter_cls = presenter if isinstance(presenter, type) else type(presenter)
    logger = get_logger()
    return LogContext(
        logger,
        presenter=presenter_cls.__name__,
        presented=list(getattr(presenter_cls, "presented", {})),
        operation_id=generate_operation_id(),
        **context,
    )
