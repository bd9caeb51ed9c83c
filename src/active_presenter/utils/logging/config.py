# ABOUTME: Loguru sink setup driven by the ACTIVE_PRESENTER_ settings
# ABOUTME: Interactive mode writes rotating files under logs/, production mode writes JSON to stdout

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

from active_presenter.config import Config, get_config

# SQLAlchemy floods the output when the engine runs with echo or pool debugging
QUIET_LOGGERS = ["sqlalchemy.engine", "sqlalchemy.pool", "sqlalchemy.orm"]

LOG_DIR = Path("logs")
LOG_FILES = {"main": "active-presenter.log", "json": "active-presenter.json", "errors": "errors.log"}

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
JSON_FORMAT = "{time} | {level} | {name} | {message}"


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode(config: Config | None = None) -> str:
    """Configured mode if set, otherwise interactive on a terminal and production elsewhere."""
    config = config or get_config()
    if config.log_mode:
        return config.log_mode
    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Keep SQLAlchemy chatter at warning level."""
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def route_structlog_to_loguru(log_level: str) -> None:
    """Render structlog events as key=value lines and hand them to the loguru sinks."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper(), logging.INFO)),
        logger_factory=lambda *args: logger,
        # module-level loggers are created at import, before this runs
        cache_logger_on_first_use=False,
    )


def _add_stdout_sink(log_level: str) -> None:
    logger.add(sys.stdout, level=log_level, format=JSON_FORMAT, serialize=True)


def _add_file_sinks(log_level: str, log_file: str | None) -> None:
    logger.add(
        log_file or str(LOG_DIR / LOG_FILES["main"]),
        level=log_level,
        format=TEXT_FORMAT,
        rotation="10 MB",
        retention="7 days",
    )
    logger.add(
        LOG_DIR / LOG_FILES["json"],
        level=log_level,
        format=JSON_FORMAT,
        serialize=True,
        rotation="10 MB",
        retention="7 days",
    )
    logger.add(LOG_DIR / LOG_FILES["errors"], level="ERROR", format=TEXT_FORMAT, backtrace=True, diagnose=True)


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom human-readable log file path, uses logs/active-presenter.log if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()
    logging.getLogger().setLevel(getattr(logging, log_level.upper(), logging.INFO))
    route_structlog_to_loguru(log_level)

    # Remove default loguru handler
    logger.remove()

    if mode == LoggingMode.PRODUCTION:
        _add_stdout_sink(log_level)
        return

    try:
        LOG_DIR.mkdir(exist_ok=True)
    except OSError:
        # No writable log directory: fall back to production output
        _add_stdout_sink(log_level)
        return
    _add_file_sinks(log_level, log_file)


def configure_logging_from_config(config: Config | None = None) -> None:
    """Configure logging from :class:`~active_presenter.config.Config` (``ACTIVE_PRESENTER_LOG_*``)."""
    config = config or get_config()
    configure_logging(
        mode=detect_logging_mode(config),
        log_level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
    )


def get_logging_status(config: Config | None = None) -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode(config)
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(LOG_DIR.absolute()) if LOG_DIR.exists() else None,
        "log_files": {key: str(LOG_DIR / name) if interactive else None for key, name in LOG_FILES.items()},
        "third_party_suppressed": [*QUIET_LOGGERS, "py.warnings"],
    }
