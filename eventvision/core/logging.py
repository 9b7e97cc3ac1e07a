"""
Logging configuration for the API.

Usage:
    # In request handlers, use the contextual logger for automatic request/session ID inclusion:
    from eventvision.middleware.logging_middleware import get_logger
    logger = get_logger(__name__)

    logger.info("Building blueprint")  # Will include [request_id][sess:...] automatically

    # Services use standard logging (no auto request ID):
    import logging
    logger = logging.getLogger(__name__)
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

import structlog

from eventvision.core.config import settings

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# Tracebacks are appended by logging.Formatter whenever a record carries exc_info
ERROR_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(pathname)s:%(lineno)d | %(message)s"

QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error", "httpx", "httpcore", "google_genai", "PIL")


def structlog_processors(log_format: str) -> List:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback))
    return processors


def build_file_handler(path: Path, level: int, fmt: str) -> RotatingFileHandler:
    """Size-rotated log file"""
    handler = RotatingFileHandler(path, maxBytes=settings.log_max_bytes, backupCount=settings.log_backup_count)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(environment: Optional[str] = None, log_dir: Optional[str] = None):
    """Configure structlog and the stdlib root logger."""
    environment = environment or settings.environment
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=structlog_processors(settings.log_format),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s" if settings.log_format == "json" else CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if environment == "production":
        directory = Path(log_dir or settings.log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(build_file_handler(directory / "api.log", logging.DEBUG, FILE_FORMAT))
        root_logger.addHandler(build_file_handler(directory / "api_errors.log", logging.ERROR, ERROR_FORMAT))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={settings.log_level}, format={settings.log_format}, env={environment}"
    )
