# logging.py

import logging
import os
from logging.handlers import RotatingFileHandler

import structlog
from structlog.contextvars import merge_contextvars

from DPRCalculator.config import Settings

_SHARED_PROCESSORS = [
    merge_contextvars,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _json_formatter() -> structlog.stdlib.ProcessorFormatter:
    # Renders calculator events and plain stdlib records alike as one JSON object per line
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            *_SHARED_PROCESSORS,
            structlog.processors.JSONRenderer(),
        ],
        foreign_pre_chain=[structlog.processors.add_log_level, merge_contextvars],
    )


def _level(name: str | None, fallback: int) -> int | None:
    """Map a configured level name to a logging level; None for "NONE"."""
    if not name or name.upper() == "NONE":
        return None
    return getattr(logging, name.upper(), fallback)


def _build_handlers(settings: Settings | None, level: int) -> list[logging.Handler]:
    formatter = _json_formatter()
    handlers: list[logging.Handler] = []

    console_level = _level(settings.logging_console if settings else "INFO", level)
    if console_level is not None:
        console = logging.StreamHandler()
        console.setLevel(console_level)
        handlers.append(console)

    file_level = _level(settings.logging_file if settings else None, level)
    if file_level is not None:
        path = settings.logging_file_path
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        rotating = RotatingFileHandler(
            path,
            maxBytes=settings.logging_max_bytes,
            backupCount=settings.logging_backup_count,
        )
        rotating.setLevel(file_level)
        handlers.append(rotating)

    for h in handlers:
        h.setFormatter(formatter)
    return handlers


def setup_logging(settings: Settings | None = None) -> None:
    """Route structlog through stdlib logging with JSON output.

    Without settings: INFO to the console, no log file. With settings, each
    handler gets its own level from [logging]; "NONE" disables it.
    """
    level = _level(settings.logging_level if settings else "INFO", logging.INFO) or logging.INFO

    logging.captureWarnings(True)
    # force=True replaces handlers left by an earlier call
    logging.basicConfig(level=level, handlers=_build_handlers(settings, level), force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
