"""Logging for the task list application.

structlog drives the application's own events. Records from the standard
library (werkzeug's request log, Flask's error log) pass through the same
processor chain via ``ProcessorFormatter``, so every line on stderr has one
format, console or JSON.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from flat_tasks.config import Settings

# Installed on the root logger; replaced when logging is reconfigured
_handler: logging.Handler | None = None


def _renderer(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def configure_logging(settings: "Settings | None" = None) -> None:
    """Route structlog and stdlib logging to stderr at the configured level.

    Args:
        settings: Application settings. If None, logs warnings and above
            in console format.
    """
    global _handler

    log_level = logging.WARNING
    log_format = "console"
    if settings is not None:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
        log_format = settings.log_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer(log_format),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(log_level)
    _handler = handler

    # werkzeug pins its own logger to INFO on first use unless a level is set
    logging.getLogger("werkzeug").setLevel(log_level)


def bind_context(**kwargs: object) -> None:
    """Attach key/values to every log line in the current context.

    The web layer binds the request method and path here.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with bind_context."""
    structlog.contextvars.clear_contextvars()


class Loggers:
    """Named loggers for the application's components."""

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        return structlog.get_logger("flat_tasks.store")

    @staticmethod
    def service() -> structlog.stdlib.BoundLogger:
        return structlog.get_logger("flat_tasks.service")

    @staticmethod
    def web() -> structlog.stdlib.BoundLogger:
        return structlog.get_logger("flat_tasks.web")

    @staticmethod
    def config() -> structlog.stdlib.BoundLogger:
        return structlog.get_logger("flat_tasks.config")
