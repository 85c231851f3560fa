"""
Structured Logging
structlog setup for the engine. Producer text can be arbitrarily long, so
string fields are clipped before rendering.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger
from structlog.typing import EventDict, WrappedLogger

from .. import __version__

MAX_FIELD_LENGTH = 500


def clip_long_values(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Shorten string fields (rejected lines, producer errors) to MAX_FIELD_LENGTH."""
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str) and len(value) > MAX_FIELD_LENGTH:
            event_dict[key] = f"{value[:MAX_FIELD_LENGTH]}... ({len(value)} chars)"
    return event_dict


def add_engine_version(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("engine", __version__)
    return event_dict


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure stdlib logging and structlog.

    JSON logs go to stdout for log shippers; console logs go to stderr so
    CLI output on stdout stays machine-readable.

    Args:
        level: Log level name
        json_logs: Render events as JSON
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_logs:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.basicConfig(level=log_level, handlers=[handler], force=True)
    else:
        logging.basicConfig(level=log_level, format="%(message)s", stream=sys.stderr, force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_engine_version,
            structlog.processors.TimeStamper(fmt="iso"),
            clip_long_values,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class LogContext:
    """
    Bind fields (stream, surface ids) to every event logged in scope.

    Nested contexts restore the outer values on exit.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self.tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self.tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self.tokens)
