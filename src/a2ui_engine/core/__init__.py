"""Core utilities and infrastructure."""

from .config import Limits, Settings, get_settings
from .errors import (
    AmbiguousMessageType,
    CapabilityViolation,
    ErrorKind,
    IdleTimeout,
    Issue,
    MalformedDocument,
    MessageRejected,
    ProtocolError,
    RootNotDefined,
    StructuralViolation,
    UnknownMessageType,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import JSONParseError, decode_document, dumps_bytes, nesting_depth, safe_json_dumps, serialized_size


def create_container(settings=None, metrics=None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings, metrics)


__all__ = [
    # Config
    "Limits",
    "Settings",
    "get_settings",
    # Errors
    "ErrorKind",
    "Issue",
    "ProtocolError",
    "IdleTimeout",
    "MessageRejected",
    "MalformedDocument",
    "UnknownMessageType",
    "AmbiguousMessageType",
    "StructuralViolation",
    "CapabilityViolation",
    "RootNotDefined",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "JSONParseError",
    "decode_document",
    "dumps_bytes",
    "nesting_depth",
    "safe_json_dumps",
    "serialized_size",
    # DI
    "create_container",
]
