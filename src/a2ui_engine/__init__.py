"""A2UI protocol engine: decode, validate and apply streamed UI messages."""

__version__ = "0.1.0"

from .catalog import CatalogRegistry
from .core import IdleTimeout, Limits, MessageRejected, ProtocolError, Settings, get_settings
from .pipeline import StreamProcessor, StreamReport
from .protocol import EnvelopeValidator
from .surface import Surface, resolve, resolve_action, resolve_number

__all__ = [
    "CatalogRegistry",
    "EnvelopeValidator",
    "Surface",
    "StreamProcessor",
    "StreamReport",
    "Settings",
    "Limits",
    "get_settings",
    "ProtocolError",
    "IdleTimeout",
    "MessageRejected",
    "resolve",
    "resolve_number",
    "resolve_action",
]
