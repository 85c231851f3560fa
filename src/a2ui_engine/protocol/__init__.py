"""Wire message types and the envelope validator."""

from .models import (
    BeginRendering,
    CreateSurface,
    DataModelOp,
    DeleteSurface,
    Envelope,
    MessageType,
    ProducerError,
    UpdateComponents,
    UpdateDataModel,
    ValidatedMessage,
)
from .validator import EnvelopeValidator

__all__ = [
    "MessageType",
    "DataModelOp",
    "Envelope",
    "CreateSurface",
    "UpdateComponents",
    "UpdateDataModel",
    "DeleteSurface",
    "BeginRendering",
    "ProducerError",
    "ValidatedMessage",
    "EnvelopeValidator",
]
