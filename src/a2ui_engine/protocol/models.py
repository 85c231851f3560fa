"""
Protocol Message Models
Typed envelopes produced by the validator and consumed by surfaces.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..catalog.components import CatalogComponent
from ..core.errors import Issue


class MessageType(str, Enum):
    """Normalized message type. Legacy wire names map onto these."""

    CREATE_SURFACE = "createSurface"
    UPDATE_COMPONENTS = "updateComponents"
    UPDATE_DATA_MODEL = "updateDataModel"
    DELETE_SURFACE = "deleteSurface"
    BEGIN_RENDERING = "beginRendering"
    ERROR = "error"


# Recognised top-level discriminator keys (current names first, then legacy)
MESSAGE_KEYS: Mapping[str, MessageType] = {
    "createSurface": MessageType.CREATE_SURFACE,
    "updateComponents": MessageType.UPDATE_COMPONENTS,
    "updateDataModel": MessageType.UPDATE_DATA_MODEL,
    "deleteSurface": MessageType.DELETE_SURFACE,
    "surfaceUpdate": MessageType.UPDATE_COMPONENTS,
    "dataModelUpdate": MessageType.UPDATE_DATA_MODEL,
    "beginRendering": MessageType.BEGIN_RENDERING,
}

LEGACY_KEYS = frozenset({"surfaceUpdate", "dataModelUpdate", "beginRendering"})

ROOT_ID = "root"


class DataModelOp(str, Enum):
    ADD = "add"
    REPLACE = "replace"
    REMOVE = "remove"


class Envelope(BaseModel):
    """Base for every validated message body."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message_type: ClassVar[MessageType]

    surface_id: str


class CreateSurface(Envelope):
    message_type: ClassVar[MessageType] = MessageType.CREATE_SURFACE

    catalog_id: str = Field(min_length=1)


class UpdateComponents(Envelope):
    message_type: ClassVar[MessageType] = MessageType.UPDATE_COMPONENTS

    components: tuple[CatalogComponent, ...] = ()


class UpdateDataModel(Envelope):
    """
    Path-scoped data model mutation.

    ``path`` is slash-delimited; ``"/"`` (or empty) addresses the whole model.
    """

    message_type: ClassVar[MessageType] = MessageType.UPDATE_DATA_MODEL

    path: str = "/"
    op: DataModelOp = DataModelOp.REPLACE
    value: Any = None


class DeleteSurface(Envelope):
    message_type: ClassVar[MessageType] = MessageType.DELETE_SURFACE


class BeginRendering(Envelope):
    message_type: ClassVar[MessageType] = MessageType.BEGIN_RENDERING

    root: str = Field(min_length=1)
    catalog_id: str = Field(min_length=1)


class ProducerError(Envelope):
    """Error the producer reported in-band. Reported, never applied."""

    message_type: ClassVar[MessageType] = MessageType.ERROR

    surface_id: str = ""
    message: str = ""
    detail: Any = None


@dataclass(frozen=True)
class ValidatedMessage:
    """An accepted message plus the advisory issues found while checking it."""

    message: Envelope
    wire_key: str
    warnings: tuple[Issue, ...] = field(default_factory=tuple)

    @property
    def type(self) -> MessageType:
        return self.message.message_type

    @property
    def surface_id(self) -> str:
        return self.message.surface_id

    @property
    def is_legacy(self) -> bool:
        return self.wire_key in LEGACY_KEYS


__all__ = [
    "MessageType",
    "MESSAGE_KEYS",
    "LEGACY_KEYS",
    "ROOT_ID",
    "DataModelOp",
    "Envelope",
    "CreateSurface",
    "UpdateComponents",
    "UpdateDataModel",
    "DeleteSurface",
    "BeginRendering",
    "ProducerError",
    "ValidatedMessage",
]
