"""Protocol error taxonomy."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Named failure classes reported by the engine."""

    IDLE_TIMEOUT = "idle_timeout"
    MALFORMED_DOCUMENT = "malformed_document"
    UNKNOWN_MESSAGE_TYPE = "unknown_message_type"
    AMBIGUOUS_MESSAGE_TYPE = "ambiguous_message_type"
    STRUCTURAL_VIOLATION = "structural_violation"
    CAPABILITY_VIOLATION = "capability_violation"
    ROOT_NOT_DEFINED = "root_not_defined"


@dataclass(frozen=True)
class Issue:
    """Advisory finding attached to an accepted message (a schema warning)."""

    message: str
    component_id: str | None = None
    index: int | None = None

    def __str__(self) -> str:
        return self.message


class ProtocolError(Exception):
    """Base class for every engine failure."""

    kind: ErrorKind


class IdleTimeout(ProtocolError):
    """No fragment arrived before the idle timer elapsed. Fatal to the stream."""

    kind = ErrorKind.IDLE_TIMEOUT

    def __init__(self, timeout: float, lines_decoded: int = 0, messages_applied: int = 0) -> None:
        super().__init__(f"No data received for {timeout:g}s")
        self.timeout = timeout
        self.lines_decoded = lines_decoded
        self.messages_applied = messages_applied


class MessageRejected(ProtocolError):
    """One candidate line or message was refused; the stream continues."""

    kind: ErrorKind

    def __init__(self, errors: list[str], warnings: list[str] | None = None) -> None:
        super().__init__("; ".join(errors) if errors else self.kind.value)
        self.errors = list(errors)
        self.warnings = list(warnings or [])


class MalformedDocument(MessageRejected):
    """Candidate line is not a JSON object."""

    kind = ErrorKind.MALFORMED_DOCUMENT


class UnknownMessageType(MessageRejected):
    """No recognised discriminator key."""

    kind = ErrorKind.UNKNOWN_MESSAGE_TYPE


class AmbiguousMessageType(MessageRejected):
    """More than one recognised discriminator key."""

    kind = ErrorKind.AMBIGUOUS_MESSAGE_TYPE


class StructuralViolation(MessageRejected):
    """Missing field, wrong type, or a size cap exceeded."""

    kind = ErrorKind.STRUCTURAL_VIOLATION


class CapabilityViolation(MessageRejected):
    """Component kind not present in the catalog."""

    kind = ErrorKind.CAPABILITY_VIOLATION


class RootNotDefined(ProtocolError):
    """Rendering was requested before the root node arrived."""

    kind = ErrorKind.ROOT_NOT_DEFINED

    def __init__(self, surface_id: str, root_id: str) -> None:
        super().__init__(f"Surface {surface_id!r} has no root component {root_id!r}")
        self.surface_id = surface_id
        self.root_id = root_id
