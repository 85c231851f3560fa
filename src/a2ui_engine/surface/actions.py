"""
Action Resolver
Turns a triggered action contract into a fully resolved outbound event.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from ..catalog.values import ActionContract, PathBinding
from ..core.json import dumps_bytes
from .binding import resolve


@dataclass(frozen=True)
class ResolvedActionEvent:
    """One user interaction, ready to send back to the producer."""

    name: str
    surface_id: str
    source_component_id: str
    timestamp: datetime
    context: dict[str, Any] = field(default_factory=dict)

    def iso_timestamp(self) -> str:
        """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
        return (
            self.timestamp.astimezone(timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

    def to_message(self) -> dict[str, Any]:
        return {
            "userAction": {
                "name": self.name,
                "surfaceId": self.surface_id,
                "sourceComponentId": self.source_component_id,
                "timestamp": self.iso_timestamp(),
                "context": self.context,
            }
        }

    def to_json(self) -> str:
        return dumps_bytes(self.to_message()).decode("utf-8")


def is_action_contract(value: Any) -> bool:
    """True for a ``{name, context}`` contract, False for legacy event descriptors."""
    if isinstance(value, ActionContract):
        return True
    return isinstance(value, Mapping) and isinstance(value.get("name"), str) and bool(value["name"])


def resolve_action(
    action: ActionContract | Mapping[str, Any],
    source_component_id: str,
    surface_id: str,
    data_model: dict[str, Any],
    now: datetime | None = None,
) -> ResolvedActionEvent:
    """
    Resolve every context entry of an action against the data model.

    Path bindings are looked up in ``data_model`` as it is at call time;
    every other value is passed through unchanged. Pure: no I/O, no mutation.

    Args:
        action: Declared contract (model or raw wire mapping)
        source_component_id: Node the user interacted with
        surface_id: Surface that owns the node
        data_model: Data model snapshot at dispatch time
        now: Timestamp override

    Returns:
        ResolvedActionEvent

    Raises:
        pydantic.ValidationError: If a raw mapping is not a valid contract
    """
    contract = action if isinstance(action, ActionContract) else ActionContract.model_validate(action)

    context: dict[str, Any] = {}
    for entry in contract.context:
        if isinstance(entry.value, PathBinding):
            context[entry.key] = resolve(entry.value, data_model)
        else:
            context[entry.key] = entry.value

    return ResolvedActionEvent(
        name=contract.name,
        surface_id=surface_id,
        source_component_id=source_component_id,
        timestamp=now or datetime.now(timezone.utc),
        context=context,
    )


__all__ = ["ResolvedActionEvent", "resolve_action", "is_action_contract"]
