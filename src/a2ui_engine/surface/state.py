"""
Surface State Machine
Owns one surface's component tree and data model and applies messages to it.
"""

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import ValidationError

from ..catalog.components import CatalogComponent
from ..catalog.registry import CatalogRegistry
from ..catalog.values import ACTION_PROPERTIES
from ..core.errors import StructuralViolation
from ..core.logging_config import get_logger
from ..protocol.models import (
    ROOT_ID,
    BeginRendering,
    CreateSurface,
    DataModelOp,
    DeleteSurface,
    Envelope,
    UpdateComponents,
    UpdateDataModel,
    ValidatedMessage,
)
from .actions import ResolvedActionEvent, is_action_contract, resolve_action
from .data_model import apply_update
from .render import RenderNode, build_render_tree

logger = get_logger(__name__)


class SurfaceState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    DELETED = "deleted"


class ApplyOutcome(str, Enum):
    APPLIED = "applied"
    IGNORED = "ignored"


@dataclass(frozen=True)
class SurfaceSnapshot:
    """
    Immutable view of a surface at one point in time.

    Readers hold a snapshot for as long as they like; every transition
    builds a new one and swaps it in whole, so a reader never sees a tree
    from one message paired with a data model from another.
    """

    surface_id: str
    state: SurfaceState = SurfaceState.UNINITIALIZED
    components: Mapping[str, CatalogComponent] = field(default_factory=lambda: MappingProxyType({}))
    data_model: dict[str, Any] = field(default_factory=dict)
    catalog_id: str | None = None
    root_id: str = ROOT_ID
    ready: bool = False
    version: int = 0

    @property
    def has_root(self) -> bool:
        return self.root_id in self.components

    def to_dict(self) -> dict[str, Any]:
        return {
            "surfaceId": self.surface_id,
            "state": self.state.value,
            "catalogId": self.catalog_id,
            "root": self.root_id,
            "ready": self.ready,
            "version": self.version,
            "components": [component.to_wire() for component in self.components.values()],
            "dataModel": self.data_model,
        }


class Surface:
    """
    One named surface.

    Messages addressed to a different surface id are ignored. Each call to
    ``apply`` is atomic with respect to ``snapshot`` readers.
    """

    def __init__(
        self,
        surface_id: str,
        registry: CatalogRegistry | None = None,
        require_create: bool = False,
        max_depth: int = 10,
    ) -> None:
        self.surface_id = surface_id
        self.registry = registry or CatalogRegistry()
        self.require_create = require_create
        self.max_depth = max_depth
        self._lock = threading.Lock()
        self._snapshot = SurfaceSnapshot(surface_id=surface_id)

    # Reads

    @property
    def snapshot(self) -> SurfaceSnapshot:
        return self._snapshot

    @property
    def state(self) -> SurfaceState:
        return self._snapshot.state

    @property
    def components(self) -> Mapping[str, CatalogComponent]:
        return self._snapshot.components

    @property
    def data_model(self) -> dict[str, Any]:
        return self._snapshot.data_model

    # Transitions

    def apply(self, message: ValidatedMessage | Envelope) -> ApplyOutcome:
        """
        Apply one validated message.

        Args:
            message: Validated message (or bare envelope)

        Returns:
            APPLIED, or IGNORED for another surface's message, a producer
            error, or an update the lifecycle does not allow

        Raises:
            StructuralViolation: If a data model update cannot be applied
        """
        envelope = message.message if isinstance(message, ValidatedMessage) else message
        if envelope.surface_id != self.surface_id:
            logger.debug(
                "message_ignored",
                surface_id=self.surface_id,
                target=envelope.surface_id,
                type=envelope.message_type.value,
                reason="surface_mismatch",
            )
            return ApplyOutcome.IGNORED

        with self._lock:
            current = self._snapshot
            updated = self._transition(current, envelope)
            if updated is None:
                return ApplyOutcome.IGNORED
            self._snapshot = replace(updated, version=current.version + 1)
        return ApplyOutcome.APPLIED

    def _transition(self, current: SurfaceSnapshot, envelope: Envelope) -> SurfaceSnapshot | None:
        if isinstance(envelope, CreateSurface):
            logger.info("surface_created", surface_id=self.surface_id, catalog_id=envelope.catalog_id)
            return SurfaceSnapshot(
                surface_id=self.surface_id,
                state=SurfaceState.ACTIVE,
                catalog_id=envelope.catalog_id,
            )

        if isinstance(envelope, DeleteSurface):
            logger.info("surface_deleted", surface_id=self.surface_id, components=len(current.components))
            return SurfaceSnapshot(surface_id=self.surface_id, state=SurfaceState.DELETED)

        if isinstance(envelope, BeginRendering):
            active = self._activate(current, implicit_allowed=True)
            return replace(active, root_id=envelope.root, catalog_id=envelope.catalog_id, ready=True)

        if isinstance(envelope, UpdateComponents):
            active = self._activate(current)
            if active is None:
                return None
            components = dict(active.components)
            for component in envelope.components:
                components[component.id] = component
            return replace(
                active,
                components=MappingProxyType(components),
                ready=active.ready or active.root_id in components,
            )

        if isinstance(envelope, UpdateDataModel):
            active = self._activate(current)
            if active is None:
                return None
            try:
                data_model = apply_update(active.data_model, envelope.op, envelope.path, envelope.value)
            except ValueError as e:
                raise StructuralViolation([str(e)]) from e
            return replace(active, data_model=data_model)

        logger.debug(
            "message_ignored",
            surface_id=self.surface_id,
            type=envelope.message_type.value,
            reason="not_applicable",
        )
        return None

    def _activate(self, current: SurfaceSnapshot, implicit_allowed: bool = False) -> SurfaceSnapshot | None:
        if current.state is SurfaceState.ACTIVE:
            return current
        if self.require_create and not implicit_allowed:
            logger.debug(
                "message_ignored",
                surface_id=self.surface_id,
                state=current.state.value,
                reason="surface_not_created",
            )
            return None
        return replace(current, state=SurfaceState.ACTIVE)

    # UI-side operations

    def write(self, path: str, value: Any) -> None:
        """
        Store a value the user entered (e.g. a form field) at ``path``.

        Raises:
            ValueError: If the root would be replaced by a non-object
        """
        with self._lock:
            current = self._snapshot
            data_model = apply_update(current.data_model, DataModelOp.REPLACE, path, value)
            self._snapshot = replace(current, data_model=data_model, version=current.version + 1)

    def dispatch_action(self, component_id: str, now: datetime | None = None) -> ResolvedActionEvent | None:
        """
        Resolve the action declared on ``component_id`` against the current data model.

        Returns:
            The resolved event, or None when the node is unknown or declares
            no usable name/context action
        """
        snapshot = self._snapshot
        component = snapshot.components.get(component_id)
        if component is None:
            logger.warning("action_unknown_component", surface_id=self.surface_id, component_id=component_id)
            return None

        props = component.properties()
        for prop in ACTION_PROPERTIES:
            action = props.get(prop)
            if action is None or not is_action_contract(action):
                continue
            try:
                event = resolve_action(action, component_id, self.surface_id, snapshot.data_model, now)
            except ValidationError as e:
                logger.warning(
                    "action_invalid",
                    surface_id=self.surface_id,
                    component_id=component_id,
                    property=prop,
                    errors=[error["msg"] for error in e.errors()],
                )
                return None
            logger.info("action_resolved", surface_id=self.surface_id, component_id=component_id, name=event.name)
            return event
        return None

    def render(self) -> RenderNode:
        """
        Build the resolved render tree for the current snapshot.

        Raises:
            RootNotDefined: If no root node has arrived yet
        """
        return build_render_tree(self._snapshot, self.registry, self.max_depth)


__all__ = ["Surface", "SurfaceSnapshot", "SurfaceState", "ApplyOutcome"]
