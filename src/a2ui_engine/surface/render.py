"""
Render walk.

Builds a resolved, depth-bounded view of a surface for an external renderer.
Children and reference slots are expanded from an explicit work-list where
every queued node carries its depth, so cycles and deep chains end in
truncated markers instead of unbounded recursion. Children that have not
arrived yet become placeholders.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..catalog.components import CatalogComponent
from ..catalog.registry import CatalogRegistry
from ..catalog.values import ActionContract, LiteralString, PathBinding
from ..core.errors import RootNotDefined
from ..core.logging_config import get_logger
from .binding import resolve, resolve_number, sanitize_url
from .data_model import lookup

if TYPE_CHECKING:
    from .state import SurfaceSnapshot

logger = get_logger(__name__)

DEFAULT_MAX_NODES = 10_000


@dataclass
class RenderNode:
    """One node of the resolved tree."""

    id: str
    component: str
    depth: int
    props: dict[str, Any] = field(default_factory=dict)
    children: list["RenderNode"] = field(default_factory=list)
    slots: dict[str, "RenderNode"] = field(default_factory=dict)
    placeholder: bool = False
    truncated: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "component": self.component}
        if self.placeholder:
            data["placeholder"] = True
        if self.truncated:
            data["truncated"] = True
        if self.props:
            data["props"] = self.props
        if self.slots:
            data["slots"] = {name: slot.to_dict() for name, slot in self.slots.items()}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


class _RenderWalk:
    def __init__(
        self,
        snapshot: "SurfaceSnapshot",
        registry: CatalogRegistry,
        max_depth: int,
        max_nodes: int,
    ) -> None:
        self.snapshot = snapshot
        self.registry = registry
        self.max_depth = max_depth
        self.max_nodes = max_nodes
        self.expanded = 0
        self.queue: deque[tuple[RenderNode, CatalogComponent]] = deque()

    def run(self) -> RenderNode:
        root = self.snapshot.components.get(self.snapshot.root_id)
        if root is None:
            raise RootNotDefined(self.snapshot.surface_id, self.snapshot.root_id)

        tree = self._open(root, 0)
        while self.queue:
            node, component = self.queue.popleft()
            for child_id in component.children:
                node.children.append(self._expand(child_id, node.depth + 1))
            for prop in sorted(self.registry.reference_properties(component.component)):
                ref = component.properties().get(prop)
                if isinstance(ref, str) and ref:
                    node.slots[prop] = self._expand(ref, node.depth + 1)
        return tree

    def _expand(self, node_id: str, depth: int) -> RenderNode:
        if depth > self.max_depth or self.expanded >= self.max_nodes:
            logger.warning(
                "render_depth_exceeded",
                surface_id=self.snapshot.surface_id,
                node_id=node_id,
                depth=depth,
                max_depth=self.max_depth,
                reason="depth" if depth > self.max_depth else "node_budget",
            )
            return RenderNode(id=node_id, component="", depth=depth, truncated=True)

        component = self.snapshot.components.get(node_id)
        if component is None:
            logger.debug("render_missing_node", surface_id=self.snapshot.surface_id, node_id=node_id)
            return RenderNode(id=node_id, component="", depth=depth, placeholder=True)
        return self._open(component, depth)

    def _open(self, component: CatalogComponent, depth: int) -> RenderNode:
        self.expanded += 1
        node = RenderNode(
            id=component.id,
            component=component.component,
            depth=depth,
            props=self._resolve_props(component),
        )
        self.queue.append((node, component))
        return node

    def _resolve_props(self, component: CatalogComponent) -> dict[str, Any]:
        kind = component.component
        references = self.registry.reference_properties(kind)
        numeric = self.registry.numeric_properties(kind)
        urls = self.registry.url_properties(kind)
        data_model = self.snapshot.data_model

        props: dict[str, Any] = {}
        for name, value in component.properties().items():
            if name in references:
                continue
            if name in urls:
                props[name] = sanitize_url(resolve(value, data_model))
            elif name in numeric:
                props[name] = resolve_number(value, data_model)
            elif isinstance(value, PathBinding):
                raw = lookup(data_model, value.path)
                props[name] = raw if isinstance(raw, bool) else resolve(value, data_model)
            elif isinstance(value, LiteralString):
                props[name] = value.literalString
            elif isinstance(value, ActionContract):
                # Declared only; context is resolved when the action fires
                props[name] = value.model_dump(mode="json")
            else:
                props[name] = value
        return props


def build_render_tree(
    snapshot: "SurfaceSnapshot",
    registry: CatalogRegistry,
    max_depth: int = 10,
    max_nodes: int = DEFAULT_MAX_NODES,
) -> RenderNode:
    """
    Resolve a snapshot into a render tree rooted at its root node.

    Args:
        snapshot: Surface snapshot to render
        registry: Catalog used for reference, numeric and URL properties
        max_depth: Deepest level expanded; deeper nodes become truncated markers
        max_nodes: Total expansion budget for one walk

    Returns:
        The root RenderNode

    Raises:
        RootNotDefined: If the snapshot has no node with the root id
    """
    return _RenderWalk(snapshot, registry, max_depth, max_nodes).run()


__all__ = ["RenderNode", "build_render_tree", "DEFAULT_MAX_NODES"]
