"""Surface state, data binding, action resolution and the render walk."""

from .actions import ResolvedActionEvent, resolve_action
from .binding import resolve, resolve_number, sanitize_url
from .render import RenderNode, build_render_tree
from .state import ApplyOutcome, Surface, SurfaceSnapshot, SurfaceState

__all__ = [
    "Surface",
    "SurfaceSnapshot",
    "SurfaceState",
    "ApplyOutcome",
    "resolve",
    "resolve_number",
    "sanitize_url",
    "resolve_action",
    "ResolvedActionEvent",
    "RenderNode",
    "build_render_tree",
]
