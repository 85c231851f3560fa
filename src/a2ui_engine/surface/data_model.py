"""
Data model path operations.

Paths are slash-delimited (``/user/name``); empty segments are ignored so
``""``, ``"/"`` and ``"//"`` all address the root. ``~1`` and ``~0`` escape
``/`` and ``~`` inside a key. Reads may step through lists by index; writes
only ever step through objects and create them on demand.

Every write returns a new model and leaves its input untouched, so a
snapshot handed to a reader can never change underneath it.
"""

import copy
from typing import Any

from ..protocol.models import DataModelOp

_MISSING = object()


def split_path(path: str) -> list[str]:
    """Split a slash path into unescaped segments."""
    return [segment.replace("~1", "/").replace("~0", "~") for segment in path.split("/") if segment]


def lookup(model: Any, path: str | list[str]) -> Any:
    """
    Walk ``path`` through ``model``.

    Returns:
        The value at the path, or None when any segment is absent
    """
    segments = split_path(path) if isinstance(path, str) else path
    current = model
    for segment in segments:
        if isinstance(current, dict):
            current = current.get(segment, _MISSING)
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            return None
        if current is _MISSING:
            return None
    return current


def apply_update(model: dict[str, Any], op: DataModelOp, path: str, value: Any = None) -> dict[str, Any]:
    """
    Apply one add/replace/remove at ``path`` and return the new model.

    - replace: set the value at the path (at the root, the value becomes the model)
    - add: shallow-merge when both the existing and new values are objects, else set
    - remove: delete the key; a missing path is a no-op; the root resets to ``{}``

    Applying the same update twice yields the same model as applying it once.

    Raises:
        ValueError: If the root would be set to something other than an object
    """
    segments = split_path(path)
    value = copy.deepcopy(value)

    if not segments:
        if op is DataModelOp.REMOVE:
            return {}
        if not isinstance(value, dict):
            raise ValueError("Data model root must be an object")
        if op is DataModelOp.ADD:
            return {**copy.deepcopy(model), **value}
        return value

    result = copy.deepcopy(model)

    if op is DataModelOp.REMOVE:
        parent = lookup(result, segments[:-1])
        if isinstance(parent, dict):
            parent.pop(segments[-1], None)
        return result

    parent = result
    for segment in segments[:-1]:
        child = parent.get(segment)
        if not isinstance(child, dict):
            child = {}
            parent[segment] = child
        parent = child

    key = segments[-1]
    existing = parent.get(key)
    if op is DataModelOp.ADD and isinstance(existing, dict) and isinstance(value, dict):
        parent[key] = {**existing, **value}
    else:
        parent[key] = value
    return result


__all__ = ["split_path", "lookup", "apply_update"]
