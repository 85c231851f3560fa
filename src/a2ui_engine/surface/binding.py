"""
Data-Binding Resolver
Resolves literal-or-path property values against a data model snapshot.
"""

import math
import re
from typing import Any

from ..catalog.values import LiteralString, PathBinding
from ..core.json import dumps_bytes
from .data_model import lookup

SAFE_URL_PREFIXES = ("http://", "https://", "data:image/")

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def stringify(value: Any) -> str:
    """
    Render a data model value as display text.

    Integral floats drop their ``.0``, booleans are ``true``/``false``,
    objects and arrays become compact JSON, None becomes ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return dumps_bytes(value).decode("utf-8")


def binding_path(binding: Any) -> str | None:
    """Path of a binding in model or wire form, else None."""
    if isinstance(binding, PathBinding):
        return binding.path
    if isinstance(binding, dict) and isinstance(binding.get("path"), str):
        return binding["path"]
    return None


def resolve(binding: Any, data_model: dict[str, Any]) -> str:
    """
    Resolve a string-or-path value to display text.

    Literals pass through (numbers are stringified). A path is walked through
    the data model; any missing segment resolves to ``""``. Never raises.

    Args:
        binding: Literal, ``{"path": ...}``, or legacy ``{"literalString": ...}``
        data_model: Current data model snapshot

    Returns:
        Resolved text
    """
    if binding is None:
        return ""
    if isinstance(binding, str):
        return binding
    if isinstance(binding, (int, float)):
        return stringify(binding)

    path = binding_path(binding)
    if path is not None:
        return stringify(lookup(data_model, path))

    if isinstance(binding, LiteralString):
        return binding.literalString
    if isinstance(binding, dict) and isinstance(binding.get("literalString"), str):
        return binding["literalString"]
    return ""


def resolve_number(binding: Any, data_model: dict[str, Any]) -> float | int:
    """
    Resolve a number-or-path value, defaulting to zero.

    Strings are read like ``parseFloat``: the longest numeric prefix counts,
    anything unparseable is 0.
    """
    if binding is None or isinstance(binding, bool):
        return 0
    if isinstance(binding, (int, float)):
        return 0 if isinstance(binding, float) and math.isnan(binding) else binding

    path = binding_path(binding)
    if path is not None:
        value = lookup(data_model, path)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value if math.isfinite(value) else 0

    match = _NUMBER_PREFIX.match(resolve(binding, data_model))
    if not match:
        return 0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0


def resolve_bool(binding: Any, data_model: dict[str, Any]) -> bool:
    """Resolve a boolean-or-path value. Missing data is False."""
    if isinstance(binding, bool):
        return binding
    path = binding_path(binding)
    if path is None:
        return bool(binding)
    value = lookup(data_model, path)
    if isinstance(value, str):
        return value not in ("", "false", "0")
    return bool(value)


def sanitize_url(url: Any) -> str:
    """
    Allow http(s), inline images and relative paths; blank everything else.

    ``javascript:``, ``vbscript:``, ``data:text/html`` and any other scheme
    resolve to ``""``. Safe values are returned in their original case.
    """
    if not isinstance(url, str):
        return ""
    lowered = url.strip().lower()
    if lowered.startswith(SAFE_URL_PREFIXES):
        return url
    if ":" not in lowered:
        return url
    return ""


__all__ = ["stringify", "binding_path", "resolve", "resolve_number", "resolve_bool", "sanitize_url"]
