"""Fast JSON decoding and encoding for protocol documents."""

from typing import Any
import json

import msgspec
import orjson

_decoder = msgspec.json.Decoder()
_encoder = msgspec.json.Encoder()


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def decode_document(text: str | bytes) -> dict[str, Any]:
    """
    Parse one candidate line as a JSON object.

    Malformed input is never repaired: a line that does not parse is
    reported and dropped by the caller.

    Args:
        text: Candidate line

    Returns:
        Parsed JSON object

    Raises:
        JSONParseError: If the text is not valid JSON or not an object
    """
    raw = text.encode("utf-8") if isinstance(text, str) else text
    try:
        result = _decoder.decode(raw)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected JSON object, got {type(result).__name__}")
    return result


def dumps_bytes(obj: Any) -> bytes:
    """Encode to compact JSON bytes using the fastest encoder that accepts the value."""
    try:
        return orjson.dumps(obj)
    except TypeError:
        # orjson rejects integers outside the 64-bit range
        return _encoder.encode(obj)


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        return dumps_bytes(obj).decode("utf-8")

    # Use stdlib for pretty-printed output
    return json.dumps(obj, indent=indent, ensure_ascii=False, default=str)


def serialized_size(obj: Any) -> int:
    """Size in bytes of the compact UTF-8 JSON encoding of ``obj``."""
    return len(dumps_bytes(obj))


def nesting_depth(obj: Any, limit: int | None = None) -> int:
    """
    Depth of nested objects and arrays in ``obj`` (scalars are 0).

    Walks iteratively so arbitrarily deep input cannot exhaust the stack.
    Stops early and returns ``limit + 1`` once ``limit`` is exceeded.
    """
    deepest = 0
    pending: list[tuple[Any, int]] = [(obj, 1)]
    while pending:
        value, depth = pending.pop()
        if isinstance(value, dict):
            children = value.values()
        elif isinstance(value, (list, tuple)):
            children = value
        else:
            continue
        deepest = max(deepest, depth)
        if limit is not None and deepest > limit:
            return deepest
        pending.extend((child, depth + 1) for child in children)
    return deepest
