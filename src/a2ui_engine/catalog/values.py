"""Property value types: literals, path bindings and action contracts."""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator


class PathBinding(BaseModel):
    """Declarative reference into the data model, e.g. ``{"path": "/amount"}``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: StrictStr


class LiteralString(BaseModel):
    """Legacy literal wrapper, ``{"literalString": "Hi"}``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    literalString: StrictStr


StringOrPath = Union[StrictStr, StrictInt, StrictFloat, PathBinding, LiteralString]
NumberOrPath = Union[StrictInt, StrictFloat, StrictStr, PathBinding]
BoolOrPath = Union[bool, PathBinding]


def is_path_binding(value: Any) -> bool:
    """True for a path binding in model or raw wire form."""
    if isinstance(value, PathBinding):
        return True
    return isinstance(value, dict) and isinstance(value.get("path"), str)


class ContextEntry(BaseModel):
    """One ``key -> literal-or-binding`` pair of an action context."""

    model_config = ConfigDict(frozen=True)

    key: StrictStr
    value: Any = None

    @field_validator("value", mode="before")
    @classmethod
    def bind_paths(cls, v: Any) -> Any:
        """Turn any object with a string ``path`` into a PathBinding; everything else is a literal."""
        if isinstance(v, dict) and is_path_binding(v):
            return PathBinding(path=v["path"])
        return v


class ActionContract(BaseModel):
    """Action declared on an interactive node: a name plus a context template."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: StrictStr = Field(min_length=1)
    context: list[ContextEntry] = Field(default_factory=list)

    @field_validator("context", mode="before")
    @classmethod
    def context_from_mapping(cls, v: Any) -> Any:
        """Accept ``{"key": value}`` mappings as well as entry lists."""
        if v is None:
            return []
        if isinstance(v, dict):
            return [{"key": key, "value": value} for key, value in v.items()]
        return v


# Properties that carry an action
ACTION_PROPERTIES = ("action", "onClick")

# A name/context action, or a legacy event descriptor passed through untouched
ActionProperty = Union[ActionContract, dict[str, Any]]


def action_field() -> Any:
    """Optional action field that prefers the name/context contract over a raw descriptor."""
    return Field(default=None, union_mode="left_to_right")


__all__ = [
    "PathBinding",
    "LiteralString",
    "StringOrPath",
    "NumberOrPath",
    "BoolOrPath",
    "ContextEntry",
    "ActionContract",
    "ActionProperty",
    "ACTION_PROPERTIES",
    "action_field",
    "is_path_binding",
]
