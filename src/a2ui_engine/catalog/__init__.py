"""Component catalog: registry, schema data and typed component kinds."""

from .components import COMPONENT_MODELS, CatalogComponent, UnknownComponent, parse_component
from .registry import CatalogRegistry, CheckSummary, ComponentCheck, KindSchema
from .schema import CATALOG_DEFINITION, CATALOG_ID, CATALOG_VERSION
from .values import (
    ActionContract,
    ContextEntry,
    LiteralString,
    PathBinding,
    is_path_binding,
)


def catalog_metadata() -> dict:
    """Catalog id, version and per-kind descriptions of the built-in catalog."""
    return CatalogRegistry().metadata()


__all__ = [
    "CATALOG_DEFINITION",
    "CATALOG_ID",
    "CATALOG_VERSION",
    "CatalogRegistry",
    "KindSchema",
    "ComponentCheck",
    "CheckSummary",
    "CatalogComponent",
    "UnknownComponent",
    "COMPONENT_MODELS",
    "parse_component",
    "ActionContract",
    "ContextEntry",
    "LiteralString",
    "PathBinding",
    "is_path_binding",
    "catalog_metadata",
]
