"""
Catalog Registry
Read-only lookup of permitted component kinds and their property schemas.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from ..core.errors import Issue
from ..core.logging_config import get_logger
from .schema import CATALOG_DEFINITION, COMMON_PROPERTIES

logger = get_logger(__name__)


@dataclass(frozen=True)
class KindSchema:
    """Property schema for one component kind."""

    name: str
    description: str
    required: frozenset[str]
    known: frozenset[str]
    enums: Mapping[str, frozenset[str]]
    references: frozenset[str] = frozenset()
    numeric: frozenset[str] = frozenset()
    urls: frozenset[str] = frozenset()


@dataclass
class ComponentCheck:
    """Result of checking one component against its kind schema."""

    valid: bool
    warnings: list[Issue] = field(default_factory=list)
    errors: list[Issue] = field(default_factory=list)


@dataclass
class CheckSummary:
    """Result of checking every component in one message."""

    total: int = 0
    valid: int = 0
    warnings: list[Issue] = field(default_factory=list)
    errors: list[Issue] = field(default_factory=list)


class CatalogRegistry:
    """
    Static registry of component kinds.

    Built once from a catalog definition and never mutated afterwards.
    Lookups for unknown kinds return empty sets rather than raising.
    """

    def __init__(self, definition: Mapping[str, Any] | None = None, catalog_id: str | None = None) -> None:
        definition = definition if definition is not None else CATALOG_DEFINITION
        self.catalog_id: str = catalog_id or definition["catalogId"]
        self.version: str = definition.get("version", "")
        self._kinds: Mapping[str, KindSchema] = MappingProxyType(
            {name: self._extract(name, entry) for name, entry in definition["components"].items()}
        )
        logger.debug("catalog_loaded", catalog_id=self.catalog_id, kinds=len(self._kinds))

    @staticmethod
    def _extract(name: str, entry: Mapping[str, Any]) -> KindSchema:
        properties: Mapping[str, Mapping[str, Any]] = entry.get("properties", {})
        enums = {
            prop: frozenset(prop_def["enum"])
            for prop, prop_def in properties.items()
            if prop_def.get("enum")
        }
        return KindSchema(
            name=name,
            description=entry.get("description", ""),
            required=frozenset(entry.get("required", [])),
            known=frozenset(COMMON_PROPERTIES) | frozenset(properties),
            enums=MappingProxyType(enums),
            references=frozenset(p for p, d in properties.items() if d.get("reference")),
            numeric=frozenset(p for p, d in properties.items() if d.get("numeric")),
            urls=frozenset(p for p, d in properties.items() if d.get("url")),
        )

    # Lookups

    def is_known_kind(self, name: Any) -> bool:
        """Check whether ``name`` is a permitted component kind."""
        return isinstance(name, str) and name in self._kinds

    def kinds(self) -> list[str]:
        """All permitted kinds in catalog order."""
        return list(self._kinds)

    def get(self, kind: str) -> KindSchema | None:
        """Get the schema for a kind."""
        return self._kinds.get(kind)

    def required_properties(self, kind: str) -> frozenset[str]:
        schema = self._kinds.get(kind)
        return schema.required if schema else frozenset()

    def known_properties(self, kind: str) -> frozenset[str]:
        schema = self._kinds.get(kind)
        return schema.known if schema else frozenset()

    def allowed_values(self, kind: str, prop: str) -> frozenset[str] | None:
        """Enumerated values for a property, or None when unconstrained."""
        schema = self._kinds.get(kind)
        if schema is None:
            return None
        return schema.enums.get(prop)

    def reference_properties(self, kind: str) -> frozenset[str]:
        """Properties whose value is another node's id (e.g. a badge)."""
        schema = self._kinds.get(kind)
        return schema.references if schema else frozenset()

    def numeric_properties(self, kind: str) -> frozenset[str]:
        schema = self._kinds.get(kind)
        return schema.numeric if schema else frozenset()

    def url_properties(self, kind: str) -> frozenset[str]:
        schema = self._kinds.get(kind)
        return schema.urls if schema else frozenset()

    def metadata(self) -> dict[str, Any]:
        """Catalog id, version and a description of every kind."""
        return {
            "catalogId": self.catalog_id,
            "version": self.version,
            "components": [
                {"name": schema.name, "description": schema.description}
                for schema in self._kinds.values()
            ],
        }

    # Advisory checks

    def check_component(self, component: Mapping[str, Any], index: int) -> ComponentCheck:
        """
        Check one flat component node against its kind schema.

        Unknown kinds are errors. Missing required properties are errors at
        this level; callers decide whether to treat them as advisory.
        Unknown properties and enum mismatches are warnings.

        Args:
            component: Flat component node (``{"id", "component", ...props}``)
            index: Position in the message, used in messages

        Returns:
            ComponentCheck with collected issues
        """
        kind = component.get("component")
        comp_id = component.get("id") if isinstance(component.get("id"), str) else None
        schema = self._kinds.get(kind) if isinstance(kind, str) else None

        if schema is None:
            return ComponentCheck(
                valid=False,
                errors=[Issue(f'[{index}] Unknown component type "{kind}"', comp_id, index)],
            )

        warnings: list[Issue] = []
        errors: list[Issue] = []

        for prop in sorted(schema.required):
            if prop not in component:
                errors.append(
                    Issue(f'[{index}] "{kind}" missing required property "{prop}"', comp_id, index)
                )

        for prop in component:
            if prop not in schema.known:
                warnings.append(
                    Issue(f'[{index}] "{kind}" has unknown property "{prop}"', comp_id, index)
                )

        for prop, allowed in schema.enums.items():
            value = component.get(prop)
            if isinstance(value, str) and value not in allowed:
                warnings.append(
                    Issue(
                        f'[{index}] "{kind}.{prop}" value "{value}" not in allowed values: '
                        + ", ".join(sorted(allowed)),
                        comp_id,
                        index,
                    )
                )

        return ComponentCheck(valid=not errors, warnings=warnings, errors=errors)

    def check_components(self, components: list[Mapping[str, Any]]) -> CheckSummary:
        """Check every component of a message. Never rejects; returns a summary."""
        summary = CheckSummary(total=len(components))
        for index, component in enumerate(components):
            result = self.check_component(component, index)
            summary.warnings.extend(result.warnings)
            summary.errors.extend(result.errors)
            if result.valid:
                summary.valid += 1

        if summary.warnings or summary.errors:
            logger.warning(
                "component_warnings",
                total=summary.total,
                warnings=len(summary.warnings),
                errors=len(summary.errors),
                details=[str(issue) for issue in (summary.errors + summary.warnings)[:10]],
            )

        return summary


__all__ = ["CatalogRegistry", "KindSchema", "ComponentCheck", "CheckSummary"]
