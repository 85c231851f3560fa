"""
Message Envelope Validator
Parses candidate lines and checks them against the wire contract and catalog.

Structural problems reject the message. Catalog findings (missing required
properties, unknown properties, enum mismatches) are attached as warnings
and the message is still applied.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from pydantic import ValidationError
from returns.result import Failure, Result, Success

from ..catalog.components import CatalogComponent, parse_component
from ..catalog.registry import CatalogRegistry
from ..catalog.values import ACTION_PROPERTIES, ActionContract
from ..core.config import Limits
from ..core.errors import (
    AmbiguousMessageType,
    CapabilityViolation,
    Issue,
    MalformedDocument,
    MessageRejected,
    StructuralViolation,
    UnknownMessageType,
)
from ..core.json import JSONParseError, decode_document, nesting_depth, serialized_size
from ..core.logging_config import get_logger
from .models import (
    MESSAGE_KEYS,
    BeginRendering,
    CreateSurface,
    DataModelOp,
    DeleteSurface,
    Envelope,
    MessageType,
    ProducerError,
    UpdateComponents,
    UpdateDataModel,
    ValidatedMessage,
)

logger = get_logger(__name__)

LEGACY_VALUE_KEYS = ("valueString", "valueInt", "valueNumber", "valueBool", "valueMap")


@dataclass
class _Findings:
    """Issues collected while checking one message body."""

    structural: list[str] = field(default_factory=list)
    capability: list[str] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.structural or self.capability)

    def rejection(self) -> MessageRejected:
        warnings = [str(issue) for issue in self.warnings]
        if self.structural:
            return StructuralViolation(self.structural + self.capability, warnings)
        return CapabilityViolation(self.capability, warnings)


class EnvelopeValidator:
    """
    Validates one candidate message at a time.

    Stateless apart from its registry and limits, so a single instance can
    serve every surface and stream in the process.
    """

    def __init__(self, registry: CatalogRegistry, limits: Limits | None = None) -> None:
        self.registry = registry
        self.limits = limits or Limits()
        self._builders: dict[MessageType, Callable[[str, str, dict[str, Any], _Findings], Envelope | None]] = {
            MessageType.CREATE_SURFACE: self._create_surface,
            MessageType.UPDATE_COMPONENTS: self._update_components,
            MessageType.UPDATE_DATA_MODEL: self._update_data_model,
            MessageType.DELETE_SURFACE: self._delete_surface,
            MessageType.BEGIN_RENDERING: self._begin_rendering,
        }

    def validate(self, candidate: str | bytes | Mapping[str, Any]) -> Result[ValidatedMessage, MessageRejected]:
        """
        Validate one candidate line (or an already parsed document).

        Args:
            candidate: Raw line text, bytes, or a parsed JSON object

        Returns:
            Success with the typed message and its warnings, or Failure with
            the rejection (one of the MessageRejected subclasses)
        """
        if isinstance(candidate, Mapping):
            document = dict(candidate)
        else:
            try:
                document = decode_document(candidate)
            except JSONParseError as e:
                return self._reject(MalformedDocument([str(e)]))

        return self.validate_document(document)

    def validate_document(self, document: dict[str, Any]) -> Result[ValidatedMessage, MessageRejected]:
        """Validate an already parsed JSON object."""
        matched = [key for key in document if key in MESSAGE_KEYS]

        if not matched:
            if "error" in document:
                return Success(ValidatedMessage(self._producer_error(document["error"]), "error"))
            keys = ", ".join(document) or "(none)"
            return self._reject(UnknownMessageType([f"No known message type found. Keys: {keys}"]))

        if len(matched) > 1:
            return self._reject(
                AmbiguousMessageType([f"Multiple message types in one object: {', '.join(matched)}"])
            )

        wire_key = matched[0]
        body = document[wire_key]
        if not isinstance(body, dict):
            return self._reject(StructuralViolation([f'"{wire_key}" body must be an object']))

        findings = _Findings()
        surface_id = body.get("surfaceId")
        if not isinstance(surface_id, str) or not surface_id:
            findings.structural.append(f'"{wire_key}.surfaceId" must be a non-empty string')
            surface_id = ""

        message = self._builders[MESSAGE_KEYS[wire_key]](wire_key, surface_id, body, findings)

        if findings.failed or message is None:
            return self._reject(findings.rejection())

        return Success(ValidatedMessage(message, wire_key, tuple(findings.warnings)))

    # Per-type checks

    def _create_surface(self, key: str, surface_id: str, body: dict[str, Any], findings: _Findings) -> Envelope | None:
        catalog_id = body.get("catalogId")
        if not isinstance(catalog_id, str) or not catalog_id:
            findings.structural.append(f'"{key}.catalogId" must be a non-empty string')
            return None
        if catalog_id != self.registry.catalog_id:
            findings.warnings.append(
                Issue(f'Surface requests catalog "{catalog_id}", registry implements "{self.registry.catalog_id}"')
            )
        return CreateSurface(surface_id=surface_id, catalog_id=catalog_id)

    def _delete_surface(self, key: str, surface_id: str, body: dict[str, Any], findings: _Findings) -> Envelope | None:
        return DeleteSurface(surface_id=surface_id)

    def _begin_rendering(self, key: str, surface_id: str, body: dict[str, Any], findings: _Findings) -> Envelope | None:
        root = body.get("root")
        catalog_id = body.get("catalogId")
        if not isinstance(root, str) or not root:
            findings.structural.append(f'"{key}.root" must be a non-empty string')
        if not isinstance(catalog_id, str) or not catalog_id:
            findings.structural.append(f'"{key}.catalogId" must be a non-empty string')
        if findings.failed:
            return None
        return BeginRendering(surface_id=surface_id, root=root, catalog_id=catalog_id)

    def _update_components(self, key: str, surface_id: str, body: dict[str, Any], findings: _Findings) -> Envelope | None:
        components = body.get("components")
        if not isinstance(components, list):
            findings.structural.append('"components" must be an array')
            return None

        # DoS: cap component count before looking at any entry
        if len(components) > self.limits.max_components:
            findings.structural.append(
                f"Too many components ({len(components)}). Maximum is {self.limits.max_components}"
            )
            return None

        nodes: list[dict[str, Any]] = []
        for index, raw in enumerate(components):
            if not isinstance(raw, dict):
                findings.structural.append(f"Component [{index}] must be an object")
                continue
            node = normalize_component(raw)
            self._check_node(index, node, findings)
            nodes.append(node)

        # Advisory catalog pass; its errors are demoted to warnings. Unknown
        # kinds are already capability errors.
        summary = self.registry.check_components(nodes)
        findings.warnings.extend(summary.warnings)
        findings.warnings.extend(
            Issue(f"[catalog] {issue.message}", issue.component_id, issue.index)
            for issue in summary.errors
            if issue.index is None or self.registry.is_known_kind(nodes[issue.index].get("component"))
        )

        if findings.failed:
            return None

        typed: list[CatalogComponent] = []
        for index, node in enumerate(nodes):
            try:
                typed.append(parse_component(node))
            except ValidationError as e:
                for error in e.errors():
                    location = ".".join(str(part) for part in error["loc"])
                    findings.structural.append(f'Component [{index}] "{location}": {error["msg"]}')

        if findings.failed:
            return None
        return UpdateComponents(surface_id=surface_id, components=tuple(typed))

    def _check_node(self, index: int, node: dict[str, Any], findings: _Findings) -> None:
        # DoS: property values are copied and walked recursively later
        limit = self.limits.max_value_depth
        if nesting_depth(node, limit) > limit:
            findings.structural.append(f"Component [{index}] is nested deeper than {limit} levels")
            return

        comp_id = node.get("id")
        if not isinstance(comp_id, str) or not comp_id:
            findings.structural.append(f'Component [{index}] missing "id" string')

        kind = node.get("component")
        if not isinstance(kind, str) or not kind:
            findings.structural.append(f'Component [{index}] "component" must be a string (v0.9) or object (v0.8)')
        elif not self.registry.is_known_kind(kind):
            findings.capability.append(f'Component [{index}] type "{kind}" not in catalog')

        for prop in ACTION_PROPERTIES:
            action = node.get(prop)
            # A name marks a name/context contract; anything else is a legacy descriptor
            if isinstance(action, dict) and "name" in action:
                try:
                    ActionContract.model_validate(action)
                except ValidationError as e:
                    for error in e.errors():
                        location = ".".join(str(part) for part in error["loc"])
                        findings.structural.append(f'Component [{index}] "{prop}.{location}": {error["msg"]}')

        if "children" not in node:
            return
        children = node["children"]
        if not isinstance(children, list):
            findings.structural.append(f'Component [{index}] "children" must be an array')
            return
        if not all(isinstance(child, str) for child in children):
            findings.structural.append(f'Component [{index}] "children" must be an array of strings')
        elif len(set(children)) != len(children):
            findings.structural.append(f'Component [{index}] "children" contains duplicate ids')
        if len(children) > self.limits.max_children:
            findings.structural.append(
                f"Component [{index}] has too many children ({len(children)}). "
                f"Maximum is {self.limits.max_children}"
            )

    def _update_data_model(self, key: str, surface_id: str, body: dict[str, Any], findings: _Findings) -> Envelope | None:
        # DoS: cap nesting first; the value is copied recursively when applied
        limit = self.limits.max_value_depth
        raw_path = body.get("path")
        segments = len([s for s in raw_path.split("/") if s]) if isinstance(raw_path, str) else 0
        nested = body["value"] if "value" in body else body.get("contents")
        depth = segments + nesting_depth(nested, limit)
        if depth > limit:
            findings.structural.append(f"Data model update is nested deeper than {limit} levels")
            return None

        # DoS: cap serialized payload size
        payload = body["value"] if body.get("value") is not None else body
        size = serialized_size(payload)
        if size > self.limits.max_data_model_bytes:
            findings.structural.append(
                f"Data model payload too large ({size} bytes). Maximum is {self.limits.max_data_model_bytes}"
            )

        path = body.get("path", "/")
        if not isinstance(path, str):
            findings.structural.append(f'"{key}.path" must be a string')
            path = "/"
        path = path or "/"

        if "contents" in body and "value" not in body:
            value = legacy_contents_to_value(body["contents"], findings)
            op = DataModelOp.ADD
        else:
            raw_op = body.get("op", DataModelOp.REPLACE.value)
            try:
                op = DataModelOp(raw_op)
            except ValueError:
                findings.structural.append(
                    f'"{key}.op" must be one of: ' + ", ".join(o.value for o in DataModelOp)
                )
                return None
            if op is not DataModelOp.REMOVE and "value" not in body:
                findings.structural.append(f'"{key}.value" is required for "{op.value}"')
            value = body.get("value")
            if op is DataModelOp.REPLACE and path.strip("/") == "" and not isinstance(value, dict):
                findings.structural.append(f'"{key}.value" must be an object when replacing the root')

        if findings.failed:
            return None
        return UpdateDataModel(surface_id=surface_id, path=path, op=op, value=value)

    # Helpers

    @staticmethod
    def _producer_error(body: Any) -> ProducerError:
        if isinstance(body, dict):
            surface_id = body.get("surfaceId")
            return ProducerError(
                surface_id=surface_id if isinstance(surface_id, str) else "",
                message=str(body.get("message", "")),
                detail=body,
            )
        return ProducerError(message=str(body), detail=body)

    @staticmethod
    def _reject(error: MessageRejected) -> Result[ValidatedMessage, MessageRejected]:
        logger.warning("message_rejected", kind=error.kind.value, errors=error.errors[:5])
        return Failure(error)


def normalize_component(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Flatten a legacy node into the current shape.

    ``{"id": "t", "component": {"Text": {"text": ...}}}`` becomes
    ``{"id": "t", "component": "Text", "text": ...}`` and a
    ``children: {"explicitList": [...]}`` becomes a plain list.
    Current-shape nodes are returned unchanged.
    """
    node = raw
    component = raw.get("component")
    if isinstance(component, dict) and len(component) == 1:
        kind, props = next(iter(component.items()))
        node = {k: v for k, v in raw.items() if k != "component"}
        node["component"] = kind
        if isinstance(props, dict):
            for prop, value in props.items():
                node.setdefault(prop, value)

    children = node.get("children")
    if isinstance(children, dict) and isinstance(children.get("explicitList"), list):
        node = {**node, "children": children["explicitList"]}
    return node


def legacy_contents_to_value(contents: Any, findings: _Findings) -> dict[str, Any]:
    """Convert a legacy ``contents`` entry list into a plain mapping."""
    if not isinstance(contents, list):
        findings.structural.append('"contents" must be an array')
        return {}

    value: dict[str, Any] = {}
    for index, entry in enumerate(contents):
        if not isinstance(entry, dict) or not isinstance(entry.get("key"), str):
            findings.structural.append(f'Contents [{index}] missing "key" string')
            continue
        for value_key in LEGACY_VALUE_KEYS:
            if value_key not in entry:
                continue
            if value_key == "valueMap":
                value[entry["key"]] = legacy_contents_to_value(entry["valueMap"], findings)
            else:
                value[entry["key"]] = entry[value_key]
            break
    return value


__all__ = ["EnvelopeValidator", "normalize_component", "legacy_contents_to_value"]
