"""Tests for the message envelope validator."""

import json

import pytest
from returns.pipeline import is_successful

from a2ui_engine.core import (
    AmbiguousMessageType,
    CapabilityViolation,
    Limits,
    MalformedDocument,
    StructuralViolation,
    UnknownMessageType,
)
from a2ui_engine.protocol import (
    BeginRendering,
    CreateSurface,
    DataModelOp,
    EnvelopeValidator,
    MessageType,
    ProducerError,
    UpdateComponents,
    UpdateDataModel,
)


def components_message(*components, key="updateComponents"):
    return {key: {"surfaceId": "main", "components": list(components)}}


def rejection(result):
    assert not is_successful(result)
    return result.failure()


@pytest.mark.unit
def test_create_surface(validator):
    """Test a well-formed createSurface line."""
    result = validator.validate('{"createSurface":{"surfaceId":"main","catalogId":"cat:v1"}}')

    assert is_successful(result)
    validated = result.unwrap()
    assert isinstance(validated.message, CreateSurface)
    assert validated.surface_id == "main"
    assert validated.message.catalog_id == "cat:v1"
    assert validated.type is MessageType.CREATE_SURFACE


@pytest.mark.unit
def test_create_surface_requires_catalog(validator):
    """Test createSurface without a catalog id is structural."""
    error = rejection(validator.validate({"createSurface": {"surfaceId": "main", "catalogId": ""}}))

    assert isinstance(error, StructuralViolation)


@pytest.mark.unit
def test_surface_id_required(validator):
    """Test every message needs a non-empty surface id."""
    error = rejection(validator.validate({"deleteSurface": {}}))

    assert isinstance(error, StructuralViolation)
    assert "surfaceId" in error.errors[0]


@pytest.mark.unit
@pytest.mark.parametrize("line", ["{not json", "[1, 2]", '"text"', ""])
def test_malformed_document(validator, line):
    """Test lines that are not JSON objects."""
    assert isinstance(rejection(validator.validate(line)), MalformedDocument)


@pytest.mark.unit
def test_unknown_message_type(validator):
    """Test no recognised discriminator."""
    error = rejection(validator.validate({"paintSurface": {"surfaceId": "main"}}))

    assert isinstance(error, UnknownMessageType)
    assert "No known message type" in error.errors[0]


@pytest.mark.unit
def test_ambiguous_message_type(validator):
    """Test more than one discriminator in one object."""
    error = rejection(
        validator.validate({"deleteSurface": {"surfaceId": "main"}, "surfaceUpdate": {"surfaceId": "main"}})
    )

    assert isinstance(error, AmbiguousMessageType)
    assert "Multiple message types" in error.errors[0]


@pytest.mark.unit
def test_body_must_be_object(validator):
    """Test a non-object body is structural."""
    assert isinstance(rejection(validator.validate({"deleteSurface": "main"})), StructuralViolation)


@pytest.mark.unit
def test_update_components_valid(validator):
    """Test components are typed and in order."""
    result = validator.validate(
        components_message(
            {"id": "root", "component": "Stack", "direction": "column", "children": ["title"]},
            {"id": "title", "component": "Text", "text": "Hi"},
        )
    )

    validated = result.unwrap()
    assert isinstance(validated.message, UpdateComponents)
    assert [c.id for c in validated.message.components] == ["root", "title"]
    assert validated.warnings == ()


@pytest.mark.unit
def test_unknown_kind_is_capability_violation(validator):
    """Scenario B: a kind outside the catalog rejects the whole message."""
    error = rejection(
        validator.validate(
            components_message(
                {"id": "root", "component": "Text", "text": "fine"},
                {"id": "x", "component": "GhostWidget"},
            )
        )
    )

    assert isinstance(error, CapabilityViolation)
    assert "not in catalog" in error.errors[0]


@pytest.mark.unit
def test_structural_wins_over_capability(validator):
    """Test mixed failures are reported as structural with every error."""
    error = rejection(
        validator.validate(
            components_message({"component": "Text", "text": "no id"}, {"id": "x", "component": "GhostWidget"})
        )
    )

    assert isinstance(error, StructuralViolation)
    assert any('missing "id"' in e for e in error.errors)
    assert any("not in catalog" in e for e in error.errors)


@pytest.mark.unit
def test_components_must_be_array(validator):
    """Test components must be a list."""
    error = rejection(validator.validate({"updateComponents": {"surfaceId": "main", "components": {}}}))

    assert isinstance(error, StructuralViolation)


@pytest.mark.unit
def test_too_many_components(registry):
    """Test the per-message component cap."""
    validator = EnvelopeValidator(registry, Limits(max_components=2))
    nodes = [{"id": f"n{i}", "component": "Divider"} for i in range(3)]

    error = rejection(validator.validate(components_message(*nodes)))

    assert isinstance(error, StructuralViolation)
    assert "Too many components" in error.errors[0]


@pytest.mark.unit
def test_too_many_children(registry):
    """Test the per-node children cap."""
    validator = EnvelopeValidator(registry, Limits(max_children=2))

    error = rejection(
        validator.validate(
            components_message({"id": "root", "component": "List", "children": ["a", "b", "c"]})
        )
    )

    assert "too many children" in error.errors[0]


@pytest.mark.unit
@pytest.mark.parametrize(
    "children,fragment",
    [(["a", 1], "array of strings"), ("a", "must be an array"), (["a", "a"], "duplicate")],
)
def test_children_shape(validator, children, fragment):
    """Test children must be distinct string ids."""
    error = rejection(
        validator.validate(components_message({"id": "root", "component": "List", "children": children}))
    )

    assert isinstance(error, StructuralViolation)
    assert fragment in error.errors[0]


@pytest.mark.unit
def test_forward_references_allowed(validator):
    """Test children may name nodes that have not arrived yet."""
    result = validator.validate(
        components_message({"id": "root", "component": "List", "children": ["later"]})
    )

    assert is_successful(result)


@pytest.mark.unit
def test_schema_findings_are_warnings(validator):
    """Test missing required, unknown property and enum mismatch only warn."""
    result = validator.validate(
        components_message(
            {"id": "b", "component": "Button", "variant": "loud"},
            {"id": "t", "component": "Text", "text": "Hi", "sparkle": True},
        )
    )

    validated = result.unwrap()
    messages = [str(w) for w in validated.warnings]
    assert any(m.startswith("[catalog]") and "missing required" in m for m in messages)
    assert any("not in allowed values" in m for m in messages)
    assert any("unknown property" in m for m in messages)


@pytest.mark.unit
def test_wrong_property_type_is_structural(validator):
    """Test a known property with the wrong type rejects the message."""
    error = rejection(
        validator.validate(components_message({"id": "t", "component": "Text", "text": {"bogus": 1}}))
    )

    assert isinstance(error, StructuralViolation)


@pytest.mark.unit
def test_legacy_surface_update(validator):
    """Test legacy component shape and explicitList children are normalized."""
    result = validator.validate(
        components_message(
            {"id": "root", "component": {"List": {"children": {"explicitList": ["t"]}}}},
            {"id": "t", "component": {"Text": {"text": {"literalString": "Hi"}}}},
            key="surfaceUpdate",
        )
    )

    validated = result.unwrap()
    assert validated.is_legacy
    root, text = validated.message.components
    assert root.component == "List"
    assert root.children == ["t"]
    assert text.component == "Text"


@pytest.mark.unit
def test_update_data_model_defaults(validator):
    """Test default path and op."""
    validated = validator.validate({"updateDataModel": {"surfaceId": "main", "value": {"a": 1}}}).unwrap()

    assert isinstance(validated.message, UpdateDataModel)
    assert validated.message.path == "/"
    assert validated.message.op is DataModelOp.REPLACE


@pytest.mark.unit
def test_update_data_model_too_large(registry):
    """Scenario C: an oversized payload is structural."""
    validator = EnvelopeValidator(registry, Limits(max_data_model_bytes=64))
    value = {"blob": "x" * 100}
    assert len(json.dumps(value)) > 64

    error = rejection(validator.validate({"updateDataModel": {"surfaceId": "main", "value": value}}))

    assert isinstance(error, StructuralViolation)
    assert "too large" in error.errors[0]


@pytest.mark.unit
def test_update_data_model_bad_op(validator):
    """Test unknown ops are structural."""
    error = rejection(
        validator.validate({"updateDataModel": {"surfaceId": "main", "op": "append", "value": 1}})
    )

    assert isinstance(error, StructuralViolation)


@pytest.mark.unit
def test_update_data_model_root_must_be_object(validator):
    """Test replacing the root with a scalar is structural."""
    error = rejection(validator.validate({"updateDataModel": {"surfaceId": "main", "value": 3}}))

    assert isinstance(error, StructuralViolation)


@pytest.mark.unit
def test_update_data_model_remove_needs_no_value(validator):
    """Test remove works without a value."""
    validated = validator.validate(
        {"updateDataModel": {"surfaceId": "main", "path": "/a", "op": "remove"}}
    ).unwrap()

    assert validated.message.op is DataModelOp.REMOVE


@pytest.mark.unit
def test_legacy_data_model_update(validator):
    """Test legacy typed contents become a keyed merge."""
    validated = validator.validate(
        {
            "dataModelUpdate": {
                "surfaceId": "main",
                "contents": [
                    {"key": "title", "valueString": "My Title"},
                    {"key": "count", "valueInt": 3},
                    {"key": "open", "valueBool": True},
                    {"key": "user", "valueMap": [{"key": "name", "valueString": "Ada"}]},
                    {"key": "skipped"},
                ],
            }
        }
    ).unwrap()

    message = validated.message
    assert message.op is DataModelOp.ADD
    assert message.value == {"title": "My Title", "count": 3, "open": True, "user": {"name": "Ada"}}


@pytest.mark.unit
def test_begin_rendering(validator):
    """Test beginRendering needs a root and catalog id."""
    validated = validator.validate(
        {"beginRendering": {"surfaceId": "main", "root": "root", "catalogId": "cat:v1"}}
    ).unwrap()
    assert isinstance(validated.message, BeginRendering)

    error = rejection(validator.validate({"beginRendering": {"surfaceId": "main"}}))
    assert len(error.errors) == 2


@pytest.mark.unit
def test_producer_error_envelope(validator):
    """Test an in-band producer error is accepted as a report."""
    validated = validator.validate({"error": {"message": "quota exceeded"}}).unwrap()

    assert isinstance(validated.message, ProducerError)
    assert validated.message.message == "quota exceeded"


def nested(depth, leaf=1):
    value = leaf
    for _ in range(depth):
        value = [value]
    return value


@pytest.mark.unit
@pytest.mark.parametrize("depth", [600, 2000])
def test_deeply_nested_data_model_rejected(validator, depth):
    """Test a small but deeply nested value is refused before it is applied."""
    document = {"updateDataModel": {"surfaceId": "main", "value": {"a": nested(depth)}}}

    error = rejection(validator.validate(document))

    assert isinstance(error, StructuralViolation)
    assert "nested deeper than 32 levels" in error.errors[0]


@pytest.mark.unit
def test_nesting_limit_counts_path_segments(validator):
    """Test path segments and value nesting share one depth budget."""
    at_limit = {"updateDataModel": {"surfaceId": "main", "path": "/a/b", "value": {"c": nested(29)}}}
    over_limit = {"updateDataModel": {"surfaceId": "main", "path": "/a/b/c", "value": {"c": nested(29)}}}

    assert is_successful(validator.validate(at_limit))
    assert isinstance(rejection(validator.validate(over_limit)), StructuralViolation)


@pytest.mark.unit
def test_deeply_nested_legacy_contents_rejected(validator):
    """Test legacy contents are bounded the same way."""
    contents = [{"key": "leaf", "valueString": "x"}]
    for _ in range(300):
        contents = [{"key": "k", "valueMap": contents}]

    error = rejection(validator.validate({"dataModelUpdate": {"surfaceId": "main", "contents": contents}}))

    assert isinstance(error, StructuralViolation)


@pytest.mark.unit
def test_deeply_nested_component_property_rejected(validator):
    """Test component property values are bounded by the nesting limit."""
    error = rejection(
        validator.validate(components_message({"id": "root", "component": "Text", "text": "hi", "meta": nested(600)}))
    )

    assert isinstance(error, StructuralViolation)
    assert "nested deeper" in error.errors[0]


@pytest.mark.unit
def test_nesting_limit_is_configurable(registry):
    """Test max_value_depth comes from the limits."""
    validator = EnvelopeValidator(registry, Limits(max_value_depth=3))

    assert is_successful(validator.validate({"updateDataModel": {"surfaceId": "main", "value": {"a": [1]}}}))
    assert not is_successful(validator.validate({"updateDataModel": {"surfaceId": "main", "value": {"a": [[[1]]]}}}))


@pytest.mark.unit
@pytest.mark.parametrize(
    "action",
    [
        {"name": "go", "context": [{"value": 1}]},
        {"name": "", "context": []},
        {"name": 5},
        {"name": "go", "context": "amount"},
    ],
)
def test_malformed_action_contract_is_structural(validator, action):
    """Test an action with a name must be a valid name/context contract."""
    error = rejection(
        validator.validate(components_message({"id": "b", "component": "Button", "label": "Go", "action": action}))
    )

    assert isinstance(error, StructuralViolation)
    assert any('"action.' in message for message in error.errors)


@pytest.mark.unit
def test_legacy_event_descriptor_still_accepted(validator):
    """Test onClick descriptors without a name pass through."""
    result = validator.validate(
        components_message({"id": "c", "component": "Chip", "content": "A", "onClick": {"eventType": "click"}})
    )

    assert is_successful(result)


@pytest.mark.unit
def test_unknown_kind_reported_once(validator):
    """Test an unknown kind is a capability error and not also a catalog warning."""
    error = rejection(validator.validate(components_message({"id": "x", "component": "GhostWidget"})))

    assert error.errors == ['Component [0] type "GhostWidget" not in catalog']
    assert not any("GhostWidget" in warning for warning in error.warnings)
