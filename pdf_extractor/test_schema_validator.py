"""
Tests for JSON schema validation.
"""

from __future__ import annotations

import pytest

from .errors import ErrorKind, InvalidSchemaError
from .schema_validator import validate_schema


def test_valid_object_schema() -> None:
    """Test a simple object schema is accepted."""
    schema = {
        "type": "object",
        "properties": {"name": {"type": "string"}},
    }
    assert validate_schema(schema) is None


def test_valid_nested_strict_schema() -> None:
    """Test a strict nested schema with required and additionalProperties."""
    schema = {
        "type": "object",
        "properties": {
            "items": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {"amount": {"type": "number"}},
                    "required": ["amount"],
                    "additionalProperties": False,
                },
            },
        },
        "required": ["items"],
        "additionalProperties": False,
    }
    validate_schema(schema)


def test_explicit_draft_is_honoured() -> None:
    """Test a schema declaring Draft 7 validates under that draft."""
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {"title": {"type": "string"}},
    }
    validate_schema(schema)


def test_none_schema_rejected() -> None:
    """Test a missing schema fails."""
    with pytest.raises(InvalidSchemaError) as exc_info:
        validate_schema(None)
    assert exc_info.value.kind is ErrorKind.INVALID_SCHEMA


def test_empty_schema_rejected() -> None:
    """Test an empty mapping fails."""
    with pytest.raises(InvalidSchemaError, match="empty"):
        validate_schema({})


@pytest.mark.parametrize("schema", ["object", ["type"], 42])
def test_non_mapping_schema_rejected(schema: object) -> None:
    """Test non-object schemas fail."""
    with pytest.raises(InvalidSchemaError):
        validate_schema(schema)


@pytest.mark.parametrize(
    "schema",
    [
        {"type": 12},
        {"type": "not-a-type"},
        {"type": "object", "required": "name"},
        {"type": "object", "properties": {"age": {"minimum": "zero"}}},
    ],
)
def test_malformed_schema_rejected(schema: dict) -> None:
    """Test schemas violating the metaschema fail."""
    with pytest.raises(InvalidSchemaError, match="schema validation failed"):
        validate_schema(schema)
