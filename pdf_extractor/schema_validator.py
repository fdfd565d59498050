"""
Schema Validation

Checks that a caller-supplied JSON Schema is well formed before it is sent
to the completion endpoint. Only the schema itself is checked here; the
extracted data is constrained by the remote model, not re-validated locally.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from pdf_extractor.errors import InvalidSchemaError


def validate_schema(schema: Any) -> None:
    """
    Validate that a JSON schema is properly formed.

    The draft is taken from ``$schema`` when present, Draft 2020-12 otherwise.

    Args:
        schema: Candidate JSON Schema mapping

    Raises:
        InvalidSchemaError: If the schema is missing, empty or malformed
    """
    if schema is None:
        raise InvalidSchemaError("schema must be a non-null object")

    if not isinstance(schema, Mapping):
        raise InvalidSchemaError(
            f"schema must be an object, got {type(schema).__name__}"
        )

    if len(schema) == 0:
        raise InvalidSchemaError("schema cannot be empty")

    validator_cls = validator_for(schema, default=Draft202012Validator)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        path = ".".join(str(p) for p in e.path) or "root"
        raise InvalidSchemaError(
            f"schema validation failed at {path}: {e.message}",
            {"path": path},
        ) from e
