"""Shared schema validation utilities.

Glovebox validates mod definitions, profiles and the merged configuration
with JSON Schema. Schemas are bundled as YAML files under
``glovebox.data/schemas`` and loaded once per process.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from glovebox.data import file_exists, read_yaml


def _schema_filename(schema_name: str) -> str:
    lowered = schema_name.lower()
    if lowered.endswith(".yaml") or lowered.endswith(".yml"):
        return schema_name
    return f"{schema_name}.schema.yaml"


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by short name (``"mod"``) or file name.

    Raises:
        FileNotFoundError: If the schema file doesn't exist.
        ValueError: If the schema is not a YAML mapping.
    """
    filename = _schema_filename(schema_name)
    if not file_exists("schemas", filename):
        raise FileNotFoundError(f"Schema not found: {filename}")
    schema = read_yaml("schemas", filename)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


@lru_cache(maxsize=16)
def _validator(schema_name: str) -> Draft202012Validator:
    schema = load_schema(schema_name)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return readable error messages (empty if valid)."""
    errors: List[str] = []
    for error in sorted(_validator(schema_name).iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


__all__ = ["load_schema", "validate_payload_safe"]
