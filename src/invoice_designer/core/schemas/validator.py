"""
Schema Validation Utilities

Validates design documents before they are turned into Design values.

Two levels:
- Basic (default): the shallow structural check imports rely on:
  ``version``, ``elements`` and ``pageSize`` must be present.
- Strict: full JSON Schema validation against ``design.schema.json``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from invoice_designer.core.models.design import DESIGN_VERSION

DESIGN_SCHEMA_VERSION = DESIGN_VERSION

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class DesignFormatError(Exception):
    """Raised when text or data is not a structurally valid design document."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_design(data: Any, *, strict: bool = False) -> None:
    """
    Validate a parsed design document.

    Args:
        data: Parsed JSON value
        strict: If True, also validate against the full JSON schema

    Raises:
        DesignFormatError: If data is invalid
    """
    if not isinstance(data, dict):
        raise DesignFormatError(
            f"Design must be a JSON object, got {type(data).__name__}",
            path="",
        )

    required = ["version", "elements", "pageSize"]
    missing = [f for f in required if data.get(f) is None]
    if missing:
        raise DesignFormatError(
            f"Invalid template design format, missing: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    if not data["version"]:
        raise DesignFormatError(f"Invalid design version: {data['version']!r}", path="version")
    if not isinstance(data["elements"], list):
        raise DesignFormatError("elements must be a list", path="elements")
    if not isinstance(data["pageSize"], dict):
        raise DesignFormatError("pageSize must be an object", path="pageSize")

    if strict:
        schema = _load_schema("design")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise DesignFormatError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e
