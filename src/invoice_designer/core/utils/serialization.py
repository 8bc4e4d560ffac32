"""
Serialization Utilities

to/from JSON for Design values.

- ``export_design`` / ``import_design`` work on text (the exchange format
  used for file download/upload and for the persisted layout config).
- ``serialize_design`` / ``deserialize_design`` work on dicts.
- ``load_design_json`` / ``save_design_json`` work on files.

Import is deliberately shallow: only the top-level structure is checked
unless ``strict=True`` is passed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..models.design import Design
from ..schemas.validator import DesignFormatError, validate_design

logger = logging.getLogger(__name__)


def serialize_design(design: Design) -> dict[str, Any]:
    """Serialize a Design to a dictionary suitable for JSON."""
    return design.to_dict()


def deserialize_design(data: Any, *, strict: bool = False) -> Design:
    """
    Deserialize a Design from a parsed JSON value.

    Args:
        data: Parsed design document
        strict: Validate against the full JSON schema first

    Returns:
        Design instance

    Raises:
        DesignFormatError: If the document is not a well-formed design
    """
    validate_design(data, strict=strict)
    try:
        return Design.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise DesignFormatError(f"Invalid template design format: {e}", errors=[str(e)]) from e


def export_design(design: Design) -> str:
    """Serialize a Design to formatted JSON text."""
    return json.dumps(serialize_design(design), indent=2, ensure_ascii=False)


def import_design(text: str, *, strict: bool = False) -> Design:
    """
    Parse design JSON text.

    Raises:
        DesignFormatError: If the text is not JSON, or the JSON lacks
            ``version``, ``elements`` or ``pageSize``
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DesignFormatError(f"Design is not valid JSON: {e.msg}", errors=[str(e)]) from e
    return deserialize_design(data, strict=strict)


def load_design_json(path: Path, *, strict: bool = False) -> Design:
    """Load a design from a JSON file."""
    design = import_design(path.read_text(encoding="utf-8"), strict=strict)
    logger.debug(f"Loaded design with {len(design.elements)} elements from {path.name}")
    return design


def save_design_json(design: Design, path: Path) -> None:
    """Write a design to a JSON file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_design(design), encoding="utf-8")
    logger.debug(f"Saved design with {len(design.elements)} elements to {path.name}")
