"""
Utils Package

Serialization functions for design documents.
"""

from .serialization import (
    serialize_design,
    deserialize_design,
    export_design,
    import_design,
    load_design_json,
    save_design_json,
)

__all__ = [
    "serialize_design",
    "deserialize_design",
    "export_design",
    "import_design",
    "load_design_json",
    "save_design_json",
]
