"""Common utilities shared across the designer, compiler and generator."""

from __future__ import annotations

from .thresholds import (
    COMPILER,
    EDITOR,
    GEOMETRY,
    MM_TO_PX,
    is_narrow_width,
)
from .units import clamp_position, clamp_size, mm_to_px, px_to_mm, snap_to_grid
from .field_catalog import (
    DATA_FIELD_CATALOG,
    ITEM_TABLE_COLUMNS,
    DataField,
    DataFieldCategory,
    ItemColumnSpec,
    all_fields,
    field_by_key,
    item_column,
)

__all__ = [
    # thresholds
    "COMPILER",
    "EDITOR",
    "GEOMETRY",
    "MM_TO_PX",
    "is_narrow_width",
    # units
    "clamp_position",
    "clamp_size",
    "mm_to_px",
    "px_to_mm",
    "snap_to_grid",
    # field catalog
    "DATA_FIELD_CATALOG",
    "ITEM_TABLE_COLUMNS",
    "DataField",
    "DataFieldCategory",
    "ItemColumnSpec",
    "all_fields",
    "field_by_key",
    "item_column",
]
