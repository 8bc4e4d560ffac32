"""
Module: core.models.elements

Purpose:
    The placeable unit of a design. An Element has identity, geometry in
    millimetres from the page's top-left corner, a kind from a closed set,
    a style bundle, and exactly one kind-specific payload.

Key Classes:
    - ElementKind: text | field | image | table | divider | totals | shape
    - TableColumn / TableConfig: items table configuration
    - TotalsRow / TotalsConfig: summary block configuration
    - Element: One placeable, styled unit

Dependencies:
    - dataclasses (std)
    - core.models.styles: ElementStyles

Used By:
    - core.models.design.Design
    - designer.state: CRUD operations
    - compiler: region partition and rendering
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional

from .styles import ElementStyles

logger = logging.getLogger(__name__)


class ElementKind(str, Enum):
    """Closed set of element kinds."""
    TEXT = "text"        # Static text (content)
    FIELD = "field"      # Data-bound value (field_binding)
    IMAGE = "image"      # Logo or custom image (image_type)
    TABLE = "table"      # Items table (table_config)
    DIVIDER = "divider"  # Horizontal rule (divider_style)
    TOTALS = "totals"    # Summary rows (totals_config)
    SHAPE = "shape"      # Box / rounded box (shape_type)

    def __str__(self) -> str:
        return self.value


# ─────────────────────────────────────────────────────────────────────────────
# Table
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TableColumn:
    """
    One items-table column.

    Attributes:
        key: Item field key, e.g. "product_name" ("serial_no" is a counter)
        label: Header text
        width: Percentage of the table width (not normalized)
        align: "left" | "center" | "right"
        format: "text" | "currency" | "number" | "date" or None
    """

    key: str
    label: str
    width: float
    align: str = "left"
    format: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"key": self.key, "label": self.label, "width": self.width, "align": self.align}
        if self.format is not None:
            d["format"] = self.format
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TableColumn:
        return cls(
            key=data["key"],
            label=data.get("label", ""),
            width=data.get("width", 0),
            align=data.get("align", "left"),
            format=data.get("format"),
        )


@dataclass(frozen=True, slots=True)
class TableConfig:
    """
    Items table configuration.

    Column widths are independent percentages; they are not required to
    sum to 100 and are never rescaled.
    """

    columns: tuple[TableColumn, ...]
    show_header: bool = True
    show_serial_no: bool = True
    header_bg: Optional[str] = None
    header_color: Optional[str] = None
    header_font_size: Optional[float] = None
    body_font_size: Optional[float] = None
    striped_rows: Optional[bool] = None
    striped_color: Optional[str] = None
    border_style: Optional[str] = None  # full | horizontal | none
    row_height: Optional[float] = None  # mm

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "columns": [c.to_dict() for c in self.columns],
            "showHeader": self.show_header,
            "showSerialNo": self.show_serial_no,
        }
        optional = {
            "headerBg": self.header_bg,
            "headerColor": self.header_color,
            "headerFontSize": self.header_font_size,
            "bodyFontSize": self.body_font_size,
            "stripedRows": self.striped_rows,
            "stripedColor": self.striped_color,
            "borderStyle": self.border_style,
            "rowHeight": self.row_height,
        }
        d.update({k: v for k, v in optional.items() if v is not None})
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TableConfig:
        return cls(
            columns=tuple(TableColumn.from_dict(c) for c in data.get("columns", [])),
            show_header=data.get("showHeader", True),
            show_serial_no=data.get("showSerialNo", True),
            header_bg=data.get("headerBg"),
            header_color=data.get("headerColor"),
            header_font_size=data.get("headerFontSize"),
            body_font_size=data.get("bodyFontSize"),
            striped_rows=data.get("stripedRows"),
            striped_color=data.get("stripedColor"),
            border_style=data.get("borderStyle"),
            row_height=data.get("rowHeight"),
        )


# ─────────────────────────────────────────────────────────────────────────────
# Totals
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TotalsRow:
    """One summary row bound to a totals field (e.g. "grand_total")."""

    label: str
    field: str
    format: str = "currency"  # currency | text
    bold: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"label": self.label, "field": self.field, "format": self.format}
        if self.bold is not None:
            d["bold"] = self.bold
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TotalsRow:
        return cls(
            label=data.get("label", ""),
            field=data["field"],
            format=data.get("format", "currency"),
            bold=data.get("bold"),
        )


@dataclass(frozen=True, slots=True)
class TotalsConfig:
    """Summary block configuration."""

    rows: tuple[TotalsRow, ...]
    label_align: Optional[str] = None  # left | right
    value_align: Optional[str] = None  # right
    show_border: Optional[bool] = None  # rule above bold rows

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"rows": [r.to_dict() for r in self.rows]}
        if self.label_align is not None:
            d["labelAlign"] = self.label_align
        if self.value_align is not None:
            d["valueAlign"] = self.value_align
        if self.show_border is not None:
            d["showBorder"] = self.show_border
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TotalsConfig:
        return cls(
            rows=tuple(TotalsRow.from_dict(r) for r in data.get("rows", [])),
            label_align=data.get("labelAlign"),
            value_align=data.get("valueAlign"),
            show_border=data.get("showBorder"),
        )


# ─────────────────────────────────────────────────────────────────────────────
# Element
# ─────────────────────────────────────────────────────────────────────────────

# Python attribute -> wire key, for the optional scalar payload fields
_OPTIONAL_WIRE_KEYS = {
    "content": "content",
    "field_binding": "fieldBinding",
    "image_type": "imageType",
    "divider_style": "dividerStyle",
    "divider_color": "dividerColor",
    "divider_thickness": "dividerThickness",
    "shape_type": "shapeType",
    "label": "label",
}

# Wire key -> Python attribute, for every key that differs
_ATTRIBUTE_FOR_WIRE_KEY = {
    **{key: attr for attr, key in _OPTIONAL_WIRE_KEYS.items() if key != attr},
    "type": "kind",
    "tableConfig": "table_config",
    "totalsConfig": "totals_config",
    "zIndex": "z_index",
}


@dataclass(frozen=True, slots=True)
class Element:
    """
    One placeable unit on the page (immutable).

    Geometry is in millimetres relative to the page's top-left corner.
    Which payload fields are meaningful depends on ``kind``:
    content (text; optional prefix for field), field_binding (field),
    image_type (image), table_config (table), divider_* (divider),
    totals_config (totals), shape_type (shape).

    Attributes:
        id: Unique, stable identifier within a design
        kind: ElementKind
        x, y, width, height: Geometry in mm
        styles: Style overrides (unset fields inherit global styles)
        label: Editor-only display name, never rendered
        locked: Excluded from drag/resize edits
        visible: Rendered by the compiler when True
        z_index: Explicit stacking order

    Example:
        >>> el = Element(id="el_1", kind=ElementKind.TEXT, x=10, y=10,
        ...              width=80, height=8, content="Hello")
        >>> el.bottom
        18
    """

    id: str
    kind: ElementKind
    x: float
    y: float
    width: float
    height: float
    styles: ElementStyles = ElementStyles()
    content: Optional[str] = None
    field_binding: Optional[str] = None
    table_config: Optional[TableConfig] = None
    totals_config: Optional[TotalsConfig] = None
    image_type: Optional[str] = None  # logo | custom
    divider_style: Optional[str] = None  # solid | dashed | dotted | double
    divider_color: Optional[str] = None
    divider_thickness: Optional[float] = None  # px
    shape_type: Optional[str] = None  # rectangle | rounded-rect
    label: Optional[str] = None
    locked: bool = False
    visible: bool = True
    z_index: int = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_logo(self) -> bool:
        return self.kind == ElementKind.IMAGE and self.image_type == "logo"

    def with_changes(self, changes: Mapping[str, Any]) -> Element:
        """
        Shallow-merge attribute changes, returning a new Element.

        Keys may be attribute names or their camelCase wire keys.
        ``styles`` may be given as an ElementStyles or a mapping, which
        replaces the whole style bundle. A ``table_config`` or
        ``totals_config`` mapping is merged over the current config.
        Unknown keys are dropped.

        Raises:
            ValueError: If ``kind`` is not a known kind
            KeyError: If a config mapping has a column or row without its key
        """
        known = {f.name for f in fields(self)}
        updates: dict[str, Any] = {}
        for key, value in changes.items():
            name = key if key in known else _ATTRIBUTE_FOR_WIRE_KEY.get(key)
            if name is None:
                logger.warning(f"Ignoring unknown element attribute: {key!r}")
                continue
            if name == "styles" and not isinstance(value, ElementStyles):
                value = ElementStyles().merged(value)
            elif name == "kind":
                value = ElementKind(value)
            elif name == "table_config" and isinstance(value, Mapping):
                current = self.table_config.to_dict() if self.table_config else {}
                value = TableConfig.from_dict({**current, **value})
            elif name == "totals_config" and isinstance(value, Mapping):
                current = self.totals_config.to_dict() if self.totals_config else {}
                value = TotalsConfig.from_dict({**current, **value})
            updates[name] = value
        return replace(self, **updates)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase design document form."""
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "styles": self.styles.to_dict(),
        }
        for attr, key in _OPTIONAL_WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                d[key] = value
        if self.table_config is not None:
            d["tableConfig"] = self.table_config.to_dict()
        if self.totals_config is not None:
            d["totalsConfig"] = self.totals_config.to_dict()
        d["locked"] = self.locked
        d["visible"] = self.visible
        d["zIndex"] = self.z_index
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Element:
        """
        Deserialize from the design document form.

        Raises:
            KeyError: If id or type is missing
            ValueError: If type is not a known kind
        """
        optional = {attr: data.get(key) for attr, key in _OPTIONAL_WIRE_KEYS.items()}
        return cls(
            id=data["id"],
            kind=ElementKind(data["type"]),
            x=data.get("x", 0),
            y=data.get("y", 0),
            width=data.get("width", 0),
            height=data.get("height", 0),
            styles=ElementStyles.from_dict(data.get("styles") or {}),
            table_config=TableConfig.from_dict(data["tableConfig"]) if data.get("tableConfig") else None,
            totals_config=TotalsConfig.from_dict(data["totalsConfig"]) if data.get("totalsConfig") else None,
            locked=bool(data.get("locked", False)),
            visible=data.get("visible") is not False,
            z_index=data.get("zIndex") or 0,
            **optional,
        )
