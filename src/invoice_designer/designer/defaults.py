"""
Module: designer.defaults

Purpose:
    Per-kind defaults for newly added elements: size, style bundle and
    kind payload (starter table columns, default totals rows, ...).

Key Functions:
    - default_size(): (width, height) in mm for a kind
    - default_styles(): ElementStyles for a kind
    - default_payload(): Kind-specific attribute defaults
    - default_table_config() / default_totals_config()

Used By:
    - designer.state.DesignerSession.add_element
"""

from __future__ import annotations

from typing import Any

from invoice_designer.core.models.elements import (
    ElementKind,
    TableColumn,
    TableConfig,
    TotalsConfig,
    TotalsRow,
)
from invoice_designer.core.models.styles import ElementStyles

# Divider is drawn 1px thick but its box keeps the minimum manipulable height
_DEFAULT_SIZES: dict[ElementKind, tuple[float, float]] = {
    ElementKind.TEXT: (80, 8),
    ElementKind.FIELD: (60, 7),
    ElementKind.IMAGE: (30, 20),
    ElementKind.TABLE: (190, 60),
    ElementKind.DIVIDER: (190, 3),
    ElementKind.TOTALS: (80, 40),
    ElementKind.SHAPE: (50, 30),
}

_BASE_STYLES = ElementStyles(
    font_weight="normal",
    font_style="normal",
    background_color="transparent",
    text_align="left",
    padding=1,
    line_height=1.4,
)


def default_size(kind: ElementKind) -> tuple[float, float]:
    """Default (width, height) in mm."""
    return _DEFAULT_SIZES.get(kind, (60, 10))


def default_styles(kind: ElementKind) -> ElementStyles:
    """Default style bundle; font family and colour inherit from globals."""
    overrides: dict[ElementKind, dict[str, Any]] = {
        ElementKind.TEXT: {"font_size": 10},
        ElementKind.FIELD: {"font_size": 10},
        ElementKind.IMAGE: {"padding": 0},
        ElementKind.TABLE: {"padding": 0, "font_size": 9},
        ElementKind.DIVIDER: {"padding": 0},
        ElementKind.TOTALS: {"font_size": 10, "text_align": "right"},
        ElementKind.SHAPE: {"border": "1px solid #000000", "padding": 2},
    }
    return _BASE_STYLES.merged(overrides.get(kind, {}))


def default_table_config() -> TableConfig:
    """Starter items table mirroring a standard GST line-item layout."""
    return TableConfig(
        columns=(
            TableColumn("serial_no", "S.No", 6, "center"),
            TableColumn("product_name", "Description", 34, "left"),
            TableColumn("hsn_code", "HSN", 10, "center"),
            TableColumn("initial_quantity", "Qty", 8, "right", "number"),
            TableColumn("rate", "Rate", 12, "right", "currency"),
            TableColumn("amount", "Amount", 14, "right", "currency"),
            TableColumn("tax_rate", "Tax %", 6, "center", "number"),
            TableColumn("total", "Total", 10, "right", "currency"),
        ),
        show_header=True,
        show_serial_no=True,
        header_bg="#f0f0f0",
        header_color="#000000",
        header_font_size=9,
        body_font_size=9,
        striped_rows=False,
        border_style="full",
        row_height=7,
    )


def default_totals_config() -> TotalsConfig:
    return TotalsConfig(
        rows=(
            TotalsRow("Subtotal", "subtotal", "currency"),
            TotalsRow("Discount", "discount_amount", "currency"),
            TotalsRow("Tax", "tax_total", "currency"),
            TotalsRow("Grand Total", "grand_total", "currency", bold=True),
        ),
        label_align="right",
        show_border=True,
    )


def default_payload(kind: ElementKind) -> dict[str, Any]:
    """Kind-specific attributes (and editor label) for a new element."""
    if kind == ElementKind.TEXT:
        return {"content": "Text Label", "label": "Text"}
    if kind == ElementKind.FIELD:
        return {"field_binding": "company.name", "label": "Company Name"}
    if kind == ElementKind.IMAGE:
        return {"image_type": "logo", "label": "Logo"}
    if kind == ElementKind.TABLE:
        return {"table_config": default_table_config(), "label": "Items Table"}
    if kind == ElementKind.DIVIDER:
        return {
            "divider_style": "solid",
            "divider_color": "#cccccc",
            "divider_thickness": 1,
            "label": "Divider",
        }
    if kind == ElementKind.TOTALS:
        return {"totals_config": default_totals_config(), "label": "Totals"}
    if kind == ElementKind.SHAPE:
        return {"shape_type": "rectangle", "label": "Box"}
    return {}
