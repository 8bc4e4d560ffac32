"""
Module: generator.default_design

Purpose:
    Deterministic default designs for templates that were never
    customized. Dispatches on the same narrow/wide page-width rule as the
    compiler, then lays out a hand-tuned element sequence by advancing a
    vertical cursor past each block.

    Every optional block is gated by its feature flag; a disabled flag
    skips both the element and the cursor advance for it.

    Wide (A4) sequence:
        [logo] company name, [address], phone, [gstin], divider,
        invoice no | date, [bill-to label, party name, party address],
        divider, items table, totals, [bank details], [terms], [signature]

    Narrow (receipt) sequence:
        [logo] company name, [address], phone, [gstin], divider,
        invoice no | date, [customer], divider, items table, divider,
        totals, divider, thank-you, visit-again

Key Functions:
    - generate_default_design(): Flags + page width -> Design
    - generate_for_format(): Flags (with template_format) -> Design

Dependencies:
    - core.models: Design and element types
    - generator.flags: FeatureFlags

Used By:
    - storage.store.open_template_design: bootstrap fallback
    - scripts/compile_design.py generate
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Any, Optional

from invoice_designer.common.thresholds import is_narrow_width
from invoice_designer.core.models.design import DESIGN_VERSION, Design
from invoice_designer.core.models.elements import (
    Element,
    ElementKind,
    TableColumn,
    TableConfig,
    TotalsConfig,
    TotalsRow,
)
from invoice_designer.core.models.page import PageSetup, page_preset, page_setup_for_width
from invoice_designer.core.models.styles import DEFAULT_GLOBAL_STYLES, ElementStyles

from .flags import FeatureFlags

logger = logging.getLogger(__name__)

RECEIPT_FONT_FAMILY = "'Courier New', 'Courier', monospace"

_id_counter = itertools.count(1)


def generate_default_id() -> str:
    """Unique within this process: ``el_default_<epoch ms>_<counter>``."""
    return f"el_default_{int(time.time() * 1000)}_{next(_id_counter)}"


class _Layout:
    """Accumulates elements and the running vertical cursor."""

    def __init__(self, page: PageSetup) -> None:
        self.page = page
        self.left = page.margins.left
        self.content_width = page.content_width
        self.y = page.margins.top
        self.elements: list[Element] = []

    def add(
        self,
        kind: ElementKind,
        x: float,
        width: float,
        height: float,
        styles: dict[str, Any],
        y: Optional[float] = None,
        **payload: Any,
    ) -> Element:
        element = Element(
            id=generate_default_id(),
            kind=kind,
            x=x,
            y=self.y if y is None else y,
            width=width,
            height=height,
            styles=ElementStyles().merged(styles),
            visible=True,
            z_index=len(self.elements) + 1,
            **payload,
        )
        self.elements.append(element)
        return element

    def full_width(self, kind: ElementKind, height: float, styles: dict[str, Any], **payload: Any) -> Element:
        return self.add(kind, self.left, self.content_width, height, styles, **payload)

    def divider(self, style: str) -> None:
        self.full_width(
            ElementKind.DIVIDER,
            3,
            {"padding": 0, "line_height": 1.4},
            divider_style=style,
            divider_color="#000000",
            divider_thickness=1,
            label="Divider",
        )
        self.advance(3)

    def advance(self, distance: float) -> None:
        self.y += distance


# ─────────────────────────────────────────────────────────────────────────────
# Receipt (narrow)
# ─────────────────────────────────────────────────────────────────────────────

def _receipt_columns(flags: FeatureFlags) -> tuple[TableColumn, ...]:
    less = flags.show_less_column
    columns = [
        TableColumn("product_name", "Item", 35 if less else 40, "left"),
        TableColumn("initial_quantity", "Qty", 15, "right"),
    ]
    if less:
        columns.append(TableColumn("less_quantity", "Less", 10, "right"))
    columns += [
        TableColumn("rate", "Rate", 20, "right"),
        TableColumn("total", "Amt", 20 if less else 25, "right"),
    ]
    return tuple(columns)


def _generate_receipt(flags: FeatureFlags, page: PageSetup) -> Design:
    layout = _Layout(page)
    half = layout.content_width / 2
    small = {"font_size": 9, "text_align": "center", "padding": 0, "line_height": 1.3}

    if flags.show_logo:
        layout.add(
            ElementKind.IMAGE,
            layout.left + (layout.content_width - 40) / 2,
            40,
            15,
            {"padding": 0, "line_height": 1.4},
            image_type="logo",
            label="Company Logo",
        )
        layout.advance(16)

    layout.full_width(
        ElementKind.FIELD,
        8,
        {"font_size": 14, "font_weight": "bold", "text_align": "center", "padding": 1, "line_height": 1.3},
        field_binding="company.name",
        label="Company Name",
    )
    layout.advance(8)

    if flags.show_company_address:
        layout.full_width(ElementKind.FIELD, 5, small, field_binding="company.address", label="Company Address")
        layout.advance(5)

    layout.full_width(ElementKind.FIELD, 5, small, field_binding="company.phone", content="Ph: ", label="Phone")
    layout.advance(5)

    if flags.show_gstin:
        layout.full_width(ElementKind.FIELD, 5, small, field_binding="company.gstin", content="GSTIN: ", label="GSTIN")
        layout.advance(5)

    layout.divider("dashed")

    # Invoice number and date share a row
    layout.add(
        ElementKind.FIELD, layout.left, half, 5,
        {"font_size": 9, "font_weight": "bold", "padding": 0, "line_height": 1.3},
        field_binding="voucher_no", content="Invoice: ", label="Invoice Number",
    )
    layout.add(
        ElementKind.FIELD, layout.left + half, half, 5,
        {"font_size": 9, "text_align": "right", "padding": 0, "line_height": 1.3},
        field_binding="voucher_date", content="Date: ", label="Invoice Date",
    )
    layout.advance(5)

    if flags.show_party_address:
        layout.full_width(
            ElementKind.FIELD, 5, {"font_size": 9, "padding": 0, "line_height": 1.3},
            field_binding="party.name", content="Customer: ", label="Customer Name",
        )
        layout.advance(5)

    layout.divider("dashed")

    layout.full_width(
        ElementKind.TABLE, 40, {"font_size": 9, "padding": 0, "line_height": 1.3},
        label="Items Table",
        table_config=TableConfig(
            columns=_receipt_columns(flags),
            show_header=True,
            show_serial_no=False,
            header_bg="transparent",
            header_color="#000000",
            header_font_size=9,
            body_font_size=9,
            border_style="none",
        ),
    )
    layout.advance(42)

    layout.divider("dashed")

    layout.full_width(
        ElementKind.TOTALS, 30, {"font_size": 9, "padding": 0, "line_height": 1.3},
        label="Totals",
        totals_config=TotalsConfig(
            rows=(
                TotalsRow("Subtotal", "subtotal", "currency", bold=False),
                TotalsRow("Discount", "discount_amount", "currency", bold=False),
                TotalsRow("Tax", "tax_total", "currency", bold=False),
                TotalsRow("TOTAL", "grand_total", "currency", bold=True),
            ),
            label_align="left",
            show_border=True,
        ),
    )
    layout.advance(32)

    layout.divider("dashed")

    layout.full_width(
        ElementKind.TEXT, 6,
        {"font_size": 10, "font_weight": "bold", "text_align": "center", "padding": 0, "line_height": 1.3},
        content="Thank You for Your Business!", label="Thank You",
    )
    layout.advance(7)

    layout.full_width(
        ElementKind.TEXT, 5, {"font_size": 8, "text_align": "center", "padding": 0, "line_height": 1.3},
        content="Visit Again!", label="Visit Again",
    )

    return Design(
        page_size=page,
        elements=tuple(layout.elements),
        global_styles=DEFAULT_GLOBAL_STYLES.merged({"font_family": RECEIPT_FONT_FAMILY, "font_size": 11}),
        version=DESIGN_VERSION,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Page (wide)
# ─────────────────────────────────────────────────────────────────────────────

def _page_columns(flags: FeatureFlags) -> tuple[TableColumn, ...]:
    columns = [
        TableColumn("serial_no", "S.No", 6, "center"),
        TableColumn("product_name", "Description", 28 if flags.show_item_hsn else 34, "left"),
    ]
    if flags.show_item_hsn:
        columns.append(TableColumn("hsn_code", "HSN", 10, "center"))
    columns.append(TableColumn("initial_quantity", "Qty", 8, "right"))
    if flags.show_less_column:
        columns.append(TableColumn("less_quantity", "Less", 7, "right"))
    columns += [
        TableColumn("rate", "Rate", 12, "right"),
        TableColumn("amount", "Amount", 14, "right"),
        TableColumn("tax_rate", "Tax %", 6, "center"),
        TableColumn("total", "Total", 10, "right"),
    ]
    return tuple(columns)


def _generate_page(flags: FeatureFlags, page: PageSetup) -> Design:
    layout = _Layout(page)
    cw = layout.content_width
    left = layout.left

    # Header fields sit beside the logo when there is one
    if flags.show_logo:
        layout.add(
            ElementKind.IMAGE, left, 30, 20, {"padding": 0, "line_height": 1.4},
            image_type="logo", label="Company Logo",
        )
        head_x, head_width, head_align = left + 35, cw - 35, "left"
    else:
        head_x, head_width, head_align = left, cw, "center"

    layout.add(
        ElementKind.FIELD, head_x, head_width, 12,
        {"font_size": 18, "font_weight": "bold", "text_align": head_align, "padding": 1, "line_height": 1.4},
        field_binding="company.name", label="Company Name",
    )
    layout.advance(13)

    if flags.show_company_address:
        layout.add(
            ElementKind.FIELD, head_x, head_width, 8,
            {"font_size": 9, "text_align": head_align, "padding": 1, "line_height": 1.3},
            field_binding="company.address", label="Company Address",
        )
        layout.advance(9)

    layout.add(
        ElementKind.FIELD, head_x, head_width, 6,
        {"font_size": 9, "text_align": head_align, "padding": 1, "line_height": 1.3},
        field_binding="company.phone", label="Company Phone",
    )
    layout.advance(7)

    if flags.show_gstin:
        layout.full_width(
            ElementKind.FIELD, 6, {"font_size": 9, "text_align": "center", "padding": 1, "line_height": 1.3},
            field_binding="company.gstin", label="GSTIN",
        )
        layout.advance(7)

    layout.divider("solid")

    layout.add(
        ElementKind.FIELD, left, cw / 2, 7,
        {"font_size": 10, "font_weight": "bold", "padding": 1, "line_height": 1.4},
        field_binding="voucher_no", label="Invoice Number",
    )
    layout.add(
        ElementKind.FIELD, left + cw / 2, cw / 2, 7,
        {"font_size": 10, "text_align": "right", "padding": 1, "line_height": 1.4},
        field_binding="voucher_date", label="Invoice Date",
    )
    layout.advance(8)

    if flags.show_party_address:
        layout.add(
            ElementKind.TEXT, left, 20, 6,
            {"font_size": 9, "font_weight": "bold", "padding": 1, "line_height": 1.4},
            content="Bill To:", label="Bill To Label",
        )
        layout.advance(6)
        layout.add(
            ElementKind.FIELD, left, cw * 0.5, 7,
            {"font_size": 10, "font_weight": "bold", "padding": 1, "line_height": 1.4},
            field_binding="party.name", label="Customer Name",
        )
        layout.advance(8)
        layout.add(
            ElementKind.FIELD, left, cw * 0.5, 12, {"font_size": 9, "padding": 1, "line_height": 1.4},
            field_binding="party.address", label="Customer Address",
        )
        layout.advance(13)

    layout.divider("solid")

    layout.full_width(
        ElementKind.TABLE, 80, {"font_size": 9, "padding": 0, "line_height": 1.4},
        label="Items Table",
        table_config=TableConfig(
            columns=_page_columns(flags),
            show_header=True,
            show_serial_no=True,
            header_bg="#f0f0f0",
            header_color="#000000",
            header_font_size=9,
            body_font_size=9,
            border_style="horizontal",
        ),
    )
    layout.advance(85)

    layout.add(
        ElementKind.TOTALS, left + cw * 0.5, cw * 0.5, 40, {"font_size": 10, "padding": 0, "line_height": 1.4},
        label="Totals",
        totals_config=TotalsConfig(
            rows=(
                TotalsRow("Subtotal", "subtotal", "currency", bold=False),
                TotalsRow("Discount", "discount_amount", "currency", bold=False),
                TotalsRow("Tax", "tax_total", "currency", bold=False),
                TotalsRow("Grand Total", "grand_total", "currency", bold=True),
            ),
            label_align="right",
            show_border=True,
        ),
    )
    layout.advance(45)

    if flags.show_bank_details:
        layout.add(
            ElementKind.TEXT, left, cw * 0.5, 17,
            {"font_size": 8, "padding": 2, "line_height": 1.5, "border": "1px solid #ddd", "border_radius": 4},
            content="Bank Details:\nBank: {{bank.name}}\nA/C: {{bank.account_no}}\nIFSC: {{bank.ifsc}}",
            label="Bank Details",
        )
        layout.advance(17)

    if flags.show_terms:
        layout.add(
            ElementKind.TEXT, left, cw * 0.55, 15, {"font_size": 7, "padding": 2, "line_height": 1.5},
            content="Terms & Conditions:\n1. Goods once sold will not be taken back.\n2. Subject to local jurisdiction.",
            label="Terms & Conditions",
        )
        layout.advance(16)

    if flags.show_signature:
        layout.add(
            ElementKind.TEXT, left + cw * 0.6, cw * 0.35, 25,
            {"font_size": 9, "text_align": "center", "padding": 2, "line_height": 1.4, "border": "1px solid #ddd"},
            content="\n\n\nAuthorized Signatory",
            label="Signature",
        )

    return Design(
        page_size=page,
        elements=tuple(layout.elements),
        global_styles=DEFAULT_GLOBAL_STYLES,
        version=DESIGN_VERSION,
    )


def generate_default_design(flags: FeatureFlags, page_width: float) -> Design:
    """
    Build the default design for a page width.

    Args:
        flags: Feature switches
        page_width: Page width in mm; below 120 yields a receipt layout

    Returns:
        New Design (element ids unique within it)

    Example:
        >>> design = generate_default_design(FeatureFlags(show_logo=True), 210)
        >>> design.elements[0].kind
        <ElementKind.IMAGE: 'image'>
    """
    return _generate(flags, page_setup_for_width(page_width))


def generate_for_format(flags: FeatureFlags) -> Design:
    """Default design on the page preset named by ``flags.template_format``."""
    return _generate(flags, page_preset(flags.template_format))


def _generate(flags: FeatureFlags, page: PageSetup) -> Design:
    if is_narrow_width(page.width):
        design = _generate_receipt(flags, page)
    else:
        design = _generate_page(flags, page)
    logger.info(
        f"Generated default {'receipt' if page.is_narrow else 'page'} design: "
        f"{len(design.elements)} elements at {page.width}mm"
    )
    return design
