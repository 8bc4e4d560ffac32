"""
Module: compiler.flow

Purpose:
    Flow (receipt) rendering strategy for narrow pages.

    Receipt printers feed a roll of variable-length stock, so nothing is
    positioned: elements are emitted top-to-bottom and only typography
    and spacing survive. Elements whose y positions agree within the row
    tolerance share one flex row (e.g. "Invoice: ..." / "Date: ...").

    The totals block is always followed by a fixed account summary (old
    balance, bill amount, paid amount, balance due). It is not driven by
    the element's totals rows; downstream receipt templates rely on it.

Key Functions:
    - group_rows(): Group elements sharing a y position
    - render_flow_region(): Markup for one region
    - render_flow_element(): Markup for one element
    - flow_stylesheet(): Receipt page CSS

Used By:
    - compiler.compiler.compile_design
"""

from __future__ import annotations

import logging
from typing import Sequence

from invoice_designer.common.thresholds import COMPILER
from invoice_designer.core.models.design import Design
from invoice_designer.core.models.elements import Element, ElementKind

from .inline_styles import css_number, flow_style
from .markup import (
    CURRENCY_SYMBOL,
    LOGO_FLAG,
    LOGO_SOURCE,
    TABLE_FALLBACK,
    TOTALS_FALLBACK,
    column_cell,
    each_block,
    escape_html,
    helper,
    if_block,
    placeholder,
)

logger = logging.getLogger(__name__)

# Totals rows hidden entirely when their value is zero/empty
_HIDE_WHEN_EMPTY = ("discount_amount", "tax_total")

_ROW_STYLE = "display:flex;justify-content:space-between;padding:2px 0;color:#000;"

ACCOUNT_SUMMARY_HTML = """
<div style="border-top:1px dashed #000;margin:10px 0;padding:5px 0;font-size:11px;color:#000;">
    <div style="display:flex;justify-content:space-between;"><span>Old Bal:</span><span>{{abs_format_number old_balance 2}}</span></div>
    <div style="display:flex;justify-content:space-between;"><span>Bill Amt:</span><span>{{format_number grand_total 2}}</span></div>
    <div style="display:flex;justify-content:space-between;"><span>Paid Amt:</span><span>{{format_number paid_amount 2}}</span></div>
    <div style="display:flex;justify-content:space-between;font-weight:bold;border-top:1px dotted #000;padding-top:2px;margin-top:2px;font-size:12px;"><span>Bal Due:</span><span>{{abs_format_number balance_due 2}}</span></div>
</div>"""


def group_rows(
    elements: Sequence[Element],
    tolerance: float = COMPILER.row_group_tolerance,
) -> list[list[Element]]:
    """
    Group consecutive elements whose y is within ``tolerance`` of the
    row's first element.

    Elements must already be in reading order.
    """
    rows: list[list[Element]] = []
    row_y: float | None = None
    for element in elements:
        if rows and row_y is not None and abs(element.y - row_y) < tolerance:
            rows[-1].append(element)
        else:
            rows.append([element])
            row_y = element.y
    return rows


def render_flow_region(elements: Sequence[Element]) -> str:
    """Markup for one region; rows are concatenated top-to-bottom."""
    chunks: list[str] = []
    for row in group_rows(elements):
        if len(row) == 1:
            chunks.append(render_flow_element(row[0]))
            continue
        inner = "\n".join(render_flow_element(el) for el in row)
        chunks.append(
            '<div style="display:flex;justify-content:space-between;align-items:flex-start;">\n'
            f"{inner}\n</div>"
        )
    return "\n".join(chunks)


def render_flow_element(element: Element) -> str:
    style = flow_style(element)
    kind = element.kind

    if kind == ElementKind.TEXT:
        return f'<div style="{style}">{escape_html(element.content)}</div>'

    if kind == ElementKind.FIELD:
        prefix = escape_html(element.content)
        binding = (element.field_binding or "").strip()
        if binding and "date" in binding:
            value = helper("format_date", binding)
        else:
            value = placeholder(binding)
        return f'<div style="{style}">{prefix}{value}</div>'

    if kind == ElementKind.IMAGE:
        if element.is_logo:
            img = (
                f'<img src="{{{{{LOGO_SOURCE}}}}}" alt="Logo" '
                'style="max-width:100%;max-height:100%;object-fit:contain;" />'
            )
            return if_block(LOGO_FLAG, f'<div style="{style}">{img}</div>')
        return f'<div style="{style}"></div>'

    if kind == ElementKind.DIVIDER:
        thickness = css_number(element.divider_thickness or 1)
        line = f"{element.divider_style or 'dashed'} {element.divider_color or '#000'}"
        return f'<div style="border-top:{thickness}px {escape_html(line)};margin:0;"></div>'

    if kind == ElementKind.TABLE:
        return _render_table(element)

    if kind == ElementKind.TOTALS:
        return _render_totals(element)

    # Shapes are decorative boxes; receipts have no room for them
    return ""


def _render_table(element: Element) -> str:
    config = element.table_config
    if config is None:
        logger.warning(f"Table element {element.id} has no table configuration")
        return f'<div style="{flow_style(element)}">{TABLE_FALLBACK}</div>'

    font_size = css_number(config.body_font_size or 9)
    header_font_size = css_number(config.header_font_size or config.body_font_size or 9)

    html = f'<table style="width:100%;border-collapse:collapse;font-size:{font_size}pt;color:#000;">'

    if config.show_header:
        html += "<thead><tr>"
        for col in config.columns:
            bg = ""
            if config.header_bg and config.header_bg != "#f0f0f0":
                bg = f"background:{escape_html(config.header_bg)};"
            html += (
                f'<th style="text-align:{escape_html(col.align)};padding:4px 2px;font-size:{header_font_size}pt;'
                f'border-bottom:1px solid #000;font-weight:bold;color:#000;{bg}">'
                f"{escape_html(col.label)}</th>"
            )
        html += "</tr></thead>"

    cells = "".join(
        f'<td style="padding:4px 2px;text-align:{escape_html(col.align)};font-size:{font_size}pt;'
        f'color:#000;font-weight:bold;">{column_cell(col, "format_number")}</td>'
        for col in config.columns
    )
    html += "<tbody>" + each_block("items", f"<tr>{cells}</tr>") + "</tbody>"
    html += "</table>"
    return html


def _render_totals(element: Element) -> str:
    config = element.totals_config
    if config is None:
        logger.warning(f"Totals element {element.id} has no totals configuration")
        return f'<div style="{flow_style(element)}">{TOTALS_FALLBACK}</div>'

    font_size = element.styles.font_size or 10
    html = '<div class="totals" style="color:#000;">'

    for row in config.rows:
        if row.field == "grand_total":
            extra = (
                f"font-weight:bold;font-size:{css_number(font_size + 2)}pt;"
                "border-top:1px solid #000;padding-top:5px;margin-top:5px;"
            )
        elif row.bold:
            extra = "font-weight:bold;"
        else:
            extra = ""

        if row.format == "currency":
            value = CURRENCY_SYMBOL + helper("format_number", row.field, 2)
        else:
            value = placeholder(row.field)

        line = (
            f'<div style="{_ROW_STYLE}{extra}">'
            f"<span>{escape_html(row.label)}:</span><span>{value}</span></div>"
        )
        if row.format == "currency" and row.field in _HIDE_WHEN_EMPTY:
            line = if_block(row.field, line)
        html += line

    html += "</div>"
    html += ACCOUNT_SUMMARY_HTML
    return html


def flow_stylesheet(design: Design) -> str:
    """
    Receipt page CSS.

    The body is forced to the content width, and everything prints black
    and bold: thermal heads render neither colour nor weight variation
    reliably. Page height is automatic so the roll is cut after content.
    """
    page = design.page_size
    globals_ = design.global_styles
    margins = page.margins
    body_width = css_number(page.content_width)
    font_family = globals_.font_family or "'Courier New', 'Courier', monospace"
    font_size = css_number(globals_.font_size or 11)

    return f"""@page {{
    margin: 0;
    size: {css_number(page.width)}mm auto;
}}
* {{
    color: #000000 !important;
    border-color: #000000 !important;
}}
body, p, span, div, td, th, h1, h2, h3, h4, h5, h6 {{
    font-weight: bold !important;
}}
body {{
    font-family: {font_family};
    font-size: {font_size}pt;
    width: {body_width}mm;
    margin: 0;
    padding: {css_number(margins.top)}mm {css_number(margins.right)}mm {css_number(margins.bottom)}mm {css_number(margins.left)}mm;
    line-height: 1.3;
    color: #000000;
}}
.totals {{
    margin-top: 8px;
    font-size: 9pt;
    color: #000000;
}}
@media print {{
    body {{
        width: {body_width}mm;
        color: #000000;
    }}
}}"""
