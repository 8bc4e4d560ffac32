"""
Module: compiler.absolute

Purpose:
    Absolute (page) rendering strategy for wide formats such as A4.

    Every element keeps its literal millimetre box and is wrapped in a
    ``de`` container plus a kind class (``de-text``, ``de-table`` ...).
    Image elements are guarded by the company-has-logo flag so the
    rendered page omits the block entirely when there is no logo.

Key Functions:
    - render_absolute_region(): Markup for one region
    - render_absolute_element(): Markup for one element
    - absolute_stylesheet(): Positioned page container CSS

Used By:
    - compiler.compiler.compile_design
"""

from __future__ import annotations

import logging
from typing import Sequence

from invoice_designer.core.models.design import Design
from invoice_designer.core.models.elements import Element, ElementKind, TableConfig

from .inline_styles import absolute_style, css_number
from .markup import (
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

STRIPE_COLOR = "#f9f9f9"


def render_absolute_region(elements: Sequence[Element]) -> str:
    return "\n".join(render_absolute_element(el) for el in elements)


def _container(element: Element, inner: str = "") -> str:
    return f'<div class="de de-{element.kind.value}" style="{absolute_style(element)}">{inner}</div>'


def render_absolute_element(element: Element) -> str:
    kind = element.kind

    if kind == ElementKind.TEXT:
        return _container(element, escape_html(element.content))

    if kind == ElementKind.FIELD:
        return _container(element, escape_html(element.content) + placeholder(element.field_binding))

    if kind == ElementKind.IMAGE:
        inner = ""
        if element.is_logo:
            inner = (
                f'<img src="{{{{{LOGO_SOURCE}}}}}" alt="{{{{company.name}}}}" '
                'style="max-width:100%;max-height:100%;object-fit:contain;" />'
            )
        return if_block(LOGO_FLAG, _container(element, inner))

    if kind == ElementKind.TABLE:
        return _render_table(element)

    if kind == ElementKind.DIVIDER:
        thickness = css_number(element.divider_thickness or 1)
        line = f"{element.divider_style or 'solid'} {element.divider_color or '#ccc'}"
        return _container(
            element,
            f'<hr style="width:100%;border:none;border-top:{thickness}px {escape_html(line)};margin:0;" />',
        )

    if kind == ElementKind.TOTALS:
        return _render_totals(element)

    if kind == ElementKind.SHAPE:
        return _container(element)

    return ""


def _cell_border(config: TableConfig) -> str:
    if config.border_style == "full":
        return "border:1px solid #ddd;"
    if config.border_style == "horizontal":
        return "border-bottom:1px solid #eee;"
    return ""


def _render_table(element: Element) -> str:
    config = element.table_config
    if config is None:
        logger.warning(f"Table element {element.id} has no table configuration")
        return _container(element, TABLE_FALLBACK)

    border = _cell_border(config)
    table_style = f"width:100%;border-collapse:collapse;font-size:{css_number(config.body_font_size or 9)}pt;"
    table_class = ""
    if config.striped_rows:
        # Even rows pick up --stripe-color via the .striped rule in the stylesheet
        table_class = ' class="striped"'
        table_style += f"--stripe-color:{escape_html(config.striped_color or STRIPE_COLOR)};"
    html = f'<table{table_class} style="{table_style}">'

    if config.show_header:
        header_bg = escape_html(config.header_bg or "#f0f0f0")
        header_color = escape_html(config.header_color or "#000")
        header_size = css_number(config.header_font_size or 9)
        html += "<thead><tr>"
        for col in config.columns:
            html += (
                f'<th style="background:{header_bg};color:{header_color};padding:4px 6px;{border}'
                f'text-align:{escape_html(col.align)};width:{css_number(col.width)}%;font-size:{header_size}pt;">'
                f"{escape_html(col.label)}</th>"
            )
        html += "</tr></thead>"

    cells = "".join(
        f'<td style="padding:4px 6px;{border}text-align:{escape_html(col.align)};">'
        f"{column_cell(col, 'format_currency')}</td>"
        for col in config.columns
    )
    html += "<tbody>" + each_block("items", f"<tr>{cells}</tr>") + "</tbody>"
    html += "</table>"
    return _container(element, html)


def _render_totals(element: Element) -> str:
    config = element.totals_config
    if config is None:
        logger.warning(f"Totals element {element.id} has no totals configuration")
        return _container(element, TOTALS_FALLBACK)

    label_align = escape_html(config.label_align or "right")
    value_align = escape_html(config.value_align or "right")
    html = '<table style="width:100%;"><tbody>'
    for row in config.rows:
        border_top = "border-top:1px solid #333;" if row.bold and config.show_border else ""
        weight = "font-weight:bold;" if row.bold else ""
        if row.format == "currency":
            value = helper("format_currency", row.field)
        else:
            value = placeholder(row.field)
        html += (
            "<tr>"
            f'<td style="text-align:{label_align};padding:2px 6px;{border_top}{weight}">'
            f"{escape_html(row.label)}:</td>"
            f'<td style="text-align:{value_align};padding:2px 6px;width:40%;{border_top}{weight}">'
            f"{value}</td>"
            "</tr>"
        )
    html += "</tbody></table>"
    return _container(element, html)


def absolute_stylesheet(design: Design) -> str:
    """Single positioned ``.invoice-page`` container sized to the page."""
    page = design.page_size
    m = page.margins
    g = design.global_styles
    width = css_number(page.width)
    height = css_number(page.height)

    return f""".invoice-page {{
  position: relative;
  width: {width}mm;
  min-height: {height}mm;
  margin: 0 auto;
  padding: {css_number(m.top)}mm {css_number(m.right)}mm {css_number(m.bottom)}mm {css_number(m.left)}mm;
  font-family: {g.font_family};
  font-size: {css_number(g.font_size)}pt;
  color: {g.color};
  background: {g.background_color};
  box-sizing: border-box;
}}
.de {{ position: absolute; box-sizing: border-box; }}
.de-text {{ white-space: pre-wrap; }}
.de-image {{ display: flex; align-items: center; justify-content: center; }}
.de-image img {{ max-width: 100%; max-height: 100%; object-fit: contain; }}
.de-divider {{ display: flex; align-items: center; }}
.de-table table.striped tbody tr:nth-child(even) {{ background: var(--stripe-color, {STRIPE_COLOR}); }}
@media print {{
  @page {{
    size: {width}mm {height}mm;
    margin: 0;
  }}
  body {{ margin: 0; }}
  .invoice-page {{ margin: 0; }}
}}"""
