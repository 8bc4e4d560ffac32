"""
Module: compiler.markup

Purpose:
    Text escaping and builders for the placeholder mini-language consumed
    by the external rendering engine (handlebars syntax).

    Literal text and labels are escaped; placeholders never are. Whatever
    escaping bound values need is the rendering engine's job.

Key Functions:
    - escape_html(): Escape & < > "
    - placeholder(): ``{{path}}`` (or the unbound marker)
    - if_block() / each_block(): ``{{#if}}`` / ``{{#each}}`` guards
    - column_cell(): Items-table cell binding chosen by column format
"""

from __future__ import annotations

from typing import Optional

from invoice_designer.core.models.elements import TableColumn

# Rendered by handlebars as nothing; keeps unbound fields well-formed
UNBOUND_PLACEHOLDER = "{{!unbound}}"

SERIAL_COUNTER = "{{increment @index}}"
SERIAL_COLUMN_KEY = "serial_no"

LOGO_FLAG = "company.has_logo"
LOGO_SOURCE = "company.logo"

TABLE_FALLBACK = "[table]"
TOTALS_FALLBACK = "[totals]"

CURRENCY_SYMBOL = "₹"


def escape_html(text: Optional[str]) -> str:
    """
    Escape the four markup-unsafe characters.

    Example:
        >>> escape_html('<b>&"x"</b>')
        '&lt;b&gt;&amp;&quot;x&quot;&lt;/b&gt;'
    """
    if not text:
        return ""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def placeholder(path: Optional[str]) -> str:
    """Binding expression for a dotted field path."""
    if not path or not path.strip():
        return UNBOUND_PLACEHOLDER
    return f"{{{{{path.strip()}}}}}"


def helper(name: str, *args: object) -> str:
    """Helper call, e.g. ``helper("format_number", "rate", 2)``."""
    return "{{" + " ".join([name, *(str(a) for a in args)]) + "}}"


def if_block(flag: str, inner: str) -> str:
    return f"{{{{#if {flag}}}}}{inner}{{{{/if}}}}"


def each_block(sequence: str, inner: str) -> str:
    return f"{{{{#each {sequence}}}}}{inner}{{{{/each}}}}"


def column_cell(column: TableColumn, currency_helper: str) -> str:
    """
    Placeholder for one items-table cell.

    ``serial_no`` is a 1-based counter over the loop index. Currency,
    number and date columns go through formatting helpers; anything else
    binds the raw item field.

    Args:
        column: Column configuration
        currency_helper: ``format_currency`` (page layout) or
            ``format_number`` (receipt layout, two decimals)
    """
    if column.key == SERIAL_COLUMN_KEY:
        return SERIAL_COUNTER
    if column.format == "currency":
        if currency_helper == "format_number":
            return helper("format_number", column.key, 2)
        return helper(currency_helper, column.key)
    if column.format == "number":
        return helper("format_number", column.key, 2)
    if column.format == "date":
        return helper("format_date", column.key)
    return placeholder(column.key)
