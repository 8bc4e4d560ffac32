"""
Module: compiler.inline_styles

Purpose:
    Inline ``style`` attribute builders for compiled elements.

    Only style fields the element sets are emitted; unset fields inherit
    the page-wide defaults from the stylesheet through the CSS cascade.
    Flow output carries typography and spacing only. Absolute output adds
    the element's literal millimetre box and stacking order.

Key Functions:
    - css_number(): Compact number formatting for CSS values
    - typography_declarations(): Style-bundle declarations shared by both modes
    - flow_style(): Receipt layout style
    - absolute_style(): Page layout style
"""

from __future__ import annotations

from invoice_designer.core.models.elements import Element
from invoice_designer.core.models.styles import ElementStyles

from .markup import escape_html


def css_number(value: float) -> str:
    """
    ``10.0`` -> ``"10"``, ``12.5`` -> ``"12.5"``.

    Example:
        >>> css_number(63.333333333)
        '63.3333'
    """
    if float(value).is_integer():
        return str(int(value))
    text = f"{round(float(value), 4):.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def typography_declarations(styles: ElementStyles, *, letter_spacing: bool = True) -> list[str]:
    """CSS declarations for the set, non-default fields of a style bundle."""
    s = styles
    parts: list[str] = []
    if s.font_family:
        parts.append(f"font-family:{s.font_family}")
    if s.font_size:
        parts.append(f"font-size:{css_number(s.font_size)}pt")
    if s.font_weight and s.font_weight != "normal":
        parts.append(f"font-weight:{s.font_weight}")
    if s.font_style and s.font_style != "normal":
        parts.append(f"font-style:{s.font_style}")
    if s.text_decoration and s.text_decoration != "none":
        parts.append(f"text-decoration:{s.text_decoration}")
    if s.color:
        parts.append(f"color:{s.color}")
    if s.background_color and s.background_color != "transparent":
        parts.append(f"background-color:{s.background_color}")
    if s.text_align:
        parts.append(f"text-align:{s.text_align}")
    if s.line_height:
        parts.append(f"line-height:{css_number(s.line_height)}")
    if letter_spacing and s.letter_spacing:
        parts.append(f"letter-spacing:{css_number(s.letter_spacing)}px")
    if s.text_transform and s.text_transform != "none":
        parts.append(f"text-transform:{s.text_transform}")
    if s.border:
        parts.append(f"border:{s.border}")
    if s.border_radius:
        parts.append(f"border-radius:{css_number(s.border_radius)}px")
    if s.padding:
        parts.append(f"padding:{css_number(s.padding)}mm")
    if s.opacity is not None and s.opacity < 1:
        parts.append(f"opacity:{css_number(s.opacity)}")
    return parts


def flow_style(element: Element) -> str:
    """Typography and spacing only; no coordinates."""
    parts = typography_declarations(element.styles, letter_spacing=False)
    parts.append("margin:2px 0")
    return escape_html(";".join(parts))


def absolute_style(element: Element) -> str:
    """Literal mm box plus typography and stacking order."""
    parts = [
        "position:absolute",
        f"left:{css_number(element.x)}mm",
        f"top:{css_number(element.y)}mm",
        f"width:{css_number(element.width)}mm",
        f"height:{css_number(element.height)}mm",
        "box-sizing:border-box",
        "overflow:hidden",
    ]
    parts.extend(typography_declarations(element.styles))
    if element.z_index:
        parts.append(f"z-index:{element.z_index}")
    return escape_html(";".join(parts))
