"""
Module: preview.wireframe

Purpose:
    Wireframe thumbnail of a Design: the page, its content-area margins
    and every visible element as a labelled box, drawn in z-index order.
    Used for template pickers and for eyeballing generated designs; it
    is not a render of the compiled template.

Key Functions:
    - render_wireframe(): Draw a design to a PIL image
    - save_wireframe(): Render and save as PNG

Dependencies:
    - PIL: Image drawing

Used By:
    - scripts/compile_design.py preview
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from invoice_designer.common.thresholds import MM_TO_PX
from invoice_designer.core.models.design import Design
from invoice_designer.core.models.elements import Element, ElementKind

logger = logging.getLogger(__name__)

# Visualization constants
COLORS = {
    ElementKind.TEXT: (33, 150, 243, 200),     # Blue
    ElementKind.FIELD: (0, 150, 136, 200),     # Teal
    ElementKind.IMAGE: (156, 39, 176, 200),    # Purple
    ElementKind.TABLE: (255, 152, 0, 200),     # Orange
    ElementKind.DIVIDER: (97, 97, 97, 200),    # Grey
    ElementKind.TOTALS: (244, 67, 54, 200),    # Red
    ElementKind.SHAPE: (121, 85, 72, 200),     # Brown
}

PAGE_COLOR = (255, 255, 255, 255)
MARGIN_COLOR = (200, 200, 200, 255)
LABEL_TEXT_COLOR = (0, 0, 0, 255)
BOX_LINE_WIDTH = 2
FONT_SIZE = 11


def _box(element: Element, scale: float) -> Tuple[int, int, int, int]:
    return (
        round(element.x * scale),
        round(element.y * scale),
        round(element.right * scale),
        round(element.bottom * scale),
    )


def _label(element: Element) -> str:
    if element.label:
        return element.label
    if element.kind == ElementKind.FIELD and element.field_binding:
        return element.field_binding
    return element.kind.value


def render_wireframe(design: Design, scale: float = MM_TO_PX) -> Image.Image:
    """
    Draw the design as labelled boxes.

    Args:
        design: Design to draw
        scale: Pixels per millimetre (96 dpi by default)

    Returns:
        RGB image of the page

    Example:
        >>> img = render_wireframe(design, scale=2)
        >>> img.size
        (420, 594)
    """
    page = design.page_size
    size = (max(1, round(page.width * scale)), max(1, round(page.height * scale)))
    img = Image.new("RGBA", size, PAGE_COLOR)
    overlay = Image.new("RGBA", size, (255, 255, 255, 0))
    draw = ImageDraw.Draw(overlay)

    try:
        font = ImageFont.truetype("Arial.ttf", FONT_SIZE)
    except (IOError, OSError):
        font = ImageFont.load_default()

    # Content area
    m = page.margins
    draw.rectangle(
        (
            round(m.left * scale),
            round(m.top * scale),
            round((page.width - m.right) * scale),
            round((page.height - m.bottom) * scale),
        ),
        outline=MARGIN_COLOR,
        width=1,
    )

    visible = sorted((el for el in design.elements if el.visible), key=lambda el: el.z_index)
    for element in visible:
        color = COLORS.get(element.kind, (0, 0, 0, 200))
        box = _box(element, scale)
        fill = color[:3] + (40,)
        draw.rectangle(box, outline=color, fill=fill, width=BOX_LINE_WIDTH)
        draw.text((box[0] + 2, box[1] + 1), _label(element), fill=LABEL_TEXT_COLOR, font=font)

    img = Image.alpha_composite(img, overlay)
    return img.convert("RGB")


def save_wireframe(design: Design, output_path: Path, scale: float = MM_TO_PX) -> Path:
    """Render the wireframe and save it as PNG, creating parent directories."""
    img = render_wireframe(design, scale=scale)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(output_path, "PNG")
    logger.info(f"Saved wireframe for {len(design.elements)} elements to {output_path.name}")
    return output_path
