"""
Module: compiler.compiler

Purpose:
    Entry point of the layout compiler: Design -> CompiledTemplate.

    Pure function. The page width picks the strategy once per call
    (narrow pages flow, wide pages are absolutely positioned); both
    strategies share the same region partition.

Key Functions:
    - select_layout_mode(): Strategy for a design
    - compile_design(): Design -> header/body/footer markup + CSS

Dependencies:
    - compiler.regions: partition_regions
    - compiler.flow / compiler.absolute: rendering strategies

Used By:
    - storage.store.save_template_design
    - scripts/compile_design.py
"""

from __future__ import annotations

import logging

from invoice_designer.core.models.design import Design

from .absolute import absolute_stylesheet, render_absolute_region
from .flow import flow_stylesheet, render_flow_region
from .models import CompiledTemplate, LayoutMode, Region
from .regions import partition_regions

logger = logging.getLogger(__name__)

_RENDERERS = {
    LayoutMode.FLOW: (render_flow_region, flow_stylesheet),
    LayoutMode.ABSOLUTE: (render_absolute_region, absolute_stylesheet),
}


def select_layout_mode(design: Design) -> LayoutMode:
    """FLOW iff the page is narrower than the flow threshold (120mm)."""
    return LayoutMode.for_page_width(design.page_size.width)


def compile_design(design: Design) -> CompiledTemplate:
    """
    Compile a design into template artifacts.

    Never raises for a structurally valid design: elements with missing
    configuration compile to fallback markup instead.

    Args:
        design: Design to compile (not modified)

    Returns:
        CompiledTemplate with header/body/footer markup and stylesheet

    Example:
        >>> compiled = compile_design(design)
        >>> compiled.mode
        <LayoutMode.ABSOLUTE: 'absolute'>
    """
    mode = select_layout_mode(design)
    render_region, build_stylesheet = _RENDERERS[mode]
    partition = partition_regions(design.elements)

    compiled = CompiledTemplate(
        header_html=render_region(partition.elements_in(Region.HEADER)),
        body_html=render_region(partition.elements_in(Region.BODY)),
        footer_html=render_region(partition.elements_in(Region.FOOTER)),
        styles_css=build_stylesheet(design),
        mode=mode,
    )
    logger.info(
        f"Compiled design ({mode} layout): "
        f"{len(partition.header)} header, {len(partition.body)} body, "
        f"{len(partition.footer)} footer elements"
    )
    return compiled
