"""
Module: compiler.models

Purpose:
    Value types produced and consumed by the layout compiler.

Key Classes:
    - LayoutMode: FLOW (narrow receipt) or ABSOLUTE (fixed page)
    - Region: HEADER | BODY | FOOTER
    - RegionPartition: Elements assigned to each region
    - CompiledTemplate: Header/body/footer markup plus stylesheet

Dependencies:
    - dataclasses (std)
    - common.thresholds: flow width threshold

Used By:
    - compiler.regions: partition_regions
    - compiler.compiler: compile_design
    - storage.store: persisted compiled artifacts
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from invoice_designer.common.thresholds import is_narrow_width
from invoice_designer.core.models.elements import Element


class LayoutMode(str, Enum):
    """Rendering strategy, chosen once per compile from the page width."""
    FLOW = "flow"          # Receipt rolls: top-to-bottom, no coordinates
    ABSOLUTE = "absolute"  # Fixed pages: every element at its literal mm box

    @classmethod
    def for_page_width(cls, width_mm: float) -> LayoutMode:
        return cls.FLOW if is_narrow_width(width_mm) else cls.ABSOLUTE

    def __str__(self) -> str:
        return self.value


class Region(str, Enum):
    HEADER = "header"
    BODY = "body"
    FOOTER = "footer"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RegionPartition:
    """
    Visible elements split into header/body/footer (immutable).

    Each tuple keeps the y-then-x reading order the scan used.
    """

    header: tuple[Element, ...] = ()
    body: tuple[Element, ...] = ()
    footer: tuple[Element, ...] = ()

    def elements_in(self, region: Region) -> tuple[Element, ...]:
        return getattr(self, region.value)

    def region_of(self, element_id: str) -> Region | None:
        """Region holding the element, or None if it was not partitioned."""
        for region in Region:
            if any(el.id == element_id for el in self.elements_in(region)):
                return region
        return None


@dataclass(frozen=True)
class CompiledTemplate:
    """
    Compiler output handed to the external rendering engine.

    The markup strings interleave literal HTML with handlebars-style
    placeholders (``{{field}}``, ``{{#if}}``, ``{{#each}}``, helpers).

    Attributes:
        header_html: Markup for elements above the items table
        body_html: Items table, totals and anything between them
        footer_html: Markup for elements after the totals block
        styles_css: Page-level stylesheet
        mode: Strategy that produced the output
    """

    header_html: str
    body_html: str
    footer_html: str
    styles_css: str
    mode: LayoutMode

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the keys the template store persists."""
        return {
            "headerHtml": self.header_html,
            "bodyHtml": self.body_html,
            "footerHtml": self.footer_html,
            "stylesCss": self.styles_css,
        }
