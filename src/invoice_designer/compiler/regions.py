"""
Module: compiler.regions

Purpose:
    Split a design's visible elements into header, body and footer.

    There is no user-declared region: placing a table or totals block is
    what defines the boundaries. Elements are read top-to-bottom (ties
    left-to-right) and scanned once:

        BEFORE_TABLE --table--> IN_BODY --totals--> AFTER_TOTALS

    - table / totals elements always land in the body
    - other elements land in the header until a table has been seen
    - after totals has been seen they land in the footer
    - between a table and totals they land in the body

    Both "seen" flags are sticky and independent: a totals block placed
    above every table sends the elements after it to the header, not the
    footer, because no table has been seen yet.

Key Functions:
    - reading_order(): Sort elements by (y, x)
    - partition_regions(): Classify visible elements

Used By:
    - compiler.compiler.compile_design
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from invoice_designer.core.models.elements import Element, ElementKind

from .models import Region, RegionPartition

logger = logging.getLogger(__name__)


class ScanPhase(str, Enum):
    BEFORE_TABLE = "before_table"
    IN_BODY = "in_body"
    AFTER_TOTALS = "after_totals"


class _RegionScanner:
    """Sticky-flag classifier; feed elements in reading order."""

    def __init__(self) -> None:
        self.seen_table = False
        self.seen_totals = False

    @property
    def phase(self) -> ScanPhase:
        if not self.seen_table:
            return ScanPhase.BEFORE_TABLE
        if self.seen_totals:
            return ScanPhase.AFTER_TOTALS
        return ScanPhase.IN_BODY

    def classify(self, element: Element) -> Region:
        if element.kind == ElementKind.TABLE:
            self.seen_table = True
            return Region.BODY
        if element.kind == ElementKind.TOTALS:
            self.seen_totals = True
            return Region.BODY

        phase = self.phase
        if phase == ScanPhase.BEFORE_TABLE:
            return Region.HEADER
        if phase == ScanPhase.AFTER_TOTALS:
            return Region.FOOTER
        return Region.BODY


def reading_order(elements: Iterable[Element]) -> list[Element]:
    """Top-to-bottom, then left-to-right."""
    return sorted(elements, key=lambda el: (el.y, el.x))


def partition_regions(elements: Iterable[Element]) -> RegionPartition:
    """
    Assign every visible element to a region.

    Hidden elements are dropped. Source order does not matter; elements
    are re-sorted before the scan.
    """
    buckets: dict[Region, list[Element]] = {region: [] for region in Region}
    scanner = _RegionScanner()

    for element in reading_order(el for el in elements if el.visible):
        buckets[scanner.classify(element)].append(element)

    if not scanner.seen_table:
        logger.debug("No table element; every element falls into the header")

    return RegionPartition(
        header=tuple(buckets[Region.HEADER]),
        body=tuple(buckets[Region.BODY]),
        footer=tuple(buckets[Region.FOOTER]),
    )
