"""
Module: core.models.page

Purpose:
    Page geometry. PageSetup holds the physical page size and margins in
    millimetres; width alone decides whether a design is laid out as a
    narrow receipt (flow) or a fixed page (absolute).

Key Classes:
    - Margins: Four page margins (mm)
    - PageSetup: Page width/height plus margins

Key Functions:
    - page_preset(): Look up a named preset
    - page_setup_for_width(): Preset (or synthesized setup) for a width

Dependencies:
    - dataclasses (std)
    - common.thresholds: narrow/wide decision

Used By:
    - core.models.design.Design
    - designer.state: element placement within the content area
    - generator.default_design: preset selection
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping

from invoice_designer.common.thresholds import is_narrow_width

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Margins:
    """Page margins in millimetres."""

    top: float = 10
    right: float = 10
    bottom: float = 10
    left: float = 10

    def __post_init__(self) -> None:
        """Validate margins on construction."""
        for side in ("top", "right", "bottom", "left"):
            value = getattr(self, side)
            if value < 0:
                raise ValueError(f"{side} margin must be >= 0: {value}")

    def merged(self, changes: Mapping[str, Any]) -> Margins:
        return replace(self, **{k: v for k, v in changes.items() if k in ("top", "right", "bottom", "left")})

    def to_dict(self) -> dict[str, float]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Margins:
        return cls(
            top=data.get("top", 0),
            right=data.get("right", 0),
            bottom=data.get("bottom", 0),
            left=data.get("left", 0),
        )


@dataclass(frozen=True, slots=True)
class PageSetup:
    """
    Physical page size and margins (immutable).

    Attributes:
        width: Page width in mm (A4 = 210, thermal roll = 80 or 58)
        height: Page height in mm (thermal rolls use a nominal height)
        margins: Page margins in mm

    Invariants:
        - width > 0, height > 0
        - left + right margins < width

    Example:
        >>> page = PageSetup(width=80, height=200, margins=Margins(3, 3, 3, 3))
        >>> page.content_width
        74
        >>> page.is_narrow
        True
    """

    width: float
    height: float
    margins: Margins = Margins()

    def __post_init__(self) -> None:
        """Validate page geometry on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.content_width <= 0:
            raise ValueError("Margins exceed page width")

    @property
    def content_width(self) -> float:
        """Width between the left and right margins."""
        return self.width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        """Height between the top and bottom margins."""
        return self.height - self.margins.top - self.margins.bottom

    @property
    def is_narrow(self) -> bool:
        """True for receipt-width pages (laid out top-to-bottom)."""
        return is_narrow_width(self.width)

    def merged(self, changes: Mapping[str, Any]) -> PageSetup:
        """
        Shallow-merge width/height/margins changes.

        ``margins`` may be a Margins instance or a partial mapping.

        Raises:
            ValueError: If the result violates the page invariants
        """
        updates: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "margins":
                updates["margins"] = value if isinstance(value, Margins) else self.margins.merged(value)
            elif key in ("width", "height"):
                updates[key] = value
            else:
                logger.warning(f"Ignoring unknown page setup key: {key!r}")
        return replace(self, **updates)

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height, "margins": self.margins.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PageSetup:
        return cls(
            width=data["width"],
            height=data["height"],
            margins=Margins.from_dict(data.get("margins", {})),
        )


PAGE_PRESETS: dict[str, PageSetup] = {
    "a4_portrait": PageSetup(210, 297, Margins(10, 10, 10, 10)),
    "a4_landscape": PageSetup(297, 210, Margins(10, 10, 10, 10)),
    "thermal_80mm": PageSetup(80, 200, Margins(3, 3, 3, 3)),
    "thermal_58mm": PageSetup(58, 200, Margins(3, 3, 3, 3)),
}

DEFAULT_PRESET = "a4_portrait"


def page_preset(name: str) -> PageSetup:
    """Return the named preset, falling back to A4 portrait for unknown names."""
    preset = PAGE_PRESETS.get(name)
    if preset is None:
        logger.debug(f"Unknown page preset {name!r}, using {DEFAULT_PRESET}")
        return PAGE_PRESETS[DEFAULT_PRESET]
    return preset


def page_setup_for_width(width: float) -> PageSetup:
    """
    Return the preset with this width, or synthesize one.

    Synthesized narrow pages get a 200mm nominal height and 3mm margins;
    wide pages get a 297mm height and 10mm margins.
    """
    for preset in PAGE_PRESETS.values():
        if preset.width == width:
            return preset
    if is_narrow_width(width):
        return PageSetup(width, 200, Margins(3, 3, 3, 3))
    return PageSetup(width, 297, Margins(10, 10, 10, 10))
