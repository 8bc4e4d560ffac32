"""
Module: core.models.styles

Purpose:
    Style value types. ElementStyles holds per-element overrides where every
    field is optional; GlobalStyles holds the page-wide defaults that unset
    element fields inherit at render time.

Key Classes:
    - ElementStyles: Optional per-element typography/box styling
    - GlobalStyles: Page-wide font, size, text and background colour

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.elements.Element
    - core.models.design.Design
    - compiler.inline_styles: CSS generation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def snake_to_camel(name: str) -> str:
    """``background_color`` -> ``backgroundColor`` (wire format keys)."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True, slots=True)
class ElementStyles:
    """
    Per-element style overrides (immutable).

    Any field left as None inherits from GlobalStyles (font family, size,
    colour, background) or from the renderer's defaults.

    Attributes:
        font_family: CSS font-family list
        font_size: Font size in pt
        font_weight: "normal" | "bold"
        font_style: "normal" | "italic"
        text_decoration: "none" | "underline"
        color: Hex text colour
        background_color: Hex background colour or "transparent"
        text_align: "left" | "center" | "right"
        vertical_align: "top" | "middle" | "bottom"
        border: CSS border shorthand, e.g. "1px solid #000"
        border_radius: Corner radius in px
        padding: Inner padding in mm
        line_height: Unitless line-height multiplier
        letter_spacing: Letter spacing in px
        text_transform: "none" | "uppercase" | "lowercase" | "capitalize"
        opacity: 0..1
    """

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    text_decoration: Optional[str] = None
    color: Optional[str] = None
    background_color: Optional[str] = None
    text_align: Optional[str] = None
    vertical_align: Optional[str] = None
    border: Optional[str] = None
    border_radius: Optional[float] = None
    padding: Optional[float] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    text_transform: Optional[str] = None
    opacity: Optional[float] = None

    def merged(self, changes: Mapping[str, Any]) -> ElementStyles:
        """
        Shallow-merge style changes, returning a new instance.

        Keys may be given in snake_case or in the camelCase wire form.
        Unknown keys are dropped.
        """
        known = {f.name for f in fields(self)}
        by_camel = {snake_to_camel(name): name for name in known}
        updates: dict[str, Any] = {}
        for key, value in changes.items():
            name = key if key in known else by_camel.get(key)
            if name is None:
                logger.warning(f"Ignoring unknown style key: {key!r}")
                continue
            updates[name] = value
        return replace(self, **updates)

    def resolve(self, global_styles: GlobalStyles) -> ElementStyles:
        """Fill unset inheritable fields from the page-wide defaults."""
        return replace(
            self,
            font_family=self.font_family or global_styles.font_family,
            font_size=self.font_size or global_styles.font_size,
            color=self.color or global_styles.color,
            background_color=self.background_color or global_styles.background_color,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize set fields only, using camelCase keys."""
        return {
            snake_to_camel(f.name): getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ElementStyles:
        """Deserialize from a camelCase mapping; unknown keys are ignored."""
        return cls().merged({k: v for k, v in data.items() if v is not None})


@dataclass(frozen=True, slots=True)
class GlobalStyles:
    """Page-wide style defaults."""

    font_family: str = "Arial, sans-serif"
    font_size: float = 10
    color: str = "#000000"
    background_color: str = "#ffffff"

    def merged(self, changes: Mapping[str, Any]) -> GlobalStyles:
        """Shallow-merge changes (snake_case or camelCase keys)."""
        known = {f.name for f in fields(self)}
        by_camel = {snake_to_camel(name): name for name in known}
        updates = {}
        for key, value in changes.items():
            name = key if key in known else by_camel.get(key)
            if name is None:
                logger.warning(f"Ignoring unknown global style key: {key!r}")
                continue
            updates[name] = value
        return replace(self, **updates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "color": self.color,
            "backgroundColor": self.background_color,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GlobalStyles:
        default = cls()
        return cls(
            font_family=data.get("fontFamily", default.font_family),
            font_size=data.get("fontSize", default.font_size),
            color=data.get("color", default.color),
            background_color=data.get("backgroundColor", default.background_color),
        )


DEFAULT_GLOBAL_STYLES = GlobalStyles()

FONT_FAMILIES = (
    "Arial, sans-serif",
    "Helvetica, sans-serif",
    "Times New Roman, serif",
    "Georgia, serif",
    "Courier New, monospace",
    "Verdana, sans-serif",
    "Tahoma, sans-serif",
    "Trebuchet MS, sans-serif",
    "Roboto, sans-serif",
    "Inter, sans-serif",
)
