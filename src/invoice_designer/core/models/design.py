"""
Module: core.models.design

Purpose:
    The Design aggregate root: format version, page setup, elements and
    global styles. The only unit of persistence and the sole input of the
    layout compiler.

Key Classes:
    - Design: Immutable design value

Key Functions:
    - create_blank_design(): Empty design on a named page preset

Dependencies:
    - core.models.page, core.models.elements, core.models.styles

Used By:
    - designer.state.DesignerSession: live design + history snapshots
    - compiler.compile_design
    - generator.default_design
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional

from .elements import Element
from .page import DEFAULT_PRESET, PageSetup, page_preset
from .styles import DEFAULT_GLOBAL_STYLES, GlobalStyles

DESIGN_VERSION = 1


@dataclass(frozen=True, slots=True)
class Design:
    """
    Versioned page layout (immutable).

    Edits produce a new Design via ``dataclasses.replace``; unchanged
    elements are shared between the old and new value, so history
    snapshots cost one tuple per edit rather than a deep copy.

    Attributes:
        page_size: Page geometry
        elements: Elements in insertion order (order carries no layout meaning)
        global_styles: Page-wide style defaults
        version: Format version tag

    Example:
        >>> design = create_blank_design("thermal_80mm")
        >>> design.page_size.is_narrow
        True
        >>> len(design.elements)
        0
    """

    page_size: PageSetup
    elements: tuple[Element, ...] = ()
    global_styles: GlobalStyles = DEFAULT_GLOBAL_STYLES
    version: int = DESIGN_VERSION

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def find(self, element_id: str) -> Optional[Element]:
        """Element with this id, or None."""
        for el in self.elements:
            if el.id == element_id:
                return el
        return None

    def contains(self, element_id: str) -> bool:
        return self.find(element_id) is not None

    @property
    def max_z_index(self) -> int:
        """Highest z-index in use (0 for an empty design)."""
        return max((el.z_index for el in self.elements), default=0)

    @property
    def visible_elements(self) -> tuple[Element, ...]:
        return tuple(el for el in self.elements if el.visible)

    # ─────────────────────────────────────────────────────────────────────────
    # Structural edits (return new values)
    # ─────────────────────────────────────────────────────────────────────────

    def with_elements(self, elements: tuple[Element, ...]) -> Design:
        return replace(self, elements=tuple(elements))

    def with_element_added(self, element: Element) -> Design:
        return replace(self, elements=self.elements + (element,))

    def with_elements_removed(self, element_ids: set[str] | frozenset[str]) -> Design:
        return replace(self, elements=tuple(el for el in self.elements if el.id not in element_ids))

    def with_element_mapped(self, element_id: str, fn: Callable[[Element], Element]) -> Design:
        """Apply ``fn`` to the element with this id; other elements are shared."""
        return replace(
            self,
            elements=tuple(fn(el) if el.id == element_id else el for el in self.elements),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted design document form."""
        return {
            "version": self.version,
            "pageSize": self.page_size.to_dict(),
            "elements": [el.to_dict() for el in self.elements],
            "globalStyles": self.global_styles.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Design:
        """
        Deserialize from the persisted design document form.

        Performs no validation beyond what construction requires; use
        core.schemas.validate_design first.
        """
        return cls(
            version=data["version"],
            page_size=PageSetup.from_dict(data["pageSize"]),
            elements=tuple(Element.from_dict(el) for el in data["elements"]),
            global_styles=GlobalStyles.from_dict(data.get("globalStyles") or {}),
        )


def create_blank_design(preset: str = DEFAULT_PRESET) -> Design:
    """Empty design on the named page preset with default global styles."""
    return Design(page_size=page_preset(preset))
