"""
Core Models Package

Immutable data models for invoice designs.

All models in this package are frozen dataclasses. This ensures:
1. History snapshots can share unchanged elements instead of deep-copying
2. A design handed to the compiler or a store cannot change underneath it
3. Equality is structural, so round-trips compare with ``==``
"""

from .styles import DEFAULT_GLOBAL_STYLES, FONT_FAMILIES, ElementStyles, GlobalStyles
from .page import PAGE_PRESETS, Margins, PageSetup, page_preset, page_setup_for_width
from .elements import (
    Element,
    ElementKind,
    TableColumn,
    TableConfig,
    TotalsConfig,
    TotalsRow,
)
from .design import DESIGN_VERSION, Design, create_blank_design

__all__ = [
    "DEFAULT_GLOBAL_STYLES",
    "FONT_FAMILIES",
    "ElementStyles",
    "GlobalStyles",
    "PAGE_PRESETS",
    "Margins",
    "PageSetup",
    "page_preset",
    "page_setup_for_width",
    "Element",
    "ElementKind",
    "TableColumn",
    "TableConfig",
    "TotalsConfig",
    "TotalsRow",
    "DESIGN_VERSION",
    "Design",
    "create_blank_design",
]
