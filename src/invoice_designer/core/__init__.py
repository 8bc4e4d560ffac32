"""
Invoice Designer Core Package

Shared data models, schema validation and serialization. These models are
the single source of truth for the designer, compiler and generator.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; edits create new values via ``replace``
   - History snapshots share unchanged elements

2. **Two Key Styles**
   - Python attributes are snake_case
   - The persisted/exported document keeps camelCase keys
     (``pageSize``, ``globalStyles``, ``fieldBinding`` ...)

3. **Shallow Import Check**
   - ``import_design`` only requires ``version``, ``elements`` and ``pageSize``
   - ``strict=True`` adds full JSON Schema validation
"""

from .models import Design, Element, ElementKind, PageSetup, GlobalStyles, ElementStyles
from .schemas import DesignFormatError, validate_design
from .utils import export_design, import_design

__all__ = [
    "Design",
    "Element",
    "ElementKind",
    "PageSetup",
    "GlobalStyles",
    "ElementStyles",
    "DesignFormatError",
    "validate_design",
    "export_design",
    "import_design",
]
