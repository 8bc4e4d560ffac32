"""
Layout Compiler

Turns a Design into the four artifacts the external rendering engine
consumes: header/body/footer markup fragments and one stylesheet.

Usage:
    from invoice_designer.compiler import compile_design

    compiled = compile_design(design)
    store.save(None, "Sales", "sales_invoice", design, compiled)
"""

from .compiler import compile_design, select_layout_mode
from .markup import escape_html
from .models import CompiledTemplate, LayoutMode, Region, RegionPartition
from .regions import partition_regions

__all__ = [
    "compile_design",
    "select_layout_mode",
    "escape_html",
    "CompiledTemplate",
    "LayoutMode",
    "Region",
    "RegionPartition",
    "partition_regions",
]
