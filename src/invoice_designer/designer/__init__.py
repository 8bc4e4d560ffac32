"""
Design State Engine

One DesignerSession per editor session: the live design, selection,
view settings and a bounded undo/redo history.

Usage:
    from invoice_designer.designer import DesignerSession

    session = DesignerSession()
    table_id = session.add_element("table")
    session.undo()
"""

from .defaults import default_payload, default_size, default_styles
from .history import DesignHistory
from .state import DesignerSession, DesignerState, clamp_zoom, generate_element_id

__all__ = [
    "DesignerSession",
    "DesignerState",
    "DesignHistory",
    "clamp_zoom",
    "generate_element_id",
    "default_payload",
    "default_size",
    "default_styles",
]
