"""Centralized threshold and magic number configuration.

This module contains the hardcoded limits, offsets and conversion factors
used by the editing session, the layout compiler and the default design
generator. Having these in one place makes tuning easier and documents
what each value means.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeometryThresholds:
    """Limits applied to element geometry (all values in mm)."""

    min_element_size: float = 3.0  # Smallest width/height that stays manipulable
    duplicate_offset: float = 5.0  # Shift applied to both axes on duplicate
    new_element_top_offset: float = 10.0  # Distance below top margin for new elements


@dataclass(frozen=True)
class EditorThresholds:
    """Editor view and history limits."""

    zoom_min: float = 0.25
    zoom_max: float = 2.0
    default_zoom: float = 1.0
    default_grid_size: float = 5.0  # mm
    history_capacity: int = 50


@dataclass(frozen=True)
class CompilerThresholds:
    """Layout compiler decision points."""

    flow_width_threshold: float = 120.0  # Pages narrower than this (mm) use flow layout
    row_group_tolerance: float = 0.5  # Elements within this many mm share a flow row


# Conversion: mm to px at 96dpi (1mm ≈ 3.7795px)
MM_TO_PX = 3.7795

GEOMETRY = GeometryThresholds()
EDITOR = EditorThresholds()
COMPILER = CompilerThresholds()


def is_narrow_width(width_mm: float) -> bool:
    """Return True when a page of this width is laid out as a receipt (flow)."""
    return width_mm < COMPILER.flow_width_threshold
