"""Unit conversion and grid helpers for millimetre-based layouts."""

from __future__ import annotations

from .thresholds import GEOMETRY, MM_TO_PX


def mm_to_px(value: float, scale: float = MM_TO_PX) -> float:
    """Convert millimetres to pixels (96 dpi unless a scale is given)."""
    return value * scale


def px_to_mm(value: float, scale: float = MM_TO_PX) -> float:
    """Convert pixels back to millimetres."""
    return value / scale


def snap_to_grid(value: float, grid_size: float) -> float:
    """
    Round a millimetre value to the nearest grid line.

    A non-positive grid size disables snapping.

    Example:
        >>> snap_to_grid(12.4, 5)
        10
        >>> snap_to_grid(12.6, 5)
        15
    """
    if grid_size <= 0:
        return value
    return round(value / grid_size) * grid_size


def clamp_position(value: float) -> float:
    """Positions are measured from the page corner and never go negative."""
    return max(0.0, value)


def clamp_size(value: float) -> float:
    """Width/height never shrink below the minimum manipulable size."""
    return max(GEOMETRY.min_element_size, value)
