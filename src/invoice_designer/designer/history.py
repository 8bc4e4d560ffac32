"""
Module: designer.history

Purpose:
    Bounded undo/redo history of Design snapshots.

    Snapshots are immutable Design values, so pushing one stores a
    reference rather than a copy. The buffer is a fixed-capacity deque;
    once full, the oldest snapshot is evicted. Pushing after an undo
    discards the redo tail.

Key Classes:
    - DesignHistory: Snapshot ring with a cursor

Used By:
    - designer.state.DesignerSession
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from invoice_designer.common.thresholds import EDITOR
from invoice_designer.core.models.design import Design

logger = logging.getLogger(__name__)


class DesignHistory:
    """
    Cursor over a bounded sequence of Design snapshots.

    Example:
        >>> history = DesignHistory(capacity=3)
        >>> history.reset(d0)
        >>> history.push(d1)
        >>> history.undo() is d0
        True
        >>> history.redo() is d1
        True
    """

    def __init__(self, capacity: int = EDITOR.history_capacity) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive: {capacity}")
        self.capacity = capacity
        self._snapshots: deque[Design] = deque(maxlen=capacity)
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        """Index of the current snapshot (-1 when empty)."""
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    @property
    def current(self) -> Optional[Design]:
        if self._cursor < 0:
            return None
        return self._snapshots[self._cursor]

    def reset(self, design: Design) -> None:
        """Replace the whole history with a single snapshot."""
        self._snapshots.clear()
        self._snapshots.append(design)
        self._cursor = 0

    def push(self, design: Design) -> None:
        """Record a snapshot after the cursor, dropping any redo tail."""
        while len(self._snapshots) > self._cursor + 1:
            self._snapshots.pop()
        if len(self._snapshots) == self.capacity:
            logger.debug("History full, evicting oldest snapshot")
        self._snapshots.append(design)
        self._cursor = len(self._snapshots) - 1

    def undo(self) -> Optional[Design]:
        """Step back; returns the snapshot now current, or None at the start."""
        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._snapshots[self._cursor]

    def redo(self) -> Optional[Design]:
        """Step forward; returns the snapshot now current, or None at the end."""
        if not self.can_redo:
            return None
        self._cursor += 1
        return self._snapshots[self._cursor]
