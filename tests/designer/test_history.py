"""
Tests for designer.history.DesignHistory
"""

import pytest

from invoice_designer.core.models import Element, ElementKind, create_blank_design
from invoice_designer.designer.history import DesignHistory


def _designs(n):
    base = create_blank_design()
    return [
        base.with_element_added(Element(f"el{i}", ElementKind.TEXT, 0, i * 10, 10, 5))
        for i in range(n)
    ]


class TestDesignHistory:
    def test_undo_when_single_snapshot_then_none(self):
        """Nothing to undo right after a reset."""
        history = DesignHistory()
        history.reset(create_blank_design())

        assert history.undo() is None
        assert not history.can_undo

    def test_undo_redo_when_pushed_then_walks_snapshots(self):
        d0, d1, d2 = _designs(3)
        history = DesignHistory()
        history.reset(d0)
        history.push(d1)
        history.push(d2)

        assert history.undo() == d1
        assert history.undo() == d0
        assert history.redo() == d1
        assert history.redo() == d2
        assert history.redo() is None

    def test_push_when_after_undo_then_redo_tail_dropped(self):
        d0, d1, d2 = _designs(3)
        history = DesignHistory()
        history.reset(d0)
        history.push(d1)
        history.undo()

        history.push(d2)

        assert not history.can_redo
        assert history.undo() == d0

    def test_push_when_over_capacity_then_oldest_evicted(self):
        """Only the newest ``capacity`` snapshots are kept."""
        d0, d1, d2, d3 = _designs(4)
        history = DesignHistory(capacity=3)
        history.reset(d0)
        for d in (d1, d2, d3):
            history.push(d)

        assert len(history) == 3
        assert history.undo() == d2
        assert history.undo() == d1
        assert history.undo() is None

    def test_init_when_capacity_zero_then_raises(self):
        with pytest.raises(ValueError):
            DesignHistory(capacity=0)
