"""
Tests for storage.file_locking
"""

import json

import pytest

from invoice_designer.storage.file_locking import locked_read_json, locked_write_json


def test_locked_write_json_creates_parent_directories(tmp_path):
    """locked_write_json creates missing directories and the file."""
    path = tmp_path / "nested" / "deep" / "doc.json"

    locked_write_json(path, {"a": 1})

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": 1}


def test_locked_write_json_replaces_longer_content(tmp_path):
    """Existing content is truncated, not partially overwritten."""
    path = tmp_path / "doc.json"
    locked_write_json(path, {"long": "x" * 200})

    locked_write_json(path, {"b": 2})

    assert locked_read_json(path) == {"b": 2}


def test_locked_read_json_when_missing_then_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        locked_read_json(tmp_path / "missing.json")
