"""
Module: storage.file_locking

Purpose:
    Cross-platform locked JSON file access for the template store.
    Uses portalocker for Mac, Windows, and Linux compatibility.

Key Functions:
    - locked_file: Context manager for locked file access
    - locked_read_json: Read a JSON document under a shared lock
    - locked_write_json: Replace a JSON document under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - storage.store.JsonTemplateStore
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'w', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.

    Example:
        >>> with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        ...     data = json.load(f)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def locked_read_json(path: Path) -> Dict[str, Any]:
    """
    Read a JSON document with a shared lock.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        return json.load(f)


def locked_write_json(path: Path, data: Dict[str, Any]) -> None:
    """
    Replace a JSON document with an exclusive lock held.

    The file is opened without truncation and only truncated once the
    lock is held, so a concurrent reader never sees a half-written file.
    """
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()

    with locked_file(path, 'r+', portalocker.LOCK_EX) as f:
        f.seek(0)
        f.truncate()
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.flush()

    logger.debug(f"Wrote {path.name}")
