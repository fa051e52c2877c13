"""
Module: storage.file_locking

Purpose:
    Cross-platform locked JSON access so two Sumway processes sharing a
    data directory never interleave reads and writes.
    Uses portalocker for Mac, Windows, and Linux compatibility.

Key Functions:
    - locked_file: Context manager for locked file access
    - locked_read_json: Read JSON under a shared lock
    - locked_write_json: Replace JSON content under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - storage.store: GradebookStore
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

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
        mode: File open mode ('r', 'r+', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.

    Example:
        >>> with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        ...     data = f.read()
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Ensure file exists for read modes
    if 'r' in mode and not path.exists():
        path.touch()

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def locked_read_json(path: Path) -> Any:
    """
    Read and decode a JSON file under a shared lock.

    Args:
        path: Path to JSON file.

    Returns:
        Decoded data, or None when the file is missing or empty.

    Raises:
        json.JSONDecodeError: If the content is not valid JSON.
    """
    if not path.exists():
        return None

    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        content = f.read()

    if not content.strip():
        return None
    return json.loads(content)


def locked_write_json(path: Path, data: Any) -> None:
    """
    Replace a JSON file's content under an exclusive lock.

    The file is truncated only after the lock is held, so a concurrent
    reader never sees a half-written document.

    Args:
        path: Path to JSON file.
        data: JSON-serializable data.
    """
    with locked_file(path, 'a+', portalocker.LOCK_EX) as f:
        f.seek(0)
        f.truncate()
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.debug(f"Wrote {path.name}")
