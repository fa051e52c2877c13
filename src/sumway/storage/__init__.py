"""
Module: storage

Purpose:
    Locked JSON persistence of the hierarchy, its draft and the roster.

Dependencies:
    - portalocker: Cross-platform file locking
"""

from .store import GradebookStore, StorageError, ITEMS_FILE, DRAFT_FILE, STUDENTS_FILE
from .file_locking import locked_file, locked_read_json, locked_write_json

__all__ = [
    "GradebookStore",
    "StorageError",
    "ITEMS_FILE",
    "DRAFT_FILE",
    "STUDENTS_FILE",
    "locked_file",
    "locked_read_json",
    "locked_write_json",
]
