"""
Module: gradebook

Purpose:
    Application state around the score engine: hierarchy edits with
    explicit invalidation, cached Results, the student roster and
    autosave to the store.

Key Classes:
    - Gradebook: State owner
    - GradebookConfig: Storage, engine and search-ceiling settings
    - GradebookError: Invalid requests
"""

from .config import GradebookConfig
from .controller import Gradebook, GradebookError

__all__ = [
    "Gradebook",
    "GradebookConfig",
    "GradebookError",
]
