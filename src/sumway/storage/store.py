"""
Module: storage.store

Purpose:
    JSON persistence for a gradebook: the validated hierarchy, the current
    draft (edits not yet evaluated) and the student roster.

    Layout under the store root:
        items.json     - last hierarchy that passed evaluation
        draft.json     - hierarchy with unevaluated edits (optional)
        students.json  - {"students": [...], "next_id": n}

    Loading never aborts the application: a missing file yields the default
    and a corrupt one is logged and ignored.

Key Classes:
    - GradebookStore: Load/save entry points

Dependencies:
    - storage.file_locking: portalocker-backed JSON access
    - core.utils.serialization: payload conversion

Used By:
    - gradebook.controller: Gradebook.open() and autosave
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from sumway.core.errors import SumwayError
from sumway.core.models import Hierarchy, Roster
from sumway.core.schemas.validator import ValidationError
from sumway.core.utils.serialization import (
    deserialize_hierarchy,
    deserialize_roster,
    serialize_hierarchy,
    serialize_roster,
)

from .file_locking import locked_read_json, locked_write_json

logger = logging.getLogger(__name__)

ITEMS_FILE = "items.json"
DRAFT_FILE = "draft.json"
STUDENTS_FILE = "students.json"


class StorageError(SumwayError):
    """Error reading or writing gradebook files."""
    pass


class GradebookStore:
    """
    File-backed store for one gradebook.

    Attributes:
        root: Directory holding the JSON files

    Example:
        >>> store = GradebookStore(Path("workspace"))
        >>> store.save_hierarchy(Hierarchy.from_lists([[[1, 2]]]))
        >>> store.load_hierarchy().to_lists()
        [[[1, 2]]]
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @property
    def items_path(self) -> Path:
        return self.root / ITEMS_FILE

    @property
    def draft_path(self) -> Path:
        return self.root / DRAFT_FILE

    @property
    def students_path(self) -> Path:
        return self.root / STUDENTS_FILE

    # ─────────────────────────────────────────────────────────────────────────
    # Hierarchy
    # ─────────────────────────────────────────────────────────────────────────

    def load_hierarchy(self) -> Hierarchy:
        """
        Load the working hierarchy.

        Returns:
            The draft if one is stored, else the saved hierarchy, else
            Hierarchy.default()
        """
        for path in (self.draft_path, self.items_path):
            data = self._read(path)
            if data is None:
                continue
            try:
                hierarchy = deserialize_hierarchy(data, strict=True)
            except ValidationError as e:
                logger.warning(f"Ignoring invalid hierarchy in {path.name}: {e}")
                continue
            logger.debug(f"Loaded hierarchy with {len(hierarchy)} items from {path.name}")
            return hierarchy
        return Hierarchy.default()

    def save_hierarchy(self, hierarchy: Hierarchy) -> None:
        """Persist a hierarchy that passed evaluation and drop the draft."""
        self._write(self.items_path, serialize_hierarchy(hierarchy))
        self.clear_draft()
        logger.info(f"Saved hierarchy ({len(hierarchy)} items) to {self.items_path}")

    def save_draft(self, hierarchy: Hierarchy) -> None:
        """Persist unevaluated edits."""
        self._write(self.draft_path, serialize_hierarchy(hierarchy))

    def clear_draft(self) -> None:
        self.draft_path.unlink(missing_ok=True)

    # ─────────────────────────────────────────────────────────────────────────
    # Roster
    # ─────────────────────────────────────────────────────────────────────────

    def load_roster(self) -> Roster:
        """
        Load the student roster.

        Returns:
            Stored roster, or an empty one when missing or invalid
        """
        data = self._read(self.students_path)
        if data is None:
            return Roster()
        try:
            roster = deserialize_roster(data, strict=True)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid roster in {self.students_path.name}: {e}")
            return Roster()
        logger.debug(f"Loaded {len(roster)} students")
        return roster

    def save_roster(self, roster: Roster) -> None:
        self._write(self.students_path, serialize_roster(roster))

    # ─────────────────────────────────────────────────────────────────────────
    # Maintenance
    # ─────────────────────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Delete every stored file."""
        for path in (self.items_path, self.draft_path, self.students_path):
            path.unlink(missing_ok=True)
        logger.info(f"Cleared gradebook storage in {self.root}")

    def _read(self, path: Path) -> Optional[Any]:
        try:
            return locked_read_json(path)
        except json.JSONDecodeError as e:
            logger.warning(f"{path.name} is corrupted, using defaults: {e}")
            return None
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def _write(self, path: Path, data: Any) -> None:
        try:
            locked_write_json(path, data)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e
