"""
Unit Tests for GradebookStore and locked JSON access
"""

import json

import pytest

from sumway.core.models import Hierarchy, Roster, StudentRecord
from sumway.storage import GradebookStore
from sumway.storage.file_locking import locked_read_json, locked_write_json
from sumway.storage.store import DRAFT_FILE, ITEMS_FILE, STUDENTS_FILE


@pytest.fixture
def store(tmp_path) -> GradebookStore:
    return GradebookStore(tmp_path / "data")


class TestFileLocking:

    def test_read_when_missing_then_none(self, tmp_path):
        assert locked_read_json(tmp_path / "absent.json") is None

    def test_read_when_empty_then_none(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("")
        assert locked_read_json(path) is None

    def test_write_when_existing_longer_content_then_replaced(self, tmp_path):
        path = tmp_path / "data.json"
        locked_write_json(path, {"values": list(range(100))})

        locked_write_json(path, [1])

        assert json.loads(path.read_text(encoding="utf-8")) == [1]

    def test_write_when_parent_missing_then_created(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "data.json"
        locked_write_json(path, {"a": 1})
        assert locked_read_json(path) == {"a": 1}


class TestGradebookStoreHierarchy:

    def test_load_when_nothing_stored_then_default(self, store):
        assert store.load_hierarchy() == Hierarchy.default()

    def test_save_when_loaded_then_same_hierarchy(self, store, single_item_hierarchy):
        store.save_hierarchy(single_item_hierarchy)
        assert store.load_hierarchy() == single_item_hierarchy

    def test_load_when_draft_present_then_draft_wins(self, store, single_item_hierarchy, two_item_hierarchy):
        store.save_hierarchy(single_item_hierarchy)
        store.save_draft(two_item_hierarchy)

        assert store.load_hierarchy() == two_item_hierarchy

    def test_save_when_draft_present_then_draft_removed(self, store, single_item_hierarchy, two_item_hierarchy):
        store.save_draft(two_item_hierarchy)

        store.save_hierarchy(single_item_hierarchy)

        assert not store.draft_path.exists()

    def test_load_when_draft_corrupt_then_falls_back_to_items(self, store, single_item_hierarchy):
        store.save_hierarchy(single_item_hierarchy)
        store.draft_path.write_text("{not json", encoding="utf-8")

        assert store.load_hierarchy() == single_item_hierarchy

    def test_load_when_items_malformed_then_default(self, store):
        store.root.mkdir(parents=True)
        (store.root / ITEMS_FILE).write_text(json.dumps([[]]), encoding="utf-8")

        assert store.load_hierarchy() == Hierarchy.default()

    def test_save_when_written_then_nested_list_json(self, store, single_item_hierarchy):
        store.save_hierarchy(single_item_hierarchy)

        data = json.loads((store.root / ITEMS_FILE).read_text(encoding="utf-8"))

        assert data == [[[1, 2], [10, 20]]]


class TestGradebookStoreRoster:

    def test_load_when_nothing_stored_then_empty(self, store):
        roster = store.load_roster()
        assert len(roster) == 0
        assert roster.next_id == 1

    def test_save_when_loaded_then_same_roster(self, store):
        roster = Roster(
            (StudentRecord(2, "Ana", 21, (21,), ((1, 20),)), StudentRecord(5, "Bo")),
            next_id=6,
        )

        store.save_roster(roster)

        assert store.load_roster() == roster

    def test_save_when_non_ascii_name_then_preserved(self, store):
        store.save_roster(Roster().add("김민지"))
        assert store.load_roster().get(1).name == "김민지"

    def test_load_when_corrupt_then_empty(self, store):
        store.root.mkdir(parents=True)
        (store.root / STUDENTS_FILE).write_text("[1, 2", encoding="utf-8")

        assert len(store.load_roster()) == 0

    def test_load_when_invalid_record_then_empty(self, store):
        store.root.mkdir(parents=True)
        payload = {"students": [{"id": 1, "name": "A", "total_score": 3}], "next_id": 2}
        (store.root / STUDENTS_FILE).write_text(json.dumps(payload), encoding="utf-8")

        assert len(store.load_roster()) == 0


class TestGradebookStoreClear:

    def test_clear_when_files_present_then_all_removed(self, store, single_item_hierarchy):
        store.save_hierarchy(single_item_hierarchy)
        store.save_draft(single_item_hierarchy)
        store.save_roster(Roster().add())

        store.clear()

        for name in (ITEMS_FILE, DRAFT_FILE, STUDENTS_FILE):
            assert not (store.root / name).exists()

    def test_clear_when_nothing_stored_then_no_error(self, store):
        store.clear()


class TestGradebookStoreSchema:

    def test_load_when_score_mistyped_then_empty(self, store):
        store.root.mkdir(parents=True)
        payload = {
            "students": [{"id": 1, "name": "A", "total_score": "2", "item_scores": ["2"]}],
            "next_id": 2,
        }
        (store.root / STUDENTS_FILE).write_text(json.dumps(payload), encoding="utf-8")

        assert len(store.load_roster()) == 0

    def test_load_when_next_id_stale_then_students_kept(self, store):
        store.root.mkdir(parents=True)
        payload = {"students": [{"id": 3, "name": "Ana"}], "next_id": 2}
        (store.root / STUDENTS_FILE).write_text(json.dumps(payload), encoding="utf-8")

        roster = store.load_roster()

        assert roster.get(3).name == "Ana"
        assert roster.next_id == 4
