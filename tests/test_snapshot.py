"""Tests for snapshot loading and merging."""

import io
import json

import pytest

from beadtree.snapshot import (
    SnapshotError,
    load_snapshot,
    load_snapshot_text,
    merge_blocked,
    merge_deferred,
    parse_snapshot,
)
from tests.helpers import ids, make_item


class TestParseSnapshot:
    """Tests for parse_snapshot()."""

    def test_list_of_objects(self):
        items = parse_snapshot([{"id": "a"}, {"id": "b", "blocked_by": ["a"]}])

        assert ids(items) == ["a", "b"]
        assert items[1].blocked_by == ["a"]

    def test_rejects_non_list(self):
        with pytest.raises(SnapshotError, match="expected a JSON array"):
            parse_snapshot({"id": "a"})

    def test_rejects_non_object_entry(self):
        with pytest.raises(SnapshotError, match="entry 1 is not an object"):
            parse_snapshot([{"id": "a"}, "b"])

    def test_rejects_missing_id(self):
        with pytest.raises(SnapshotError, match="entry 0 has no string 'id'"):
            parse_snapshot([{"title": "no id"}])

    def test_rejects_bad_priority(self):
        with pytest.raises(SnapshotError, match=r"entry 0 \(a\)"):
            parse_snapshot([{"id": "a", "priority": "high"}])

    def test_rejects_bad_timestamp(self):
        with pytest.raises(SnapshotError, match=r"entry 0 \(a\): invalid timestamp"):
            parse_snapshot([{"id": "a", "defer_until": "next week"}])

    def test_snapshot_error_is_value_error(self):
        assert issubclass(SnapshotError, ValueError)


class TestLoadSnapshot:
    """Tests for load_snapshot() and load_snapshot_text()."""

    def test_empty_text_is_empty_snapshot(self):
        assert load_snapshot_text("  \n") == []

    def test_invalid_json(self):
        with pytest.raises(SnapshotError, match="invalid JSON"):
            load_snapshot_text("[{", "items.json")

    def test_reads_file(self, listing_file):
        items = load_snapshot(listing_file)

        assert ids(items) == ["bd-1", "bd-2", "bd-3", "bd-4", "bd-5"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError, match="Cannot read"):
            load_snapshot(tmp_path / "nope.json")

    def test_reads_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps([{"id": "x"}])))

        assert ids(load_snapshot(None)) == ["x"]

    def test_dash_reads_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("[]"))

        assert load_snapshot("-") == []


class TestMergeBlocked:
    """Tests for merge_blocked()."""

    def test_replaces_blockers_of_known_items(self):
        items = [make_item("a"), make_item("b", ["old"])]
        blocked = [make_item("b", ["a"])]

        merged = merge_blocked(items, blocked)

        assert merged is items
        assert items[1].blocked_by == ["a"]
        assert items[1].title == "Task b"

    def test_appends_unknown_items(self):
        items = [make_item("a")]
        blocked = [make_item("c", ["a"]), make_item("d", ["c"])]

        merge_blocked(items, blocked)

        assert ids(items) == ["a", "c", "d"]

    def test_empty_blocked_listing(self):
        items = [make_item("a")]

        assert merge_blocked(items, []) == [make_item("a")]


class TestMergeDeferred:
    """Tests for merge_deferred()."""

    def test_replaces_known_items(self):
        items = [make_item("a"), make_item("b", title="Old")]
        deferred = parse_snapshot([{"id": "b", "title": "New", "defer_until": "2026-04-01"}])

        merged = merge_deferred(items, deferred)

        assert merged is items
        assert ids(items) == ["a", "b"]
        assert items[1].title == "New"
        assert items[1].defer_until is not None

    def test_appends_unknown_items(self):
        items = [make_item("a")]
        deferred = [make_item("c"), make_item("c", title="Again")]

        merge_deferred(items, deferred)

        assert ids(items) == ["a", "c"]
        assert items[1].title == "Again"

    def test_blocked_listing_applied_afterwards_keeps_blockers(self):
        items = [make_item("a"), make_item("b")]
        merge_deferred(items, [make_item("b", title="Deferred b")])
        merge_blocked(items, [make_item("b", ["a"])])

        assert items[1].title == "Deferred b"
        assert items[1].blocked_by == ["a"]

    def test_empty_deferred_listing(self):
        items = [make_item("a")]

        assert merge_deferred(items, []) == [make_item("a")]
