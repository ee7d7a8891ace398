"""
beadtree.snapshot - Load work item snapshots from store JSON.

The item store emits JSON arrays of issue objects (e.g. `bd list --json`).
A full listing does not always carry blocker lists, so a second
"blocked" listing (`bd blocked --json`) can be merged on top of it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from beadtree.models import WorkItem


class SnapshotError(ValueError):
    """Raised when snapshot JSON cannot be turned into work items."""


def parse_snapshot(data: Any, source: str = "<input>") -> List[WorkItem]:
    """Convert decoded JSON into work items.

    Args:
        data: Decoded JSON, expected to be a list of objects
        source: Name used in error messages

    Returns:
        Work items in listing order

    Raises:
        SnapshotError: If the top level is not a list, or an entry is not
            an object with a string "id"
    """
    if not isinstance(data, list):
        raise SnapshotError(f"{source}: expected a JSON array of items")

    items = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise SnapshotError(f"{source}: entry {position} is not an object")
        if not isinstance(entry.get("id"), str) or not entry["id"]:
            raise SnapshotError(f"{source}: entry {position} has no string 'id'")
        try:
            items.append(WorkItem.from_dict(entry))
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"{source}: entry {position} ({entry['id']}): {e}") from e

    return items


def load_snapshot_text(text: str, source: str = "<input>") -> List[WorkItem]:
    """Parse snapshot JSON text.

    Empty or whitespace-only text is an empty snapshot.
    """
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"{source}: invalid JSON: {e}") from e
    return parse_snapshot(data, source)


def load_snapshot(path: Optional[Path]) -> List[WorkItem]:
    """Load a snapshot from a file, or from stdin when path is None or "-".

    Raises:
        SnapshotError: If the file cannot be read or parsed
    """
    if path is None or str(path) == "-":
        return load_snapshot_text(sys.stdin.read(), "<stdin>")

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read {path}: {e.strerror or e}") from e
    return load_snapshot_text(text, str(path))


def merge_blocked(items: List[WorkItem], blocked: List[WorkItem]) -> List[WorkItem]:
    """Merge a blocked listing into a full listing.

    Items already in the listing take the blocker list from the blocked
    listing; items only in the blocked listing are appended in order.

    Args:
        items: Full listing, updated in place
        blocked: Blocked listing

    Returns:
        The full listing (same list object)
    """
    if not blocked:
        return items

    index_by_id = {}
    for i, item in enumerate(items):
        index_by_id[item.id] = i

    for item in blocked:
        idx = index_by_id.get(item.id)
        if idx is not None:
            items[idx].blocked_by = list(item.blocked_by)
        else:
            items.append(item)

    return items


def merge_deferred(items: List[WorkItem], deferred: List[WorkItem]) -> List[WorkItem]:
    """Merge a deferred listing into a full listing.

    The full listing may omit deferral data, so entries of the deferred
    listing replace items with the same id wholesale; items only in the
    deferred listing are appended in order. Apply this before
    merge_blocked() so blocker lists from a blocked listing survive.

    Args:
        items: Full listing, updated in place
        deferred: Deferred listing (e.g. output of `bd list --deferred --json`)

    Returns:
        The full listing (same list object)
    """
    if not deferred:
        return items

    index_by_id = {}
    for i, item in enumerate(items):
        index_by_id[item.id] = i

    for item in deferred:
        idx = index_by_id.get(item.id)
        if idx is not None:
            items[idx] = item
        else:
            index_by_id[item.id] = len(items)
            items.append(item)

    return items
