"""Test helpers for building work item snapshots.

Snapshots are written as compact specs so each test reads like the
graph it describes.
"""

from __future__ import annotations

from beadtree.models import WorkItem


def make_item(
    item_id: str,
    blocked_by: list[str] | None = None,
    title: str = "",
    priority: int = 2,
    status: str = "open",
    blocks: list[str] | None = None,
) -> WorkItem:
    """Factory for creating test items.

    Args:
        item_id: Item ID (e.g., "bd-1")
        blocked_by: Blocker IDs in order
        title: Title (defaults to "Task <id>")
        priority: Numeric priority
        status: Store status
        blocks: IDs this item blocks

    Returns:
        WorkItem with computed fields at their defaults
    """
    return WorkItem(
        id=item_id,
        title=title or f"Task {item_id}",
        priority=priority,
        status=status,
        blocked_by=list(blocked_by or []),
        blocks=list(blocks or []),
    )


def make_snapshot(*specs: tuple[str, list[str]] | str) -> list[WorkItem]:
    """Build a snapshot from ("id", [blockers]) tuples or bare ids.

    Example:
        make_snapshot("A", ("B", ["A"]), ("C", ["B"]))
    """
    items = []
    for entry in specs:
        if isinstance(entry, str):
            items.append(make_item(entry))
        else:
            item_id, blocked_by = entry
            items.append(make_item(item_id, blocked_by))
    return items


def ids(items: list[WorkItem]) -> list[str]:
    """Return item ids in list order."""
    return [item.id for item in items]


def prefixes(items: list[WorkItem]) -> list[str]:
    """Return tree prefixes in list order."""
    return [item.tree_prefix for item in items]


def depths(items: list[WorkItem]) -> dict[str, int]:
    """Return id -> blocking depth."""
    return {item.id: item.blocking_depth for item in items}
