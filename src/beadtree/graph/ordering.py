"""Depth-first tree ordering with box-drawing prefixes.

Walks the layout forest in pre-order and gives every non-root item a
prefix such as "│  └─ " so that a flat list renders as a tree:

    bd-1 Set up database
    │  ├─ bd-2 Write migrations
    │  │  └─ bd-4 Seed fixtures
    │  └─ bd-3 Add connection pool
    bd-5 Draft release notes

A root's own sibling flag becomes the first column of its descendants,
which is why the subtree of bd-1 carries a leading bar. Items the walk
cannot reach are appended at the end, unprefixed, in snapshot order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from beadtree.graph.depth import apply_blocking_depth
from beadtree.graph.forest import build_forest
from beadtree.graph.index import build_index

if TYPE_CHECKING:
    from beadtree.models import WorkItem

PIPE = "│  "
SPACE = "   "
TEE = "├─ "
ELBOW = "└─ "


def build_tree_prefix(ancestors: Sequence[bool], has_next: bool) -> str:
    """Build the prefix for a non-root node.

    Args:
        ancestors: For each ancestor, oldest first, whether it has a
            following sibling.
        has_next: Whether this node has a following sibling.

    Returns:
        One continuation column per ancestor followed by a branch glyph.
    """
    columns = [PIPE if ancestor_has_next else SPACE for ancestor_has_next in ancestors]
    columns.append(TEE if has_next else ELBOW)
    return "".join(columns)


def order_by_blocking_tree(items: Sequence[WorkItem]) -> list[WorkItem]:
    """Reorder a snapshot into depth-first forest order.

    tree_prefix is reset on every item and then set for each visited
    item in place. The returned list holds the same item objects.

    Args:
        items: Snapshot in caller order.

    Returns:
        New list with exactly len(items) entries.
    """
    if not items:
        return []

    for item in items:
        item.tree_prefix = ""

    index = build_index(items)
    forest = build_forest(items, index)

    visited = [False] * len(items)
    ordered: list[WorkItem] = []

    # Frame: (position, ancestor flags, has following sibling, depth)
    stack: list[tuple[int, tuple[bool, ...], bool, int]] = []
    roots = forest.roots
    for i in reversed(range(len(roots))):
        stack.append((roots[i], (), i < len(roots) - 1, 0))

    while stack:
        pos, ancestors, has_next, depth = stack.pop()
        if visited[pos]:
            continue
        visited[pos] = True

        item = items[pos]
        item.tree_prefix = build_tree_prefix(ancestors, has_next) if depth > 0 else ""
        ordered.append(item)

        kids = forest.children[pos]
        child_ancestors = ancestors + (has_next,)
        for i in reversed(range(len(kids))):
            stack.append((kids[i], child_ancestors, i < len(kids) - 1, depth + 1))

    if len(ordered) < len(items):
        for pos, item in enumerate(items):
            if not visited[pos]:
                item.tree_prefix = ""
                ordered.append(item)

    return ordered


def annotate_snapshot(items: Sequence[WorkItem]) -> list[WorkItem]:
    """Run both passes over a snapshot.

    Sets blocking_depth and tree_prefix on every item and returns the
    items in tree order.
    """
    apply_blocking_depth(items)
    return order_by_blocking_tree(items)
