"""Forest - Single-parent layout structure derived from blocker lists.

An item may list several blockers, but for tree display it hangs under
exactly one of them: the first blocker in its list that is present in
the snapshot. The remaining blockers stay in WorkItem.blocked_by for
informational display and do not affect the shape of the forest.

The forest is a rendering aid only. Dependency semantics (depth,
readiness) always come from the full blocked_by relation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from beadtree.graph.index import GraphIndex
    from beadtree.models import WorkItem


@dataclass
class Forest:
    """Parent/children arrays over snapshot positions.

    Attributes:
        parent: parent[i] is the forest parent position of item i, or None.
        children: children[i] lists child positions of item i in snapshot order.
        roots: Positions without a parent, in snapshot order. When no item
            qualifies, every position is a root.
    """

    parent: list[int | None] = field(default_factory=list)
    children: list[list[int]] = field(default_factory=list)
    roots: list[int] = field(default_factory=list)


def _first_known_blocker(index: GraphIndex, pos: int) -> int | None:
    for blocker_pos in index.blocker_positions(pos):
        if blocker_pos is not None:
            return blocker_pos
    return None


def build_forest(items: Sequence[WorkItem], index: GraphIndex) -> Forest:
    """Derive the layout forest for a snapshot.

    Args:
        items: Snapshot in caller order.
        index: Index built over the same items.

    Returns:
        Forest with at least one root whenever items is non-empty.
    """
    count = len(items)
    parent = [_first_known_blocker(index, pos) for pos in range(count)]

    children: list[list[int]] = [[] for _ in range(count)]
    for pos, parent_pos in enumerate(parent):
        if parent_pos is not None:
            children[parent_pos].append(pos)

    roots = [pos for pos in range(count) if parent[pos] is None]
    if not roots:
        # Every item has a known blocker, so there are only cycles
        roots = list(range(count))

    return Forest(parent=parent, children=children, roots=roots)
