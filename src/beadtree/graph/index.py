"""Index - Dense integer positions for a work item snapshot.

Every graph pass starts from a GraphIndex so that memo tables, parent
links and child lists can be plain lists addressed by position instead
of id-keyed dicts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Sequence

if TYPE_CHECKING:
    from beadtree.models import WorkItem


class GraphIndex:
    """Read-only id -> position mapping over one snapshot.

    Snapshots are expected to carry unique ids. When they do not, the
    first occurrence of an id is the one that gets indexed; later
    duplicates still exist at their own positions but cannot be found
    by id.

    Attributes:
        items: The snapshot, in caller order.
    """

    def __init__(self, items: Sequence[WorkItem]) -> None:
        self.items = items
        self._positions: dict[str, int] = {}
        for pos, item in enumerate(items):
            self._positions.setdefault(item.id, pos)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._positions

    def __len__(self) -> int:
        """Return number of items in the snapshot, duplicates included."""
        return len(self.items)

    def position(self, item_id: str) -> int | None:
        """Return the dense position of an id, or None if not in the snapshot."""
        return self._positions.get(item_id)

    def item(self, item_id: str) -> WorkItem | None:
        """Return the indexed item for an id, or None if not in the snapshot."""
        pos = self._positions.get(item_id)
        if pos is None:
            return None
        return self.items[pos]

    def blocker_positions(self, pos: int) -> Iterator[int | None]:
        """Iterate over blocker positions of the item at pos, in list order.

        Unknown blockers yield None so callers can tell them apart from
        resolvable ones without a second lookup.
        """
        for blocker in self.items[pos].blocked_by:
            yield self._positions.get(blocker)


def build_index(items: Sequence[WorkItem]) -> GraphIndex:
    """Index a snapshot by id.

    Args:
        items: Work items in snapshot order.

    Returns:
        GraphIndex with first-seen positions.
    """
    return GraphIndex(items)
