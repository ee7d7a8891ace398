"""Blocking depth resolution.

Blocking depth is the length of the longest chain of blocker edges that
ends at an item:

- An item with no blockers has depth 0.
- A blocker that is in the snapshot contributes 1 + its own depth.
- A blocker that is not in the snapshot contributes exactly 1.
- An item with any blocker has depth >= 1.

Cycles are broken by treating a back-edge into an item that is still
being resolved as contributing 0. That zero is never memoized, so the
ancestor that is still on the stack finishes with its real value.

Usage:
    from beadtree.graph.depth import apply_blocking_depth

    apply_blocking_depth(items)
    for item in items:
        print(item.id, item.blocking_depth)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from beadtree.graph.index import GraphIndex, build_index

if TYPE_CHECKING:
    from beadtree.models import WorkItem


class DepthResolver:
    """Memoized, cycle-safe depth computation over one snapshot.

    All working state lives on the instance and is sized to the index,
    so a resolver must not be shared across snapshots.
    """

    def __init__(self, index: GraphIndex) -> None:
        self.index = index
        self._memo: list[int | None] = [None] * len(index)
        self._visiting: list[bool] = [False] * len(index)

    def depth_for(self, item_id: str) -> int:
        """Return the blocking depth of an id.

        Ids that are not in the snapshot have depth 0.
        """
        pos = self.index.position(item_id)
        if pos is None:
            return 0
        return self._resolve(pos)

    def _enter(self, pos: int, stack: list[list[int]]) -> int | None:
        """Start resolving pos.

        Returns the depth if it is known without descending, otherwise
        marks pos as visiting, pushes a frame and returns None.
        """
        memo = self._memo[pos]
        if memo is not None:
            return memo

        if not self.index.items[pos].blocked_by:
            self._memo[pos] = 0
            return 0

        if self._visiting[pos]:
            # Back-edge: contributes nothing and stays unmemoized
            return 0

        self._visiting[pos] = True
        # Frame: [position, next blocker offset, best contribution so far]
        stack.append([pos, 0, 0])
        return None

    def _resolve(self, start: int) -> int:
        """Resolve one position with an explicit stack.

        Behaves exactly like the recursive definition, blocker by blocker
        and in list order, without touching the interpreter's recursion
        limit on long chains.
        """
        stack: list[list[int]] = []
        first = self._enter(start, stack)
        if first is not None:
            return first

        result: int | None = None
        while True:
            frame = stack[-1]
            pos = frame[0]

            if result is not None:
                # A child frame just finished
                frame[2] = max(frame[2], 1 + result)
                result = None

            blockers = self.index.items[pos].blocked_by
            descended = False
            while frame[1] < len(blockers):
                blocker_pos = self.index.position(blockers[frame[1]])
                frame[1] += 1

                if blocker_pos is None:
                    # Unknown blocker: counted, never recursed
                    frame[2] = max(frame[2], 1)
                    continue

                child = self._enter(blocker_pos, stack)
                if child is None:
                    descended = True
                    break
                frame[2] = max(frame[2], 1 + child)

            if descended:
                continue

            stack.pop()
            self._visiting[pos] = False
            depth = frame[2]
            if depth == 0:
                # Every blocker was a back-edge
                depth = 1
            self._memo[pos] = depth
            if not stack:
                return depth
            result = depth


def apply_blocking_depth(items: Sequence[WorkItem]) -> None:
    """Set blocking_depth on every item in place.

    Depths are reset first, so nothing carries over from an earlier
    call. Duplicate ids all receive the depth of the first occurrence.

    Args:
        items: Snapshot to annotate.
    """
    for item in items:
        item.blocking_depth = 0

    resolver = DepthResolver(build_index(items))
    for item in items:
        item.blocking_depth = resolver.depth_for(item.id)
