"""
beadtree - Blocking depth and tree ordering for work item snapshots

beadtree annotates a snapshot of work items linked by blocked-by edges
with a blocking depth per item, and reorders the snapshot into a
depth-first forest with box-drawing prefixes ready for display. Cyclic
and dangling blocker references are handled without errors.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("beadtree")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from beadtree.graph import annotate_snapshot, apply_blocking_depth, order_by_blocking_tree
from beadtree.models import WorkItem

__all__ = [
    "__version__",
    "WorkItem",
    "annotate_snapshot",
    "apply_blocking_depth",
    "order_by_blocking_tree",
]
