"""Graph module - Blocking graph passes over a work item snapshot.

Exports:
- GraphIndex / build_index: Dense id -> position index
- DepthResolver / apply_blocking_depth: Blocking depth per item
- Forest / build_forest: Single-parent layout forest
- order_by_blocking_tree: Depth-first order with tree prefixes
- build_tree_prefix: Box-drawing prefix for one node
- annotate_snapshot: Both passes in one call
"""

from beadtree.graph.depth import DepthResolver, apply_blocking_depth
from beadtree.graph.forest import Forest, build_forest
from beadtree.graph.index import GraphIndex, build_index
from beadtree.graph.ordering import (
    annotate_snapshot,
    build_tree_prefix,
    order_by_blocking_tree,
)

__all__ = [
    "GraphIndex",
    "build_index",
    "DepthResolver",
    "apply_blocking_depth",
    "Forest",
    "build_forest",
    "order_by_blocking_tree",
    "build_tree_prefix",
    "annotate_snapshot",
]
