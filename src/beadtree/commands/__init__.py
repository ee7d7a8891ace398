"""
beadtree.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "depth",
    "show",
    "tree",
]
