"""
beadtree.commands.show - Show one item with its blockers.
"""

from __future__ import annotations

import argparse
import sys

from beadtree.config import get_display_settings
from beadtree.factory import build_snapshot
from beadtree.graph import build_index
from beadtree.render import format_item_detail


def run(args: argparse.Namespace) -> int:
    """Run the show command."""
    snapshot = build_snapshot(
        snapshot_path=args.file,
        blocked_path=args.blocked,
        deferred_path=args.deferred,
        config_path=args.config,
        verbose=args.verbose,
    )

    item = build_index(snapshot.items).item(args.id)
    if item is None:
        print(f"Error: No item with id '{args.id}'", file=sys.stderr)
        return 1

    display = get_display_settings(snapshot.config)
    sys.stdout.write(format_item_detail(item, snapshot.items, width=display["width"]))
    return 0
