"""
beadtree.commands.depth - Print blocking depth per item.
"""

from __future__ import annotations

import argparse
import json

from beadtree.factory import build_snapshot


def run(args: argparse.Namespace) -> int:
    """Run the depth command.

    Output keeps the listing order, one "id<TAB>depth" line per item.
    """
    snapshot = build_snapshot(
        snapshot_path=args.file,
        blocked_path=args.blocked,
        deferred_path=args.deferred,
        config_path=args.config,
        verbose=args.verbose,
    )

    if args.json:
        depths = {}
        for item in snapshot.items:
            depths.setdefault(item.id, item.blocking_depth)
        print(json.dumps(depths, indent=2))
        return 0

    for item in snapshot.items:
        print(f"{item.id}\t{item.blocking_depth}")

    return 0
