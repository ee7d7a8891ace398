"""
beadtree.commands.tree - Print a snapshot as a blocking tree.
"""

from __future__ import annotations

import argparse
import json

from beadtree.config import get_display_settings
from beadtree.factory import build_snapshot
from beadtree.render import format_lines


def run(args: argparse.Namespace) -> int:
    """Run the tree command."""
    snapshot = build_snapshot(
        snapshot_path=args.file,
        blocked_path=args.blocked,
        deferred_path=args.deferred,
        config_path=args.config,
        verbose=args.verbose,
    )
    display = get_display_settings(snapshot.config)

    if args.json:
        print(json.dumps([item.to_dict() for item in snapshot.ordered], indent=2, ensure_ascii=False))
        return 0

    if not snapshot.ordered:
        if not args.quiet:
            print("(no items)")
        return 0

    width = args.width if args.width is not None else display["width"]
    shorten = display["shorten_ids"] and not args.no_shorten
    show_depth = args.show_depth or display["show_depth"]

    for line in format_lines(snapshot.ordered, width=width, shorten=shorten, show_depth=show_depth):
        print(line)

    return 0
