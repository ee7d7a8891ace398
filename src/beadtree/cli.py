"""
beadtree.cli - Command-line interface.

Main entry point for the beadtree CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from beadtree import __version__
from beadtree.commands import config_cmd, depth, show, tree
from beadtree.config import ConfigError
from beadtree.snapshot import SnapshotError


def _add_snapshot_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the input arguments shared by snapshot commands."""
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="Item listing as JSON (default: stdin, or '-')",
        metavar="FILE",
    )
    parser.add_argument(
        "--blocked",
        type=Path,
        help="Blocked listing to merge (e.g. output of 'bd blocked --json')",
        metavar="FILE",
    )
    parser.add_argument(
        "--deferred",
        type=Path,
        help="Deferred listing to merge (e.g. output of 'bd list --deferred --json')",
        metavar="FILE",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON instead of text",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="beadtree",
        description="Blocking depth and tree ordering for work item snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bd list --all --json | beadtree tree         # Tree from stdin
  beadtree tree items.json --blocked blk.json  # Merge blocker lists first
  beadtree tree items.json --deferred def.json # Mark deferred items
  beadtree tree items.json --width 80          # Truncate titles to fit
  beadtree depth items.json                    # id<TAB>depth per item
  beadtree show bd-a1b2 items.json             # Item with its blockers

Configuration:
  beadtree config path          # Show config file location
  beadtree config show          # View effective settings

For detailed command help: beadtree <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"beadtree {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tree command
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print items in blocking-tree order",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Each item hangs under the first of its blockers present in the listing.
Blocked items shown as roots get a "(blocked by ...)" suffix.
Deferred items are marked with an hourglass and "(in 3h)".
""",
    )
    _add_snapshot_arguments(tree_parser)
    tree_parser.add_argument(
        "--width",
        type=int,
        help="Maximum line width (0 disables truncation)",
        metavar="N",
    )
    tree_parser.add_argument(
        "--no-shorten",
        action="store_true",
        help="Show full item ids",
    )
    tree_parser.add_argument(
        "--show-depth",
        action="store_true",
        help="Append blocking depth to each line",
    )

    # depth command
    depth_parser = subparsers.add_parser(
        "depth",
        help="Print blocking depth per item",
    )
    _add_snapshot_arguments(depth_parser)

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Show one item with its blockers",
    )
    show_parser.add_argument("id", help="Item id")
    _add_snapshot_arguments(show_parser)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("show", help="Show effective configuration")
    config_subparsers.add_parser("path", help="Show configuration file location")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install beadtree[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "tree":
            return tree.run(args)
        elif args.command == "depth":
            return depth.run(args)
        elif args.command == "show":
            return show.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except (SnapshotError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
