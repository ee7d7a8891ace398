"""
beadtree.commands.config_cmd - Inspect configuration.
"""

from __future__ import annotations

import argparse
import sys

import tomlkit

from beadtree.factory import resolve_config


def run(args: argparse.Namespace) -> int:
    """Run the config command.

    Subcommands:
    - show: Print the effective configuration as TOML
    - path: Print the configuration file location
    """
    action = getattr(args, "config_action", None)

    if action == "show":
        config, _ = resolve_config(args.config, args.verbose)
        sys.stdout.write(tomlkit.dumps(config))
        return 0
    elif action == "path":
        _, path = resolve_config(args.config)
        if path is None:
            if not args.quiet:
                print("No configuration file found (using defaults)", file=sys.stderr)
            return 1
        print(path)
        return 0
    else:
        print("Usage: beadtree config <show|path>", file=sys.stderr)
        return 1
