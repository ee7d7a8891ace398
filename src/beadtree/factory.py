"""Snapshot Factory - Shared utility for building an annotated snapshot.

Single entry point for commands: resolve configuration, load the item
listing (plus optional deferred and blocked listings), and run both
graph passes.
Commands should use this instead of loading files themselves.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from beadtree.config import find_config_file, load_config
from beadtree.graph import annotate_snapshot
from beadtree.models import WorkItem
from beadtree.snapshot import load_snapshot, merge_blocked, merge_deferred


@dataclass
class AnnotatedSnapshot:
    """Result of build_snapshot().

    Attributes:
        items: Items in original listing order, annotated.
        ordered: The same items in tree order.
        config: Effective configuration.
        config_path: Config file used, if any.
    """

    items: list[WorkItem] = field(default_factory=list)
    ordered: list[WorkItem] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)
    config_path: Path | None = None


def resolve_config(config_path: Path | None = None, verbose: bool = False) -> tuple[dict, Path | None]:
    """Load the explicit config file, or the nearest one from the cwd.

    Returns:
        (config dict, path used or None)
    """
    path = config_path or find_config_file(Path.cwd())
    if verbose:
        print(f"Using config: {path or '(defaults)'}", file=sys.stderr)
    return load_config(path), path


def _configured_path(config: dict[str, Any], key: str) -> Path | None:
    configured = config.get("input", {}).get(key) or ""
    return Path(configured) if configured else None


def build_snapshot(
    snapshot_path: Path | None = None,
    blocked_path: Path | None = None,
    deferred_path: Path | None = None,
    config_path: Path | None = None,
    verbose: bool = False,
) -> AnnotatedSnapshot:
    """Load, merge and annotate a snapshot.

    Args:
        snapshot_path: Full listing; None or "-" reads stdin
        blocked_path: Blocked listing; falls back to input.blocked_file
        deferred_path: Deferred listing; falls back to input.deferred_file
        config_path: Explicit config file
        verbose: Report the config file used on stderr

    Returns:
        AnnotatedSnapshot

    Raises:
        SnapshotError: If a listing cannot be read
        ConfigError: If the config file cannot be read
    """
    config, used_path = resolve_config(config_path, verbose)

    items = load_snapshot(snapshot_path)

    deferred_path = deferred_path or _configured_path(config, "deferred_file")
    if deferred_path is not None:
        merge_deferred(items, load_snapshot(deferred_path))

    blocked_path = blocked_path or _configured_path(config, "blocked_file")
    if blocked_path is not None:
        merge_blocked(items, load_snapshot(blocked_path))

    ordered = annotate_snapshot(items)
    return AnnotatedSnapshot(items=items, ordered=ordered, config=config, config_path=used_path)
