"""
beadtree.render - Plain-text rendering of annotated work items.

Lines have the form:

    " ⛔ P1 a1b2 │  └─ Write migrations"

marker, priority, short id, tree prefix and title, followed by optional
notes: "(in 3h)" for deferred items and "(blocked by ...)" for blocked
items that are shown as roots. No colors or borders are produced here.

All widths are terminal cells: East Asian wide glyphs such as the
markers count as two.
"""

from __future__ import annotations

import math
import textwrap
import unicodedata
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from beadtree.models import TEXT_SECTIONS, WorkItem

BLOCKED_MARKER = "⛔"
DEFERRED_MARKER = "⏳"
MARKER_WIDTH = 2
ELLIPSIS = "..."
MIN_SECTION_WIDTH = 20


def cell_width(text: str) -> int:
    """Return the number of terminal cells text occupies."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def shorten_id(item_id: str) -> str:
    """Return the part of an id after its last dash.

    Examples:
        'bd-a1b2' -> 'a1b2'
        'proj-ui-17' -> '17'
        'a1b2' -> 'a1b2'
        '-x' -> '-x'  (leading dash only, kept as is)
        'bd-' -> 'bd-'  (trailing dash, kept as is)
    """
    last_dash = item_id.rfind("-")
    if last_dash <= 0 or last_dash >= len(item_id) - 1:
        return item_id
    return item_id[last_dash + 1 :]


def truncate(text: str, max_width: int) -> str:
    """Truncate text to max_width cells, ending with "...".

    The result never exceeds max_width cells. Returns an empty string
    when max_width is not positive; when the full ellipsis does not fit,
    only as many dots as fit are returned.
    """
    if max_width <= 0:
        return ""
    if cell_width(text) <= max_width:
        return text
    if max_width <= len(ELLIPSIS):
        return ELLIPSIS[:max_width]
    while text and cell_width(text + ELLIPSIS) > max_width:
        text = text[:-1]
    return text + ELLIPSIS


def format_relative_time(target: datetime, now: datetime) -> str:
    """Describe target relative to now, e.g. "in 5m" or "3d ago".

    Units step up at 90 seconds, 90 minutes and 48 hours; values are
    rounded up.
    """
    delta = (target - now).total_seconds()
    future = delta >= 0
    seconds = abs(delta)

    if seconds >= 48 * 3600:
        value, unit = math.ceil(seconds / 86400), "d"
    elif seconds >= 90 * 60:
        value, unit = math.ceil(seconds / 3600), "h"
    elif seconds >= 90:
        value, unit = math.ceil(seconds / 60), "m"
    else:
        value, unit = math.ceil(max(seconds, 1)), "s"

    if future:
        return f"in {value}{unit}"
    return f"{value}{unit} ago"


def state_marker(item: WorkItem, now: datetime) -> str:
    """Return the marker column, padded to MARKER_WIDTH cells.

    Blocked takes precedence over deferred.
    """
    if item.is_blocked:
        marker = BLOCKED_MARKER
    elif item.is_deferred(now):
        marker = DEFERRED_MARKER
    else:
        marker = ""
    return marker + " " * max(MARKER_WIDTH - cell_width(marker), 0)


def blocked_suffix(item: WorkItem, shorten: bool = True) -> str:
    """Return the " (blocked by ...)" suffix, or "" when not applicable.

    Items drawn under a parent already show what blocks them, so the
    suffix is only produced for blocked items without a tree prefix.
    """
    if not item.is_blocked or item.tree_prefix:
        return ""
    ids = [shorten_id(b) if shorten else b for b in item.blocked_by]
    return f" (blocked by {', '.join(ids)})"


def _line_suffix(item: WorkItem, now: datetime, shorten: bool, show_depth: bool) -> str:
    parts = []
    if show_depth:
        parts.append(f"[depth {item.blocking_depth}]")
    if item.is_deferred(now):
        parts.append(f"({format_relative_time(item.defer_until, now)})")
    blocked = blocked_suffix(item, shorten)
    if blocked:
        parts.append(blocked.lstrip(" "))
    if not parts:
        return ""
    return " " + " ".join(parts)


def format_item_line(
    item: WorkItem,
    width: int = 0,
    shorten: bool = True,
    show_depth: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """Format one item as a single display line.

    Args:
        item: Annotated work item
        width: Maximum line width in cells; 0 disables truncation
        shorten: Show the short form of ids
        show_depth: Add "[depth N]" after the title
        now: Reference time for deferral (default: current UTC time)

    Returns:
        The line without a trailing newline
    """
    now = now or datetime.now(timezone.utc)
    issue_id = shorten_id(item.id) if shorten else item.id

    head = f" {state_marker(item, now)} {item.priority_label} {issue_id} "
    suffix = _line_suffix(item, now, shorten, show_depth)
    title = item.title

    if width > 0:
        head_width = cell_width(head) + cell_width(item.tree_prefix)
        title = truncate(title, width - head_width - cell_width(suffix))
        remaining = width - head_width - cell_width(title)
        if cell_width(suffix) > remaining:
            trimmed = truncate(suffix.lstrip(" "), remaining - 1)
            suffix = " " + trimmed if trimmed else ""

    return f"{head}{item.tree_prefix}{title}{suffix}"


def format_lines(
    items: Iterable[WorkItem],
    width: int = 0,
    shorten: bool = True,
    show_depth: bool = False,
    now: Optional[datetime] = None,
) -> List[str]:
    """Format every item with format_item_line()."""
    now = now or datetime.now(timezone.utc)
    return [format_item_line(item, width, shorten, show_depth, now) for item in items]


def format_item_detail(
    item: WorkItem,
    snapshot: Optional[Sequence[WorkItem]] = None,
    width: int = 0,
    now: Optional[datetime] = None,
) -> str:
    """Format a multi-line detail block for one item.

    Blocker ids are followed by their titles when the blocker is part
    of the snapshot. Long-form text sections are wrapped to width
    (never narrower than 20 columns); width 0 leaves them unwrapped.

    Args:
        item: The item to describe
        snapshot: Items used to look up blocker titles
        width: Wrap width for text sections
        now: Reference time for deferral (default: current UTC time)

    Returns:
        Detail text ending with a newline
    """
    now = now or datetime.now(timezone.utc)
    titles = {}
    for other in snapshot or []:
        titles.setdefault(other.id, other.title)

    lines = [
        f"{item.id}: {item.title}",
        f"Status: {item.status}",
        f"Priority: {item.priority_label}",
        f"Type: {item.issue_type}",
    ]
    if item.assignee:
        lines.append(f"Assignee: {item.assignee}")
    if item.labels:
        lines.append(f"Labels: {', '.join(item.labels)}")
    if item.due_date is not None:
        lines.append(f"Due: {item.due_date:%Y-%m-%d}")
    if item.is_deferred(now):
        lines.append(f"Deferred: until {item.defer_until:%Y-%m-%d}")
    lines.append(f"Blocking depth: {item.blocking_depth}")

    wrap_width = max(width - 2, MIN_SECTION_WIDTH) if width > 0 else 0
    for key, label in TEXT_SECTIONS:
        value = getattr(item, key)
        if not value:
            continue
        lines.append("")
        lines.append(label)
        for paragraph in value.splitlines():
            if wrap_width and paragraph:
                lines.extend(textwrap.wrap(paragraph, wrap_width))
            else:
                lines.append(paragraph)

    if item.blocked_by:
        lines.append("")
        lines.append("Blocked by:")
        for blocker in item.blocked_by:
            title = titles.get(blocker)
            lines.append(f"  - {blocker} {title}" if title else f"  - {blocker}")

    if item.blocks:
        lines.append("")
        lines.append("Blocks:")
        for blocked in item.blocks:
            lines.append(f"  - {blocked}")

    timestamps = []
    if item.created_at is not None:
        created = f"Created: {item.created_at:%Y-%m-%d %H:%M}"
        if item.created_by:
            created += f" by {item.created_by}"
        timestamps.append(created)
    if item.updated_at is not None:
        timestamps.append(f"Updated: {item.updated_at:%Y-%m-%d %H:%M}")
    if item.closed_at is not None:
        timestamps.append(f"Closed: {item.closed_at:%Y-%m-%d %H:%M}")
    if timestamps:
        lines.append("")
        lines.extend(timestamps)

    return "\n".join(lines) + "\n"
