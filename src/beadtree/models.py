"""
beadtree.models - Work item data model.

Provides the WorkItem dataclass shared by the graph passes, the
snapshot loader and the renderers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

# Text sections shown in the detail view, in display order
TEXT_SECTIONS = [
    ("description", "Description:"),
    ("notes", "Notes:"),
    ("design", "Design:"),
    ("acceptance_criteria", "Acceptance Criteria:"),
    ("close_reason", "Close Reason:"),
]

TIMESTAMP_FIELDS = ["due_date", "defer_until", "created_at", "updated_at", "closed_at"]

# Fractional seconds of any length, trimmed or padded to microseconds
_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a store timestamp into an aware datetime.

    Accepts RFC 3339 strings (a trailing "Z" and nanosecond fractions
    included) and plain YYYY-MM-DD dates. Naive values are taken as
    UTC. Empty values give None.

    Raises:
        ValueError: If the value is not a recognizable timestamp
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"invalid timestamp {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"invalid timestamp {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class WorkItem:
    """
    A trackable unit of work as delivered by the item store.

    Attributes:
        id: Identifier, unique within one snapshot (e.g., "bd-a1b2")
        title: Human-readable title
        status: Store status (e.g., "open", "in_progress", "closed")
        priority: Numeric priority, 0 is highest
        issue_type: Store type (e.g., "task", "bug", "epic")
        blocked_by: IDs that must complete first, in store order
        blocks: IDs this item blocks (informational only)
        assignee: Assigned user, empty if unassigned
        labels: Free-form labels
        description, notes, design, acceptance_criteria, close_reason:
            Long-form text shown in the detail view
        created_by: User who created the item
        due_date, defer_until, created_at, updated_at, closed_at:
            Aware datetimes, None when unset
        blocking_depth: Computed longest blocker chain ending here
        tree_prefix: Computed box-drawing prefix for tree display
    """

    id: str
    title: str = ""
    status: str = "open"
    priority: int = 2
    issue_type: str = "task"
    blocked_by: list[str] = field(default_factory=list)
    blocks: list[str] = field(default_factory=list)
    assignee: str = ""
    labels: list[str] = field(default_factory=list)
    description: str = ""
    notes: str = ""
    design: str = ""
    acceptance_criteria: str = ""
    close_reason: str = ""
    created_by: str = ""
    due_date: Optional[datetime] = None
    defer_until: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    # Computed on every pass, never read back from the store
    blocking_depth: int = 0
    tree_prefix: str = ""

    @property
    def is_blocked(self) -> bool:
        """True if the item lists at least one blocker."""
        return len(self.blocked_by) > 0

    def is_deferred(self, now: datetime) -> bool:
        """True if the item is deferred past now."""
        return self.defer_until is not None and self.defer_until > now

    @property
    def priority_label(self) -> str:
        """Return the priority as displayed, e.g. "P1"."""
        return f"P{self.priority}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkItem:
        """Create a WorkItem from a store JSON object.

        Unknown keys are ignored. Missing list and text fields default
        to empty, missing timestamps to None.

        Args:
            data: Decoded JSON object with at least an "id" key

        Returns:
            WorkItem with computed fields reset

        Raises:
            ValueError: If priority or a timestamp cannot be parsed
        """
        texts = {key: data.get(key) or "" for key, _ in TEXT_SECTIONS}
        times = {key: parse_timestamp(data.get(key)) for key in TIMESTAMP_FIELDS}
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            status=data.get("status") or "open",
            priority=int(data.get("priority", 2)),
            issue_type=data.get("issue_type") or "task",
            blocked_by=list(data.get("blocked_by") or []),
            blocks=list(data.get("blocks") or []),
            assignee=data.get("assignee") or "",
            labels=list(data.get("labels") or []),
            created_by=data.get("created_by") or "",
            **texts,
            **times,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict including computed fields.

        Timestamps are written in ISO 8601 form, or None when unset.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "priority": self.priority,
            "issue_type": self.issue_type,
            "blocked_by": list(self.blocked_by),
            "blocks": list(self.blocks),
            "assignee": self.assignee,
            "labels": list(self.labels),
            "created_by": self.created_by,
        }
        for key, _ in TEXT_SECTIONS:
            data[key] = getattr(self, key)
        for key in TIMESTAMP_FIELDS:
            value = getattr(self, key)
            data[key] = value.isoformat() if value is not None else None
        data["blocking_depth"] = self.blocking_depth
        data["tree_prefix"] = self.tree_prefix
        return data

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.id}: {self.title}"
