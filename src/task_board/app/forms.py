"""Map submitted form fields to a Task record."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import Task, parse_due_date, parse_priority

# Textual values that mean "pinned". Everything else, including a missing
# field, means not pinned.
PINNED_TRUE_VALUES = frozenset({"on", "true", "1", "yes", "y", "checked", "pinned"})


def parse_pinned(raw: Any) -> bool:
    """Explicit mapping from a submitted pinned value to a boolean."""
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in PINNED_TRUE_VALUES


def split_tags(raw: str | None) -> list[str]:
    """Split a comma separated string into trimmed, unique, non-empty labels."""
    if not raw:
        return []
    labels: list[str] = []
    for part in raw.split(","):
        label = part.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def _blank_to_none(raw: Any) -> Any:
    # An empty form field means "no progress"; other values pass through as-is.
    if isinstance(raw, str) and not raw.strip():
        return None
    return raw


def build_task_from_form(fields: Mapping[str, Any]) -> Task:
    """Create a Task from raw form fields (`dueDate` and `due-date` both accepted)."""
    due_raw = fields.get("dueDate")
    if due_raw is None:
        due_raw = fields.get("due-date")
    return Task(
        title=str(fields.get("title") or "").strip(),
        description=str(fields.get("description") or ""),
        priority=parse_priority(fields.get("priority")),
        due_date=parse_due_date(due_raw),
        pinned=parse_pinned(fields.get("pinned")),
        tags=split_tags(fields.get("tags")),
        progress=_blank_to_none(fields.get("progress")),
    )
