"""Pydantic models shared across the API, pipeline, store, and loader.

Beginner terms used in this file:
- Frozen model: instances cannot be changed after creation, so the pipeline
  can pass the same record around without copying it.
- Alias: a second name accepted on input (persisted files and query strings
  use hyphenated or camelCase keys).
- field_validator(mode="before"): runs on the raw value before type coercion.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Values accepted for TaskQuery.sort_by / sort_order. Anything else is a no-op.
SORT_BY_DUE_DATE = "due-date"
SORT_BY_PRIORITY = "priority"
SORT_ASC = "asc"
SORT_DESC = "desc"


def parse_due_date(raw: Any) -> datetime | None:
    """Parse a due date into a UTC instant; return None when absent or unparseable.

    Date-only values mean midnight. Naive values are read as UTC so every
    parsed due date can be compared with every other one.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        parsed = datetime.combine(raw, time.min)
    elif isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def parse_priority(raw: Any) -> int | None:
    """Parse an integer priority; return None when absent or invalid."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


class Task(BaseModel):
    """Canonical task record shape used by the store, pipeline, and API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    description: str = ""
    # None means "no usable priority"; such tasks never move during a sort.
    priority: int | None = None
    due_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("due_date", "dueDate", "due-date"),
    )
    pinned: bool = False
    tags: list[str] = Field(default_factory=list)
    # Pass-through value; the pipeline never reads it.
    progress: Any = None

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value: Any) -> int | None:
        return parse_priority(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _coerce_due_date(cls, value: Any) -> datetime | None:
        return parse_due_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        elif not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError(
                f"tags must be a string or a list of strings, got {type(value).__name__}"
            )
        labels: list[str] = []
        for item in value:
            label = str(item).strip()
            if label and label not in labels:
                labels.append(label)
        return labels


class TaskQuery(BaseModel):
    """Filter and sort parameters for one pipeline run.

    Every field is optional; blank strings behave the same as missing ones.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tag: str | None = None
    title: str | None = None
    sort_by: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sort_by", "sort-by"),
    )
    sort_order: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sort_order", "sort-order"),
    )

    @property
    def has_sort(self) -> bool:
        """True when both a sort key and a direction were supplied."""
        return bool(self.sort_by) and bool(self.sort_order)


class TaskListResponse(BaseModel):
    """Response body for GET /tasks."""

    total: int
    # False while the startup load is still running.
    loaded: bool
    tasks: list[Task]
