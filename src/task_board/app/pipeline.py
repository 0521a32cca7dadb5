"""Task query pipeline: filter stage followed by order stage.

All functions here are pure. They never mutate the task records (which are
frozen) or the caller's list; each call returns a new list holding the same
record references.

Ordering rules:
- Pinned tasks always come before unpinned tasks.
- The secondary comparator (due date or priority, asc or desc) only applies
  when both a sort key and a direction are supplied, and only within each
  pinned partition.
- Ties keep input order. A task without a usable sort value (missing or
  invalid due date/priority) compares as a tie with everything, so it keeps
  its slot inside its partition while the other tasks are sorted around it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from functools import cmp_to_key

from .models import (
    SORT_ASC,
    SORT_BY_DUE_DATE,
    SORT_BY_PRIORITY,
    SORT_DESC,
    Task,
    TaskQuery,
)

Comparator = Callable[[Task, Task], int]


def apply_query(tasks: Iterable[Task], query: TaskQuery) -> list[Task]:
    """Run the filter stage, then the order stage."""
    return order_tasks(filter_tasks(tasks, query), query)


# ---------------------------------------------------------------------------
# Filter stage
# ---------------------------------------------------------------------------


def filter_tasks(tasks: Iterable[Task], query: TaskQuery) -> list[Task]:
    """Keep tasks matching both the tag and title predicates (when given)."""
    filtered = list(tasks)
    if query.tag:
        filtered = [task for task in filtered if matches_tag(task, query.tag)]
    if query.title:
        filtered = [task for task in filtered if matches_title(task, query.title)]
    return filtered


def matches_tag(task: Task, needle: str) -> bool:
    """True if any tag contains `needle`, ignoring case."""
    lowered = needle.lower()
    return any(lowered in tag.lower() for tag in task.tags)


def matches_title(task: Task, needle: str) -> bool:
    """True if the title contains `needle`, ignoring case."""
    return needle.lower() in task.title.lower()


# ---------------------------------------------------------------------------
# Order stage
# ---------------------------------------------------------------------------


def partition_pinned(tasks: Iterable[Task]) -> tuple[list[Task], list[Task]]:
    """Split into (pinned, unpinned), each keeping input order."""
    pinned: list[Task] = []
    unpinned: list[Task] = []
    for task in tasks:
        (pinned if task.pinned else unpinned).append(task)
    return pinned, unpinned


def order_tasks(tasks: Iterable[Task], query: TaskQuery) -> list[Task]:
    """Pinned tasks first, then the optional secondary ordering per partition."""
    pinned, unpinned = partition_pinned(tasks)
    if not query.has_sort:
        return pinned + unpinned

    sort_by = query.sort_by or ""
    sort_order = query.sort_order or ""

    def compare(a: Task, b: Task) -> int:
        return compare_tasks(a, b, sort_by, sort_order)

    return _sort_partition(pinned, sort_by, compare) + _sort_partition(
        unpinned, sort_by, compare
    )


def compare_tasks(a: Task, b: Task, sort_by: str, sort_order: str) -> int:
    """Fused pinned-first and secondary comparator.

    Returns a negative number when `a` sorts first, positive when `b` does,
    and 0 for a tie. Never raises.
    """
    if a.pinned and not b.pinned:
        return -1
    if b.pinned and not a.pinned:
        return 1
    if sort_order == SORT_ASC:
        return _compare_values(sort_value(a, sort_by), sort_value(b, sort_by))
    if sort_order == SORT_DESC:
        return _compare_values(sort_value(b, sort_by), sort_value(a, sort_by))
    return 0


def sort_value(task: Task, sort_by: str) -> datetime | int | None:
    """Value used by the secondary comparator; None when not comparable."""
    if sort_by == SORT_BY_DUE_DATE:
        return task.due_date
    if sort_by == SORT_BY_PRIORITY:
        return task.priority
    return None


def _compare_values(left: datetime | int | None, right: datetime | int | None) -> int:
    if left is None or right is None:
        return 0
    if isinstance(left, int) and isinstance(right, int):
        return left - right
    if left == right:
        return 0
    return 1 if left > right else -1


def _sort_partition(
    partition: Sequence[Task], sort_by: str, compare: Comparator
) -> list[Task]:
    # Tasks without a sort value stay in place; the rest are stably sorted
    # into the remaining slots.
    slots = [index for index, task in enumerate(partition) if sort_value(task, sort_by) is not None]
    if len(slots) < 2:
        return list(partition)
    ordered = sorted((partition[index] for index in slots), key=cmp_to_key(compare))
    result = list(partition)
    for index, task in zip(slots, ordered):
        result[index] = task
    return result
