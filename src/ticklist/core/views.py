"""Read-only views over a task sequence - no I/O, never mutates."""

from collections.abc import Iterable, Iterator, Sequence
from datetime import date
from itertools import groupby

from .tasks import Task


def filter_incomplete(tasks: Iterable[Task]) -> Iterator[Task]:
    """Incomplete tasks in collection order."""
    return (t for t in tasks if not t.complete)


def filter_by_date(tasks: Iterable[Task], day: date) -> Iterator[Task]:
    """Tasks anchored to the given calendar day."""
    return (t for t in tasks if t.day == day)


def group_by_day(tasks: Iterable[Task]) -> list[list[Task]]:
    """
    Split tasks into consecutive runs sharing a calendar day.

    This is not a global group-by: [Mon, Mon, Tue, Mon] gives three groups.
    """
    return [list(group) for _, group in groupby(tasks, key=lambda t: t.day)]


def sort_by_date(tasks: Iterable[Task]) -> list[Task]:
    """Stable sort by timestamp."""
    return sorted(tasks, key=lambda t: t.date)


def is_visible(task: Task, show_completed: bool) -> bool:
    return show_completed or not task.complete


def next_visible(tasks: Sequence[Task], index: int | None, show_completed: bool) -> int | None:
    """
    Index of the next visible task after ``index``.

    Stops at the end: returns ``index`` when nothing visible follows.
    With no current index, returns the first visible index.
    """
    if index is None:
        return _first_visible(tasks, range(len(tasks)), show_completed)

    found = _first_visible(tasks, range(index + 1, len(tasks)), show_completed)
    return index if found is None else found


def prev_visible(tasks: Sequence[Task], index: int | None, show_completed: bool) -> int | None:
    """
    Index of the previous visible task before ``index``.

    Stops at the start: returns ``index`` when nothing visible precedes it.
    With no current index, returns the last visible index.
    """
    if index is None:
        return _first_visible(tasks, range(len(tasks) - 1, -1, -1), show_completed)

    found = _first_visible(tasks, range(min(index, len(tasks)) - 1, -1, -1), show_completed)
    return index if found is None else found


def closest_visible(tasks: Sequence[Task], index: int | None, show_completed: bool) -> int | None:
    """
    Recover a valid selection after the current row vanished or got hidden.

    Searches forward from ``index`` inclusive, then backward. Returns None
    when no task is visible.
    """
    start = 0 if index is None else min(index, len(tasks))
    forward = _first_visible(tasks, range(start, len(tasks)), show_completed)
    if forward is not None:
        return forward
    return _first_visible(tasks, range(start - 1, -1, -1), show_completed)


def _first_visible(tasks: Sequence[Task], indices: Iterable[int], show_completed: bool) -> int | None:
    for i in indices:
        if is_visible(tasks[i], show_completed):
            return i
    return None
