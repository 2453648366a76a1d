"""Functional core - pure business logic with no I/O."""

from .recurrence import (
    Frequency,
    ParseError,
    Recurrence,
    Weekday,
    next_occurrence,
    parse_recurrence,
)
from .tasks import Task, UnassignedIdError, parse_date
from .collection import AlreadyAddedError, TaskList
from .views import (
    closest_visible,
    filter_by_date,
    filter_incomplete,
    group_by_day,
    next_visible,
    prev_visible,
    sort_by_date,
)

__all__ = [
    # Recurrence
    "Frequency",
    "ParseError",
    "Recurrence",
    "Weekday",
    "next_occurrence",
    "parse_recurrence",
    # Tasks
    "Task",
    "UnassignedIdError",
    "parse_date",
    "AlreadyAddedError",
    "TaskList",
    # Views
    "closest_visible",
    "filter_by_date",
    "filter_incomplete",
    "group_by_day",
    "next_visible",
    "prev_visible",
    "sort_by_date",
]
