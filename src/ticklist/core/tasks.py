"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta

from .recurrence import NEVER, ParseError, Recurrence, next_occurrence


class UnassignedIdError(RuntimeError):
    """Raised when reading the id of a task that was never added to a TaskList."""

    pass


@dataclass
class Task:
    """A single to-do item."""

    name: str = ""
    date: datetime = field(default_factory=datetime.now)
    recurrence: Recurrence = NEVER
    description: str | None = None
    complete: bool = False
    id: int | None = None

    @classmethod
    def new(cls) -> "Task":
        """Draft task: no id, dated now, never repeats."""
        return cls()

    @property
    def day(self) -> date:
        """Calendar day the task is anchored to."""
        return self.date.date()

    def get_id(self) -> int:
        if self.id is None:
            raise UnassignedIdError("Tasks should always have an ID once added")
        return self.id

    def set_name(self, name: str) -> None:
        self.name = name

    def set_date(self, when: datetime) -> None:
        self.date = when

    def set_recurrence(self, recurrence: Recurrence) -> None:
        self.recurrence = recurrence

    def set_description(self, description: str | None) -> None:
        self.description = description or None

    def mark_complete(self) -> "Task | None":
        """
        Mark complete and derive the next occurrence, if any.

        The task itself is never rescheduled. For a recurring task a new,
        incomplete, unadmitted copy carrying the next date is returned for
        the caller to add.
        """
        self.complete = True
        if self.recurrence.is_never:
            return None

        next_date = next_occurrence(self.date, self.recurrence)
        if next_date is None:
            return None
        return replace(self, id=None, date=next_date, complete=False)

    def mark_incomplete(self) -> None:
        self.complete = False
        return None

    def toggle(self) -> "Task | None":
        """Flip completion. Returns a spawned successor when completing."""
        if self.complete:
            return self.mark_incomplete()
        return self.mark_complete()


def parse_date(text: str, today: date | None = None) -> datetime:
    """
    Parse date text into a local timestamp.

    Accepts ``YYYY-MM-DD`` (midnight), ``YYYY-MM-DD HH:MM``, ``today`` and
    ``tomorrow``. Empty text means today.
    """
    today = today or date.today()
    value = text.strip()
    lowered = value.lower()

    if not value or lowered == "today":
        return datetime.combine(today, time())
    if lowered == "tomorrow":
        return datetime.combine(today + timedelta(days=1), time())

    for fmt in ("%Y-%m-%d", "%Y-%m-%d %H:%M"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ParseError(f"Invalid date format: {text!r} (expected YYYY-MM-DD)")
