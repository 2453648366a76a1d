"""Pure recurrence logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntEnum


class ParseError(ValueError):
    """Raised when user-entered date or recurrence text cannot be parsed."""

    pass


class Weekday(IntEnum):
    """Day of week, numbered like ``date.weekday()``."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @property
    def short_name(self) -> str:
        return self.name.capitalize()


_WEEKDAY_NAMES = {
    "mon": Weekday.MON,
    "monday": Weekday.MON,
    "tue": Weekday.TUE,
    "tues": Weekday.TUE,
    "tuesday": Weekday.TUE,
    "wed": Weekday.WED,
    "wednesday": Weekday.WED,
    "thu": Weekday.THU,
    "thur": Weekday.THU,
    "thurs": Weekday.THU,
    "thursday": Weekday.THU,
    "fri": Weekday.FRI,
    "friday": Weekday.FRI,
    "sat": Weekday.SAT,
    "saturday": Weekday.SAT,
    "sun": Weekday.SUN,
    "sunday": Weekday.SUN,
}


class Frequency(Enum):
    """Kind of recurrence rule."""

    NEVER = "never"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    WEEKDAYS = "weekdays"


@dataclass(frozen=True)
class Recurrence:
    """A recurrence rule. ``days`` is only meaningful for WEEKDAYS."""

    frequency: Frequency = Frequency.NEVER
    days: frozenset[Weekday] = field(default_factory=frozenset)

    @classmethod
    def never(cls) -> "Recurrence":
        return cls(Frequency.NEVER)

    @classmethod
    def on_weekdays(cls, days) -> "Recurrence":
        return cls(Frequency.WEEKDAYS, frozenset(Weekday(d) for d in days))

    @property
    def is_never(self) -> bool:
        return self.frequency == Frequency.NEVER

    def __str__(self) -> str:
        if self.frequency == Frequency.WEEKDAYS:
            return ",".join(d.short_name for d in sorted(self.days))
        return self.frequency.value.capitalize()


NEVER = Recurrence.never()
DAILY = Recurrence(Frequency.DAILY)
WEEKLY = Recurrence(Frequency.WEEKLY)
MONTHLY = Recurrence(Frequency.MONTHLY)
YEARLY = Recurrence(Frequency.YEARLY)


def add_months(anchor: datetime, months: int) -> datetime | None:
    """
    Add calendar months, keeping day-of-month and time.

    Returns None when the target month has no such day (Jan 31 + 1 month).
    The date is never clamped to the end of the month.
    """
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    try:
        return anchor.replace(year=year, month=month)
    except ValueError:
        return None


def next_occurrence(anchor: datetime, recurrence: Recurrence) -> datetime | None:
    """
    Next occurrence after ``anchor`` under ``recurrence``.

    Pure function - no I/O. Returns None when there is no further occurrence:
    Never, an empty weekday set, or a month/year step landing on a day the
    target month lacks.
    """
    match recurrence.frequency:
        case Frequency.NEVER:
            return None
        case Frequency.DAILY:
            return anchor + timedelta(days=1)
        case Frequency.WEEKLY:
            return anchor + timedelta(days=7)
        case Frequency.MONTHLY:
            return add_months(anchor, 1)
        case Frequency.YEARLY:
            return add_months(anchor, 12)
        case Frequency.WEEKDAYS:
            for offset in range(1, 8):
                candidate = anchor + timedelta(days=offset)
                if candidate.weekday() in recurrence.days:
                    return candidate
            return None


def parse_recurrence(text: str) -> Recurrence:
    """
    Parse recurrence text.

    Accepts Never, Daily, Weekly, Monthly, Yearly (any case) or a
    comma-separated list of weekday names such as ``Mon,Wed,Fri``.
    Empty text means Never.
    """
    value = text.strip().lower()
    if not value:
        return NEVER

    for freq in (Frequency.NEVER, Frequency.DAILY, Frequency.WEEKLY, Frequency.MONTHLY, Frequency.YEARLY):
        if value == freq.value:
            return Recurrence(freq)

    days = set()
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if part not in _WEEKDAY_NAMES:
            raise ParseError(
                f"Invalid repeat format: {text!r} "
                "(expected Never, Daily, Weekly, Monthly, Yearly or days like Mon,Wed)"
            )
        days.add(_WEEKDAY_NAMES[part])

    if not days:
        raise ParseError(f"Invalid repeat format: {text!r}")
    return Recurrence.on_weekdays(days)
