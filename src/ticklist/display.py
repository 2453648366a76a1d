"""Display helpers shared by the command surface and the interactive UI."""

from datetime import date, datetime, timedelta

from .config import Config
from .core.tasks import Task


def date_to_display_str(when: datetime, config: Config, today: date | None = None) -> str:
    """Relative name for nearby days, otherwise the configured format."""
    today = today or date.today()
    delta = (when.date() - today).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Tomorrow"
    if delta == -1:
        return "Yesterday"
    return when.strftime(config.date_format)


def is_hyperlink(text: str | None) -> bool:
    if not text:
        return False
    return text.startswith(("http://", "https://"))


def repeats_icon(task: Task, config: Config) -> str:
    return "" if task.recurrence.is_never else config.repeats_icon


def format_task_line(task: Task, config: Config) -> str:
    """One-line summary: icon, id, name, repeat marker."""
    icon = config.complete_icon_for(task.complete)
    line = f"{icon} {task.get_id()}. {task.name}"
    marker = repeats_icon(task, config)
    return f"{line} {marker}" if marker else line


def format_task_details(task: Task, config: Config, today: date | None = None) -> list[str]:
    """Detail lines: date, repeats unless Never, description if set."""
    details = [f"Date: {date_to_display_str(task.date, config, today)}"]
    if not task.recurrence.is_never:
        details.append(f"Repeats: {task.recurrence}")
    if task.description:
        details.append(f"Description: {task.description}")
    return details
