"""JSON file task storage adapter."""

import json
import logging
from datetime import datetime
from pathlib import Path

from ticklist.core.recurrence import Frequency, Recurrence, Weekday
from ticklist.core.tasks import Task

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Raised when the task file exists but cannot be read."""

    pass


def recurrence_to_json(recurrence: Recurrence) -> str | dict:
    if recurrence.frequency == Frequency.WEEKDAYS:
        return {"weekdays": [d.short_name for d in sorted(recurrence.days)]}
    return recurrence.frequency.value


def recurrence_from_json(data: str | dict) -> Recurrence:
    if isinstance(data, dict):
        names = data["weekdays"]
        return Recurrence.on_weekdays(Weekday[name.upper()] for name in names)
    return Recurrence(Frequency(data))


def task_to_json(task: Task) -> dict:
    return {
        "id": task.id,
        "name": task.name,
        "date": task.date.isoformat(),
        "repeats": recurrence_to_json(task.recurrence),
        "description": task.description,
        "complete": task.complete,
    }


def date_from_json(text: str) -> datetime:
    """Parse an ISO timestamp as naive local time."""
    when = datetime.fromisoformat(text)
    if when.tzinfo is not None:
        when = when.astimezone().replace(tzinfo=None)
    return when


def task_from_json(data: dict) -> Task:
    return Task(
        id=data.get("id"),
        name=data.get("name", ""),
        date=date_from_json(data["date"]),
        recurrence=recurrence_from_json(data.get("repeats", "never")),
        description=data.get("description") or None,
        complete=bool(data.get("complete", False)),
    )


class JsonTaskStore:
    """
    JSON file task storage.

    Implements TaskStore protocol. The whole collection lives in one file
    along with the highest id assigned so far.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> tuple[list[Task], int]:
        """Load tasks and last assigned id. Missing file -> empty collection."""
        if not self.path.exists():
            logger.debug(f"No task file at {self.path}, starting empty")
            return [], 0

        try:
            data = json.loads(self.path.read_text())
            tasks = [task_from_json(item) for item in data.get("tasks", [])]
            last_id = int(data.get("last_id", 0))
        except (json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError) as e:
            raise TaskStoreError(f"Could not read {self.path}: {e}") from e

        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks, last_id

    def save(self, tasks: list[Task], last_id: int) -> None:
        """
        Write tasks and last assigned id (pretty-printed).

        Writes a sibling temp file and swaps it in, so the existing file is
        intact until the new one is complete.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "last_id": last_id,
            "tasks": [task_to_json(t) for t in tasks],
        }
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2))
        tmp_path.replace(self.path)
        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")
