"""Shared workflow layer between the command surface and the interactive UI.

Front ends load a TaskList, mutate it through core operations and hand it
back here to persist.
"""

import logging
from datetime import date

from .adapters.json_store import JsonTaskStore
from .config import Config, save_setting
from .core.collection import TaskList
from .core.recurrence import parse_recurrence
from .core.tasks import Task, parse_date
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> TaskStore:
    """Resolve the task file from config."""
    return JsonTaskStore(config.data_file)


def load_task_list(config: Config) -> TaskList:
    tasks, last_id = get_store(config).load()
    return TaskList(tasks, last_id=last_id)


def save_task_list(config: Config, task_list: TaskList) -> None:
    get_store(config).save(task_list.tasks, task_list.last_id)


def build_draft(
    name: str,
    date_text: str = "",
    repeats_text: str = "",
    description: str = "",
    today: date | None = None,
) -> Task:
    """
    Validate user-entered fields into an unadmitted task.

    Raises ParseError before anything is constructed, so a bad field never
    leaves a half-filled task behind.
    """
    when = parse_date(date_text, today)
    recurrence = parse_recurrence(repeats_text)

    task = Task.new()
    task.set_name(name)
    task.set_date(when)
    task.set_recurrence(recurrence)
    task.set_description(description)
    return task


def set_show_complete(config: Config, show: bool) -> None:
    """Remember the completed-task visibility toggle across runs."""
    config.show_complete = show
    try:
        save_setting("show_complete", "true" if show else "false")
    except OSError as e:
        logger.warning(f"Could not persist SHOW_COMPLETE: {e}")
