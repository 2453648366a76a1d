"""Interactive terminal interface.

Screens form a closed set (AllTasks, NewTask, EditTask, Quit). Each page
handles one key at a time and returns the screen to switch to, or None to
stay where it is.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

import click

from .config import Config
from .core.collection import TaskList
from .core.recurrence import ParseError
from .core.tasks import Task
from .core.views import closest_visible, group_by_day, is_visible, next_visible, prev_visible
from .display import date_to_display_str, format_task_details, is_hyperlink, repeats_icon
from .workflows import build_draft, load_task_list, save_task_list, set_show_complete

logger = logging.getLogger(__name__)

ENTER_KEYS = ("\r", "\n")
ESC_KEY = "\x1b"
BACKSPACE_KEYS = ("\x7f", "\x08")


@dataclass(frozen=True)
class AllTasks:
    pass


@dataclass(frozen=True)
class NewTask:
    pass


@dataclass(frozen=True)
class EditTask:
    task_id: int


@dataclass(frozen=True)
class Quit:
    pass


Screen = AllTasks | NewTask | EditTask | Quit


class AllTasksPage:
    """Day-grouped task list with a details panel for the selected task."""

    KEYBINDS = (
        "j/k move  x toggle  h show/hide completed  d delete  "
        "Enter open link  n new  e edit  q quit"
    )

    def __init__(self, task_list: TaskList, config: Config):
        self.task_list = task_list
        self.config = config
        self.show_hidden = config.show_complete
        self.current_idx: int | None = None

    def selected_task(self) -> Task | None:
        if self.current_idx is None or self.current_idx >= len(self.task_list):
            return None
        return self.task_list[self.current_idx]

    def next(self) -> None:
        self.current_idx = next_visible(self.task_list, self.current_idx, self.show_hidden)

    def prev(self) -> None:
        self.current_idx = prev_visible(self.task_list, self.current_idx, self.show_hidden)

    def move_closest(self) -> None:
        self.current_idx = closest_visible(self.task_list, self.current_idx, self.show_hidden)

    def toggle_selected(self) -> None:
        task = self.selected_task()
        if task is None:
            return
        self.task_list.toggle_complete(task.get_id())
        save_task_list(self.config, self.task_list)
        if not self.show_hidden:
            self.move_closest()

    def delete_selected(self) -> None:
        task = self.selected_task()
        if task is None:
            return
        self.task_list.delete(task.get_id())
        save_task_list(self.config, self.task_list)
        self.move_closest()

    def toggle_hidden(self) -> None:
        self.show_hidden = not self.show_hidden
        set_show_complete(self.config, self.show_hidden)
        if not self.show_hidden:
            self.move_closest()

    def open_selected_link(self) -> None:
        task = self.selected_task()
        if task is None or not is_hyperlink(task.description):
            return
        logger.debug(f"Opening {task.description}")
        click.launch(task.description)

    def handle_key(self, key: str) -> Screen | None:
        match key:
            case "q":
                return Quit()
            case "j":
                self.next()
            case "k":
                self.prev()
            case "x":
                self.toggle_selected()
            case "h":
                self.toggle_hidden()
            case "d":
                self.delete_selected()
            case "n":
                return NewTask()
            case "e":
                task = self.selected_task()
                if task is not None:
                    return EditTask(task.get_id())
            case _ if key in ENTER_KEYS:
                self.open_selected_link()
        return None

    def render_lines(self, today: date | None = None) -> list[str]:
        lines = [click.style("Todos", bold=True), ""]
        position = 0

        for group in group_by_day(self.task_list):
            rows = []
            for task in group:
                idx = position
                position += 1
                if not is_visible(task, self.show_hidden):
                    continue
                rows.append(self._task_row(task, idx == self.current_idx))

            # Every task in the group is hidden: drop the header too
            if not rows:
                continue

            header = " " + date_to_display_str(group[0].date, self.config, today).upper()
            lines.append(click.style(header, fg="bright_blue", bold=True))
            lines.extend(rows)
            lines.append("")

        if position == 0:
            lines.append(click.style("  No tasks. Press 'n' to add one.", dim=True))
            lines.append("")

        task = self.selected_task()
        if task is not None:
            lines.append(click.style("Description", bold=True))
            lines.extend(f"  {d}" for d in format_task_details(task, self.config, today))
            lines.append("")

        lines.append(click.style(self.KEYBINDS, dim=True))
        return lines

    def _task_row(self, task: Task, selected: bool) -> str:
        icon = self.config.complete_icon_for(task.complete)
        text = f"  {icon} {task.name} {repeats_icon(task, self.config)}".rstrip()
        if selected:
            return click.style(text, fg="bright_yellow", bold=True)
        if task.complete:
            return click.style(text, fg="bright_black", bold=True)
        return click.style(text, fg="white", bold=True)


class InputMode(Enum):
    NORMAL = "normal"
    EDITING = "editing"


FIELD_TITLES = (
    "Name",
    "Date (YYYY-MM-DD)",
    "Repeats (Never | Daily | Weekly | Monthly | Yearly | Mon,Tue,Wed,Thu,Fri,Sat,Sun)",
    "Description",
)


class TaskFormPage:
    """Form for creating a task, or editing one when ``task_id`` is set."""

    KEYBINDS = (
        "Press 'i' to enter input mode, 'q' to quit, 'j' and 'k' to move up and down, "
        "'Enter' to submit, 'Esc' to exit input mode, and 'b' to go back to the main screen"
    )

    def __init__(
        self,
        task_list: TaskList,
        config: Config,
        task_id: int | None = None,
        fields: list[str] | None = None,
    ):
        self.task_list = task_list
        self.config = config
        self.task_id = task_id
        self.fields = fields or ["", "", "", ""]
        self.current_idx = 0
        self.input_mode = InputMode.NORMAL
        self.error: str | None = None
        # Prefilled date text and the exact timestamp it was rendered from
        self.original_date: tuple[str, datetime] | None = None

    @classmethod
    def for_task(cls, task_list: TaskList, config: Config, task: Task) -> "TaskFormPage":
        """Edit form prefilled from an existing task."""
        if task.date.hour or task.date.minute:
            date_text = task.date.strftime("%Y-%m-%d %H:%M")
        else:
            date_text = task.date.strftime("%Y-%m-%d")
        repeats = "" if task.recurrence.is_never else str(task.recurrence)
        fields = [task.name, date_text, repeats, task.description or ""]
        page = cls(task_list, config, task_id=task.get_id(), fields=fields)
        page.original_date = (date_text, task.date)
        return page

    def next_field(self) -> None:
        if self.current_idx < len(self.fields) - 1:
            self.current_idx += 1

    def prev_field(self) -> None:
        if self.current_idx > 0:
            self.current_idx -= 1

    def add_char(self, c: str) -> None:
        self.fields[self.current_idx] += c

    def remove_char(self) -> None:
        self.fields[self.current_idx] = self.fields[self.current_idx][:-1]

    def submit(self) -> Screen | None:
        name, date_text, repeats, description = self.fields
        try:
            draft = build_draft(name, date_text, repeats, description)
        except ParseError as e:
            self.error = str(e)
            return None

        if self.original_date is not None and date_text == self.original_date[0]:
            draft.set_date(self.original_date[1])

        if self.task_id is None:
            self.task_list.add(draft)
        else:
            self.task_list.update(self.task_id, draft)
        save_task_list(self.config, self.task_list)
        return AllTasks()

    def handle_key(self, key: str) -> Screen | None:
        if self.input_mode == InputMode.EDITING:
            if key == ESC_KEY:
                self.input_mode = InputMode.NORMAL
            elif key in BACKSPACE_KEYS:
                self.remove_char()
            elif len(key) == 1 and key.isprintable():
                self.add_char(key)
            return None

        match key:
            case "j":
                self.next_field()
            case "k":
                self.prev_field()
            case "q":
                return Quit()
            case "i":
                self.input_mode = InputMode.EDITING
            case "b":
                return AllTasks()
            case _ if key in ENTER_KEYS:
                return self.submit()
        return None

    def render_lines(self) -> list[str]:
        title = "New task" if self.task_id is None else f"Edit task {self.task_id}"
        lines = [click.style(title, bold=True), click.style(self.KEYBINDS, dim=True), ""]

        for idx, (field_title, value) in enumerate(zip(FIELD_TITLES, self.fields)):
            current = idx == self.current_idx
            editing = current and self.input_mode == InputMode.EDITING
            marker = ">" if current else " "
            lines.append(click.style(f"{marker} {field_title}", fg="yellow" if editing else None, bold=current))
            lines.append(f"    {value}{'_' if editing else ''}")

        if self.error:
            lines.append("")
            lines.append(click.style(f"Error: {self.error}", fg="red"))
        return lines


def _page_for(screen: Screen, task_list: TaskList, config: Config, all_tasks_page: AllTasksPage):
    match screen:
        case AllTasks():
            return all_tasks_page
        case NewTask():
            return TaskFormPage(task_list, config)
        case EditTask(task_id=task_id):
            task = task_list.get(task_id)
            if task is None:
                return all_tasks_page
            return TaskFormPage.for_task(task_list, config, task)
        case Quit():
            return None


def run(config: Config) -> None:
    """Run the interactive loop until the user quits."""
    task_list = load_task_list(config)
    all_tasks_page = AllTasksPage(task_list, config)
    page = all_tasks_page

    try:
        while page is not None:
            click.clear()
            click.echo("\n".join(page.render_lines()))
            screen = page.handle_key(click.getchar())
            if screen is not None:
                page = _page_for(screen, task_list, config, all_tasks_page)
    except (KeyboardInterrupt, EOFError):
        pass
