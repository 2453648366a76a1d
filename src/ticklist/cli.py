"""ticklist CLI - Personal task tracker."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.json_store import TaskStoreError, task_to_json
from .config import load_config
from .core.recurrence import ParseError, parse_recurrence
from .core.tasks import Task, parse_date
from .core.views import filter_by_date, filter_incomplete, group_by_day, sort_by_date
from .display import date_to_display_str, format_task_details, format_task_line
from .workflows import build_draft, load_task_list, save_task_list


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(config):
    try:
        return load_task_list(config)
    except TaskStoreError as e:
        _fail(str(e))


@click.group(invoke_without_command=True)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="ticklist")
@click.pass_context
def main(ctx, debug: bool):
    """ticklist - Personal task tracker.

    Run without a command to open the interactive interface.
    """
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    if ctx.invoked_subcommand is None:
        from .tui import run

        config = load_config()
        try:
            run(config)
        except TaskStoreError as e:
            _fail(str(e))


def _show_tasks(tasks: list[Task], config, as_json: bool) -> None:
    """Shared task listing logic."""
    if as_json:
        click.echo(json.dumps([task_to_json(t) for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("No tasks.")
        return

    for i, group in enumerate(group_by_day(tasks)):
        if i:
            click.echo()
        click.echo(f"### {date_to_display_str(group[0].date, config)}")
        for task in group:
            click.echo(f"  {format_task_line(task, config)}")


@main.command()
@click.option("--format", "output_format", type=click.Choice(["plain", "json"]), default=None,
              help="Output format (defaults to DEFAULT_FORMAT from config)")
@click.option("--show-completed", "-s", is_flag=True, help="Include completed tasks")
@click.option("--filter", "day_filter", type=click.Choice(["all", "today"]), default="all",
              help="Restrict to tasks dated today")
@click.option("--sort", "sort_order", type=click.Choice(["insertion", "date"]), default="insertion",
              help="Order tasks by insertion or by date")
def ls(output_format: str | None, show_completed: bool, day_filter: str, sort_order: str):
    """List tasks."""
    config = load_config()
    task_list = _load(config)

    tasks = iter(task_list)
    if not show_completed:
        tasks = filter_incomplete(tasks)
    if day_filter == "today":
        tasks = filter_by_date(tasks, date.today())

    selected = sort_by_date(tasks) if sort_order == "date" else list(tasks)
    _show_tasks(selected, config, (output_format or config.default_format) == "json")


@main.command()
@click.argument("name")
@click.option("--date", "-d", "date_text", default="", help="Date (YYYY-MM-DD), defaults to today")
@click.option("--repeats", "-r", default="", help="Never, Daily, Weekly, Monthly, Yearly or Mon,Wed,...")
@click.option("--description", default="", help="Free text or a link")
def add(name: str, date_text: str, repeats: str, description: str):
    """Add a task."""
    config = load_config()
    try:
        draft = build_draft(name, date_text, repeats, description)
    except ParseError as e:
        _fail(str(e))

    task_list = _load(config)
    task_id = task_list.add(draft)
    save_task_list(config, task_list)
    click.echo(f"Added task {task_id}")


@main.command()
@click.argument("task_id", type=int)
def toggle(task_id: int):
    """Toggle a task between complete and incomplete."""
    config = load_config()
    task_list = _load(config)

    task = task_list.get(task_id)
    if task is None:
        _fail(f"No task with id {task_id}")

    successor = task_list.toggle_complete(task_id)
    save_task_list(config, task_list)

    state = "complete" if task.complete else "incomplete"
    click.echo(f"Task {task_id} marked {state}")
    if successor is not None:
        when = date_to_display_str(successor.date, config)
        click.echo(f"Next occurrence: task {successor.get_id()} ({when})")


@main.command()
@click.argument("task_id", type=int)
def rm(task_id: int):
    """Delete a task."""
    config = load_config()
    task_list = _load(config)

    if task_list.get(task_id) is None:
        _fail(f"No task with id {task_id}")

    task_list.delete(task_id)
    save_task_list(config, task_list)
    click.echo(f"Deleted task {task_id}")


@main.command()
@click.argument("task_id", type=int)
@click.option("--name", default=None, help="New name")
@click.option("--date", "-d", "date_text", default=None, help="New date (YYYY-MM-DD)")
@click.option("--repeats", "-r", default=None, help="New repeat rule")
@click.option("--description", default=None, help="New description (empty string clears it)")
def edit(task_id: int, name: str | None, date_text: str | None, repeats: str | None,
         description: str | None):
    """Edit fields of a task."""
    config = load_config()

    # Parse everything before touching the task
    try:
        new_date = parse_date(date_text) if date_text is not None else None
        new_recurrence = parse_recurrence(repeats) if repeats is not None else None
    except ParseError as e:
        _fail(str(e))

    task_list = _load(config)
    task = task_list.get(task_id)
    if task is None:
        _fail(f"No task with id {task_id}")

    if name is not None:
        task.set_name(name)
    if new_date is not None:
        task.set_date(new_date)
    if new_recurrence is not None:
        task.set_recurrence(new_recurrence)
    if description is not None:
        task.set_description(description)

    save_task_list(config, task_list)
    click.echo(f"Updated task {task_id}")


@main.command()
@click.argument("task_id", type=int)
def show(task_id: int):
    """Show a task's details."""
    config = load_config()
    task_list = _load(config)

    task = task_list.get(task_id)
    if task is None:
        _fail(f"No task with id {task_id}")

    click.echo(format_task_line(task, config))
    for line in format_task_details(task, config):
        click.echo(f"  {line}")


if __name__ == "__main__":
    main()
