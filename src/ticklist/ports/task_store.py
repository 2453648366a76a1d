"""Task storage interface."""

from typing import Protocol

from ticklist.core.tasks import Task


class TaskStore(Protocol):
    """Interface for persisting the task collection."""

    def load(self) -> tuple[list[Task], int]:
        """Load tasks in order, plus the highest id ever assigned."""
        ...

    def save(self, tasks: list[Task], last_id: int) -> None:
        """Persist tasks in order, plus the highest id ever assigned."""
        ...
