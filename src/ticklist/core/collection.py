"""Task collection manager - owns task membership and id assignment."""

import logging
from collections.abc import Iterable, Iterator

from .tasks import Task

logger = logging.getLogger(__name__)


class AlreadyAddedError(RuntimeError):
    """Raised when a task that already has an id is added again."""

    pass


class TaskList:
    """
    Ordered collection of tasks.

    The only place ids are assigned. Ids grow from the highest id ever
    assigned, so a deleted task's id is never handed out again.
    """

    def __init__(self, tasks: Iterable[Task] = (), last_id: int = 0):
        tasks = list(tasks)
        self._tasks: list[Task] = []
        self.last_id = max([last_id, *(t.id for t in tasks if t.id is not None)])

        # Records without an id, or repeating an earlier one, get a fresh id in place
        seen: set[int] = set()
        for task in tasks:
            if task.id is None or task.id in seen:
                if task.id is not None:
                    logger.warning(f"Duplicate task id {task.id} in loaded tasks, reassigning")
                task.id = None
                self.add(task)
                continue
            seen.add(task.id)
            self._tasks.append(task)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the tasks in collection order."""
        return list(self._tasks)

    def add(self, task: Task) -> int:
        """Admit a task, assigning the next unused id."""
        if task.id is not None:
            raise AlreadyAddedError(f"Task {task.id} was already added")
        self.last_id += 1
        task.id = self.last_id
        self._tasks.append(task)
        logger.debug(f"Added task {task.id}: {task.name!r}")
        return task.id

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def index_of(self, task_id: int) -> int | None:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        return None

    def delete(self, task_id: int) -> None:
        """Remove a task. Unknown ids are ignored."""
        idx = self.index_of(task_id)
        if idx is None:
            logger.debug(f"Delete ignored, no task {task_id}")
            return
        del self._tasks[idx]
        logger.debug(f"Deleted task {task_id}")

    def toggle_complete(self, task_id: int) -> Task | None:
        """
        Toggle a task's completion state.

        A successor spawned by completing a recurring task is admitted here.
        Returns that successor, or None.
        """
        task = self.get(task_id)
        if task is None:
            logger.debug(f"Toggle ignored, no task {task_id}")
            return None

        successor = task.toggle()
        if successor is not None:
            self.add(successor)
            logger.debug(f"Task {task_id} spawned task {successor.id} on {successor.date.isoformat()}")
        return successor

    def update(self, task_id: int, draft: Task) -> Task | None:
        """Copy editable fields from a validated draft onto an existing task."""
        task = self.get(task_id)
        if task is None:
            return None
        task.set_name(draft.name)
        task.set_date(draft.date)
        task.set_recurrence(draft.recurrence)
        task.set_description(draft.description)
        return task
