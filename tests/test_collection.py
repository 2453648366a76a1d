"""Tests for the task collection manager."""

from datetime import datetime

import pytest

from ticklist.core.collection import AlreadyAddedError, TaskList
from ticklist.core.recurrence import DAILY, MONTHLY, NEVER
from ticklist.core.tasks import Task


@pytest.fixture
def task_list():
    return TaskList()


def make_task(name, recurrence=NEVER, when=datetime(2024, 1, 10)):
    return Task(name=name, date=when, recurrence=recurrence)


class TestAdd:
    def test_assigns_ids_from_one(self, task_list):
        assert task_list.add(make_task("a")) == 1
        assert task_list.add(make_task("b")) == 2
        assert [t.id for t in task_list] == [1, 2]

    def test_ids_not_reused_after_delete(self, task_list):
        a = task_list.add(make_task("A"))
        b = task_list.add(make_task("B"))
        task_list.delete(a)

        assert (a, b) == (1, 2)
        assert task_list.add(make_task("C")) == 3

    def test_ids_not_reused_after_deleting_newest(self, task_list):
        task_list.add(make_task("A"))
        newest = task_list.add(make_task("B"))
        task_list.delete(newest)
        assert task_list.add(make_task("C")) == 3

    def test_seeded_from_last_id(self):
        task_list = TaskList([Task(name="kept", id=2)], last_id=9)
        assert task_list.add(make_task("new")) == 10

    def test_seeded_from_existing_ids_when_larger(self):
        task_list = TaskList([Task(name="a", id=5), Task(name="b", id=3)], last_id=0)
        assert task_list.add(make_task("new")) == 6

    def test_loaded_tasks_without_id_are_admitted_in_place(self):
        task_list = TaskList([Task(name="legacy"), Task(name="has id", id=4)])
        assert [(t.name, t.id) for t in task_list] == [("legacy", 5), ("has id", 4)]

    def test_loaded_duplicate_ids_are_reassigned(self):
        task_list = TaskList([Task(name="a", id=1), Task(name="b", id=1)], last_id=1)

        ids = [t.id for t in task_list]
        assert ids == [1, 2]
        assert len(set(ids)) == len(task_list)
        assert task_list.get(2).name == "b"
        assert task_list.add(make_task("c")) == 3

    def test_adding_same_task_twice_fails(self, task_list):
        task = make_task("once")
        task_list.add(task)

        with pytest.raises(AlreadyAddedError):
            task_list.add(task)
        assert len(task_list) == 1
        assert task.id == 1

    def test_adding_task_with_id_fails(self, task_list):
        with pytest.raises(AlreadyAddedError):
            task_list.add(Task(name="loaded", id=8))
        assert len(task_list) == 0


class TestGetDelete:
    def test_get(self, task_list):
        task_id = task_list.add(make_task("a"))
        assert task_list.get(task_id).name == "a"

    def test_get_unknown(self, task_list):
        assert task_list.get(42) is None

    def test_delete_unknown_is_noop(self, task_list):
        task_list.add(make_task("a"))
        task_list.delete(42)
        assert len(task_list) == 1

    def test_index_of(self, task_list):
        task_list.add(make_task("a"))
        b = task_list.add(make_task("b"))
        assert task_list.index_of(b) == 1
        assert task_list.index_of(99) is None

    def test_tasks_is_snapshot(self, task_list):
        task_list.add(make_task("a"))
        snapshot = task_list.tasks
        snapshot.clear()
        assert len(task_list) == 1


class TestToggleComplete:
    def test_recurring_admits_successor(self, task_list):
        task_id = task_list.add(make_task("run", DAILY))

        successor = task_list.toggle_complete(task_id)

        assert successor.id == 2
        assert task_list.get(task_id).complete is True
        assert task_list[1] is successor
        assert successor.date == datetime(2024, 1, 11)

    def test_non_recurring_admits_nothing(self, task_list):
        task_id = task_list.add(make_task("once"))
        assert task_list.toggle_complete(task_id) is None
        assert len(task_list) == 1

    def test_toggle_twice_only_one_successor(self, task_list):
        task_id = task_list.add(make_task("run", DAILY))
        task_list.toggle_complete(task_id)
        task_list.toggle_complete(task_id)

        assert task_list.get(task_id).complete is False
        assert len(task_list) == 2

    def test_unknown_id_is_noop(self, task_list):
        assert task_list.toggle_complete(5) is None
        assert len(task_list) == 0

    def test_jan_31_monthly_end_to_end(self, task_list):
        task_id = task_list.add(make_task("rent", MONTHLY, datetime(2024, 1, 31)))

        assert task_list.toggle_complete(task_id) is None
        assert task_list.get(task_id).complete is True
        assert len(task_list) == 1


class TestUpdate:
    def test_copies_editable_fields(self, task_list):
        task_id = task_list.add(make_task("old"))
        task_list.get(task_id).complete = True
        draft = Task(name="new", date=datetime(2024, 5, 1), recurrence=DAILY, description="x")

        task_list.update(task_id, draft)

        task = task_list.get(task_id)
        assert (task.name, task.date, task.recurrence, task.description) == (
            "new",
            datetime(2024, 5, 1),
            DAILY,
            "x",
        )
        assert task.id == task_id
        assert task.complete is True

    def test_unknown(self, task_list):
        assert task_list.update(3, Task(name="x")) is None
