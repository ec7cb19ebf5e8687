"""
Task data model.

Records are immutable; every change produces a new Task or TaskStore.
The repository protocol defines how a store is loaded and written back,
so the app can run against the JSON file or an in-memory fake.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Protocol


@dataclass(frozen=True)
class Task:
    """Immutable snapshot of a single task."""

    id: int
    name: str
    is_done: bool
    created_at: datetime

    def mark(self, is_done: bool) -> Task:
        return replace(self, is_done=is_done)

    def rename(self, name: str) -> Task:
        return replace(self, name=name)


@dataclass(frozen=True)
class TaskStore:
    """Pending and done tasks plus the id counter.

    A task lives in exactly one of the two sequences, the one matching
    its is_done flag. latest_task_id only ever grows.
    """

    pending: tuple[Task, ...] = ()
    done: tuple[Task, ...] = ()
    latest_task_id: int = 0

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> TaskStore:
        """Classify tasks by is_done, keeping their order within each list."""
        pending: list[Task] = []
        done: list[Task] = []
        latest = 0
        for task in tasks:
            if task.is_done:
                done.append(task)
            else:
                pending.append(task)
            latest = max(latest, task.id)
        store = cls(tuple(pending), tuple(done), latest)
        store.check()
        return store

    def all_tasks(self) -> tuple[Task, ...]:
        return self.pending + self.done

    def check(self) -> None:
        """Raise ValueError if membership or id uniqueness is violated."""
        for task in self.pending:
            if task.is_done:
                raise ValueError(f"Task {task.id} is done but listed as pending")
        for task in self.done:
            if not task.is_done:
                raise ValueError(f"Task {task.id} is pending but listed as done")

        seen: set[int] = set()
        for task in self.all_tasks():
            if task.id in seen:
                raise ValueError(f"Duplicate task id: {task.id}")
            seen.add(task.id)
            if task.id > self.latest_task_id:
                raise ValueError(
                    f"Task id {task.id} exceeds latest id {self.latest_task_id}"
                )

    def new_task(self, name: str, now: datetime | None = None) -> tuple[TaskStore, Task]:
        """Append a new pending task with the next id."""
        task_id = self.latest_task_id + 1
        task = Task(
            id=task_id,
            name=name,
            is_done=False,
            created_at=now or datetime.now().astimezone(),
        )
        store = replace(self, pending=self.pending + (task,), latest_task_id=task_id)
        return store, task


class TaskRepository(Protocol):
    """Protocol for reading and writing the task store."""

    def load(self) -> TaskStore:
        """Load the persisted store (empty if nothing was saved yet)."""
        ...

    def save(self, store: TaskStore) -> None:
        """Overwrite the persisted store."""
        ...
