from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from salesboard.domain.entities import TaskEntity


class TaskRepository:
    """In-memory task collection; list order is insertion order."""

    def __init__(self, tasks: Iterable[TaskEntity] = ()) -> None:
        self._tasks: list[TaskEntity] = list(tasks)

    def list_tasks(self) -> list[TaskEntity]:
        return list(self._tasks)

    def count(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: str) -> Optional[TaskEntity]:
        return next((task for task in self._tasks if task.id == task_id), None)

    def contains(self, task_id: str) -> bool:
        return self.get_task(task_id) is not None

    def append(self, task: TaskEntity) -> TaskEntity:
        self._tasks.append(task)
        return task

    def replace(self, task: TaskEntity) -> Optional[TaskEntity]:
        for index, current in enumerate(self._tasks):
            if current.id == task.id:
                self._tasks[index] = task
                return task
        return None

    def remove(self, task_id: str) -> Optional[TaskEntity]:
        for index, current in enumerate(self._tasks):
            if current.id == task_id:
                return self._tasks.pop(index)
        return None

    def reset(self, tasks: Iterable[TaskEntity]) -> None:
        self._tasks = list(tasks)
