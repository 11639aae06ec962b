from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from salesboard.domain.entities import TaskEntity, TaskInput
from salesboard.domain.enums import Priority, TaskStatus, coerce_enum
from salesboard.infra.clock import Clock, IdFactory, new_task_id, utcnow
from salesboard.infra.repository import TaskRepository

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = {"title", "revenue", "time_taken", "priority", "status", "notes", "completed_at"}
IMMUTABLE_FIELDS = {"id", "created_at"}
FIELD_ALIASES = {
    "timeTaken": "time_taken",
    "createdAt": "created_at",
    "completedAt": "completed_at",
}


class TaskService:
    """CRUD over the in-memory collection with single-slot delete undo.

    Mutators hold one lock: delete/undo and the completed_at rule are
    read-modify-write sequences.
    """

    def __init__(
        self,
        repo: TaskRepository,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_task_id,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._new_id = id_factory
        self._last_deleted: TaskEntity | None = None
        self._lock = threading.RLock()

    @property
    def last_deleted(self) -> TaskEntity | None:
        return self._last_deleted

    def list_tasks(self) -> list[TaskEntity]:
        return self._repo.list_tasks()

    def get_task(self, task_id: str) -> TaskEntity | None:
        return self._repo.get_task(task_id)

    def replace_all(self, tasks: list[TaskEntity]) -> None:
        with self._lock:
            self._repo.reset(tasks)
            self._last_deleted = None

    def add_task(self, data: TaskInput, task_id: str | None = None) -> TaskEntity:
        with self._lock:
            if task_id and self._repo.contains(task_id):
                logger.warning("Task id %s already exists; assigning a new id", task_id)
                task_id = None
            if not task_id:
                task_id = self._unique_id()

            status = coerce_enum(TaskStatus, data.status, TaskStatus.TODO)
            created_at = self._clock()
            task = TaskEntity(
                id=task_id,
                title=data.title,
                revenue=data.revenue,
                time_taken=data.time_taken,
                priority=coerce_enum(Priority, data.priority, Priority.MEDIUM),
                status=status,
                notes=data.notes,
                created_at=created_at,
                completed_at=created_at if status == TaskStatus.DONE else None,
            )
            self._repo.append(task)
            logger.debug("Task added id=%s status=%s", task.id, task.status.value)
            return task

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> TaskEntity | None:
        with self._lock:
            task = self._repo.get_task(task_id)
            if task is None:
                return None

            changes = self._normalize_patch(patch)
            if task.completed_at is not None:
                changes.pop("completed_at", None)

            updated = replace(task, **changes)
            if (
                task.status != TaskStatus.DONE
                and updated.status == TaskStatus.DONE
                and updated.completed_at is None
            ):
                updated = replace(updated, completed_at=self._clock())

            self._repo.replace(updated)
            logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
            return updated

    def delete_task(self, task_id: str) -> TaskEntity | None:
        with self._lock:
            removed = self._repo.remove(task_id)
            self._last_deleted = removed
            logger.debug("Task delete id=%s removed=%s", task_id, removed is not None)
            return removed

    def undo_delete(self) -> TaskEntity | None:
        with self._lock:
            task = self._last_deleted
            if task is None:
                return None
            if self._repo.contains(task.id):
                logger.warning("Cannot restore task %s: id is in use again", task.id)
                return None
            self._repo.append(task)
            self._last_deleted = None
            logger.debug("Task restored id=%s", task.id)
            return task

    def clear_last_deleted(self) -> None:
        with self._lock:
            self._last_deleted = None

    def _unique_id(self) -> str:
        task_id = self._new_id()
        while self._repo.contains(task_id):
            task_id = self._new_id()
        return task_id

    def _normalize_patch(self, patch: Mapping[str, Any]) -> dict[str, Any]:
        normalized: dict[str, Any] = {}
        for key, value in patch.items():
            field = FIELD_ALIASES.get(key, key)
            if field in IMMUTABLE_FIELDS:
                continue
            if field not in PATCHABLE_FIELDS:
                logger.warning("Ignoring unknown task field %r in patch", key)
                continue
            if field == "priority":
                value = coerce_enum(Priority, value, None)
            elif field == "status":
                value = coerce_enum(TaskStatus, value, None)
            if value is None and field in {"priority", "status"}:
                logger.warning("Ignoring invalid %s value %r", field, patch[key])
                continue
            normalized[field] = value
        return normalized

