from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from salesboard.domain.entities import TaskEntity
from salesboard.domain.enums import Priority, TaskStatus
from salesboard.infra.repository import TaskRepository
from salesboard.services.task_service import TaskService

START = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns START, then advances one minute per call."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + timedelta(minutes=1)
        self.calls += 1
        return value


class SequentialIds:
    def __init__(self, prefix: str = "task") -> None:
        self.prefix = prefix
        self.counter = 0

    def __call__(self) -> str:
        self.counter += 1
        return f"{self.prefix}-{self.counter}"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def service(clock: FakeClock) -> TaskService:
    return TaskService(TaskRepository(), clock=clock, id_factory=SequentialIds())


def make_task(
    task_id: str = "t1",
    revenue: float = 1000,
    time_taken: float = 10,
    priority: Priority = Priority.HIGH,
    status: TaskStatus = TaskStatus.TODO,
    title: str | None = None,
    notes: str | None = None,
) -> TaskEntity:
    return TaskEntity(
        id=task_id,
        title=title or f"Task {task_id}",
        revenue=revenue,
        time_taken=time_taken,
        priority=priority,
        status=status,
        notes=notes,
        created_at=START,
    )
