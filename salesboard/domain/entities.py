from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import Priority, TaskStatus


@dataclass(frozen=True)
class TaskInput:
    title: str
    revenue: float
    time_taken: float
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    notes: str | None = None


@dataclass(frozen=True)
class TaskEntity:
    id: str
    title: str
    revenue: float
    time_taken: float
    priority: Priority
    status: TaskStatus
    notes: str | None
    created_at: datetime
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class DerivedTask:
    task: TaskEntity
    roi: float | None
    priority_weight: int

    # Read-through accessors so views can treat a derived task like a task.
    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def revenue(self) -> float:
        return self.task.revenue

    @property
    def time_taken(self) -> float:
        return self.task.time_taken

    @property
    def priority(self) -> Priority:
        return self.task.priority

    @property
    def status(self) -> TaskStatus:
        return self.task.status

    @property
    def notes(self) -> str | None:
        return self.task.notes

    @property
    def created_at(self) -> datetime:
        return self.task.created_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self.task.completed_at


@dataclass(frozen=True)
class Metrics:
    total_revenue: float
    total_time_taken: float
    time_efficiency_pct: float
    revenue_per_hour: float
    average_roi: float
    performance_grade: str
