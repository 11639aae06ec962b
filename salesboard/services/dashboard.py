from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from salesboard.domain.aggregates import bucket_by_priority, bucket_by_status, bucket_roi, sort_tasks
from salesboard.domain.entities import DerivedTask, Metrics, TaskEntity, TaskInput
from salesboard.domain.enums import Priority, TaskStatus
from salesboard.domain.metrics import GRADE_THRESHOLDS, compute_metrics, derive_tasks
from salesboard.infra.clock import Clock, utcnow
from salesboard.infra.csv_codec import CsvImport, from_csv, to_csv
from salesboard.infra.loader import LoadResult, RecordSource, load_tasks

from .task_service import TaskService

logger = logging.getLogger(__name__)


class Dashboard:
    """State and intents exposed to the rendering layer.

    Derived views are recomputed from the current collection on every read.
    """

    def __init__(
        self,
        service: TaskService,
        source: RecordSource | None = None,
        seed_count: int = 50,
        grade_thresholds: Sequence[tuple[float, str]] = GRADE_THRESHOLDS,
        clock: Clock = utcnow,
    ) -> None:
        self.service = service
        self._source = source
        self._seed_count = seed_count
        self._grade_thresholds = tuple(grade_thresholds)
        self._clock = clock
        self.loading = source is not None
        self.error: str | None = None
        self.dropped = 0
        self.seeded = False

    def load(self) -> LoadResult:
        if self._source is None:
            self.loading = False
            return LoadResult(tasks=self.service.list_tasks())

        self.loading = True
        self.error = None
        try:
            result = load_tasks(self._source, self._seed_count, self._clock)
            self.service.replace_all(result.tasks)
            self.error = result.error
            self.dropped = result.dropped
            self.seeded = result.seeded
        finally:
            self.loading = False
        return result

    @property
    def tasks(self) -> list[TaskEntity]:
        return self.service.list_tasks()

    @property
    def last_deleted(self) -> TaskEntity | None:
        return self.service.last_deleted

    @property
    def derived_sorted(self) -> list[DerivedTask]:
        return sort_tasks(derive_tasks(self.tasks))

    @property
    def metrics(self) -> Metrics:
        return compute_metrics(self.tasks, self._grade_thresholds)

    @property
    def revenue_by_priority(self) -> list[tuple[Priority, float]]:
        return bucket_by_priority(self.tasks)

    @property
    def revenue_by_status(self) -> list[tuple[TaskStatus, float]]:
        return bucket_by_status(self.tasks)

    @property
    def roi_buckets(self) -> list[tuple[str, int]]:
        return bucket_roi(derive_tasks(self.tasks))

    def add_task(self, data: TaskInput, task_id: str | None = None) -> TaskEntity:
        return self.service.add_task(data, task_id)

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> TaskEntity | None:
        return self.service.update_task(task_id, patch)

    def delete_task(self, task_id: str) -> TaskEntity | None:
        return self.service.delete_task(task_id)

    def undo_delete(self) -> TaskEntity | None:
        return self.service.undo_delete()

    def clear_last_delete(self) -> None:
        self.service.clear_last_deleted()

    def export_csv(self) -> str:
        return to_csv(self.tasks)

    def import_csv(self, text: str) -> CsvImport:
        """Append tasks parsed from CSV; ids already in the collection get fresh ones."""
        result = from_csv(text, self._clock)
        for task in result.tasks:
            self.service.add_task(
                TaskInput(
                    title=task.title,
                    revenue=task.revenue,
                    time_taken=task.time_taken,
                    priority=task.priority,
                    status=task.status,
                    notes=task.notes,
                ),
                task.id,
            )
        logger.info("CSV import added %s tasks", len(result.tasks))
        return result
