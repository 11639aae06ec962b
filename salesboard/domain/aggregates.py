from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .entities import DerivedTask, TaskEntity
from .enums import Priority, TaskStatus
from .metrics import is_finite_number

ROI_LOW_LABEL = "<200"
ROI_MID_LABEL = "200–500"
ROI_HIGH_LABEL = ">500"
ROI_NA_LABEL = "N/A"

ROI_LOW_BOUND = 200
ROI_HIGH_BOUND = 500


def sort_tasks(tasks: Iterable[DerivedTask]) -> list[DerivedTask]:
    """Order for presentation: best ROI first, undefined ROI last, then by priority.

    ``sorted`` is stable, so tasks that tie keep their collection order.
    """
    return sorted(tasks, key=_sort_key)


def _sort_key(task: DerivedTask) -> tuple[bool, float, int]:
    has_roi = is_finite_number(task.roi)
    return (not has_roi, -task.roi if has_roi else 0.0, -task.priority_weight)


def bucket_by_priority(tasks: Sequence[TaskEntity | DerivedTask]) -> list[tuple[Priority, float]]:
    return [
        (priority, _revenue_sum(task for task in tasks if task.priority == priority))
        for priority in Priority
    ]


def bucket_by_status(tasks: Sequence[TaskEntity | DerivedTask]) -> list[tuple[TaskStatus, float]]:
    return [
        (status, _revenue_sum(task for task in tasks if task.status == status))
        for status in TaskStatus
    ]


def bucket_roi(tasks: Sequence[DerivedTask]) -> list[tuple[str, int]]:
    counts = {
        ROI_LOW_LABEL: 0,
        ROI_MID_LABEL: 0,
        ROI_HIGH_LABEL: 0,
        ROI_NA_LABEL: 0,
    }
    for task in tasks:
        counts[roi_bucket_label(task.roi)] += 1
    return list(counts.items())


def roi_bucket_label(roi: float | None) -> str:
    if not is_finite_number(roi):
        return ROI_NA_LABEL
    if roi < ROI_LOW_BOUND:
        return ROI_LOW_LABEL
    if roi <= ROI_HIGH_BOUND:
        return ROI_MID_LABEL
    return ROI_HIGH_LABEL


def _revenue_sum(tasks: Iterable[TaskEntity | DerivedTask]) -> float:
    return math.fsum(task.revenue for task in tasks if is_finite_number(task.revenue))
