from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .entities import DerivedTask, Metrics, TaskEntity
from .enums import PRIORITY_WEIGHTS, TaskStatus

DEFAULT_GRADE = "Needs Improvement"

# (minimum average ROI, grade), inclusive lower bounds.
GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (500.0, "Excellent"),
    (200.0, "Good"),
)

NEUTRAL_METRICS = Metrics(
    total_revenue=0,
    total_time_taken=0,
    time_efficiency_pct=0,
    revenue_per_hour=0,
    average_roi=0,
    performance_grade=DEFAULT_GRADE,
)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: object) -> bool:
    return _is_number(value) and math.isfinite(value)


def compute_roi(revenue: object, time_taken: object) -> float | None:
    """Revenue earned per hour spent, or None when it cannot be computed."""
    if not is_finite_number(revenue) or not is_finite_number(time_taken):
        return None
    if time_taken <= 0:
        return None
    roi = revenue / time_taken
    return roi if math.isfinite(roi) else None


def derive_task(task: TaskEntity) -> DerivedTask:
    return DerivedTask(
        task=task,
        roi=compute_roi(task.revenue, task.time_taken),
        priority_weight=PRIORITY_WEIGHTS.get(task.priority, 0),
    )


def derive_tasks(tasks: Iterable[TaskEntity]) -> list[DerivedTask]:
    return [derive_task(task) for task in tasks]


def performance_grade(
    average_roi: float,
    thresholds: Sequence[tuple[float, str]] = GRADE_THRESHOLDS,
) -> str:
    if not is_finite_number(average_roi):
        return DEFAULT_GRADE
    for bound, grade in sorted(thresholds, key=lambda item: item[0], reverse=True):
        if average_roi >= bound:
            return grade
    return DEFAULT_GRADE


def compute_metrics(
    tasks: Sequence[TaskEntity],
    thresholds: Sequence[tuple[float, str]] = GRADE_THRESHOLDS,
) -> Metrics:
    if not tasks:
        return NEUTRAL_METRICS

    total_revenue = _safe_sum(task.revenue for task in tasks)
    total_time = _safe_sum(task.time_taken for task in tasks)
    done_time = _safe_sum(
        task.time_taken for task in tasks if task.status == TaskStatus.DONE
    )

    rois = [roi for roi in (compute_roi(t.revenue, t.time_taken) for t in tasks) if roi is not None]
    average_roi = _safe_div(math.fsum(rois), len(rois))

    return Metrics(
        total_revenue=total_revenue,
        total_time_taken=total_time,
        time_efficiency_pct=_safe_div(done_time, total_time) * 100,
        revenue_per_hour=_safe_div(total_revenue, total_time),
        average_roi=average_roi,
        performance_grade=performance_grade(average_roi, thresholds),
    )


def _safe_sum(values: Iterable[object]) -> float:
    # Non-finite values are skipped.
    return math.fsum(value for value in values if is_finite_number(value))


def _safe_div(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0
    result = numerator / denominator
    return result if math.isfinite(result) else 0
