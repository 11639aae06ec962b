from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from salesboard.domain.entities import TaskEntity
from salesboard.domain.enums import Priority, TaskStatus, coerce_enum
from salesboard.domain.metrics import is_finite_number

from .clock import Clock, utcnow
from .seed import generate_sales_tasks

logger = logging.getLogger(__name__)

RecordSource = Callable[[], Any]


@dataclass(frozen=True)
class LoadResult:
    tasks: list[TaskEntity] = field(default_factory=list)
    error: str | None = None
    dropped: int = 0
    seeded: bool = False


def json_file_source(path: str | Path) -> RecordSource:
    return lambda: read_source(Path(path))


def read_source(path: Path) -> Any:
    """Raw records from a JSON file; a missing file reads as no records."""
    if not path.exists():
        logger.info("Task source %s not found", path)
        return []
    return json.loads(path.read_text(encoding="utf-8"))


def load_tasks(source: RecordSource, seed_count: int = 50, clock: Clock = utcnow) -> LoadResult:
    try:
        data = source()
    except (OSError, ValueError) as exc:
        logger.exception("Failed to load tasks")
        return LoadResult(error=str(exc) or "Failed to load tasks")

    if not isinstance(data, list):
        logger.warning("Task source returned %s, expected a list", type(data).__name__)
        data = []

    tasks, dropped = filter_valid_records(data, clock)
    seeded = not tasks
    if seeded:
        logger.info("No valid tasks in source; generating %s seed tasks", seed_count)
        tasks, _ = filter_valid_records(generate_sales_tasks(seed_count), clock)
    logger.info("Loaded %s tasks (dropped=%s seeded=%s)", len(tasks), dropped, seeded)
    return LoadResult(tasks=tasks, dropped=dropped, seeded=seeded)


def filter_valid_records(records: Iterable[Any], clock: Clock = utcnow) -> tuple[list[TaskEntity], int]:
    tasks: list[TaskEntity] = []
    seen: set[str] = set()
    dropped = 0
    for record in records:
        task = record_to_task(record, clock)
        if task is None or task.id in seen:
            dropped += 1
            continue
        seen.add(task.id)
        tasks.append(task)
    if dropped:
        logger.warning("Dropped %s invalid task records", dropped)
    return tasks, dropped


def is_valid_record(record: Any) -> bool:
    if not isinstance(record, dict):
        return False
    return (
        _non_empty_str(record.get("id"))
        and _non_empty_str(record.get("title"))
        and is_finite_number(record.get("revenue"))
        and is_finite_number(record.get("timeTaken"))
        and record["timeTaken"] > 0
    )


def record_to_task(record: Any, clock: Clock = utcnow) -> Optional[TaskEntity]:
    if not is_valid_record(record):
        return None

    status = coerce_enum(TaskStatus, record.get("status"), TaskStatus.TODO)
    now = clock()
    created_at = _parse_timestamp(record.get("createdAt")) or now
    completed_at = _parse_timestamp(record.get("completedAt"))
    if completed_at is None and status == TaskStatus.DONE:
        completed_at = now

    notes = record.get("notes")
    return TaskEntity(
        id=record["id"],
        title=record["title"],
        revenue=record["revenue"],
        time_taken=record["timeTaken"],
        priority=coerce_enum(Priority, record.get("priority"), Priority.MEDIUM),
        status=status,
        notes=notes if isinstance(notes, str) else None,
        created_at=created_at,
        completed_at=completed_at,
    )


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
