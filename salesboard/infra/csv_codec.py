from __future__ import annotations

import csv
import io
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from salesboard.domain.entities import TaskEntity

from .clock import Clock, utcnow
from .loader import filter_valid_records

logger = logging.getLogger(__name__)

CSV_HEADERS = (
    "id",
    "title",
    "revenue",
    "timeTaken",
    "priority",
    "status",
    "notes",
)


class CsvFormatError(ValueError):
    pass


@dataclass(frozen=True)
class CsvImport:
    tasks: list[TaskEntity] = field(default_factory=list)
    dropped: int = 0


def to_csv(tasks: Iterable[TaskEntity]) -> str:
    """Serialize tasks with the header row first and rows joined by newlines.

    Only fields holding a quote, comma or newline are quoted; inner quotes
    are doubled. There is no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for task in tasks:
        writer.writerow(
            [
                _text(task.id),
                _text(task.title),
                format_number(task.revenue),
                format_number(task.time_taken),
                _text(task.priority),
                _text(task.status),
                _text(task.notes),
            ]
        )
    return buffer.getvalue()[: -len(writer.dialect.lineterminator)]


def from_csv(text: str, clock: Clock = utcnow) -> CsvImport:
    # Spreadsheet exports may start with a byte-order mark.
    reader = csv.DictReader(io.StringIO(text.removeprefix("\ufeff"), newline=""))
    missing = [name for name in CSV_HEADERS if name not in (reader.fieldnames or [])]
    if missing:
        raise CsvFormatError(f"CSV is missing columns: {', '.join(missing)}")

    records = [_row_to_record(row) for row in reader]
    tasks, dropped = filter_valid_records(records, clock)
    logger.info("Imported %s tasks from CSV (dropped=%s)", len(tasks), dropped)
    return CsvImport(tasks=tasks, dropped=dropped)


def write_csv(path: str | Path, tasks: Iterable[TaskEntity]) -> Path:
    target = Path(path)
    target.write_text(to_csv(tasks), encoding="utf-8", newline="")
    logger.info("CSV export written to %s", target)
    return target


def read_csv(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8-sig")


def format_number(value: Any) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return _text(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def _row_to_record(row: dict[str, Any]) -> dict[str, Any]:
    notes = row.get("notes")
    return {
        "id": row.get("id"),
        "title": row.get("title"),
        "revenue": _parse_number(row.get("revenue")),
        "timeTaken": _parse_number(row.get("timeTaken")),
        "priority": row.get("priority"),
        "status": row.get("status"),
        "notes": notes or None,
    }


def _parse_number(value: Any) -> float | None:
    if not isinstance(value, str):
        return None
    try:
        return float(value)
    except ValueError:
        return None
