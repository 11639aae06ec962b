from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_dir: str = "logs"
    tasks_source: str = "data/tasks.json"
    seed_count: int = 50
    export_filename: str = "tasks.csv"
    grade_excellent_roi: float = 500.0
    grade_good_roi: float = 200.0

    @property
    def grade_thresholds(self) -> tuple[tuple[float, str], ...]:
        return (
            (self.grade_excellent_roi, "Excellent"),
            (self.grade_good_roi, "Good"),
        )

    @property
    def tasks_source_path(self) -> Path:
        path = Path(self.tasks_source)
        return path if path.is_absolute() else PROJECT_ROOT / path


def _env_number(name: str, default: str, cast: type[int] | type[float]) -> int | float:
    raw = os.getenv(name, default).strip() or default
    try:
        return cast(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    load_env()
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        tasks_source=os.getenv("TASKS_SOURCE", "").strip() or "data/tasks.json",
        seed_count=int(_env_number("SEED_COUNT", "50", int)),
        export_filename=os.getenv("EXPORT_FILENAME", "").strip() or "tasks.csv",
        grade_excellent_roi=float(_env_number("GRADE_EXCELLENT_ROI", "500", float)),
        grade_good_roi=float(_env_number("GRADE_GOOD_ROI", "200", float)),
    )


SETTINGS = load_settings()
