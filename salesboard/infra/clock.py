from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    return uuid.uuid4().hex
