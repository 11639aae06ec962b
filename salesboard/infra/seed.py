from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Any

from salesboard.domain.enums import Priority, TaskStatus

SEED = 42
SEED_EPOCH = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

TITLES = [
    "Follow up with lead",
    "Prepare proposal",
    "Product demo",
    "Contract negotiation",
    "Quarterly business review",
    "Cold outreach batch",
    "Renewal call",
    "Upsell pitch",
    "Pricing review",
    "Onboarding kickoff",
]

ACCOUNTS = ["Acme Corp", "Globex", "Initech", "Umbrella", "Hooli", "Stark Industries", "Wayne Enterprises"]

NOTES = [
    None,
    "Decision maker joined the call",
    "Waiting on legal",
    "Budget approved, needs sign-off",
    "Asked for a discount",
]


def generate_sales_tasks(count: int) -> list[dict[str, Any]]:
    """Deterministic raw task records; the same count always yields the same data."""
    rng = random.Random(SEED)
    priorities = list(Priority)
    statuses = list(TaskStatus)
    records: list[dict[str, Any]] = []
    for index in range(max(count, 0)):
        status = rng.choice(statuses)
        created_at = SEED_EPOCH + timedelta(hours=index * 7)
        completed_at = created_at + timedelta(days=rng.randint(1, 14)) if status == TaskStatus.DONE else None
        records.append(
            {
                "id": f"seed-{index + 1:04d}",
                "title": f"{rng.choice(TITLES)} - {rng.choice(ACCOUNTS)}",
                "revenue": rng.randrange(0, 20_000, 50),
                "timeTaken": rng.randint(1, 40),
                "priority": rng.choice(priorities).value,
                "status": status.value,
                "notes": rng.choice(NOTES),
                "createdAt": created_at.isoformat(),
                "completedAt": completed_at.isoformat() if completed_at else None,
            }
        )
    return records
