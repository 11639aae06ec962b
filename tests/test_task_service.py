from __future__ import annotations

from datetime import datetime, timezone

from salesboard.domain.entities import TaskInput
from salesboard.domain.enums import Priority, TaskStatus
from salesboard.infra.repository import TaskRepository
from salesboard.services.task_service import TaskService

from conftest import START, FakeClock, SequentialIds


def _input(**overrides) -> TaskInput:
    data = {
        "title": "Renewal call",
        "revenue": 1000,
        "time_taken": 10,
        "priority": Priority.HIGH,
        "status": TaskStatus.TODO,
        "notes": None,
    }
    data.update(overrides)
    return TaskInput(**data)


def test_add_assigns_id_and_timestamps(service: TaskService) -> None:
    task = service.add_task(_input())

    assert task.id == "task-1"
    assert task.created_at == START
    assert task.completed_at is None
    assert service.list_tasks() == [task]


def test_add_done_task_sets_completed_at_to_creation_time(service: TaskService) -> None:
    task = service.add_task(_input(status=TaskStatus.DONE))

    assert task.completed_at == task.created_at


def test_add_keeps_caller_id_and_appends(service: TaskService) -> None:
    first = service.add_task(_input(title="A"))
    second = service.add_task(_input(title="B"), "client-7")

    assert second.id == "client-7"
    assert [t.id for t in service.list_tasks()] == [first.id, "client-7"]


def test_add_with_taken_id_gets_fresh_id(service: TaskService) -> None:
    service.add_task(_input(), "dup")
    again = service.add_task(_input(), "dup")

    assert again.id != "dup"
    assert len({t.id for t in service.list_tasks()}) == 2


def test_update_merges_patch_fields(service: TaskService) -> None:
    task = service.add_task(_input())

    updated = service.update_task(task.id, {"title": "Upsell", "revenue": 2500, "priority": "Low"})

    assert updated is not None
    assert updated.title == "Upsell"
    assert updated.revenue == 2500
    assert updated.priority is Priority.LOW
    assert updated.time_taken == task.time_taken
    assert service.get_task(task.id) == updated


def test_update_missing_id_is_noop(service: TaskService) -> None:
    service.add_task(_input())
    before = service.list_tasks()

    assert service.update_task("nope", {"title": "x"}) is None
    assert service.list_tasks() == before


def test_update_ignores_id_created_at_and_unknown_fields(service: TaskService) -> None:
    task = service.add_task(_input())

    updated = service.update_task(
        task.id,
        {"id": "other", "created_at": datetime(2000, 1, 1, tzinfo=timezone.utc), "color": "red"},
    )

    assert updated.id == task.id
    assert updated.created_at == task.created_at


def test_update_into_done_sets_completed_at(service: TaskService, clock: FakeClock) -> None:
    task = service.add_task(_input())
    expected = clock.now

    updated = service.update_task(task.id, {"status": TaskStatus.DONE})

    assert updated.completed_at == expected


def test_update_into_done_keeps_supplied_completed_at(service: TaskService) -> None:
    task = service.add_task(_input())
    supplied = datetime(2025, 12, 31, tzinfo=timezone.utc)

    updated = service.update_task(task.id, {"status": "Done", "completed_at": supplied})

    assert updated.completed_at == supplied


def test_completed_at_survives_leaving_and_reentering_done(service: TaskService) -> None:
    task = service.add_task(_input())
    done = service.update_task(task.id, {"status": TaskStatus.DONE})
    first_completion = done.completed_at

    service.update_task(task.id, {"status": TaskStatus.IN_PROGRESS})
    again = service.update_task(task.id, {"status": TaskStatus.DONE})

    assert again.completed_at == first_completion


def test_completed_at_cannot_be_cleared_or_reassigned(service: TaskService) -> None:
    task = service.add_task(_input(status=TaskStatus.DONE))

    cleared = service.update_task(task.id, {"completed_at": None})
    moved = service.update_task(
        task.id, {"completedAt": datetime(2030, 1, 1, tzinfo=timezone.utc)}
    )

    assert cleared.completed_at == task.completed_at
    assert moved.completed_at == task.completed_at


def test_invalid_status_in_patch_is_ignored(service: TaskService) -> None:
    task = service.add_task(_input())

    updated = service.update_task(task.id, {"status": "Blocked"})

    assert updated.status is TaskStatus.TODO


def test_delete_then_undo_appends_original_task(service: TaskService) -> None:
    first = service.add_task(_input(title="A"))
    service.add_task(_input(title="B"))
    service.add_task(_input(title="C"))

    removed = service.delete_task(first.id)
    assert removed == first
    assert service.last_deleted == first

    restored = service.undo_delete()

    assert restored == first
    assert service.list_tasks()[-1] == first
    assert [t.title for t in service.list_tasks()] == ["B", "C", "A"]
    assert service.last_deleted is None


def test_delete_missing_id_overwrites_slot_with_none(service: TaskService) -> None:
    task = service.add_task(_input())
    service.delete_task(task.id)

    assert service.delete_task("missing") is None
    assert service.last_deleted is None
    assert service.undo_delete() is None
    assert service.list_tasks() == []


def test_second_delete_overwrites_slot(service: TaskService) -> None:
    first = service.add_task(_input(title="A"))
    second = service.add_task(_input(title="B"))

    service.delete_task(first.id)
    service.delete_task(second.id)
    service.undo_delete()

    assert service.list_tasks() == [second]
    assert service.undo_delete() is None


def test_undo_with_empty_slot_is_noop(service: TaskService) -> None:
    task = service.add_task(_input())

    assert service.undo_delete() is None
    assert service.list_tasks() == [task]


def test_clear_last_deleted(service: TaskService) -> None:
    task = service.add_task(_input())
    service.delete_task(task.id)

    service.clear_last_deleted()

    assert service.last_deleted is None
    assert service.undo_delete() is None
    assert service.list_tasks() == []


def test_undo_refused_when_id_reused(service: TaskService) -> None:
    task = service.add_task(_input(), "client-1")
    service.delete_task(task.id)
    service.add_task(_input(title="Replacement"), "client-1")

    assert service.undo_delete() is None
    assert service.last_deleted == task
    assert [t.title for t in service.list_tasks()] == ["Replacement"]


def test_generated_ids_skip_existing() -> None:
    service = TaskService(TaskRepository(), clock=FakeClock(), id_factory=SequentialIds())
    service.add_task(_input(), "task-1")

    task = service.add_task(_input())

    assert task.id == "task-2"
