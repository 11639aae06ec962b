from __future__ import annotations

import pytest

from salesboard.domain.enums import Priority, TaskStatus
from salesboard.domain.metrics import derive_tasks
from salesboard.infra.csv_codec import CSV_HEADERS, CsvFormatError, from_csv, read_csv, to_csv, write_csv

from conftest import FakeClock, make_task

HEADER = "id,title,revenue,timeTaken,priority,status,notes"


def test_empty_export_is_header_only() -> None:
    assert to_csv([]) == HEADER
    assert ",".join(CSV_HEADERS) == HEADER


def test_rows_follow_header_without_trailing_newline() -> None:
    tasks = [
        make_task("a", revenue=1000.0, time_taken=10, priority=Priority.HIGH, status=TaskStatus.DONE),
        make_task("b", revenue=66.5, time_taken=2.5, priority=Priority.LOW, title="Demo", notes="ok"),
    ]

    assert to_csv(tasks) == "\n".join(
        [
            HEADER,
            "a,Task a,1000,10,High,Done,",
            "b,Demo,66.5,2.5,Low,Todo,ok",
        ]
    )


def test_status_with_space_is_not_quoted() -> None:
    csv_text = to_csv([make_task("a", status=TaskStatus.IN_PROGRESS)])

    assert csv_text.splitlines()[1] == "a,Task a,1000,10,High,In Progress,"


def test_quotes_commas_and_newlines_are_escaped() -> None:
    task = make_task("q", title='He said "hi", bye', notes="line one\nline two")

    csv_text = to_csv([task])

    assert csv_text == HEADER + '\nq,"He said ""hi"", bye",1000,10,High,Todo,"line one\nline two"'


def test_comma_only_field_is_quoted() -> None:
    csv_text = to_csv([make_task("c", title="Acme, Inc")])

    assert '"Acme, Inc"' in csv_text


def test_import_reverses_export(clock: FakeClock) -> None:
    original = [
        make_task("q", title='He said "hi", bye', notes="line one\nline two", revenue=1250.5),
        make_task("p", priority=Priority.MEDIUM, status=TaskStatus.IN_PROGRESS, time_taken=0.5),
    ]

    imported = from_csv(to_csv(original), clock)

    assert imported.dropped == 0
    assert [(t.id, t.title, t.revenue, t.time_taken, t.priority, t.status, t.notes) for t in imported.tasks] == [
        (t.id, t.title, t.revenue, t.time_taken, t.priority, t.status, t.notes) for t in original
    ]


def test_import_drops_invalid_rows(clock: FakeClock) -> None:
    text = "\n".join(
        [
            HEADER,
            "a,Valid,100,2,High,Todo,",
            "b,No time,100,0,High,Todo,",
            "c,Bad revenue,lots,2,High,Todo,",
            ",Missing id,100,2,High,Todo,",
        ]
    )

    imported = from_csv(text, clock)

    assert [t.id for t in imported.tasks] == ["a"]
    assert imported.dropped == 3


def test_import_rejects_missing_columns() -> None:
    with pytest.raises(CsvFormatError):
        from_csv("id,title\n1,x")


def test_import_of_empty_text_is_a_format_error() -> None:
    with pytest.raises(CsvFormatError):
        from_csv("")


def test_write_csv_writes_exact_text(tmp_path) -> None:
    task = make_task("n", notes="a\nb")

    path = write_csv(tmp_path / "tasks.csv", [task])

    assert path.read_bytes().decode("utf-8") == to_csv([task])


def test_derived_tasks_export_like_tasks() -> None:
    tasks = [make_task("d", notes="n"), make_task("e", status=TaskStatus.DONE)]

    assert to_csv(derive_tasks(tasks)) == to_csv(tasks)


def test_import_accepts_byte_order_mark(tmp_path, clock: FakeClock) -> None:
    path = tmp_path / "excel.csv"
    path.write_bytes(("\ufeff" + HEADER + "\na,Valid,100,2,High,Todo,").encode("utf-8"))

    text = read_csv(path)

    assert not text.startswith("\ufeff")
    assert [t.id for t in from_csv(text, clock).tasks] == ["a"]
    assert [t.id for t in from_csv("\ufeff" + HEADER + "\nb,Valid,100,2,High,Todo,", clock).tasks] == ["b"]
