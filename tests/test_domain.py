from __future__ import annotations

from datetime import timedelta

from todo_app.domain.codec import parse_timestamp, todo_from_dict, todo_to_dict
from todo_app.domain.enums import CompletionFilter, Priority, SortKey
from todo_app.domain.factory import create_todo, generate_id
from todo_app.domain.filters import TodoFilters, apply_filters, build_list_view, collect_stats
from todo_app.domain.sorting import sort_todos
from todo_app.domain.status import days_until, deadline_label, is_due_soon, is_overdue

from conftest import T0, make_todo


def test_create_todo_defaults() -> None:
    todo = create_todo("  Buy milk ", T0 + timedelta(days=2), now=T0)

    assert todo.title == "Buy milk"
    assert todo.priority == Priority.MEDIUM
    assert todo.completed is False
    assert todo.created_at == todo.updated_at == T0


def test_generate_id_is_unique() -> None:
    ids = {generate_id() for _ in range(500)}
    assert len(ids) == 500


def test_sort_by_priority_orders_high_medium_low() -> None:
    todos = [
        make_todo("l", priority=Priority.LOW),
        make_todo("h", priority=Priority.HIGH),
        make_todo("m", priority=Priority.MEDIUM),
        make_todo("h2", priority=Priority.HIGH),
    ]

    ordered = sort_todos(todos, SortKey.PRIORITY)

    assert [t.id for t in ordered] == ["h", "h2", "m", "l"]
    assert [t.id for t in todos] == ["l", "h", "m", "h2"]


def test_sort_by_deadline_is_non_decreasing() -> None:
    todos = [make_todo(str(i), deadline=T0 + timedelta(days=d)) for i, d in enumerate([5, -1, 3, 3, 0])]

    ordered = sort_todos(todos, "deadline")

    deadlines = [t.deadline for t in ordered]
    assert deadlines == sorted(deadlines)
    assert [t.id for t in ordered][2:4] == ["2", "3"]


def test_sort_by_created_puts_newest_first_and_unknown_key_falls_back() -> None:
    todos = [make_todo(str(i), created_at=T0 + timedelta(minutes=i)) for i in range(3)]

    assert [t.id for t in sort_todos(todos, "created")] == ["2", "1", "0"]
    assert [t.id for t in sort_todos(todos, "bogus")] == ["2", "1", "0"]


def test_completed_and_pending_filters_partition_collection() -> None:
    todos = [make_todo(str(i), completed=i % 3 == 0) for i in range(7)]

    done = apply_filters(todos, TodoFilters(completion=CompletionFilter.COMPLETED))
    pending = apply_filters(todos, TodoFilters(completion=CompletionFilter.PENDING))

    assert {t.id for t in done} | {t.id for t in pending} == {t.id for t in todos}
    assert not {t.id for t in done} & {t.id for t in pending}


def test_filters_compose_and_report_counts() -> None:
    todos = [
        make_todo("a", priority=Priority.HIGH),
        make_todo("b", priority=Priority.HIGH, completed=True),
        make_todo("c", priority=Priority.LOW),
    ]

    view = build_list_view(todos, TodoFilters.from_values("pending", "high"), SortKey.CREATED)

    assert [t.id for t in view.items] == ["a"]
    assert (view.shown, view.total) == (1, 3)
    assert TodoFilters.from_values("all", "all") == TodoFilters()


def test_deadline_scenario_overdue_flags() -> None:
    a = make_todo("A", priority=Priority.HIGH, deadline=T0 + timedelta(days=1))
    b = make_todo("B", priority=Priority.LOW, deadline=T0 - timedelta(days=1))

    assert [t.id for t in sort_todos([a, b], SortKey.DEADLINE)] == ["B", "A"]
    assert is_overdue(b, T0)
    assert not is_overdue(a, T0)


def test_due_soon_window_and_labels() -> None:
    assert days_until(T0 + timedelta(hours=5), T0) == 1
    assert days_until(T0 - timedelta(hours=5), T0) == 0
    assert is_due_soon(make_todo("x", deadline=T0 + timedelta(days=3)), T0)
    assert not is_due_soon(make_todo("y", deadline=T0 + timedelta(days=3, hours=1)), T0)
    assert not is_due_soon(make_todo("z", deadline=T0 + timedelta(days=1), completed=True), T0)
    assert not is_overdue(make_todo("w", deadline=T0 - timedelta(days=1), completed=True), T0)

    assert deadline_label(make_todo("a", deadline=T0 - timedelta(days=2)), T0) == "overdue by 2 days"
    assert deadline_label(make_todo("b", deadline=T0), T0) == "due today"
    assert deadline_label(make_todo("c", deadline=T0 + timedelta(hours=3)), T0) == "due tomorrow"
    assert deadline_label(make_todo("d", deadline=T0 + timedelta(days=4)), T0) == "due in 4 days"


def test_collect_stats() -> None:
    todos = [
        make_todo("a", completed=True),
        make_todo("b", deadline=T0 - timedelta(days=1)),
        make_todo("c"),
    ]

    stats = collect_stats(todos, T0)

    assert (stats.total, stats.completed, stats.pending, stats.overdue) == (3, 1, 2, 1)


def test_codec_uses_camel_case_iso_strings() -> None:
    todo = make_todo("a", deadline=T0.replace(hour=23, minute=59, second=59, microsecond=999000))

    record = todo_to_dict(todo)

    assert record["deadline"] == "2026-10-19T23:59:59.999000Z"
    assert record["createdAt"] == "2026-10-19T12:00:00Z"
    assert record["priority"] == "medium"
    assert todo_from_dict(record) == todo


def test_parse_timestamp_accepts_browser_format() -> None:
    parsed = parse_timestamp("2026-10-19T23:59:59.999Z")

    assert parsed == T0.replace(hour=23, minute=59, second=59, microsecond=999000)
    assert parse_timestamp("2026-10-19T12:00:00") == T0
