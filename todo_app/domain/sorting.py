from __future__ import annotations

from collections.abc import Iterable

from .entities import TodoEntity
from .enums import SortKey


def sort_todos(todos: Iterable[TodoEntity], sort_by: SortKey | str = SortKey.CREATED) -> list[TodoEntity]:
    """Return a new list ordered by ``sort_by``; the input is left untouched.

    Ties keep their input order. Unknown keys sort by creation time.
    """
    try:
        key = SortKey(sort_by)
    except ValueError:
        key = SortKey.CREATED

    if key == SortKey.DEADLINE:
        return sorted(todos, key=lambda todo: todo.deadline)
    if key == SortKey.PRIORITY:
        return sorted(todos, key=lambda todo: todo.priority.rank)
    return sorted(todos, key=lambda todo: todo.created_at, reverse=True)
