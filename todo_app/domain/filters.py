from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .entities import TodoEntity
from .enums import CompletionFilter, Priority, SortKey
from .sorting import sort_todos
from .status import is_overdue

ALL = "all"


@dataclass(frozen=True)
class TodoFilters:
    completion: CompletionFilter = CompletionFilter.ALL
    priority: Optional[Priority] = None

    @classmethod
    def from_values(cls, completion: str = ALL, priority: str = ALL) -> TodoFilters:
        return cls(
            completion=CompletionFilter(completion),
            priority=None if priority == ALL else Priority(priority),
        )

    def matches(self, todo: TodoEntity) -> bool:
        if self.completion == CompletionFilter.COMPLETED and not todo.completed:
            return False
        if self.completion == CompletionFilter.PENDING and todo.completed:
            return False
        if self.priority is not None and todo.priority != self.priority:
            return False
        return True


@dataclass(frozen=True)
class TodoListView:
    items: list[TodoEntity]
    shown: int
    total: int


@dataclass(frozen=True)
class TodoStats:
    total: int
    completed: int
    pending: int
    overdue: int


def apply_filters(todos: Sequence[TodoEntity], filters: TodoFilters) -> list[TodoEntity]:
    return [todo for todo in todos if filters.matches(todo)]


def build_list_view(
    todos: Sequence[TodoEntity],
    filters: TodoFilters,
    sort_by: SortKey | str = SortKey.CREATED,
) -> TodoListView:
    items = sort_todos(apply_filters(todos, filters), sort_by)
    return TodoListView(items=items, shown=len(items), total=len(todos))


def collect_stats(todos: Sequence[TodoEntity], now: datetime) -> TodoStats:
    total = len(todos)
    completed = sum(1 for todo in todos if todo.completed)
    return TodoStats(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=sum(1 for todo in todos if is_overdue(todo, now)),
    )
