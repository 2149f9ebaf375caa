from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from todo_app.config import SETTINGS
from todo_app.domain.entities import TodoEntity, utcnow
from todo_app.domain.enums import Priority, SortKey
from todo_app.domain.errors import ImportFormatError
from todo_app.domain.filters import (
    TodoFilters,
    TodoListView,
    TodoStats,
    build_list_view,
    collect_stats,
)
from todo_app.domain.validation import validate_todo_form

from .todo_service import TodoService, export_json, parse_import

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "todos-backup-"


@dataclass(frozen=True)
class Notice:
    title: str
    message: str
    level: str = "info"


def backup_filename(day: date) -> str:
    return f"{BACKUP_PREFIX}{day.isoformat()}.json"


class TodoBoard:
    def __init__(
        self,
        service: TodoService,
        clock: Callable[[], datetime] = utcnow,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.service = service
        self._clock = clock
        self._today = today
        self.todos: list[TodoEntity] = []
        self.sort_by = SortKey.CREATED
        self.filters = TodoFilters()
        self.editing_id: str | None = None

    def refresh(self) -> list[TodoEntity]:
        self.todos = self.service.list_todos()
        return self.todos

    def find(self, todo_id: str) -> TodoEntity | None:
        return next((todo for todo in self.todos if todo.id == todo_id), None)

    def submit(self, title: str, deadline: date | str | None, priority: Priority | str = Priority.MEDIUM) -> Notice:
        draft = validate_todo_form(title, deadline, today=self._today())
        priority = Priority(priority)

        if self.editing_id is None:
            self.todos = self.service.add_todo(draft.title, draft.deadline, priority)
            return Notice("Task added", f'"{draft.title}" was added to the list')

        editing_id, self.editing_id = self.editing_id, None
        self.todos = self.service.update_todo(
            editing_id,
            {"title": draft.title, "deadline": draft.deadline, "priority": priority},
        )
        if not any(todo.id == editing_id for todo in self.todos):
            return Notice("Task not found", f"No task with id {editing_id}", level="warning")
        return Notice("Task updated", f'"{draft.title}" was updated')

    def start_edit(self, todo_id: str) -> TodoEntity | None:
        todo = self.find(todo_id)
        self.editing_id = todo.id if todo else None
        return todo

    def cancel_edit(self) -> None:
        self.editing_id = None

    def delete(self, todo_id: str) -> Notice:
        todo = self.find(todo_id)
        self.todos = self.service.delete_todo(todo_id)
        if self.editing_id == todo_id:
            self.editing_id = None
        if todo is None:
            return Notice("Task deleted", "Task deleted")
        return Notice("Task deleted", f'"{todo.title}" was deleted')

    def toggle(self, todo_id: str) -> Notice:
        todo = self.find(todo_id)
        self.todos = self.service.toggle_todo(todo_id)
        if todo is None:
            return Notice("Task not found", f"No task with id {todo_id}", level="warning")
        if todo.completed:
            return Notice("Task reopened", f'"{todo.title}" is pending again')
        return Notice("Task completed", f'"{todo.title}" is marked as done')

    def list_view(self) -> TodoListView:
        return build_list_view(self.todos, self.filters, self.sort_by)

    def stats(self, now: datetime | None = None) -> TodoStats:
        return collect_stats(self.todos, now or self._clock())

    def export_to(self, directory: Path | str | None = None) -> Path:
        target_dir = Path(directory or SETTINGS.export_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / backup_filename(self._clock().date())
        path.write_text(export_json(self.todos), encoding="utf-8")
        logger.info("Exported %d todos to %s", len(self.todos), path)
        return path

    def import_from(self, path: Path | str) -> Notice:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ImportFormatError(f"file is not UTF-8 text: {exc}") from exc
        imported = parse_import(text)
        self.todos = self.service.replace_all(imported)
        self.editing_id = None
        logger.info("Imported %d todos from %s", len(imported), path)
        return Notice("Import finished", f"Imported {len(imported)} tasks")
