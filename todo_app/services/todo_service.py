from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import datetime

from todo_app.domain.codec import as_utc, parse_timestamp, todos_from_records, todos_to_records
from todo_app.domain.entities import TodoEntity, utcnow
from todo_app.domain.enums import Priority
from todo_app.domain.errors import ImportFormatError
from todo_app.domain.factory import create_todo
from todo_app.infra.repository import TodoRepository

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = frozenset({"title", "deadline", "priority", "completed"})
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class TodoService:
    def __init__(self, repo: TodoRepository, clock: Callable[[], datetime] = utcnow) -> None:
        self._repo = repo
        self._clock = clock

    def list_todos(self) -> list[TodoEntity]:
        return self._repo.load()

    def get_todo(self, todo_id: str) -> TodoEntity | None:
        return next((todo for todo in self._repo.load() if todo.id == todo_id), None)

    def add_todo(
        self,
        title: str,
        deadline: datetime,
        priority: Priority | str = Priority.MEDIUM,
    ) -> list[TodoEntity]:
        todos = self._repo.load()
        todo = create_todo(title, deadline, priority, now=self._clock())
        updated = [todo, *todos]
        self._repo.save(updated)
        logger.info("Added todo %s", todo.id)
        return updated

    def update_todo(self, todo_id: str, data: dict) -> list[TodoEntity]:
        normalized = self._normalize_data(data)
        return self._modify(todo_id, lambda todo, now: replace(todo, **normalized, updated_at=now))

    def delete_todo(self, todo_id: str) -> list[TodoEntity]:
        todos = self._repo.load()
        updated = [todo for todo in todos if todo.id != todo_id]
        if len(updated) == len(todos):
            return todos
        self._repo.save(updated)
        logger.info("Deleted todo %s", todo_id)
        return updated

    def toggle_todo(self, todo_id: str) -> list[TodoEntity]:
        return self._modify(
            todo_id,
            lambda todo, now: replace(todo, completed=not todo.completed, updated_at=now),
        )

    def replace_all(self, todos: Sequence[TodoEntity]) -> list[TodoEntity]:
        updated = list(todos)
        self._repo.save(updated)
        logger.info("Replaced collection with %d todos", len(updated))
        return updated

    def _modify(self, todo_id: str, change: Callable[[TodoEntity, datetime], TodoEntity]) -> list[TodoEntity]:
        todos = self._repo.load()
        if not any(todo.id == todo_id for todo in todos):
            return todos
        now = self._clock()
        updated = [change(todo, now) if todo.id == todo_id else todo for todo in todos]
        self._repo.save(updated)
        logger.info("Updated todo %s", todo_id)
        return updated

    @staticmethod
    def _normalize_data(data: dict) -> dict:
        immutable = IMMUTABLE_FIELDS.intersection(data)
        if immutable:
            raise ValueError(f"cannot update immutable fields: {', '.join(sorted(immutable))}")
        unknown = set(data) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"unknown todo fields: {', '.join(sorted(unknown))}")

        normalized = dict(data)
        if "title" in normalized:
            normalized["title"] = normalized["title"].strip()
        if "priority" in normalized:
            normalized["priority"] = Priority(normalized["priority"])
        if isinstance(normalized.get("deadline"), str):
            normalized["deadline"] = parse_timestamp(normalized["deadline"])
        elif isinstance(normalized.get("deadline"), datetime):
            normalized["deadline"] = as_utc(normalized["deadline"])
        if "completed" in normalized:
            normalized["completed"] = bool(normalized["completed"])
        return normalized


def export_json(todos: Sequence[TodoEntity]) -> str:
    return json.dumps(todos_to_records(list(todos)), indent=2, ensure_ascii=False)


def parse_import(text: str) -> list[TodoEntity]:
    """Parse an exported backup; raise ImportFormatError on anything else."""
    try:
        records = json.loads(text)
    except ValueError as exc:
        raise ImportFormatError(f"file is not valid JSON: {exc}") from exc
    if not isinstance(records, list):
        raise ImportFormatError("parsed value is not an array")
    try:
        todos = todos_from_records(records)
    except (KeyError, TypeError, ValueError) as exc:
        raise ImportFormatError(f"malformed todo record: {exc}") from exc
    seen: set[str] = set()
    for todo in todos:
        if todo.id in seen:
            raise ImportFormatError(f"duplicate todo id {todo.id!r}")
        seen.add(todo.id)
    return todos
