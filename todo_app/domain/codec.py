from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .entities import TodoEntity
from .enums import Priority


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return as_utc(value).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    return as_utc(datetime.fromisoformat(value))


def todo_to_dict(todo: TodoEntity) -> dict[str, Any]:
    return {
        "id": todo.id,
        "title": todo.title,
        "deadline": format_timestamp(todo.deadline),
        "priority": todo.priority.value,
        "completed": todo.completed,
        "createdAt": format_timestamp(todo.created_at),
        "updatedAt": format_timestamp(todo.updated_at),
    }


def todo_from_dict(data: dict[str, Any]) -> TodoEntity:
    """Build a TodoEntity from a stored record.

    Raises KeyError, TypeError or ValueError when the record is malformed.
    """
    if not isinstance(data, dict):
        raise TypeError(f"todo record must be an object, got {type(data).__name__}")
    todo_id = data["id"]
    title = data["title"]
    completed = data.get("completed", False)
    if not isinstance(todo_id, str) or not isinstance(title, str):
        raise TypeError("todo id and title must be strings")
    if not isinstance(completed, bool):
        raise TypeError("todo completed flag must be a boolean")
    return TodoEntity(
        id=todo_id,
        title=title,
        deadline=parse_timestamp(data["deadline"]),
        priority=Priority(data.get("priority", Priority.MEDIUM.value)),
        completed=completed,
        created_at=parse_timestamp(data["createdAt"]),
        updated_at=parse_timestamp(data["updatedAt"]),
    )


def todos_to_records(todos: list[TodoEntity]) -> list[dict[str, Any]]:
    return [todo_to_dict(todo) for todo in todos]


def todos_from_records(records: list[Any]) -> list[TodoEntity]:
    return [todo_from_dict(record) for record in records]
