from __future__ import annotations

import math
from datetime import datetime

from .entities import TodoEntity

DUE_SOON_DAYS = 3
_SECONDS_PER_DAY = 24 * 60 * 60


def days_until(deadline: datetime, now: datetime) -> int:
    """Whole days left until ``deadline``, rounded up; negative once past."""
    return math.ceil((deadline - now).total_seconds() / _SECONDS_PER_DAY)


def is_overdue(todo: TodoEntity, now: datetime) -> bool:
    return todo.deadline < now and not todo.completed


def is_due_soon(todo: TodoEntity, now: datetime) -> bool:
    return 0 <= days_until(todo.deadline, now) <= DUE_SOON_DAYS and not todo.completed


def deadline_label(todo: TodoEntity, now: datetime) -> str:
    days = days_until(todo.deadline, now)
    if days < 0:
        return f"overdue by {abs(days)} day{'s' if abs(days) != 1 else ''}"
    if days == 0:
        return "due today"
    if days == 1:
        return "due tomorrow"
    return f"due in {days} days"
