from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .enums import Priority


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TodoEntity:
    id: str
    title: str
    deadline: datetime
    priority: Priority
    completed: bool
    created_at: datetime
    updated_at: datetime
