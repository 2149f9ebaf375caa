from __future__ import annotations

import secrets
import time
from datetime import datetime

from .entities import TodoEntity, utcnow
from .enums import Priority

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Millisecond timestamp plus a random suffix, both base-36."""
    stamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(10))
    return stamp + suffix


def create_todo(
    title: str,
    deadline: datetime,
    priority: Priority | str = Priority.MEDIUM,
    now: datetime | None = None,
) -> TodoEntity:
    created = now or utcnow()
    return TodoEntity(
        id=generate_id(),
        title=title.strip(),
        deadline=deadline,
        priority=Priority(priority),
        completed=False,
        created_at=created,
        updated_at=created,
    )
