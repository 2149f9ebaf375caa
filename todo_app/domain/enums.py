from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class SortKey(StrEnum):
    CREATED = "created"
    DEADLINE = "deadline"
    PRIORITY = "priority"


class CompletionFilter(StrEnum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
