from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from todo_app.domain.entities import TodoEntity
from todo_app.domain.enums import Priority
from todo_app.infra.db import init_db
from todo_app.infra.storage import KeyValueStore

T0 = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class FakeRepo:
    def __init__(self, todos: list[TodoEntity] | None = None) -> None:
        self.todos: list[TodoEntity] = list(todos or [])
        self.saves = 0

    def load(self) -> list[TodoEntity]:
        return list(self.todos)

    def save(self, todos: list[TodoEntity]) -> None:
        self.saves += 1
        self.todos = list(todos)


def make_todo(
    todo_id: str,
    title: str = "Task",
    deadline: datetime = T0 + timedelta(days=1),
    priority: Priority = Priority.MEDIUM,
    completed: bool = False,
    created_at: datetime = T0,
) -> TodoEntity:
    return TodoEntity(
        id=todo_id,
        title=title,
        deadline=deadline,
        priority=priority,
        completed=completed,
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> KeyValueStore:
    return KeyValueStore(session_factory)
