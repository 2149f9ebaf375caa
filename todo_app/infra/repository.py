from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError

from todo_app.config import SETTINGS
from todo_app.domain.codec import todos_from_records, todos_to_records
from todo_app.domain.entities import TodoEntity

from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class TodoRepository:
    def __init__(self, store: KeyValueStore | None = None, key: str | None = None) -> None:
        self._store = store or KeyValueStore()
        self._key = key or SETTINGS.storage_key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[TodoEntity]:
        try:
            raw = self._store.get_item(self._key)
        except SQLAlchemyError:
            logger.exception("Failed to read todos from storage key %s", self._key)
            return []
        if raw is None:
            return []

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError(f"expected a JSON array, got {type(records).__name__}")
            return todos_from_records(records)
        except (KeyError, TypeError, ValueError):
            logger.exception("Stored todos under %s are corrupted; starting empty", self._key)
            return []

    def save(self, todos: Sequence[TodoEntity]) -> None:
        try:
            payload = json.dumps(todos_to_records(list(todos)), ensure_ascii=False)
            self._store.set_item(self._key, payload)
        except (SQLAlchemyError, TypeError, ValueError):
            logger.exception("Failed to save %d todos to storage key %s", len(todos), self._key)
