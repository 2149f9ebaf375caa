from __future__ import annotations

from typing import Optional

from .db import SessionLocal
from .models import StorageEntryModel


class KeyValueStore:
    """String values under string keys, one transaction per write."""

    def __init__(self, session_factory=None) -> None:
        self._session_factory = session_factory or SessionLocal

    def get_item(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            entry = session.get(StorageEntryModel, key)
            return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            entry = session.get(StorageEntryModel, key)
            if entry is None:
                session.add(StorageEntryModel(key=key, value=value))
            else:
                entry.value = value
            session.commit()

    def remove_item(self, key: str) -> None:
        with self._session_factory() as session:
            entry = session.get(StorageEntryModel, key)
            if not entry:
                return
            session.delete(entry)
            session.commit()
