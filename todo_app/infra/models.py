from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageEntryModel(Base):
    __tablename__ = "storage_entries"

    key = Column(String(200), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
