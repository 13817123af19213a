# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Key-value storage backends.
Raw string storage only — serialization and validation belong to the
callers. NO business rules here.
"""

from typing import Optional

from sqlalchemy import Column, MetaData, String, Table, Text, create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from studypilot.core.errors import StorageWriteFailure
from studypilot.core.logging import get_logger

logger = get_logger(__name__)

MEMORY_URL = "memory://"
ALL_KEYS = "*"


class KeyValueStorage:
    """Synchronous key → string store. Subclasses provide the backing."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def verify(self) -> None:
        """Raise if the backing store cannot be reached."""


class MemoryStorage(KeyValueStorage):
    """In-memory storage; lives as long as the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._store: dict[str, str] = dict(initial or {})

    # ── Read ──

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    # ── Write ──

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._store.clear()


class SqlStorage(KeyValueStorage):
    """Durable storage in a two-column SQL table (SQLite by default)."""

    def __init__(self, engine: Engine, table_name: str = "kv_store") -> None:
        self._engine = engine
        self._table = Table(
            table_name,
            MetaData(),
            Column("key", String(255), primary_key=True),
            Column("value", Text, nullable=False),
        )
        self._table.metadata.create_all(engine)

    @classmethod
    def from_url(cls, url: str, table_name: str = "kv_store") -> "SqlStorage":
        return cls(create_engine(url, pool_pre_ping=True), table_name)

    # ── Read ──

    def get(self, key: str) -> Optional[str]:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(self._table.c.value).where(self._table.c.key == key)
                ).first()
        except SQLAlchemyError as exc:
            logger.warning("Storage read failed error=%s", exc, extra={"key": key})
            return None
        return row[0] if row else None

    def verify(self) -> None:
        with self._engine.connect() as conn:
            conn.execute(select(self._table.c.key).limit(1))

    # ── Write ──

    def set(self, key: str, value: str) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(delete(self._table).where(self._table.c.key == key))
                conn.execute(self._table.insert().values(key=key, value=value))
        except SQLAlchemyError as exc:
            logger.warning("Storage write failed error=%s", exc, extra={"key": key})
            raise StorageWriteFailure(key, str(exc)) from exc

    def delete(self, key: str) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(delete(self._table).where(self._table.c.key == key))
        except SQLAlchemyError as exc:
            logger.warning("Storage delete failed error=%s", exc, extra={"key": key})
            raise StorageWriteFailure(key, str(exc)) from exc

    # ── Bulk / internal ──

    def clear(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(delete(self._table))
        except SQLAlchemyError as exc:
            logger.warning("Storage clear failed error=%s", exc, extra={"key": ALL_KEYS})
            raise StorageWriteFailure(ALL_KEYS, str(exc)) from exc


def build_storage(url: str, table_name: str = "kv_store") -> KeyValueStorage:
    """Pick a backend from a storage URL (``memory://`` or a SQLAlchemy URL)."""
    if url == MEMORY_URL:
        return MemoryStorage()
    return SqlStorage.from_url(url, table_name)
