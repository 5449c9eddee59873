"""
ledgerbench - Key-Value Store

Byte-keyed stores used by the storage throughput benchmark.

Two backends:
- InMemoryStore: plain dict, used as a baseline and in tests
- SqlKeyValueStore: single `kv` table through a SQLAlchemy engine
  (SQLite by default)
"""

from typing import Protocol

import structlog
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger(__name__)

MEMORY_URL = "memory://"


class StorageError(Exception):
    """Base exception for key-value store errors."""

    pass


class KeyValueStore(Protocol):
    """Minimal byte-keyed store interface."""

    def put(self, key: bytes, value: bytes) -> None: ...

    def get(self, key: bytes) -> bytes | None: ...

    def commit(self) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> "KeyValueStore": ...

    def __exit__(self, *exc_info: object) -> None: ...


class InMemoryStore:
    """Dictionary-backed store."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def __len__(self) -> int:
        return len(self._data)

    def __enter__(self) -> "InMemoryStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def put(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(bytes(key))

    def commit(self) -> None:
        pass

    def close(self) -> None:
        pass


class SqlKeyValueStore:
    """
    Key-value store on a single SQL table.

    Writes go through one open connection and become durable on commit().
    Reads on the same connection see uncommitted writes.
    """

    def __init__(self, url: str, engine: Engine | None = None) -> None:
        """
        Open the store and create the table if needed.

        Args:
            url: SQLAlchemy database URL
            engine: Pre-built engine (url is then only used for logging)

        Raises:
            StorageError: If the database cannot be opened
        """
        self._url = url
        self._engine = engine
        try:
            if self._engine is None:
                self._engine = create_engine(url)
            self._conn = self._engine.connect()
            self._ensure_table()
        except SQLAlchemyError as e:
            if self._engine is not None:
                self._engine.dispose()
            raise StorageError(f"Cannot open store at {url}: {e}") from e

        logger.info("Key-value store opened", url=url)

    def _ensure_table(self) -> None:
        self._conn.execute(text("""
            CREATE TABLE IF NOT EXISTS kv (
                key BLOB PRIMARY KEY,
                value BLOB NOT NULL
            )
        """))
        self._conn.commit()

    def __enter__(self) -> "SqlKeyValueStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def put(self, key: bytes, value: bytes) -> None:
        """
        Insert or replace a value.

        Raises:
            StorageError: On database failure
        """
        try:
            self._conn.execute(
                text("""
                    INSERT INTO kv (key, value) VALUES (:key, :value)
                    ON CONFLICT (key) DO UPDATE SET value = excluded.value
                """),
                {"key": key, "value": value},
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Write failed: {e}") from e

    def get(self, key: bytes) -> bytes | None:
        """
        Fetch a value.

        Returns:
            Stored value, or None if the key is absent

        Raises:
            StorageError: On database failure
        """
        try:
            row = self._conn.execute(
                text("SELECT value FROM kv WHERE key = :key"),
                {"key": key},
            ).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Read failed: {e}") from e
        return bytes(row[0]) if row is not None else None

    def commit(self) -> None:
        try:
            self._conn.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Commit failed: {e}") from e

    def close(self) -> None:
        """Commit pending writes and release the connection."""
        try:
            self._conn.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Commit failed: {e}") from e
        finally:
            self._conn.close()
            self._engine.dispose()
            logger.info("Key-value store closed", url=self._url)


def open_store(url: str) -> KeyValueStore:
    """
    Open a store from a URL.

    Args:
        url: "memory://" for an in-memory store, otherwise a SQLAlchemy URL

    Returns:
        Opened store
    """
    if url == MEMORY_URL:
        return InMemoryStore()
    return SqlKeyValueStore(url)
