"""
Unit tests for the key-value stores.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from ledgerbench.storage.kv_store import (
    MEMORY_URL,
    InMemoryStore,
    SqlKeyValueStore,
    StorageError,
    open_store,
)


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    def test_put_get(self) -> None:
        """Test round trip of one value."""
        store = InMemoryStore()
        store.put(b"key", b"value")

        assert store.get(b"key") == b"value"
        assert len(store) == 1

    def test_missing_key(self) -> None:
        """Test that a missing key returns None."""
        assert InMemoryStore().get(b"nope") is None

    def test_overwrite(self) -> None:
        """Test that put replaces an existing value."""
        store = InMemoryStore()
        store.put(b"k", b"1")
        store.put(b"k", b"2")

        assert store.get(b"k") == b"2"
        assert len(store) == 1


class TestSqlKeyValueStore:
    """Tests for SqlKeyValueStore on SQLite."""

    def test_put_get(self, sqlite_url: str) -> None:
        """Test round trip through SQLite."""
        with SqlKeyValueStore(sqlite_url) as store:
            store.put(b"\x00\x01", b"\xff" * 4)

            assert store.get(b"\x00\x01") == b"\xff" * 4

    def test_missing_key(self, sqlite_url: str) -> None:
        """Test that a missing key returns None."""
        with SqlKeyValueStore(sqlite_url) as store:
            assert store.get(b"absent") is None

    def test_overwrite(self, sqlite_url: str) -> None:
        """Test upsert on duplicate key."""
        with SqlKeyValueStore(sqlite_url) as store:
            store.put(b"k", b"1")
            store.put(b"k", b"2")

            assert store.get(b"k") == b"2"

    def test_persists_after_close(self, sqlite_url: str) -> None:
        """Test committed values survive reopening."""
        with SqlKeyValueStore(sqlite_url) as store:
            store.put(b"k", b"v")
            store.commit()

        with SqlKeyValueStore(sqlite_url) as store:
            assert store.get(b"k") == b"v"

    def test_close_commits(self, sqlite_url: str) -> None:
        """Test close() commits pending writes."""
        store = SqlKeyValueStore(sqlite_url)
        store.put(b"k", b"v")
        store.close()

        with SqlKeyValueStore(sqlite_url) as reopened:
            assert reopened.get(b"k") == b"v"

    def test_unopenable_database_raises(self, tmp_path) -> None:
        """Test that an invalid location raises StorageError."""
        url = f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}"

        with pytest.raises(StorageError, match="Cannot open store"):
            SqlKeyValueStore(url)

    def test_write_failure_wrapped(self, sqlite_url: str) -> None:
        """Test that database errors surface as StorageError."""
        store = SqlKeyValueStore(sqlite_url)
        real_conn = store._conn
        store._conn = MagicMock()
        store._conn.execute.side_effect = OperationalError("INSERT", {}, Exception("boom"))

        with pytest.raises(StorageError, match="Write failed"):
            store.put(b"k", b"v")

        with pytest.raises(StorageError, match="Read failed"):
            store.get(b"k")

        store._conn = real_conn
        store.close()

    def test_unknown_dialect_raises(self) -> None:
        """Test that a URL with no installed driver raises StorageError."""
        with pytest.raises(StorageError, match="Cannot open store"):
            SqlKeyValueStore("nosuchdb://host/db")

    def test_malformed_url_raises(self) -> None:
        """Test that an unparseable URL raises StorageError."""
        with pytest.raises(StorageError, match="Cannot open store"):
            SqlKeyValueStore("not a url")

    def test_close_commit_failure_wrapped(self, sqlite_url: str) -> None:
        """Test that a failed commit on close raises StorageError and still releases."""
        store = SqlKeyValueStore(sqlite_url)
        real_conn = store._conn
        store._conn = MagicMock()
        store._conn.commit.side_effect = OperationalError("COMMIT", {}, Exception("boom"))

        with pytest.raises(StorageError, match="Commit failed"):
            store.close()

        store._conn.close.assert_called_once()
        real_conn.close()


class TestOpenStore:
    """Tests for open_store."""

    def test_memory(self) -> None:
        """Test memory:// URL."""
        assert isinstance(open_store(MEMORY_URL), InMemoryStore)

    def test_sqlite(self, sqlite_url: str) -> None:
        """Test SQLAlchemy URL."""
        store = open_store(sqlite_url)
        try:
            assert isinstance(store, SqlKeyValueStore)
        finally:
            store.close()
