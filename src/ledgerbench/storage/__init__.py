"""
ledgerbench - Storage Package

Key-value stores measured by the storage benchmark.
"""

from ledgerbench.storage.kv_store import (
    MEMORY_URL,
    InMemoryStore,
    KeyValueStore,
    SqlKeyValueStore,
    StorageError,
    open_store,
)

__all__ = [
    "MEMORY_URL",
    "InMemoryStore",
    "KeyValueStore",
    "SqlKeyValueStore",
    "StorageError",
    "open_store",
]
