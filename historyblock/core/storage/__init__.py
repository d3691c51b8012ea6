"""Synchronized storage module for HistoryBlock.

Provides the key/value storage area and its change watcher.
"""

from historyblock.core.storage.sync_storage import (
    SyncStorage,
    JsonSyncStorage,
    MemorySyncStorage,
)
from historyblock.core.storage.storage_watcher import StorageFileWatcher

__all__ = [
    "SyncStorage",
    "JsonSyncStorage",
    "MemorySyncStorage",
    "StorageFileWatcher",
]
