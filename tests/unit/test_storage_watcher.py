"""Unit tests for StorageFileWatcher."""

import threading

from historyblock.core.storage.storage_watcher import StorageFileWatcher
from historyblock.core.storage.sync_storage import JsonSyncStorage


class TestStorageFileWatcher:
    """Tests for watcher lifecycle and change detection."""

    def test_watcher_init(self, tmp_path):
        watcher = StorageFileWatcher(tmp_path / "sync.json", lambda: None)
        assert watcher.is_running is False

    def test_watcher_start_stop(self, tmp_path):
        watcher = StorageFileWatcher(tmp_path / "sync.json", lambda: None)
        assert watcher.start() is True
        assert watcher.is_running is True
        watcher.stop()
        assert watcher.is_running is False

    def test_start_creates_directory(self, tmp_path):
        path = tmp_path / "storage" / "sync.json"
        watcher = StorageFileWatcher(path, lambda: None)
        try:
            assert watcher.start() is True
            assert path.parent.is_dir()
        finally:
            watcher.stop()

    def test_change_triggers_callback(self, tmp_path):
        path = tmp_path / "sync.json"
        changed = threading.Event()
        watcher = StorageFileWatcher(path, changed.set, debounce_seconds=0.1)
        watcher.start()
        try:
            JsonSyncStorage(path).set({"blacklist": ["a"]})
            assert changed.wait(timeout=5)
        finally:
            watcher.stop()

    def test_other_files_are_ignored(self, tmp_path):
        path = tmp_path / "sync.json"
        changed = threading.Event()
        watcher = StorageFileWatcher(path, changed.set, debounce_seconds=0.1)
        watcher.start()
        try:
            (tmp_path / "other.txt").write_text("x", encoding="utf-8")
            assert not changed.wait(timeout=0.5)
        finally:
            watcher.stop()
