"""Storage file watcher for HistoryBlock.

Watches the JSON storage file for changes made by another writer (another
worker process, a sync agent, a manual edit). When the file changes the
PatternStore drops its resident state and 'blacklistUpdated' is published
so consumers reload.

Uses trailing-edge debounce: waits for changes to stop before reloading.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class StorageFileWatcher:
    """File watcher calling on_change when the storage file changes.

    Usage:
        watcher = StorageFileWatcher(path, on_change)
        watcher.start()
        # ... application runs ...
        watcher.stop()
    """

    def __init__(
        self,
        filepath: str | Path,
        on_change: Callable[[], None],
        debounce_seconds: float = 1.0,
    ) -> None:
        """Initialize the file watcher.

        Args:
            filepath: Path of the JSON storage file
            on_change: Callback invoked once per burst of changes
            debounce_seconds: Delay before callback to debounce rapid changes
        """
        self._filepath = Path(filepath)
        self._on_change = on_change
        self._debounce_seconds = debounce_seconds
        self._observer: Observer | None = None
        self._handler: _StorageChangeHandler | None = None
        self._running = False

    def start(self) -> bool:
        """Start watching the storage directory.

        Returns:
            True if watcher started successfully, False otherwise
        """
        directory = self._filepath.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)

            self._handler = _StorageChangeHandler(
                self._filepath.name,
                self._on_change,
                self._debounce_seconds,
            )
            self._observer = Observer()
            self._observer.schedule(self._handler, str(directory), recursive=False)
            self._observer.start()
            self._running = True
            logger.info(f"Watching storage for changes (path={self._filepath})")
            return True

        except OSError as e:
            logger.error(f"Failed to start storage watcher (error={e})")
            self._observer = None
            return False

    def stop(self) -> None:
        """Stop watching for file changes."""
        if self._handler is not None:
            self._handler.cancel()
            self._handler = None
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None
            self._running = False
            logger.info("Storage watcher stopped")

    @property
    def is_running(self) -> bool:
        return self._running


class _StorageChangeHandler(FileSystemEventHandler):
    """Internal handler for storage file events."""

    def __init__(
        self,
        filename: str,
        on_change: Callable[[], None],
        debounce_seconds: float,
    ) -> None:
        super().__init__()
        self._filename = filename
        self._on_change = on_change
        self._debounce_seconds = debounce_seconds
        self._pending_timer: threading.Timer | None = None
        self._timer_lock = threading.Lock()

    def on_any_event(self, event) -> None:
        if event.event_type not in ("modified", "created", "deleted", "moved"):
            return

        # os.replace shows up as a move onto the storage file
        paths = [str(event.src_path), str(getattr(event, "dest_path", "") or "")]
        if not any(Path(p).name == self._filename for p in paths if p):
            return

        self._schedule()

    def cancel(self) -> None:
        with self._timer_lock:
            if self._pending_timer is not None:
                self._pending_timer.cancel()
                self._pending_timer = None

    def _schedule(self) -> None:
        with self._timer_lock:
            if self._pending_timer is not None:
                self._pending_timer.cancel()

            self._pending_timer = threading.Timer(self._debounce_seconds, self._fire)
            self._pending_timer.daemon = True
            self._pending_timer.start()

    def _fire(self) -> None:
        with self._timer_lock:
            self._pending_timer = None

        logger.info(f"Storage file changed (file={self._filename})")
        try:
            self._on_change()
        except Exception as e:
            logger.error(f"Storage change callback failed (error={e})")
