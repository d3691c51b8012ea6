"""Change notifier for HistoryBlock.

Publishes outbound notifications ('blacklistUpdated') to a set of
subscribers without waiting for delivery. Each publish hands delivery to a
daemon thread; subscriber failures are logged and never reach the
publisher.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

Subscriber = Callable[[str], None]


class ChangeNotifier:
    """Fire-and-forget observer set.

    Args:
        synchronous: Deliver inline in the publishing thread (testing).
    """

    def __init__(self, synchronous: bool = False) -> None:
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()
        self._synchronous = synchronous
        self._pending: set[threading.Thread] = set()
        self._revision = 0
        self._last_action: str | None = None

    @property
    def synchronous(self) -> bool:
        return self._synchronous

    def subscribe(self, callback: Subscriber) -> None:
        """Register a callback receiving the action name."""
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    @property
    def revision(self) -> int:
        """Number of actions published so far.

        Lets consumers outside the process poll for changes.
        """
        with self._lock:
            return self._revision

    @property
    def last_action(self) -> str | None:
        with self._lock:
            return self._last_action

    def publish(self, action: str) -> None:
        """Publish an action to every subscriber without blocking.

        Args:
            action: Notification name (e.g., 'blacklistUpdated')
        """
        with self._lock:
            self._revision += 1
            self._last_action = action
            subscribers = list(self._subscribers)

        if not subscribers:
            return

        if self._synchronous:
            self._deliver(action, subscribers)
            return

        thread = threading.Thread(
            target=self._run_delivery,
            args=(action, subscribers),
            name=f"notify-{action}",
            daemon=True,
        )
        with self._lock:
            self._pending.add(thread)
        thread.start()

    def wait_idle(self, timeout: float | None = None) -> None:
        """Join the delivery threads started so far."""
        with self._lock:
            pending = list(self._pending)
        for thread in pending:
            thread.join(timeout=timeout)

    def _run_delivery(self, action: str, subscribers: list[Subscriber]) -> None:
        try:
            self._deliver(action, subscribers)
        finally:
            with self._lock:
                self._pending.discard(threading.current_thread())

    def _deliver(self, action: str, subscribers: list[Subscriber]) -> None:
        for callback in subscribers:
            try:
                callback(action)
            except Exception as exc:
                logger.error(
                    f"Subscriber failed (action={action}, "
                    f"subscriber={getattr(callback, '__name__', repr(callback))}, error={exc})"
                )
