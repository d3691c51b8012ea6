"""HistoryBlock service: entry point of the blocking core.

Routes the action-tagged messages sent by the options and context-menu
surfaces to the PatternStore, and handles visit notifications by asking
the VisitFilter for a decision and delegating the purge to a
HistoryPurger.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Protocol

from historyblock.core.blocking.pattern_store import PatternStore
from historyblock.core.blocking.visit_filter import VisitFilter
from historyblock.models.blacklist import (
    ACTION_ADD_TO_BLACKLIST,
    ACTION_CHANGE_LIST_MODE,
    ACTION_CLEAR_BLACKLIST,
    ACTION_IMPORT_BLACKLIST,
    ACTION_REMOVE_FROM_BLACKLIST,
    MENU_BLOCK_THIS,
    MENU_UNBLOCK_THIS,
    PurgeLog,
    UnknownActionError,
    VisitDecision,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORDED = 500


class HistoryPurger(Protocol):
    """Collaborator that removes a URL from the browser history."""

    def delete_url(self, url: str) -> None:
        ...


class RecordingHistoryPurger:
    """HistoryPurger keeping the most recent purged URLs in memory."""

    def __init__(self, max_recorded: int = DEFAULT_MAX_RECORDED) -> None:
        self._urls: deque[str] = deque(maxlen=max_recorded)
        self._lock = threading.Lock()

    def delete_url(self, url: str) -> None:
        with self._lock:
            self._urls.append(url)

    def get_log(self) -> PurgeLog:
        with self._lock:
            return PurgeLog(urls=list(self._urls))

    def clear(self) -> None:
        with self._lock:
            self._urls.clear()


class HistoryBlock:
    """Message, visit and context-menu handling around the blocking core."""

    def __init__(
        self,
        store: PatternStore,
        visit_filter: VisitFilter,
        purger: HistoryPurger,
    ) -> None:
        self.store = store
        self.visit_filter = visit_filter
        self.purger = purger
        self._handlers = {
            ACTION_ADD_TO_BLACKLIST: lambda m: self.store.add(m.get("url")),
            ACTION_IMPORT_BLACKLIST: lambda m: self.store.import_many(m.get("blacklist")),
            ACTION_REMOVE_FROM_BLACKLIST: lambda m: self.store.remove(m.get("url")),
            ACTION_CLEAR_BLACKLIST: lambda m: self.store.clear(),
            ACTION_CHANGE_LIST_MODE: lambda m: self.store.set_mode(m.get("listMode")),
        }

    @property
    def actions(self) -> list[str]:
        return list(self._handlers)

    def on_message(self, message: dict[str, Any]) -> Any:
        """Dispatch an action-tagged message.

        Args:
            message: {'action': ..., <payload fields>}

        Returns:
            Result of the PatternStore operation

        Raises:
            UnknownActionError: If the action is missing or unrecognized
        """
        action = message.get("action") if isinstance(message, dict) else None
        handler = self._handlers.get(action) if isinstance(action, str) else None
        if handler is None:
            logger.warning(f"Unknown message action (action={action!r})")
            raise UnknownActionError(action)

        logger.debug(f"Message received (action={action})")
        return handler(message)

    def on_page_visited(self, url: str) -> VisitDecision:
        """Decide on a visit and purge the URL from history when required.

        The decision is taken on a single snapshot of the store.
        """
        state = self.store.snapshot()
        decision = self.visit_filter.decide(url, state)

        if decision.purge:
            self.purger.delete_url(url)
            logger.info(
                f"Visit purged (mode={decision.mode.value}, "
                f"pattern={decision.matched_pattern})"
            )
        else:
            logger.debug(f"Visit retained (mode={decision.mode.value})")

        return decision

    def on_context_menu_clicked(self, menu_item_id: str, tab_url: str) -> bool | None:
        """Block or unblock the URL of the tab the menu was opened on.

        Returns:
            Result of add/remove, None for unknown menu items
        """
        if menu_item_id == MENU_BLOCK_THIS:
            return self.store.add(tab_url)
        if menu_item_id == MENU_UNBLOCK_THIS:
            return self.store.remove(tab_url)
        logger.debug(f"Context menu item ignored (id={menu_item_id!r})")
        return None


def get_history_block() -> HistoryBlock:
    """Return the HistoryBlock instance of the current Flask application."""
    from flask import current_app

    return current_app.extensions["history_block"]
