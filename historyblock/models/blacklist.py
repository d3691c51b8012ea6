"""Blacklist data models for HistoryBlock.

Defines the list mode enum, the persisted blacklist state, visit
decisions and the message protocol constants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# Persisted storage keys (top-level, no nesting)
STORAGE_KEY_BLACKLIST = "blacklist"
STORAGE_KEY_LIST_MODE = "listMode"

# Inbound message actions
ACTION_ADD_TO_BLACKLIST = "addToBlacklist"
ACTION_IMPORT_BLACKLIST = "importBlacklist"
ACTION_REMOVE_FROM_BLACKLIST = "removeFromBlacklist"
ACTION_CLEAR_BLACKLIST = "clearBlacklist"
ACTION_CHANGE_LIST_MODE = "changeListMode"

# Outbound notification
ACTION_BLACKLIST_UPDATED = "blacklistUpdated"

# Context menu item ids
MENU_BLOCK_THIS = "blockthis"
MENU_UNBLOCK_THIS = "unblockthis"


class ListMode(Enum):
    """Modes de liste supportés."""

    BLACKLIST = "blacklist"
    WHITELIST = "whitelist"

    @classmethod
    def parse(cls, value: Any) -> ListMode | None:
        """Retourne le mode correspondant ou None si la valeur est inconnue.

        Args:
            value: ListMode ou chaîne ('blacklist' / 'whitelist')

        Returns:
            ListMode reconnu, None sinon
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for mode in cls:
            if mode.value == value:
                return mode
        return None


DEFAULT_LIST_MODE = ListMode.BLACKLIST


@dataclass(frozen=True)
class BlacklistState:
    """Snapshot immuable de l'état persisté.

    Attributes:
        patterns: Patterns (expressions régulières) dans l'ordre d'insertion
        mode: Mode de liste actif
    """

    patterns: tuple[str, ...] = ()
    mode: ListMode = DEFAULT_LIST_MODE

    def contains(self, pattern: str) -> bool:
        """Comparaison exacte, sensible à la casse."""
        return pattern in self.patterns

    def with_patterns(self, patterns) -> BlacklistState:
        return BlacklistState(patterns=tuple(patterns), mode=self.mode)

    def with_mode(self, mode: ListMode) -> BlacklistState:
        return BlacklistState(patterns=self.patterns, mode=mode)

    def to_dict(self) -> dict[str, Any]:
        """Sérialisation au format de stockage (clés 'blacklist' et 'listMode')."""
        return {
            STORAGE_KEY_BLACKLIST: list(self.patterns),
            STORAGE_KEY_LIST_MODE: self.mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> BlacklistState:
        """Désérialisation depuis le stockage.

        Une liste absente ou mal formée devient vide, un mode absent
        ou inconnu devient 'blacklist'.
        """
        data = data or {}
        raw_patterns = data.get(STORAGE_KEY_BLACKLIST)
        if not isinstance(raw_patterns, list):
            raw_patterns = []
        patterns = tuple(p for p in raw_patterns if isinstance(p, str))
        mode = ListMode.parse(data.get(STORAGE_KEY_LIST_MODE)) or DEFAULT_LIST_MODE
        return cls(patterns=patterns, mode=mode)


@dataclass
class VisitDecision:
    """Décision pour une visite.

    Attributes:
        address: URL visitée
        purge: True si l'entrée doit être retirée de l'historique
        mode: Mode de liste utilisé pour la décision
        matched_pattern: Premier pattern ayant matché (None sinon)
    """

    address: str
    purge: bool
    mode: ListMode = DEFAULT_LIST_MODE
    matched_pattern: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Sérialisation JSON snake_case."""
        return {
            "address": self.address,
            "purge": self.purge,
            "mode": self.mode.value,
            "matched_pattern": self.matched_pattern,
        }


class HistoryBlockError(Exception):
    """Exception for HistoryBlock errors.

    Attributes:
        code: Error code (e.g., 'STORAGE_UNAVAILABLE')
        message: Human-readable error message
        details: Additional error details
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON error response."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class StorageUnavailableError(HistoryBlockError):
    """Raised when the synchronized storage cannot be read or written."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(STORAGE_UNAVAILABLE, message, details)


class UnknownActionError(HistoryBlockError):
    """Raised when a message carries no recognized action."""

    def __init__(self, action: Any):
        super().__init__(
            MESSAGE_UNKNOWN_ACTION,
            f"Action inconnue: {action!r}",
            {"action": action if isinstance(action, str) else None},
        )


@dataclass
class PurgeLog:
    """URLs retirées de l'historique (ordre chronologique)."""

    urls: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"urls": list(self.urls), "count": len(self.urls)}


# Error code constants
STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
MESSAGE_INVALID_BODY = "MESSAGE_INVALID_BODY"
MESSAGE_UNKNOWN_ACTION = "MESSAGE_UNKNOWN_ACTION"
VISIT_INVALID_URL = "VISIT_INVALID_URL"
