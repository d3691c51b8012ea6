# Data models package

from historyblock.models.blacklist import (
    BlacklistState,
    HistoryBlockError,
    ListMode,
    PurgeLog,
    StorageUnavailableError,
    UnknownActionError,
    VisitDecision,
    DEFAULT_LIST_MODE,
    ACTION_ADD_TO_BLACKLIST,
    ACTION_BLACKLIST_UPDATED,
    ACTION_CHANGE_LIST_MODE,
    ACTION_CLEAR_BLACKLIST,
    ACTION_IMPORT_BLACKLIST,
    ACTION_REMOVE_FROM_BLACKLIST,
    MESSAGE_INVALID_BODY,
    MESSAGE_UNKNOWN_ACTION,
    STORAGE_UNAVAILABLE,
    VISIT_INVALID_URL,
)

__all__ = [
    "BlacklistState",
    "HistoryBlockError",
    "ListMode",
    "PurgeLog",
    "StorageUnavailableError",
    "UnknownActionError",
    "VisitDecision",
    "DEFAULT_LIST_MODE",
    # Message protocol
    "ACTION_ADD_TO_BLACKLIST",
    "ACTION_BLACKLIST_UPDATED",
    "ACTION_CHANGE_LIST_MODE",
    "ACTION_CLEAR_BLACKLIST",
    "ACTION_IMPORT_BLACKLIST",
    "ACTION_REMOVE_FROM_BLACKLIST",
    # Error codes
    "MESSAGE_INVALID_BODY",
    "MESSAGE_UNKNOWN_ACTION",
    "STORAGE_UNAVAILABLE",
    "VISIT_INVALID_URL",
]
