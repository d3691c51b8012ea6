"""History blocking module for HistoryBlock.

Provides pattern management, visit decisions and message handling.
"""

from historyblock.core.blocking.notifier import ChangeNotifier
from historyblock.core.blocking.pattern_store import PatternStore
from historyblock.core.blocking.visit_filter import VisitFilter
from historyblock.core.blocking.history_block import (
    HistoryBlock,
    HistoryPurger,
    RecordingHistoryPurger,
    get_history_block,
)

__all__ = [
    "ChangeNotifier",
    "PatternStore",
    "VisitFilter",
    "HistoryBlock",
    "HistoryPurger",
    "RecordingHistoryPurger",
    "get_history_block",
]
