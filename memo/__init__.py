from .exceptions import (
    ComputationAbandonedError,
    EntryAlreadySealedError,
    EntryNotReadyError,
    MemoClosedError,
    MemoError,
)
from .services.cache import Entry, Func, Memo
from .services.monitor import MonitorMemo

__all__ = [
    "ComputationAbandonedError",
    "EntryAlreadySealedError",
    "EntryNotReadyError",
    "MemoClosedError",
    "MemoError",
    "Entry",
    "Func",
    "Memo",
    "MonitorMemo",
]
