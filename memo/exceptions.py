class MemoError(Exception):
    """Base exception for cache-management errors."""

    pass


class MemoClosedError(MemoError):
    def __init__(self):
        super().__init__("Memo is closed and accepts no further requests.")


class ComputationAbandonedError(MemoError):
    """Raised to waiters when the computation for a key ended abnormally."""
    def __init__(self, key):
        super().__init__(f"Computation for key {key!r} was abandoned")
        self.key = key


class EntryNotReadyError(MemoError):
    def __init__(self, key):
        super().__init__(f"Entry for key {key!r} is not ready")
        self.key = key


class EntryAlreadySealedError(MemoError):
    def __init__(self, key):
        super().__init__(f"Entry for key {key!r} is already sealed")
        self.key = key
