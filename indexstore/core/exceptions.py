"""
Custom exceptions for the index store.
"""


class IndexStoreError(Exception):
    """Base class for index store errors."""
    pass


class LogContractError(IndexStoreError):
    """
    Raised when a tombstone is requested for an offset that does not hold
    the expected live record.

    This means the in-memory index and the log disagree. It is fatal: the
    store must not keep running on top of it.
    """

    def __init__(self, offset: int, reason: str):
        """
        Initialize contract error.

        Args:
            offset: Log offset the tombstone was requested for.
            reason: What was found there instead.
        """
        self.offset = offset
        self.reason = reason
        super().__init__(f"Cannot tombstone record at offset {offset}: {reason}")
