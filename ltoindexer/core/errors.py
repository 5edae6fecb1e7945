"""
Error types for the LTO Chain Indexer.

Storage and node failures abort the current scan pass and surface to whoever
started the monitor. Malformed transaction payloads are handled per item by
the dispatcher.
"""


class IndexerError(Exception):
    """Base exception for indexer errors."""
    pass


class StorageUnavailable(IndexerError):
    """The storage backend could not be reached or rejected the operation."""

    def __init__(self, message: str, backend: str = None):
        super().__init__(message)
        self.backend = backend


class NodeUnavailable(IndexerError):
    """Fetching the chain height or a block from the node failed."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedTransaction(IndexerError):
    """A transaction carries a value that cannot be decoded."""

    def __init__(self, message: str, transaction_id: str = None):
        super().__init__(message)
        self.transaction_id = transaction_id
