"""
Core data structures and helpers for the LTO Chain Indexer.
"""

from ltoindexer.core.errors import (
    IndexerError,
    StorageUnavailable,
    NodeUnavailable,
    MalformedTransaction
)
from ltoindexer.core.transaction import Block, Transaction, Transfer, DataEntry

__all__ = [
    "IndexerError",
    "StorageUnavailable",
    "NodeUnavailable",
    "MalformedTransaction",
    "Block",
    "Transaction",
    "Transfer",
    "DataEntry"
]
