"""
Storage interface for the LTO Chain Indexer.

Every backend offers the same small set of primitives: an object store for JSON
documents, a scalar key-value store, sets, counters and a ranked transaction
index. Absent keys always read as empty values; only backend connectivity
failures raise (as StorageUnavailable).
"""

from abc import ABC, abstractmethod
from typing import Any


class StorageInterface(ABC):
    """Abstract base class for storage backends"""

    name = "abstract"

    @abstractmethod
    async def get_object(self, key: str) -> dict[str, Any]:
        """Get a JSON document, or an empty dict if absent"""

    @abstractmethod
    async def add_object(self, key: str, value: dict[str, Any]) -> None:
        """Store a JSON document, replacing the previous one"""

    @abstractmethod
    async def get_value(self, key: str) -> str | None:
        """Get a scalar value"""

    @abstractmethod
    async def set_value(self, key: str, value: str) -> None:
        """Set a scalar value"""

    @abstractmethod
    async def del_value(self, key: str) -> None:
        """Delete a scalar value; deleting an absent key is not an error"""

    @abstractmethod
    async def sadd(self, key: str, member: str) -> None:
        """Add a member to a set"""

    @abstractmethod
    async def srem(self, key: str, member: str) -> None:
        """Remove a member from a set"""

    @abstractmethod
    async def get_array(self, key: str) -> list[str]:
        """Members of a set (order carries no meaning)"""

    @abstractmethod
    async def incr_value(self, key: str) -> int:
        """Increment a counter, creating it at 0 first if absent"""

    @abstractmethod
    async def get_multiple_values(self, keys: list[str]) -> list[str | None]:
        """Scalar values aligned with keys; missing keys give None"""

    @abstractmethod
    async def index_tx(self, tx_type: str, address: str, transaction_id: str, timestamp: int) -> None:
        """
        Append a transaction to the ranked sequence of (tx_type, address).

        Ranks are strictly increasing. Indexing an id that is already in the
        sequence leaves it at its original rank.
        """

    @abstractmethod
    async def get_tx(self, tx_type: str, address: str, limit: int, offset: int) -> list[str]:
        """Page of transaction ids of (tx_type, address) in rank order"""

    @abstractmethod
    async def count_tx(self, tx_type: str, address: str) -> int:
        """Number of entries in the ranked sequence of (tx_type, address)"""

    async def close(self) -> None:
        """Release backend resources"""
        return None
