"""
Memory Storage Module for the LTO Chain Indexer

This module provides an in-memory storage implementation. It keeps JSON
documents, scalar values, sets and ranked transaction sequences in plain
dictionaries and is used for tests and short-lived development runs.
"""

import copy
from typing import Any

from ltoindexer.storage.base import StorageInterface


class MemoryStorage(StorageInterface):
    """Simple in-memory storage backend"""

    name = "memory"

    def __init__(self):
        self.objects: dict[str, dict[str, Any]] = {}
        self.values: dict[str, str] = {}
        self.sets: dict[str, dict[str, None]] = {}
        self.tx_index: dict[tuple[str, str], dict[str, int]] = {}
        self._rank = 0

    async def get_object(self, key: str) -> dict[str, Any]:
        return copy.deepcopy(self.objects.get(key, {}))

    async def add_object(self, key: str, value: dict[str, Any]) -> None:
        self.objects[key] = copy.deepcopy(value)

    async def get_value(self, key: str) -> str | None:
        return self.values.get(key)

    async def set_value(self, key: str, value: str) -> None:
        self.values[key] = str(value)

    async def del_value(self, key: str) -> None:
        self.values.pop(key, None)

    async def sadd(self, key: str, member: str) -> None:
        self.sets.setdefault(key, {})[member] = None

    async def srem(self, key: str, member: str) -> None:
        members = self.sets.get(key)
        if members is not None:
            members.pop(member, None)
            if not members:
                del self.sets[key]

    async def get_array(self, key: str) -> list[str]:
        return list(self.sets.get(key, {}))

    async def incr_value(self, key: str) -> int:
        value = int(self.values.get(key, 0)) + 1
        self.values[key] = str(value)
        return value

    async def get_multiple_values(self, keys: list[str]) -> list[str | None]:
        return [self.values.get(key) for key in keys]

    async def index_tx(self, tx_type: str, address: str, transaction_id: str, timestamp: int) -> None:
        sequence = self.tx_index.setdefault((tx_type, address), {})
        if transaction_id in sequence:
            return
        self._rank += 1
        sequence[transaction_id] = self._rank

    async def get_tx(self, tx_type: str, address: str, limit: int, offset: int) -> list[str]:
        if limit <= 0:
            return []
        sequence = self.tx_index.get((tx_type, address), {})
        ordered = sorted(sequence, key=sequence.get)
        return ordered[offset:offset + limit]

    async def count_tx(self, tx_type: str, address: str) -> int:
        return len(self.tx_index.get((tx_type, address), {}))
