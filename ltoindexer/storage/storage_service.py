"""
Storage service for the LTO Chain Indexer.

This module maps the indexer's domain records onto the primitives of a storage
backend. All keys follow the "lto:<domain>:<identifier>" convention:

- lto:anchor:<hash>              set of transaction ids that anchored the hash
- lto:pubkey:<address>           public key of an address
- lto:verification:<address>     document recipient -> verification method
- lto:roles:<address>            document role -> {sender, type}
- lto:assoc:<address>:childs     set of child addresses
- lto:assoc:<address>:parents    set of parent addresses
- lto:txstats:<type>:<day>       counter of transactions per type and day
- lto:processing-height          last fully processed block height
"""

import logging
from datetime import datetime, timezone
from typing import Any

from ltoindexer.core.errors import StorageUnavailable
from ltoindexer.storage.base import StorageInterface

logger = logging.getLogger(__name__)

DAY_MS = 86400000
PROCESSING_HEIGHT_KEY = "lto:processing-height"


class StorageService:
    """Domain accessors over a storage backend"""

    def __init__(self, storage: StorageInterface):
        self.storage = storage

    # Anchors

    async def get_anchor(self, hash_hex: str) -> list[str]:
        return await self.storage.get_array(f"lto:anchor:{hash_hex.lower()}")

    async def save_anchor(self, hash_hex: str, transaction_id: str) -> None:
        await self.storage.sadd(f"lto:anchor:{hash_hex.lower()}", transaction_id)

    # Public keys

    async def get_public_key(self, address: str) -> str | None:
        return await self.storage.get_value(f"lto:pubkey:{address}")

    async def save_public_key(self, address: str, public_key: str) -> None:
        await self.storage.set_value(f"lto:pubkey:{address}", public_key)

    # Verification methods

    async def get_verification_methods(self, address: str) -> list[dict[str, Any]]:
        """Active (not revoked) verification methods of an address"""
        methods = await self.storage.get_object(f"lto:verification:{address}")
        return [data for data in methods.values() if not data.get("revokedAt")]

    async def get_verification_method(self, address: str, recipient: str) -> dict[str, Any] | None:
        methods = await self.storage.get_object(f"lto:verification:{address}")
        return methods.get(recipient)

    async def save_verification_method(self, address: str, method: dict[str, Any]) -> None:
        """Read-merge-write; the entry for method["recipient"] is replaced"""
        key = f"lto:verification:{address}"
        methods = await self.storage.get_object(key)
        methods[method["recipient"]] = method
        await self.storage.add_object(key, methods)

    # Trust network

    async def get_raw_roles(self, address: str) -> dict[str, Any]:
        return await self.storage.get_object(f"lto:roles:{address}")

    async def save_trust_network_role(self, recipient: str, sender: str, role_data: dict[str, Any]) -> None:
        key = f"lto:roles:{recipient}"
        roles = await self.storage.get_object(key)
        roles[role_data["role"]] = {"sender": sender, "type": role_data["type"]}
        await self.storage.add_object(key, roles)

    async def remove_trust_network_roles(self, recipient: str, sender: str, role_type: int) -> list[str]:
        """Remove the roles granted to recipient by sender with the given type. Returns the removed names."""
        key = f"lto:roles:{recipient}"
        roles = await self.storage.get_object(key)
        removed = [
            role for role, data in roles.items()
            if data.get("sender") == sender and data.get("type") == role_type
        ]
        if removed:
            for role in removed:
                del roles[role]
            await self.storage.add_object(key, roles)
        return removed

    # Associations

    async def save_association(self, parent: str, child: str) -> None:
        await self.storage.sadd(f"lto:assoc:{parent}:childs", child)
        await self.storage.sadd(f"lto:assoc:{child}:parents", parent)

    async def remove_association_pair(self, parent: str, child: str) -> None:
        await self.storage.srem(f"lto:assoc:{parent}:childs", child)
        await self.storage.srem(f"lto:assoc:{child}:parents", parent)

    async def get_association_children(self, address: str) -> list[str]:
        return await self.storage.get_array(f"lto:assoc:{address}:childs")

    async def get_associations(self, address: str) -> dict[str, list[str]]:
        return {
            "children": await self.storage.get_array(f"lto:assoc:{address}:childs"),
            "parents": await self.storage.get_array(f"lto:assoc:{address}:parents"),
        }

    # Transaction statistics

    async def incr_tx_stats(self, tx_type: str, day: int) -> int:
        return await self.storage.incr_value(f"lto:txstats:{tx_type}:{day}")

    async def get_tx_stats(self, tx_type: str, from_day: int, to_day: int) -> list[dict[str, Any]]:
        """Daily counts from from_day to to_day inclusive (days since epoch)"""
        days = list(range(from_day, to_day + 1))
        keys = [f"lto:txstats:{tx_type}:{day}" for day in days]
        values = await self.storage.get_multiple_values(keys)

        return [
            {"period": self.format_period(day), "count": int(value or 0)}
            for day, value in zip(days, values)
        ]

    @staticmethod
    def format_period(day: int) -> str:
        date = datetime.fromtimestamp(day * DAY_MS / 1000, tz=timezone.utc)
        return date.strftime("%Y-%m-%d 00:00:00")

    # Ranked transaction index

    async def index_tx(self, tx_type: str, address: str, transaction_id: str, timestamp: int) -> None:
        await self.storage.index_tx(tx_type, address, transaction_id, timestamp)

    async def get_tx(self, tx_type: str, address: str, limit: int, offset: int) -> list[str]:
        return await self.storage.get_tx(tx_type, address, limit, offset)

    async def count_tx(self, tx_type: str, address: str) -> int:
        return await self.storage.count_tx(tx_type, address)

    # Processing height

    async def get_processing_height(self) -> int | None:
        """Last fully processed height; a failing backend reads as no checkpoint"""
        try:
            height = await self.storage.get_value(PROCESSING_HEIGHT_KEY)
        except StorageUnavailable as e:
            logger.warning(f"Could not read processing height, starting from configured height: {e}")
            return None
        return int(height) if height else None

    async def save_processing_height(self, height: int) -> None:
        await self.storage.set_value(PROCESSING_HEIGHT_KEY, str(height))

    async def clear_processing_height(self) -> None:
        await self.storage.del_value(PROCESSING_HEIGHT_KEY)

    async def close(self) -> None:
        await self.storage.close()
