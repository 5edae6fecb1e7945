"""
Verification methods for the LTO Chain Indexer.

A verification method is an association whose type code lies in the
0x0100-0x01FF range. The low bits of the code are a bitmask of the DID
relationships the sender grants the recipient's key.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from ltoindexer.core.secure_logging import sanitize_for_log
from ltoindexer.core.transaction import Transaction
from ltoindexer.storage.storage_service import StorageService

logger = logging.getLogger(__name__)

VERIFICATION_METHOD_MASK = 0xFF00
VERIFICATION_METHOD_BASE = 0x0100

RELATIONSHIPS = {
    0x0101: "authentication",
    0x0102: "assertionMethod",
    0x0104: "keyAgreement",
    0x0108: "capabilityInvocation",
    0x0110: "capabilityDelegation",
}


def is_verification_method(association_type: int | None) -> bool:
    """Whether an association type code denotes a verification method"""
    return association_type is not None and association_type & VERIFICATION_METHOD_MASK == VERIFICATION_METHOD_BASE


@dataclass
class VerificationMethod:
    relationships: int
    sender: str
    recipient: str
    created_at: int
    revoked_at: int | None = None

    def relationship_names(self) -> list[str]:
        return [name for code, name in RELATIONSHIPS.items() if self.relationships & code == code]

    def to_dict(self) -> dict[str, Any]:
        data = {
            "sender": self.sender,
            "recipient": self.recipient,
            "relationships": self.relationships,
            "createdAt": self.created_at,
        }
        if self.revoked_at is not None:
            data["revokedAt"] = self.revoked_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'VerificationMethod':
        return cls(
            relationships=data["relationships"],
            sender=data["sender"],
            recipient=data["recipient"],
            created_at=data.get("createdAt", 0),
            revoked_at=data.get("revokedAt")
        )


class VerificationMethodService:
    """Indexes verification methods from association transactions"""

    def __init__(self, storage: StorageService):
        self.storage = storage

    @staticmethod
    def _timestamp(transaction: Transaction) -> int:
        # Seconds; transactions carry milliseconds
        return transaction.timestamp // 1000 if transaction.timestamp else int(time.time())

    async def index(self, transaction: Transaction) -> None:
        """Save the verification method; transactions without recipient are skipped"""
        if not transaction.sender or not transaction.recipient:
            logger.debug(f"verification-method: skipping {sanitize_for_log(transaction.id)}, no recipient")
            return

        method = VerificationMethod(
            relationships=transaction.association_type or VERIFICATION_METHOD_BASE,
            sender=transaction.sender,
            recipient=transaction.recipient,
            created_at=self._timestamp(transaction)
        )
        await self.storage.save_verification_method(transaction.sender, method.to_dict())
        logger.debug(
            f"verification-method: {sanitize_for_log(transaction.sender)} -> "
            f"{sanitize_for_log(transaction.recipient)} {method.relationship_names()}"
        )

    async def revoke(self, transaction: Transaction) -> None:
        """Mark the method of (sender, recipient) as revoked; it stays in storage"""
        if not transaction.sender or not transaction.recipient:
            return

        data = await self.storage.get_verification_method(transaction.sender, transaction.recipient)
        if not data:
            return

        method = VerificationMethod.from_dict(data)
        method.revoked_at = self._timestamp(transaction)
        await self.storage.save_verification_method(transaction.sender, method.to_dict())

    async def get_verification_methods(self, address: str) -> list[VerificationMethod]:
        return [VerificationMethod.from_dict(data) for data in await self.storage.get_verification_methods(address)]
