"""
Block and transaction models for the LTO Chain Indexer.

Blocks and transactions are parsed from the JSON returned by the node and are
treated as immutable afterwards. Only the fields the indexers consume are kept.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Transfer:
    """Single entry of a mass transfer"""
    recipient: str
    amount: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Transfer':
        return cls(recipient=data["recipient"], amount=data.get("amount", 0))


@dataclass(frozen=True)
class DataEntry:
    """Key/value item of a (legacy) data transaction"""
    key: str
    value: Any
    type: str = "string"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'DataEntry':
        return cls(key=data["key"], value=data.get("value"), type=data.get("type", "string"))


@dataclass(frozen=True)
class Transaction:
    """
    A transaction as seen by the indexers.

    Attributes:
        id: Transaction id, unique per chain
        type: Numeric transaction type tag
        sender: Sender address
        timestamp: Milliseconds since epoch
        recipient: Recipient address (transfers, leases, associations)
        party: Association party (older association transactions)
        association_type: Association type code
    """
    id: str
    type: int
    sender: str | None = None
    timestamp: int = 0
    sender_public_key: str | None = None
    recipient: str | None = None
    transfers: tuple[Transfer, ...] = ()
    data: tuple[DataEntry, ...] = ()
    anchors: tuple[str, ...] = ()
    party: str | None = None
    association_type: int | None = None

    @property
    def counterparty(self) -> str | None:
        """Address on the receiving side of an association"""
        return self.party or self.recipient

    def recipients(self) -> list[str]:
        """Recipient followed by every transfer recipient, in order"""
        result = [self.recipient] if self.recipient else []
        result.extend(transfer.recipient for transfer in self.transfers)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Transaction':
        """Create a transaction from node JSON"""
        return cls(
            id=data["id"],
            type=int(data["type"]),
            sender=data.get("sender"),
            timestamp=int(data.get("timestamp") or 0),
            sender_public_key=data.get("senderPublicKey"),
            recipient=data.get("recipient"),
            transfers=tuple(Transfer.from_dict(t) for t in data.get("transfers") or []),
            data=tuple(DataEntry.from_dict(d) for d in data.get("data") or []),
            anchors=tuple(data.get("anchors") or []),
            party=data.get("party"),
            association_type=data.get("associationType")
        )


@dataclass(frozen=True)
class Block:
    """A block with its transactions in chain order"""
    height: int
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    timestamp: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Block':
        """Create a block from node JSON"""
        return cls(
            height=int(data["height"]),
            transactions=tuple(Transaction.from_dict(tx) for tx in data.get("transactions") or []),
            timestamp=int(data.get("timestamp") or 0)
        )
