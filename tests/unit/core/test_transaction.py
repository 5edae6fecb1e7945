"""
Unit tests for parsing blocks and transactions from node JSON.
"""

from ltoindexer.core.transaction import Block, Transaction
from ltoindexer.core.transaction_types import get_type_name, get_type_names


def test_transaction_from_dict_mass_transfer():
    tx = Transaction.from_dict({
        "id": "tx1",
        "type": 11,
        "sender": "3MsSender",
        "senderPublicKey": "pubkey",
        "timestamp": 1600000000000,
        "transfers": [
            {"recipient": "3MsT1", "amount": 100},
            {"recipient": "3MsT2", "amount": 200},
        ]
    })

    assert tx.id == "tx1"
    assert tx.type == 11
    assert tx.sender_public_key == "pubkey"
    assert [t.recipient for t in tx.transfers] == ["3MsT1", "3MsT2"]
    assert tx.recipients() == ["3MsT1", "3MsT2"]


def test_transaction_from_dict_optional_fields_missing():
    tx = Transaction.from_dict({"id": "tx2", "type": 15, "sender": "3MsSender", "anchors": None})

    assert tx.recipient is None
    assert tx.transfers == ()
    assert tx.data == ()
    assert tx.anchors == ()
    assert tx.timestamp == 0


def test_counterparty_prefers_party():
    tx = Transaction.from_dict({
        "id": "tx3", "type": 16, "sender": "A", "party": "B", "recipient": "C", "associationType": 1
    })
    assert tx.counterparty == "B"

    tx = Transaction.from_dict({"id": "tx4", "type": 16, "sender": "A", "recipient": "C"})
    assert tx.counterparty == "C"


def test_block_from_dict_keeps_transaction_order():
    block = Block.from_dict({
        "height": 42,
        "timestamp": 1600000000000,
        "transactions": [
            {"id": "a", "type": 4, "sender": "S", "recipient": "R"},
            {"id": "b", "type": 12, "sender": "S"},
        ]
    })

    assert block.height == 42
    assert [tx.id for tx in block.transactions] == ["a", "b"]


def test_type_names():
    assert get_type_name(12) == "anchor"
    assert get_type_name(15) == "anchor"
    assert get_type_name(4) == "transfer"
    assert get_type_name(999) is None
    assert get_type_names().count("anchor") == 1
