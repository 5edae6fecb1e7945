"""
Unit tests for generic transaction indexing.
"""

from unittest.mock import AsyncMock, patch

import pytest

from ltoindexer.core.transaction import Transaction
from ltoindexer.indexer.tx_indexer import TxIndexer


@pytest.mark.asyncio
async def test_index_anchor_transaction_under_sender(storage):
    tx = Transaction.from_dict({"id": "fake_transaction", "type": 12, "sender": "fake_sender"})

    with patch.object(storage, "index_tx", new_callable=AsyncMock) as index_tx:
        await TxIndexer(storage).index(tx)

    assert index_tx.await_count == 1
    assert index_tx.await_args_list[0].args[:3] == ("anchor", "fake_sender", "fake_transaction")


@pytest.mark.asyncio
async def test_index_transfer_transaction_under_all_recipients(storage):
    tx = Transaction.from_dict({
        "id": "fake_transaction",
        "type": 4,
        "sender": "fake_sender",
        "recipient": "fake_recipient",
        "transfers": [
            {"recipient": "fake_transfer_1"},
            {"recipient": "fake_transfer_2"},
        ]
    })

    with patch.object(storage, "index_tx", new_callable=AsyncMock) as index_tx:
        await TxIndexer(storage).index(tx)

    calls = [call.args[:3] for call in index_tx.await_args_list]
    assert calls == [
        ("transfer", "fake_sender", "fake_transaction"),
        ("transfer", "fake_recipient", "fake_transaction"),
        ("transfer", "fake_transfer_1", "fake_transaction"),
        ("transfer", "fake_transfer_2", "fake_transaction"),
    ]


@pytest.mark.asyncio
async def test_association_is_not_indexed_under_recipient(storage):
    tx = Transaction.from_dict({"id": "t", "type": 16, "sender": "A", "recipient": "B", "associationType": 1})

    await TxIndexer(storage).index(tx)

    assert await storage.get_tx("association", "A", 10, 0) == ["t"]
    assert await storage.count_tx("association", "B") == 0


@pytest.mark.asyncio
async def test_index_counts_daily_stats(storage):
    tx = Transaction.from_dict({"id": "t", "type": 15, "sender": "A", "timestamp": 1600000000000})

    await TxIndexer(storage).index(tx)

    assert await storage.get_tx_stats("anchor", 18518, 18518) == [{"period": "2020-09-13 00:00:00", "count": 1}]


@pytest.mark.asyncio
async def test_index_saves_sender_public_key(storage):
    tx = Transaction.from_dict({"id": "t", "type": 15, "sender": "A", "senderPublicKey": "pk"})

    await TxIndexer(storage).index(tx)

    assert await storage.get_public_key("A") == "pk"


@pytest.mark.asyncio
async def test_unknown_type_is_not_indexed(storage, memory_storage):
    tx = Transaction.from_dict({"id": "t", "type": 99, "sender": "A"})

    await TxIndexer(storage).index(tx)

    assert memory_storage.tx_index == {}
    assert memory_storage.values == {}
