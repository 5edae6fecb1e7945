"""
Unit tests for the transaction dispatcher: anchor decoding and routing of
association transactions.
"""

import asyncio
import base64
import hashlib

import base58
import pytest

from ltoindexer.core.transaction import Transaction
from ltoindexer.indexer.dispatcher import TransactionDispatcher


@pytest.fixture
def dispatcher(storage, settings):
    return TransactionDispatcher.create(storage, settings)


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


@pytest.mark.asyncio
async def test_legacy_anchor_is_decoded_from_base64(storage, dispatcher):
    digest = sha256(b"document")
    tx = Transaction.from_dict({
        "id": "legacy_tx",
        "type": 12,
        "sender": "A",
        "data": [
            {"key": "⚓", "type": "binary", "value": "base64:" + base64.b64encode(digest).decode()},
            {"key": "note", "type": "string", "value": "not an anchor"},
        ]
    })

    await dispatcher.dispatch(tx)

    assert await storage.get_anchor(digest.hex()) == ["legacy_tx"]
    assert await storage.get_tx("anchor", "A", 10, 0) == ["legacy_tx"]


@pytest.mark.asyncio
async def test_native_anchors_are_decoded_from_base58(storage, dispatcher):
    digests = [sha256(b"one"), sha256(b"two"), sha256(b"three")]
    tx = Transaction.from_dict({
        "id": "anchor_tx",
        "type": 15,
        "sender": "A",
        "anchors": [base58.b58encode(d).decode() for d in digests]
    })

    await dispatcher.dispatch(tx)

    for digest in digests:
        assert await storage.get_anchor(digest.hex()) == ["anchor_tx"]


@pytest.mark.asyncio
async def test_native_anchors_are_stored_before_dispatch_returns(storage, dispatcher):
    completed = []
    save_anchor = storage.save_anchor

    async def slow_save_anchor(hash_hex, transaction_id):
        await asyncio.sleep(0.01)
        await save_anchor(hash_hex, transaction_id)
        completed.append(hash_hex)

    storage.save_anchor = slow_save_anchor
    digests = [sha256(bytes([i])) for i in range(5)]
    tx = Transaction.from_dict({
        "id": "anchor_tx", "type": 15, "sender": "A", "anchors": [base58.b58encode(d).decode() for d in digests]
    })

    await dispatcher.dispatch(tx)

    assert completed == [d.hex() for d in digests]


@pytest.mark.asyncio
async def test_malformed_anchor_is_skipped(storage, dispatcher):
    good = sha256(b"good")
    tx = Transaction.from_dict({
        "id": "anchor_tx",
        "type": 15,
        "sender": "A",
        "anchors": ["0OIl", "", base58.b58encode(good).decode()]
    })

    await dispatcher.dispatch(tx)

    assert await storage.get_anchor(good.hex()) == ["anchor_tx"]


@pytest.mark.asyncio
async def test_malformed_legacy_anchor_is_skipped(storage, dispatcher, memory_storage):
    tx = Transaction.from_dict({
        "id": "legacy_tx", "type": 12, "sender": "A", "data": [{"key": "⚓", "value": "base64:@@@"}]
    })

    await dispatcher.dispatch(tx)

    assert not any(key.startswith("lto:anchor:") for key in memory_storage.sets)


@pytest.mark.asyncio
async def test_anchor_types_are_configurable(storage, settings, memory_storage):
    settings.ANCHOR_TRANSACTION_TYPES = [15]
    dispatcher = TransactionDispatcher.create(storage, settings)
    digest = sha256(b"document")
    tx = Transaction.from_dict({
        "id": "legacy_tx",
        "type": 12,
        "sender": "A",
        "data": [{"key": "⚓", "value": "base64:" + base64.b64encode(digest).decode()}]
    })

    await dispatcher.dispatch(tx)

    assert await storage.get_anchor(digest.hex()) == []
    # Generic indexing still happens
    assert await storage.get_tx("anchor", "A", 10, 0) == ["legacy_tx"]


@pytest.mark.asyncio
async def test_verification_association_goes_to_verification_methods(storage, dispatcher):
    tx = Transaction.from_dict({
        "id": "vm_tx", "type": 16, "sender": "A", "recipient": "B", "associationType": 0x0101,
        "timestamp": 1600000000000
    })

    await dispatcher.dispatch(tx)

    methods = await storage.get_verification_methods("A")
    assert [m["recipient"] for m in methods] == ["B"]
    assert await storage.get_associations("A") == {"children": [], "parents": []}


@pytest.mark.asyncio
async def test_association_invoke_and_revoke(storage, dispatcher):
    await dispatcher.dispatch(Transaction.from_dict(
        {"id": "t1", "type": 16, "sender": "A", "party": "B", "associationType": 1}
    ))
    await dispatcher.dispatch(Transaction.from_dict(
        {"id": "t2", "type": 16, "sender": "B", "party": "C", "associationType": 1}
    ))
    assert await storage.get_associations("B") == {"children": ["C"], "parents": ["A"]}

    await dispatcher.dispatch(Transaction.from_dict(
        {"id": "t3", "type": 17, "sender": "A", "party": "B", "associationType": 1}
    ))

    assert await storage.get_associations("B") == {"children": [], "parents": []}
    assert await storage.get_associations("C") == {"children": [], "parents": []}


@pytest.mark.asyncio
async def test_association_grants_trust_network_role(storage, dispatcher):
    await storage.save_trust_network_role("A", "root", {"role": "authority", "type": 1})

    await dispatcher.dispatch(Transaction.from_dict(
        {"id": "t1", "type": 16, "sender": "A", "recipient": "B", "associationType": 100}
    ))

    assert await storage.get_raw_roles("B") == {"validator": {"sender": "A", "type": 100}}
    assert await storage.get_associations("A") == {"children": ["B"], "parents": []}


@pytest.mark.asyncio
async def test_transfer_is_only_indexed(storage, dispatcher, memory_storage):
    await dispatcher.dispatch(Transaction.from_dict(
        {"id": "t1", "type": 4, "sender": "A", "recipient": "B", "timestamp": 1600000000000}
    ))

    assert await storage.get_tx("transfer", "B", 10, 0) == ["t1"]
    assert memory_storage.objects == {}
    assert memory_storage.sets == {}
