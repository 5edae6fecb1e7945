"""
Contract tests shared by the embedded storage backends.

Every test runs against MemoryStorage and SQLiteStorage; both must behave the
same for absent keys, sets, counters and the ranked transaction index.
"""

import pytest

from ltoindexer.storage.memory_storage import MemoryStorage
from ltoindexer.storage.sqlite_storage import SQLiteStorage


@pytest.fixture(params=["memory", "sqlite"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    return SQLiteStorage(str(tmp_path / "index.db"))


@pytest.mark.asyncio
async def test_absent_keys_read_empty(backend):
    assert await backend.get_object("lto:missing") == {}
    assert await backend.get_value("lto:missing") is None
    assert await backend.get_array("lto:missing") == []
    assert await backend.get_tx("transfer", "nobody", 10, 0) == []
    assert await backend.count_tx("transfer", "nobody") == 0
    # Deleting or removing something absent is not an error
    await backend.del_value("lto:missing")
    await backend.srem("lto:missing", "member")


@pytest.mark.asyncio
async def test_objects_and_values(backend):
    await backend.add_object("lto:doc", {"a": {"b": 1}})
    assert await backend.get_object("lto:doc") == {"a": {"b": 1}}

    await backend.set_value("lto:value", "42")
    assert await backend.get_value("lto:value") == "42"

    await backend.del_value("lto:value")
    assert await backend.get_value("lto:value") is None


@pytest.mark.asyncio
async def test_returned_objects_are_copies(backend):
    await backend.add_object("lto:doc", {"a": 1})
    document = await backend.get_object("lto:doc")
    document["b"] = 2

    assert await backend.get_object("lto:doc") == {"a": 1}


@pytest.mark.asyncio
async def test_sets(backend):
    await backend.sadd("lto:set", "x")
    await backend.sadd("lto:set", "y")
    await backend.sadd("lto:set", "x")
    assert sorted(await backend.get_array("lto:set")) == ["x", "y"]

    await backend.srem("lto:set", "x")
    assert await backend.get_array("lto:set") == ["y"]


@pytest.mark.asyncio
async def test_counters(backend):
    assert await backend.incr_value("lto:counter") == 1
    assert await backend.incr_value("lto:counter") == 2
    assert await backend.get_multiple_values(["lto:counter", "lto:other"]) == ["2", None]


@pytest.mark.asyncio
async def test_get_multiple_values_keeps_key_order(backend):
    await backend.set_value("b", "2")
    await backend.set_value("a", "1")

    assert await backend.get_multiple_values(["a", "missing", "b"]) == ["1", None, "2"]
    assert await backend.get_multiple_values([]) == []


@pytest.mark.asyncio
async def test_tx_index_is_ordered_and_paginated(backend):
    for i in range(5):
        await backend.index_tx("transfer", "addr", f"tx{i}", 1000 + i)
    # Interleaved appends to another sequence do not disturb the order
    await backend.index_tx("transfer", "other", "tx-other", 2000)
    await backend.index_tx("transfer", "addr", "tx5", 1005)

    assert await backend.count_tx("transfer", "addr") == 6
    assert await backend.get_tx("transfer", "addr", 3, 0) == ["tx0", "tx1", "tx2"]
    assert await backend.get_tx("transfer", "addr", 3, 3) == ["tx3", "tx4", "tx5"]
    assert await backend.get_tx("transfer", "addr", 3, 6) == []


@pytest.mark.asyncio
async def test_tx_index_reindex_keeps_original_rank(backend):
    await backend.index_tx("anchor", "addr", "a", 1)
    await backend.index_tx("anchor", "addr", "b", 2)
    await backend.index_tx("anchor", "addr", "a", 1)

    assert await backend.count_tx("anchor", "addr") == 2
    assert await backend.get_tx("anchor", "addr", 10, 0) == ["a", "b"]


@pytest.mark.asyncio
async def test_sqlite_data_survives_reopen(tmp_path):
    path = str(tmp_path / "index.db")
    storage = SQLiteStorage(path)
    await storage.set_value("lto:processing-height", "10")
    await storage.index_tx("transfer", "addr", "tx0", 1)
    await storage.close()

    reopened = SQLiteStorage(path)
    assert await reopened.get_value("lto:processing-height") == "10"
    assert await reopened.get_tx("transfer", "addr", 10, 0) == ["tx0"]
    await reopened.close()


def test_sqlite_rejects_path_traversal():
    with pytest.raises(ValueError):
        SQLiteStorage("../outside.db")
