"""
Pytest configuration for the LTO Chain Indexer.

Ensures the project root is on sys.path and provides shared fixtures: an
in-memory storage service, testing settings with a small role definition
table, and a fake node serving a fixed list of blocks.
"""

import os
import sys

import pytest

# Compute project root (parent of this tests directory)
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from ltoindexer.config.settings import TestingSettings
from ltoindexer.core.errors import NodeUnavailable
from ltoindexer.core.transaction import Block
from ltoindexer.storage.memory_storage import MemoryStorage
from ltoindexer.storage.storage_service import StorageService


ROLE_DEFINITIONS = {
    "authority": {
        "description": "Trust network authority",
        "issues": [{"role": "validator", "type": 100}],
        "authorization": ["tx:anchor", "tx:association"]
    },
    "validator": {
        "issues": [{"role": "node", "type": 200}],
        "authorization": ["tx:anchor"]
    },
    "node": {
        "issues": [],
        "authorization": []
    }
}


class FakeNode:
    """Node serving a fixed chain; records requested heights"""

    def __init__(self, blocks: list[Block] = None):
        self.blocks = {block.height: block for block in blocks or []}
        self.requested: list[int] = []
        self.fail_at: int | None = None

    @property
    def height(self) -> int:
        return max(self.blocks, default=0)

    def add_block(self, block: Block):
        self.blocks[block.height] = block

    async def get_last_block_height(self) -> int:
        return self.height

    async def get_block(self, height: int) -> Block:
        self.requested.append(height)
        if height == self.fail_at or height not in self.blocks:
            raise NodeUnavailable(f"Block {height} not available")
        return self.blocks[height]

    async def close(self):
        pass


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def storage(memory_storage):
    return StorageService(memory_storage)


@pytest.fixture
def settings():
    settings = TestingSettings()
    settings.TRUST_NETWORK_ROLES = ROLE_DEFINITIONS
    settings.NODE_STARTING_BLOCK = "0"
    settings.MONITOR_INTERVAL = 1
    return settings


@pytest.fixture
def fake_node():
    return FakeNode()
