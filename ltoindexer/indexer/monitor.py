"""
Block monitor for the LTO Chain Indexer.

The monitor follows the chain: on every pass it replays all blocks between the
last checkpoint and the node's current height, in height order, and saves the
checkpoint after each block once all of its transactions are indexed. A crash
therefore replays at most the block that was in flight.
"""

import asyncio
import logging
from enum import Enum

from ltoindexer.core.transaction import Block, Transaction
from ltoindexer.indexer.dispatcher import TransactionDispatcher
from ltoindexer.node.client import NodeClient
from ltoindexer.storage.storage_service import StorageService

logger = logging.getLogger(__name__)


class MonitorState(Enum):
    """Observable states of the monitor"""
    IDLE = "idle"
    SCANNING = "scanning"


class BlockMonitor:
    """
    Resumable block scanning loop.

    Attributes:
        state: IDLE or SCANNING; a pass is never started while one is running
        last_block: Last height this process knows to be processed
    """

    def __init__(self, settings, node: NodeClient, storage: StorageService, dispatcher: TransactionDispatcher):
        self.settings = settings
        self.node = node
        self.storage = storage
        self.dispatcher = dispatcher
        self.state = MonitorState.IDLE
        self.last_block: int | None = None

    @property
    def processing(self) -> bool:
        return self.state == MonitorState.SCANNING

    async def start(self) -> None:
        """
        Resolve the starting height and scan forever.

        Errors abort the loop and propagate to the caller; restarting is left to
        the process supervisor.
        """
        try:
            self.last_block = await self.resolve_starting_height()
            logger.info(f"monitor: starting after block {self.last_block}")
            await self.run()
        except Exception:
            self.state = MonitorState.IDLE
            raise

    async def resolve_starting_height(self) -> int:
        """Checkpoint if present, otherwise the configured height ("last" = node height)"""
        checkpoint = await self.storage.get_processing_height()
        if checkpoint is not None:
            return checkpoint

        starting_block = self.settings.get_node_starting_block()
        if starting_block == "last":
            return await self.node.get_last_block_height()
        return int(starting_block)

    async def run(self) -> None:
        interval = self.settings.get_monitor_interval() / 1000

        while True:
            if not self.processing:
                await self.check_new_block()
            await asyncio.sleep(interval)

    async def check_new_block(self) -> int:
        """
        Run one scan pass.

        Returns:
            Number of blocks processed
        """
        self.state = MonitorState.SCANNING
        try:
            current_height = await self.node.get_last_block_height()
            checkpoint = await self.storage.get_processing_height()

            base = self.last_block if self.last_block is not None else 0
            if checkpoint is not None:
                base = max(checkpoint, base)

            processed = 0
            for height in range(base + 1, current_height + 1):
                block = await self.node.get_block(height)
                await self.process_block(block)
                await self.storage.save_processing_height(height)
                self.last_block = height
                processed += 1

            return processed
        finally:
            self.state = MonitorState.IDLE

    async def process_block(self, block: Block) -> None:
        logger.debug(f"monitor: processing block {block.height} ({len(block.transactions)} transactions)")

        for transaction in block.transactions:
            await self.process_transaction(transaction)

    async def process_transaction(self, transaction: Transaction) -> None:
        await self.dispatcher.dispatch(transaction)
