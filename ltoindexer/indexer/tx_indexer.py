"""
Generic transaction indexing.

Every transaction is added to the ranked index of its type under the sender,
and for transfer-like types also under each recipient, so the history of an
address can be paged per transaction type. Daily statistics are counted per
type, and the public key of the sender is remembered.
"""

import logging

from ltoindexer.core.secure_logging import sanitize_for_log
from ltoindexer.core.transaction import Transaction
from ltoindexer.core.transaction_types import get_type_name, RECIPIENT_INDEXED_TYPES
from ltoindexer.storage.storage_service import StorageService, DAY_MS

logger = logging.getLogger(__name__)


class TxIndexer:
    """Indexes transactions by type and address"""

    def __init__(self, storage: StorageService):
        self.storage = storage

    async def index(self, transaction: Transaction) -> None:
        tx_type = get_type_name(transaction.type)
        if tx_type is None:
            logger.debug(f"index: unknown type {transaction.type} for {sanitize_for_log(transaction.id)}")
            return

        addresses = [transaction.sender] if transaction.sender else []
        if tx_type in RECIPIENT_INDEXED_TYPES:
            addresses.extend(transaction.recipients())

        for address in addresses:
            await self.storage.index_tx(tx_type, address, transaction.id, transaction.timestamp)

        # Not idempotent: a block processed twice is counted twice
        await self.storage.incr_tx_stats(tx_type, transaction.timestamp // DAY_MS)

        if transaction.sender and transaction.sender_public_key:
            await self.storage.save_public_key(transaction.sender, transaction.sender_public_key)
