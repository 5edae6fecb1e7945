"""
Transaction dispatcher for the LTO Chain Indexer.

Routes each transaction to the indexers that apply to its type:

- every transaction goes through the generic transaction indexer,
- anchor transactions (legacy data transactions and native anchor
  transactions) record their hashes,
- association transactions update either the verification methods or the
  association graph and trust network roles.
"""

import logging
from typing import Iterable

from ltoindexer.core.encoder import hex_encode, base64_decode, base58_decode
from ltoindexer.core.errors import MalformedTransaction
from ltoindexer.core.secure_logging import sanitize_for_log
from ltoindexer.core.transaction import Transaction
from ltoindexer.core.transaction_types import (
    LEGACY_ANCHOR_TYPE,
    NATIVE_ANCHOR_TYPE,
    ASSOCIATION_INVOKE_TYPE,
    ASSOCIATION_TRANSACTION_TYPES
)
from ltoindexer.indexer.association import AssociationGraph
from ltoindexer.indexer.trust_network import TrustNetworkService
from ltoindexer.indexer.tx_indexer import TxIndexer
from ltoindexer.indexer.verification_method import VerificationMethodService, is_verification_method
from ltoindexer.storage.storage_service import StorageService

logger = logging.getLogger(__name__)

ANCHOR_TOKEN = "⚓"
BASE64_PREFIX = "base64:"


class TransactionDispatcher:
    """Classifies transactions by type and hands them to the matching indexers"""

    def __init__(
            self,
            storage: StorageService,
            tx_indexer: TxIndexer,
            verification_methods: VerificationMethodService,
            associations: AssociationGraph,
            trust_network: TrustNetworkService,
            anchor_types: Iterable[int] = (LEGACY_ANCHOR_TYPE, NATIVE_ANCHOR_TYPE),
            anchor_token: str = ANCHOR_TOKEN
    ):
        self.storage = storage
        self.tx_indexer = tx_indexer
        self.verification_methods = verification_methods
        self.associations = associations
        self.trust_network = trust_network
        self.anchor_types = frozenset(anchor_types)
        self.anchor_token = anchor_token

    @classmethod
    def create(cls, storage: StorageService, settings) -> 'TransactionDispatcher':
        """Build a dispatcher with its indexers from settings"""
        return cls(
            storage=storage,
            tx_indexer=TxIndexer(storage),
            verification_methods=VerificationMethodService(storage),
            associations=AssociationGraph(storage),
            trust_network=TrustNetworkService(storage, settings.get_trust_network_roles()),
            anchor_types=settings.ANCHOR_TRANSACTION_TYPES,
            anchor_token=settings.ANCHOR_TOKEN
        )

    async def dispatch(self, transaction: Transaction) -> None:
        await self.tx_indexer.index(transaction)

        if transaction.type in self.anchor_types:
            await self.index_anchors(transaction)

        if transaction.type in ASSOCIATION_TRANSACTION_TYPES:
            await self.index_association(transaction)

    async def index_anchors(self, transaction: Transaction) -> None:
        if transaction.type == LEGACY_ANCHOR_TYPE:
            for item in transaction.data:
                if item.key != self.anchor_token:
                    continue
                await self._save_anchor(transaction, item.value, self._decode_legacy_anchor)

        elif transaction.type == NATIVE_ANCHOR_TYPE:
            # Awaited one by one so every anchor is stored before the block is checkpointed
            for anchor in transaction.anchors:
                await self._save_anchor(transaction, anchor, self._decode_native_anchor)

    @staticmethod
    def _decode_legacy_anchor(value) -> str:
        if not isinstance(value, str):
            raise MalformedTransaction(f"Anchor value must be a string, got {type(value).__name__}")
        return hex_encode(base64_decode(value.replace(BASE64_PREFIX, "", 1)))

    @staticmethod
    def _decode_native_anchor(value) -> str:
        return hex_encode(base58_decode(value))

    async def _save_anchor(self, transaction: Transaction, value, decode) -> None:
        try:
            hex_hash = decode(value)
            if not hex_hash:
                raise MalformedTransaction("Empty anchor hash")
        except MalformedTransaction as e:
            logger.warning(
                f"anchor: skipping malformed anchor in transaction {sanitize_for_log(transaction.id)}: {e}"
            )
            return

        logger.info(f"anchor: save hash {hex_hash} with transaction {sanitize_for_log(transaction.id)}")
        await self.storage.save_anchor(hex_hash, transaction.id)

    async def index_association(self, transaction: Transaction) -> None:
        invoke = transaction.type == ASSOCIATION_INVOKE_TYPE

        if is_verification_method(transaction.association_type):
            if invoke:
                await self.verification_methods.index(transaction)
            else:
                await self.verification_methods.revoke(transaction)
            return

        party = transaction.counterparty
        if not transaction.sender or not party:
            logger.debug(f"association: skipping {sanitize_for_log(transaction.id)}, no party")
            return

        if invoke:
            await self.associations.add_association(transaction.sender, party)
        else:
            await self.associations.remove_association(transaction.sender, party)

        await self.trust_network.index(transaction)
