"""
Indexers and the block monitor for the LTO Chain Indexer.
"""

from ltoindexer.indexer.association import AssociationGraph
from ltoindexer.indexer.dispatcher import TransactionDispatcher
from ltoindexer.indexer.monitor import BlockMonitor, MonitorState
from ltoindexer.indexer.trust_network import TrustNetworkService
from ltoindexer.indexer.tx_indexer import TxIndexer
from ltoindexer.indexer.verification_method import VerificationMethod, VerificationMethodService

__all__ = [
    "AssociationGraph",
    "TransactionDispatcher",
    "BlockMonitor",
    "MonitorState",
    "TrustNetworkService",
    "TxIndexer",
    "VerificationMethod",
    "VerificationMethodService"
]
