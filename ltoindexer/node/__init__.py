"""
Node access for the LTO Chain Indexer.
"""

from ltoindexer.node.client import NodeClient

__all__ = ["NodeClient"]
