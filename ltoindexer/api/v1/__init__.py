"""
API v1 for the LTO Chain Indexer.
"""

from ltoindexer.api.v1.endpoints import router

__all__ = ["router"]
