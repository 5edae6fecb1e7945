"""
Utility units for the LTO Chain Indexer.
"""

from ltoindexer.units.version import get_version

__all__ = ["get_version"]
