"""
Configuration for the LTO Chain Indexer.
"""

from ltoindexer.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
