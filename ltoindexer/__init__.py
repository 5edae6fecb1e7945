"""
LTO Chain Indexer
=================

Scans blocks from an LTO node and maintains derived indexes (anchors, verification
methods, trust network roles, associations and per-address transaction history)
in a pluggable storage backend.
"""

from ltoindexer.units.version import get_version

VERSION = (0, 4, 0, "final", 0)

__version__ = get_version(VERSION)

__all__ = ["VERSION", "__version__"]
