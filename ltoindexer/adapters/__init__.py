"""
External backend adapters for the LTO Chain Indexer.
"""
