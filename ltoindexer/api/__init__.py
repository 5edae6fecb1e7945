"""
Read-only HTTP API for the LTO Chain Indexer.
"""
