"""
Networked storage adapters.
"""

from ltoindexer.adapters.storage.redis_storage import RedisStorageAdapter

__all__ = ["RedisStorageAdapter"]
