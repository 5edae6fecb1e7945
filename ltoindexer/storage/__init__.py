"""
Storage backends and the storage service for the LTO Chain Indexer.
"""

import logging

from ltoindexer.config.settings import Settings, STORAGE_BACKENDS
from ltoindexer.storage.base import StorageInterface
from ltoindexer.storage.memory_storage import MemoryStorage
from ltoindexer.storage.sqlite_storage import SQLiteStorage
from ltoindexer.storage.storage_service import StorageService

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> StorageInterface:
    """Create the backend selected by the settings"""
    config = settings.get_storage_config()
    backend = config["backend"]

    if backend == "redis":
        from ltoindexer.adapters.storage.redis_storage import RedisStorageAdapter
        redis_config = config["redis"]
        storage = RedisStorageAdapter(
            host=redis_config["host"],
            port=redis_config["port"],
            db=redis_config["db"],
            password=redis_config["password"]
        )
    elif backend == "sqlite":
        storage = SQLiteStorage(config["sqlite_path"])
    elif backend == "memory":
        storage = MemoryStorage()
    else:
        raise ValueError(f"Unknown storage backend '{backend}', expected one of: {', '.join(STORAGE_BACKENDS)}")

    logger.info(f"Using {storage.name} storage backend")
    return storage


def create_storage_service(settings: Settings) -> StorageService:
    """Create the storage service with the configured backend"""
    return StorageService(create_storage(settings))


__all__ = [
    "StorageInterface",
    "MemoryStorage",
    "SQLiteStorage",
    "StorageService",
    "create_storage",
    "create_storage_service"
]
