"""
Redis storage adapter for the LTO Chain Indexer

This module provides the networked storage backend using Redis. Documents are
stored as JSON strings, sets as Redis sets, and every ranked transaction
sequence as a sorted set whose scores come from one global counter, so ranks
are strictly increasing across all sequences.
"""

import json
import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ltoindexer.core.errors import StorageUnavailable
from ltoindexer.storage.base import StorageInterface

logger = logging.getLogger(__name__)


class RedisStorageAdapter(StorageInterface):
    """Redis-based storage adapter for index data"""

    name = "redis"

    TX_PREFIX = "lto:tx:"
    TX_RANK_KEY = "lto:tx:rank"

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0, password: str = None,
                 client: Redis = None, **kwargs):
        """
        Initialize Redis storage adapter
        
        Args:
            host: Redis server host
            port: Redis server port
            db: Redis database number
            password: Redis password (if required)
            client: Pre-built client (used instead of host/port/db when given)
            **kwargs: Additional Redis connection parameters
        """
        self.host = host
        self.port = port
        self.db = db

        if client is not None:
            self.redis_client = client
        else:
            connection_params = {
                'host': host,
                'port': port,
                'db': db,
                'decode_responses': True,
                **kwargs
            }
            if password:
                connection_params['password'] = password
            self.redis_client = Redis(**connection_params)

    def _get_tx_key(self, tx_type: str, address: str) -> str:
        """Get Redis key for a ranked transaction sequence"""
        return f"{self.TX_PREFIX}{tx_type}:{address}"

    def _unavailable(self, operation: str, key: str, error: Exception) -> StorageUnavailable:
        logger.error(f"Redis {operation} failed for {key} at {self.host}:{self.port}: {error}")
        return StorageUnavailable(f"Redis {operation} failed: {error}", backend=self.name)

    async def get_object(self, key: str) -> dict[str, Any]:
        try:
            value = await self.redis_client.get(key)
        except RedisError as e:
            raise self._unavailable("get", key, e)
        return json.loads(value) if value else {}

    async def add_object(self, key: str, value: dict[str, Any]) -> None:
        try:
            await self.redis_client.set(key, json.dumps(value))
        except RedisError as e:
            raise self._unavailable("set", key, e)

    async def get_value(self, key: str) -> str | None:
        try:
            return await self.redis_client.get(key)
        except RedisError as e:
            raise self._unavailable("get", key, e)

    async def set_value(self, key: str, value: str) -> None:
        try:
            await self.redis_client.set(key, str(value))
        except RedisError as e:
            raise self._unavailable("set", key, e)

    async def del_value(self, key: str) -> None:
        try:
            await self.redis_client.delete(key)
        except RedisError as e:
            raise self._unavailable("del", key, e)

    async def sadd(self, key: str, member: str) -> None:
        try:
            await self.redis_client.sadd(key, member)
        except RedisError as e:
            raise self._unavailable("sadd", key, e)

    async def srem(self, key: str, member: str) -> None:
        try:
            await self.redis_client.srem(key, member)
        except RedisError as e:
            raise self._unavailable("srem", key, e)

    async def get_array(self, key: str) -> list[str]:
        try:
            return list(await self.redis_client.smembers(key))
        except RedisError as e:
            raise self._unavailable("smembers", key, e)

    async def incr_value(self, key: str) -> int:
        try:
            return int(await self.redis_client.incr(key))
        except RedisError as e:
            raise self._unavailable("incr", key, e)

    async def get_multiple_values(self, keys: list[str]) -> list[str | None]:
        if not keys:
            return []
        try:
            return list(await self.redis_client.mget(keys))
        except RedisError as e:
            raise self._unavailable("mget", keys[0], e)

    async def index_tx(self, tx_type: str, address: str, transaction_id: str, timestamp: int) -> None:
        key = self._get_tx_key(tx_type, address)
        try:
            rank = await self.redis_client.incr(self.TX_RANK_KEY)
            # NX keeps an already indexed transaction at its original rank
            await self.redis_client.zadd(key, {transaction_id: rank}, nx=True)
        except RedisError as e:
            raise self._unavailable("zadd", key, e)

    async def get_tx(self, tx_type: str, address: str, limit: int, offset: int) -> list[str]:
        if limit <= 0:
            return []
        key = self._get_tx_key(tx_type, address)
        start = int(offset)
        stop = start + int(limit) - 1
        try:
            return list(await self.redis_client.zrange(key, start, stop))
        except RedisError as e:
            raise self._unavailable("zrange", key, e)

    async def count_tx(self, tx_type: str, address: str) -> int:
        key = self._get_tx_key(tx_type, address)
        try:
            return int(await self.redis_client.zcard(key))
        except RedisError as e:
            raise self._unavailable("zcard", key, e)

    async def close(self) -> None:
        """Close Redis connection"""
        try:
            await self.redis_client.aclose()
            logger.info("Redis connection closed")
        except RedisError as e:
            logger.error(f"Failed to close Redis connection: {e}")
