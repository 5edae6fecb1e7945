"""
HTTP client for the LTO public node API.

Only the two calls the monitor needs are implemented: the current chain height
and a block at a given height.
"""

import logging
from typing import Any

import httpx

from ltoindexer.core.errors import NodeUnavailable
from ltoindexer.core.transaction import Block

logger = logging.getLogger(__name__)


class NodeClient:
    """Async client for an LTO node"""

    def __init__(self, url: str, api_key: str = "", timeout: float = 30.0, client: httpx.AsyncClient = None):
        """
        Args:
            url: Base URL of the node (e.g. https://nodes.lto.network)
            api_key: Optional node API key, sent as X-API-Key
            timeout: Request timeout in seconds
            client: Pre-built client (tests use a MockTransport)
        """
        self.url = url.rstrip("/")
        headers = {"X-API-Key": api_key} if api_key else {}
        self.client = client or httpx.AsyncClient(base_url=self.url, headers=headers, timeout=timeout)

    async def _get(self, path: str) -> Any:
        try:
            response = await self.client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise NodeUnavailable(
                f"Node returned {e.response.status_code} for {path}",
                status_code=e.response.status_code
            )
        except (httpx.HTTPError, ValueError) as e:
            raise NodeUnavailable(f"Request to node failed for {path}: {e}")

    async def get_last_block_height(self) -> int:
        data = await self._get("/blocks/height")
        return int(data["height"])

    async def get_block(self, height: int) -> Block:
        data = await self._get(f"/blocks/at/{height}")
        if "height" not in data:
            raise NodeUnavailable(f"Block {height} not available: {data}")
        return Block.from_dict(data)

    async def close(self) -> None:
        await self.client.aclose()
