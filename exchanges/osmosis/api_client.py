"""
Osmosis REST API Client

Fetches the two documents the Osmosis backend is built from:
- The pool list (LCD gamm module)
- Trailing pool volumes (optional, enables volume ranking)

Both are returned as-is, validated into our schemas; ranking happens in the
exchange.

Usage:
    async with OsmosisAPIClient(pool_url, volume_url) as client:
        pool_list = await client.get_pool_list()
        volume_list = await client.get_volume_list()
"""

from typing import Optional

from core.http_client import JSONHttpClient
from core.logging import get_logger
from core.schemas import PoolVolumeList, RawPoolList
from core.utils.time import to_utc_datetime


class OsmosisAPIClient(JSONHttpClient):
    """
    Async HTTP client for the Osmosis pool and volume endpoints.

    Attributes:
        pool_url: Pool list endpoint
        volume_url: Volume endpoint, None when volume ranking is disabled
    """

    def __init__(self, pool_url: str, volume_url: Optional[str] = None, **kwargs):
        super().__init__(source="osmosis", **kwargs)
        self.pool_url = pool_url
        self.volume_url = volume_url or None
        self.logger = get_logger(__name__)

    async def get_pool_list(self) -> RawPoolList:
        """
        Fetch all pools.

        Response Format:
            {
              "pools": [{"@type": "...", "id": "1", "pool_assets": [...], ...}],
              "pagination": {"next_key": null, "total": "1"}
            }

        Raises:
            TransportError: If the request fails
        """
        self.logger.info("Fetching Osmosis pool list")
        data = await self.fetch_json(self.pool_url)
        pool_list = RawPoolList.model_validate(data)
        self.logger.info(f"Fetched {len(pool_list.pools)} Osmosis pools")
        return pool_list

    async def get_volume_list(self) -> PoolVolumeList:
        """
        Fetch trailing volumes for the most traded pools.

        Response Format:
            {
              "last_update_at": 1680000000,
              "data": [
                {"pool_id": "1", "volume_24h": 1.0, "volume_7d": 7.0,
                 "fees_spent_24h": 0.1, "fees_spent_7d": 0.7, "fees_percentage": "0.2%"}
              ]
            }

        Raises:
            RuntimeError: If no volume URL is configured
            TransportError: If the request fails
        """
        if not self.volume_url:
            raise RuntimeError("Volume URL not configured")

        self.logger.info("Fetching Osmosis pool volumes")
        data = await self.fetch_json(self.volume_url)
        volume_list = PoolVolumeList.model_validate(data)

        updated = ""
        if volume_list.last_update_at:
            updated = f" (updated {to_utc_datetime(volume_list.last_update_at).isoformat()})"
        self.logger.info(f"Fetched volumes for {len(volume_list.data)} pools{updated}")
        return volume_list
