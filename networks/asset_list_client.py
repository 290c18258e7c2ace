"""
Chain Asset List Client

Fetches the published asset list of a chain (symbol, base denom and IBC
traces for every asset) so that newly seen denominations can be named.

Source:
    https://github.com/osmosis-labs/assetlists
    {chain_id}/{chain_id}.assetlist.json

Response Format (trimmed):
    {
      "chain_name": "osmosis",
      "assets": [
        {
          "base": "ibc/27394FB092D2ECCD56123C74F36E4C1F926001CEADA9CA97EA622B25F41E5EB2",
          "symbol": "ATOM",
          "traces": [
            {"type": "ibc", "counterparty": {"chain_name": "cosmoshub", "base_denom": "uatom"}}
          ]
        }
      ]
    }

Each chain's list is fetched at most once per client instance.
"""

import asyncio
from typing import Dict, Optional

from core.http_client import JSONHttpClient
from core.logging import get_logger
from core.schemas import AssetList, AssetListEntry


class AssetListClient(JSONHttpClient):
    """
    Async client for chain asset lists.

    Example:
        >>> async with AssetListClient() as client:
        ...     asset = await client.find_asset("osmosis-1", "uosmo")
        ...     print(asset.symbol)
        OSMO
    """

    def __init__(self, url_template: Optional[str] = None, **kwargs):
        super().__init__(source="assetlist", **kwargs)
        if url_template is None:
            from core.config import settings
            url_template = settings.asset_list_url

        self.url_template = url_template
        self.logger = get_logger(__name__)
        self._lists: Dict[str, AssetList] = {}
        self._lock = asyncio.Lock()

    async def get_asset_list(self, chain_id: str) -> AssetList:
        """
        Asset list of a chain, fetched on first use.

        Raises:
            TransportError: If the list cannot be fetched
        """
        async with self._lock:
            if chain_id not in self._lists:
                url = self.url_template.format(chain_id=chain_id)
                self.logger.info(f"Fetching asset list for {chain_id}")
                data = await self.fetch_json(url)
                asset_list = AssetList.model_validate(data)
                self.logger.info(f"Fetched {len(asset_list.assets)} assets for {chain_id}")
                self._lists[chain_id] = asset_list
            return self._lists[chain_id]

    async def find_asset(self, chain_id: str, denom: str) -> Optional[AssetListEntry]:
        """Asset whose base denom is `denom`, or None."""
        asset_list = await self.get_asset_list(chain_id)
        for asset in asset_list.assets:
            if asset.base == denom:
                return asset
        return None
