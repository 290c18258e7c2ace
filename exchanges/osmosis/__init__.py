"""
Osmosis Exchange Backend

This module implements the ExchangeInterface for Osmosis.

Osmosis pools live in the chain's pool module and are identified by a
numeric id. Only pools carrying token/weight pairs (balancer-style pools)
can be classified; other pool kinds are reported as unknown and skipped.

Data Sources:
    - Pool list:   GET {OSMOSIS_POOL_URL}   (LCD /osmosis/gamm/v1beta1/pools)
    - Pool volume: GET {OSMOSIS_VOLUME_URL} (optional)

Ranking:
    With a volume URL the top OSMOSIS_MAX_POOLS pools by 7-day volume are
    kept; without it every asset pair keeps its heaviest pool.

Caching:
    The ranked pool list is fetched once per instance and reused by both
    register_assets and register_pools. It is never refreshed.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, TYPE_CHECKING

from core.exchange_interface import ExchangeInterface
from core.ingestor import PoolIngestor
from core.logging import logger
from core.naming import AnsName
from core.ranking import PoolRanker
from core.resolver import AssetResolver
from core.schemas import AssetReport, ContractEntry, IngestionReport, RankedPoolList, RawPool
from .api_client import OsmosisAPIClient

if TYPE_CHECKING:
    from networks.network import Network


_UNSET = object()


class OsmosisExchange(ExchangeInterface):
    """
    Osmosis DEX Backend

    Attributes:
        name: Exchange identifier ("osmosis")
        pool_url: Pool list endpoint
        volume_url: Volume endpoint (None = rank by weight)
        ranker: PoolRanker applied to the fetched pools
        client: Long-lived API client, set by initialize() or injected

    Example:
        >>> exchange = OsmosisExchange()
        >>> await exchange.initialize()
        >>> await exchange.register_assets(network)
        >>> report = await exchange.register_pools(network)
        >>> await exchange.shutdown()
    """

    name = "osmosis"

    def __init__(
        self,
        pool_url: Optional[str] = None,
        volume_url: Optional[str] = _UNSET,
        max_pools: Optional[int] = _UNSET,
        client: Optional[OsmosisAPIClient] = None,
    ):
        """
        Args:
            pool_url: Pool list endpoint (default: settings)
            volume_url: Volume endpoint; None or "" disables volume ranking
                        (default: settings)
            max_pools: Volume ranking cap (default: settings)
            client: Pre-built API client, mostly for tests
        """
        # Import settings here to avoid circular imports
        from core.config import settings

        self.pool_url = pool_url or settings.osmosis_pool_url
        self.volume_url = (settings.osmosis_volume_url if volume_url is _UNSET else volume_url) or None
        self.ranker = PoolRanker(settings.osmosis_max_pools if max_pools is _UNSET else max_pools)

        self.client = client
        self._owns_client = False

        self._pool_list_cache: Optional[RankedPoolList] = None
        self._cache_lock = asyncio.Lock()

        logger.debug(f"OsmosisExchange created (pool_url={self.pool_url}, volume_url={self.volume_url})")

    # ============================================
    # Lifecycle
    # ============================================

    async def initialize(self) -> None:
        if self.client is not None:
            return
        logger.info("Initializing Osmosis exchange backend...")
        self.client = OsmosisAPIClient(self.pool_url, self.volume_url)
        await self.client.__aenter__()
        self._owns_client = True

    async def shutdown(self) -> None:
        if self.client is not None and self._owns_client:
            await self.client.__aexit__(None, None, None)
            self.client = None
            self._owns_client = False
            logger.info("✓ Osmosis exchange backend shut down")

    @asynccontextmanager
    async def _api(self) -> AsyncIterator[OsmosisAPIClient]:
        """The long-lived client if there is one, otherwise a one-off session."""
        if self.client is not None:
            yield self.client
        else:
            async with OsmosisAPIClient(self.pool_url, self.volume_url) as client:
                yield client

    # ============================================
    # Pool List
    # ============================================

    async def fetch_pool_list(self) -> RankedPoolList:
        """
        Fetch and rank the pool list, once per instance.

        Returns:
            RankedPoolList: The cached ranked list on every call after the first

        Raises:
            TransportError: If the pool or volume document cannot be fetched
        """
        async with self._cache_lock:
            if self._pool_list_cache is not None:
                return self._pool_list_cache

            async with self._api() as api:
                pool_list = await api.get_pool_list()
                volume_list = await api.get_volume_list() if self.volume_url else None

            self._pool_list_cache = self.ranker.rank(
                pool_list.pools,
                volume_list.data if volume_list is not None else None
            )
            return self._pool_list_cache

    # ============================================
    # Registration
    # ============================================

    async def register_assets(self, network: "Network") -> AssetReport:
        pool_list = await self.fetch_pool_list()
        denoms = [denom for pool in pool_list.pools for denom in pool.denoms]
        return await AssetResolver(network).register_all(denoms, self.name)

    async def register_pools(self, network: "Network") -> IngestionReport:
        pool_list = await self.fetch_pool_list()
        logger.info(f"Retrieved {len(pool_list)} pools for {self.name} on {network.network_id}")
        return PoolIngestor(network).ingest(pool_list.pools, self)

    def staking_contract_entry(self, asset_names: List[str], pool: RawPool) -> Optional[ContractEntry]:
        """LP shares of a pool are staked at the pool's module account."""
        if not pool.address:
            return None
        return ContractEntry(
            protocol=self.name,
            name=AnsName.staking(self.name, asset_names),
            address=pool.address
        )
