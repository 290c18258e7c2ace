"""
Exchange Interface: Abstract Contract for All DEX Backends

This module defines the abstract base class that every DEX backend must
implement. The scrape orchestration (ExchangeManager, the HTTP API) only ever
talks to ExchangeInterface, so adding a backend never touches the pipeline.

Example:
    class OsmosisExchange(ExchangeInterface):
        name = "osmosis"

        async def register_assets(self, network):
            # Onboard every denomination seen in the pool list
            ...

        async def register_pools(self, network):
            # Rank, classify, resolve and commit pools
            ...

    # The orchestrator uses every backend the same way:
    exchange = manager.get_exchange("osmosis")
    await exchange.register_assets(network)
    await exchange.register_pools(network)

Optional hooks:
    - register_contracts: exchange-wide contracts (default: nothing to do)
    - staking_contract_entry: per-pool staking contract registered together
      with the pool (default: none)
"""

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from core.naming import AnsName
from core.schemas import AssetReport, ContractEntry, IngestionReport, RawPool

if TYPE_CHECKING:
    from networks.network import Network


class ExchangeInterface(ABC):
    """
    Abstract Base Class for DEX Backends

    Class Attributes:
        name: Unique identifier for the exchange (lowercase, e.g., "osmosis")

    Abstract Methods (MUST be implemented by all exchanges):
        - register_assets: Onboard the assets traded on the exchange
        - register_pools: Register the exchange's pools

    Optional Methods (can be overridden):
        - register_contracts: Register exchange-wide contracts
        - staking_contract_entry: Staking contract belonging to a pool
        - initialize: Setup connections, sessions, etc.
        - shutdown: Cleanup connections
        - health_check: Verify the exchange backend is accessible
    """

    name: str
    """Unique exchange identifier (lowercase). Example: "osmosis" """

    # ============================================
    # Registration Entry Points
    # ============================================

    @abstractmethod
    async def register_assets(self, network: "Network") -> AssetReport:
        """
        Register every distinct denomination traded in the exchange's pools.

        Must be idempotent: denominations already present in the network's
        asset registry are not registered again.

        Args:
            network: Target network and its registries

        Returns:
            AssetReport: Denominations registered, already known, and failed

        Raises:
            TransportError: If the pool list cannot be fetched
        """
        ...

    @abstractmethod
    async def register_pools(self, network: "Network") -> IngestionReport:
        """
        Register the exchange's pools into the network's pool registry.

        Pools whose assets are not all known go to the pending bucket;
        pools rejected by a registry are dropped with a warning.

        Args:
            network: Target network and its registries

        Returns:
            IngestionReport: Pool ids per outcome bucket

        Raises:
            TransportError: If the pool list cannot be fetched
        """
        ...

    async def register_contracts(self, network: "Network") -> None:
        """
        Register exchange-wide contracts (routers, factories, ...).

        This is optional; default implementation does nothing.
        """
        pass

    def staking_contract_entry(self, asset_names: List[str], pool: RawPool) -> Optional[ContractEntry]:
        """
        Staking contract to register together with a resolved pool.

        Args:
            asset_names: Canonical names of the pool's assets, in pool order
            pool: The raw pool

        Returns:
            ContractEntry, or None if the exchange has no staking contracts
        """
        return None

    def lp_token_name(self, assets: List[str]) -> str:
        """Build the LP token name using this dex name."""
        return AnsName.lp_token(self.name, assets)

    # ============================================
    # Optional Lifecycle Methods
    # ============================================

    async def initialize(self) -> None:
        """
        Initialize the exchange backend (HTTP sessions, ...).

        This is optional; default implementation does nothing. Should be
        idempotent.
        """
        pass

    async def shutdown(self) -> None:
        """
        Release resources held by the exchange backend.

        This is optional; default implementation does nothing.
        """
        pass

    async def health_check(self) -> bool:
        """
        Check if the exchange backend is reachable.

        Returns:
            bool: True if reachable; default implementation returns True
        """
        return True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"
