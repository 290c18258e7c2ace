"""
Network Context

A Network bundles everything the ingestion pipeline needs to know about one
blockchain: its identifiers, its registries, and how to onboard a native
asset from chain metadata.

Usage:
    async with AssetListClient() as asset_lists:
        network = Network("osmosis-1", "osmosis", asset_lists)
        await manager.scrape(network)
        print(network.export())
"""

from typing import Any, Dict, Optional

from core.errors import AssetLookupError
from core.logging import get_logger
from core.naming import AnsName
from core.registry import AssetRegistry, ContractRegistry, PoolRegistry
from core.schemas import AssetEntry, AssetInfo
from networks.asset_list_client import AssetListClient


class Network:
    """
    One blockchain and its name service registries.

    Attributes:
        network_id: Chain id (e.g., "osmosis-1"), used in logs and asset list URLs
        chain_name: Chain registry name (e.g., "osmosis"), prefix of native asset names
        asset_registry: Canonical asset names
        pool_registry: Registered and pending pools
        contract_registry: Registered contracts
    """

    def __init__(
        self,
        network_id: str,
        chain_name: str,
        asset_list_client: Optional[AssetListClient] = None,
        asset_registry: Optional[AssetRegistry] = None,
        pool_registry: Optional[PoolRegistry] = None,
        contract_registry: Optional[ContractRegistry] = None,
    ):
        self.network_id = network_id
        self.chain_name = chain_name
        self.asset_list_client = asset_list_client
        self.asset_registry = asset_registry or AssetRegistry()
        self.pool_registry = pool_registry or PoolRegistry()
        self.contract_registry = contract_registry or ContractRegistry()
        self.logger = get_logger(__name__)

    async def register_native_asset(self, denom: str) -> AssetEntry:
        """
        Onboard a native denomination using the chain asset list.

        The asset is named after the chain it originates from: IBC assets use
        the counterparty chain of their trace, other assets this chain.

        Returns:
            AssetEntry: The registered entry

        Raises:
            AssetLookupError: If the asset list has no entry for the denom
            TransportError: If the asset list cannot be fetched
            RegistrationError: If the name is already bound to another asset
        """
        if self.asset_list_client is None:
            raise RuntimeError(f"Network {self.network_id} has no asset list client")

        asset = await self.asset_list_client.find_asset(self.network_id, denom)
        if asset is None:
            raise AssetLookupError(denom, self.network_id)

        entry = AssetEntry(
            name=AnsName.asset(asset.origin_chain or self.chain_name, asset.symbol),
            info=AssetInfo.native(denom)
        )
        self.asset_registry.register(entry)
        self.logger.info(f"Registered {entry.name} ({denom}) on {self.network_id}")
        return entry

    def export(self) -> Dict[str, Any]:
        """All registry contents as JSON-friendly dicts."""
        pools = self.pool_registry.export()
        return {
            "network_id": self.network_id,
            "assets": self.asset_registry.export(),
            "contracts": self.contract_registry.export(),
            "pools": pools["pools"],
            "unknown_pools": pools["unknown"],
        }

    def __repr__(self) -> str:
        return f"<Network(network_id='{self.network_id}', chain_name='{self.chain_name}')>"
