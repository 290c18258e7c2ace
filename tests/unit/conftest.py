"""
Pytest configuration for unit tests.

Provides raw pool builders and a Network backed by an in-memory asset list,
so nothing here touches the network.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from core.schemas import AssetEntry, AssetInfo, AssetListEntry, AssetTrace, RawPool, TraceCounterparty
from networks.network import Network


def build_pool(
    pool_id: str,
    assets: Optional[Sequence[Tuple[str, str]]] = None,
    total_weight: Optional[str] = None,
    smooth: Optional[dict] = None,
    address: str = "",
) -> RawPool:
    """RawPool from (denom, weight) pairs, shaped like the LCD response."""
    data = {
        "@type": "/osmosis.gamm.v1beta1.Pool",
        "address": address,
        "id": pool_id,
        "pool_params": {
            "swap_fee": "0.002000000000000000",
            "exit_fee": "0.000000000000000000",
            "smooth_weight_change_params": smooth,
        },
        "future_pool_governor": "24h",
        "total_shares": {"denom": f"gamm/pool/{pool_id}", "amount": "1000000"},
    }
    if assets is not None:
        data["pool_assets"] = [
            {"token": {"denom": denom, "amount": "1000"}, "weight": weight}
            for denom, weight in assets
        ]
    if total_weight is not None:
        data["total_weight"] = total_weight
    return RawPool.model_validate(data)


class FakeAssetListClient:
    """Stands in for AssetListClient; records every lookup."""

    def __init__(self, assets: Optional[Dict[str, AssetListEntry]] = None):
        self.assets = assets or {}
        self.lookups: List[str] = []

    async def find_asset(self, chain_id: str, denom: str) -> Optional[AssetListEntry]:
        self.lookups.append(denom)
        return self.assets.get(denom)


def asset_list_entry(base: str, symbol: str, origin: Optional[str] = None) -> AssetListEntry:
    traces = []
    if origin is not None:
        traces.append(AssetTrace(type="ibc", counterparty=TraceCounterparty(chain_name=origin)))
    return AssetListEntry(base=base, symbol=symbol, traces=traces)


@pytest.fixture
def asset_lists():
    return FakeAssetListClient({
        "uosmo": asset_list_entry("uosmo", "OSMO"),
        "ibc/ATOM": asset_list_entry("ibc/ATOM", "ATOM", origin="cosmoshub"),
        "ibc/JUNO": asset_list_entry("ibc/JUNO", "JUNO", origin="juno"),
    })


@pytest.fixture
def network(asset_lists):
    return Network("osmosis-1", "osmosis", asset_lists)


@pytest.fixture
def register_asset(network):
    """Register a native asset directly in the network's asset registry."""
    def register(denom: str, name: str) -> None:
        network.asset_registry.register(AssetEntry(name=name, info=AssetInfo.native(denom)))
    return register
