"""
Networks Package

A Network is the target of a scrape: one blockchain with its asset, pool and
contract registries, plus the chain asset list used to name new assets.
"""

from networks.asset_list_client import AssetListClient
from networks.network import Network

__all__ = ["AssetListClient", "Network"]
