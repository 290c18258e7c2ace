"""
Name Service Naming Convention

Every exchange builds registry names through these helpers so that names are
identical no matter which backend produced them.

    asset:    "{chain}>{symbol}"           e.g. "cosmoshub>atom"
    lp token: "{dex}/{asset},{asset}"      e.g. "osmosis/cosmoshub>atom,osmosis>osmo"
    staking:  "staking/{lp token}"
"""

from typing import Iterable


class AnsName:
    """Builders for canonical registry names."""

    @staticmethod
    def asset(chain_name: str, symbol: str) -> str:
        return f"{chain_name}>{symbol}".lower()

    @staticmethod
    def lp_token(dex: str, assets: Iterable[str]) -> str:
        """LP token name: dex plus the asset names in sorted order."""
        return f"{dex.lower()}/{','.join(sorted(assets))}"

    @staticmethod
    def staking(dex: str, assets: Iterable[str]) -> str:
        return f"staking/{AnsName.lp_token(dex, assets)}"
