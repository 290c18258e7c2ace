"""
Unit Tests for Registry Naming

Run with:
    pytest tests/unit/test_naming.py -v
"""

from core.naming import AnsName


class TestAnsName:
    """Tests for the AnsName builders"""

    def test_asset_name_is_lowercased(self):
        assert AnsName.asset("CosmosHub", "ATOM") == "cosmoshub>atom"

    def test_lp_token_sorts_assets(self):
        assert AnsName.lp_token("osmosis", ["osmosis>osmo", "cosmoshub>atom"]) == \
            "osmosis/cosmoshub>atom,osmosis>osmo"

    def test_lp_token_is_order_insensitive(self):
        assert AnsName.lp_token("Osmosis", ["b", "a"]) == AnsName.lp_token("osmosis", ["a", "b"])

    def test_staking_name(self):
        assert AnsName.staking("osmosis", ["osmosis>osmo", "cosmoshub>atom"]) == \
            "staking/osmosis/cosmoshub>atom,osmosis>osmo"
