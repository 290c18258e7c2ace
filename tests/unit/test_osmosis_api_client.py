"""
Unit Tests for Osmosis API Client

These tests verify that the OsmosisAPIClient:
- Fetches the configured URLs
- Validates pool and volume documents into our schemas
- Refuses volume requests when no volume URL is configured

Run with:
    pytest tests/unit/test_osmosis_api_client.py -v
"""

import pytest
import pytest_asyncio

from core.errors import TransportError
from core.schemas import PoolVolumeList, RawPoolList
from exchanges.osmosis.api_client import OsmosisAPIClient


POOL_URL = "https://lcd.example/osmosis/gamm/v1beta1/pools"
VOLUME_URL = "https://volumes.example/fees/v1/pools"


# ============================================
# Fixtures
# ============================================

@pytest_asyncio.fixture
async def api_client():
    """Create an OsmosisAPIClient instance for testing"""
    async with OsmosisAPIClient(POOL_URL, VOLUME_URL) as client:
        yield client


# ============================================
# Tests for Pool List
# ============================================

class TestGetPoolList:
    """Tests for get_pool_list method"""

    @pytest.mark.asyncio
    async def test_returns_validated_pool_list(self, api_client, monkeypatch):
        """Verify the LCD response is parsed into RawPool objects"""
        mock_response = {
            "pools": [
                {
                    "@type": "/osmosis.gamm.v1beta1.Pool",
                    "address": "osmo1mw0ac6rwlp5r8wapwk3zs6g29h8fcscxqakdzw9emkne6c8wjp9q0t3v8t",
                    "id": "1",
                    "pool_params": {
                        "swap_fee": "0.002000000000000000",
                        "exit_fee": "0.000000000000000000",
                        "smooth_weight_change_params": None
                    },
                    "future_pool_governor": "24h",
                    "total_shares": {"denom": "gamm/pool/1", "amount": "202566047707685524082948766"},
                    "pool_assets": [
                        {"token": {"denom": "ibc/ATOM", "amount": "1813583742408"}, "weight": "536870912000000"},
                        {"token": {"denom": "uosmo", "amount": "32934163845630"}, "weight": "536870912000000"}
                    ],
                    "total_weight": "1073741824000000"
                },
                {
                    "@type": "/osmosis.gamm.poolmodels.stableswap.v1beta1.Pool",
                    "address": "osmo1stable",
                    "id": 600,
                    "pool_liquidity": [{"denom": "ibc/USDC", "amount": "100"}],
                    "scaling_factors": ["1", "1"]
                }
            ],
            "pagination": {"next_key": None, "total": "2"}
        }
        requested = []

        async def mock_fetch(url):
            requested.append(url)
            return mock_response

        monkeypatch.setattr(api_client, "fetch_json", mock_fetch)

        result = await api_client.get_pool_list()

        assert isinstance(result, RawPoolList)
        assert requested == [POOL_URL]
        assert [pool.id for pool in result.pools] == ["1", "600"]

        balancer, stable = result.pools
        assert balancer.type_url == "/osmosis.gamm.v1beta1.Pool"
        assert balancer.denoms == ["ibc/ATOM", "uosmo"]
        assert balancer.total_weight == "1073741824000000"
        assert balancer.total_shares.amount == "202566047707685524082948766"
        assert stable.pool_assets is None
        assert stable.denoms == []

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, api_client, monkeypatch):
        async def mock_fetch(url):
            raise TransportError("HTTP 500", url=url)

        monkeypatch.setattr(api_client, "fetch_json", mock_fetch)

        with pytest.raises(TransportError):
            await api_client.get_pool_list()


# ============================================
# Tests for Pool Volumes
# ============================================

class TestGetVolumeList:
    """Tests for get_volume_list method"""

    @pytest.mark.asyncio
    async def test_returns_validated_volume_list(self, api_client, monkeypatch):
        mock_response = {
            "last_update_at": 1680000000,
            "data": [
                {"pool_id": "1", "volume_24h": 1.5, "volume_7d": 10.25,
                 "fees_spent_24h": 0.1, "fees_spent_7d": 0.7, "fees_percentage": "0.2%"},
                {"pool_id": 678, "volume_7d": 3.0}
            ]
        }

        async def mock_fetch(url):
            assert url == VOLUME_URL
            return mock_response

        monkeypatch.setattr(api_client, "fetch_json", mock_fetch)

        result = await api_client.get_volume_list()

        assert isinstance(result, PoolVolumeList)
        assert [entry.pool_id for entry in result.data] == ["1", "678"]
        assert result.data[0].volume_7d == 10.25
        assert result.data[1].volume_24h == 0.0

    @pytest.mark.asyncio
    async def test_requires_volume_url(self):
        async with OsmosisAPIClient(POOL_URL, "") as client:
            assert client.volume_url is None
            with pytest.raises(RuntimeError):
                await client.get_volume_list()
