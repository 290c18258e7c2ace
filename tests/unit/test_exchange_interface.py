"""
Unit Tests for Exchange Interface and Manager

These tests verify that:
- ExchangeInterface is properly defined as an abstract class
- Dummy implementations can inherit and implement the interface
- ExchangeManager correctly manages exchange instances
- Scrapes run assets before pools and isolate failing exchanges

Run with:
    pytest tests/unit/test_exchange_interface.py -v
"""

import pytest

from core.errors import TransportError
from core.exchange_interface import ExchangeInterface
from core.exchange_manager import ExchangeManager, get_manager
from core.schemas import AssetReport, IngestionReport
from exchanges.osmosis import OsmosisExchange


# ============================================
# Dummy Exchange for Testing
# ============================================

class DummyExchange(ExchangeInterface):
    """
    Minimal implementation of ExchangeInterface for testing purposes.

    Records the order in which the registration hooks are called.
    """

    def __init__(self, name: str = "dummy", fail_with: Exception = None):
        self.name = name
        self.fail_with = fail_with
        self.calls = []

    async def register_assets(self, network) -> AssetReport:
        self.calls.append("assets")
        if self.fail_with is not None:
            raise self.fail_with
        return AssetReport(exchange=self.name, network_id=network.network_id, registered=["uosmo"])

    async def register_contracts(self, network) -> None:
        self.calls.append("contracts")

    async def register_pools(self, network) -> IngestionReport:
        self.calls.append("pools")
        return IngestionReport(exchange=self.name, network_id=network.network_id, committed=["1"])


# ============================================
# Tests for ExchangeInterface
# ============================================

class TestExchangeInterface:
    """Test the abstract interface"""

    def test_cannot_instantiate_abstract_interface(self):
        """Verify ExchangeInterface cannot be instantiated directly"""
        with pytest.raises(TypeError):
            ExchangeInterface()

    def test_default_hooks(self):
        exchange = DummyExchange()

        assert exchange.staking_contract_entry(["a", "b"], None) is None
        assert exchange.lp_token_name(["b", "a"]) == "dummy/a,b"
        assert repr(exchange) == "<DummyExchange(name='dummy')>"

    @pytest.mark.asyncio
    async def test_health_check_default_returns_true(self):
        assert await DummyExchange().health_check() is True

    def test_osmosis_implements_exchange_interface(self):
        """Verify OsmosisExchange is a subclass of ExchangeInterface"""
        exchange = OsmosisExchange(pool_url="https://pools", volume_url=None)
        assert isinstance(exchange, ExchangeInterface)
        assert exchange.name == "osmosis"


# ============================================
# Tests for ExchangeManager
# ============================================

class TestExchangeManager:
    """Test the exchange registry"""

    def test_manager_defaults_to_osmosis(self):
        manager = ExchangeManager()
        assert manager.list_exchanges() == ["osmosis"]
        assert isinstance(manager.get_exchange("osmosis"), OsmosisExchange)

    def test_manager_get_exchange_case_insensitive(self):
        manager = ExchangeManager([DummyExchange("dummy")])

        assert manager.get_exchange("dummy") is manager.get_exchange("DUMMY") is manager.get_exchange("Dummy")

    def test_manager_get_exchange_raises_for_unknown(self):
        manager = ExchangeManager([DummyExchange()])

        with pytest.raises(ValueError, match="not supported"):
            manager.get_exchange("astroport")

    def test_manager_has_exchange_returns_correct_values(self):
        manager = ExchangeManager([DummyExchange()])

        assert manager.has_exchange("dummy") is True
        assert manager.has_exchange("astroport") is False
        assert len(manager) == 1

    def test_get_manager_is_a_singleton(self):
        assert get_manager() is get_manager()

    @pytest.mark.asyncio
    async def test_health_check_all(self):
        manager = ExchangeManager([DummyExchange("a"), DummyExchange("b")])
        assert await manager.health_check_all() == {"a": True, "b": True}


class TestScrape:
    """Test scrape orchestration"""

    @pytest.mark.asyncio
    async def test_runs_assets_then_contracts_then_pools(self, network):
        exchange = DummyExchange()
        manager = ExchangeManager([exchange])

        reports = await manager.scrape(network)

        assert exchange.calls == ["assets", "contracts", "pools"]
        report = reports["dummy"]
        assert report.ok
        assert report.assets.registered == ["uosmo"]
        assert report.pools.committed == ["1"]

    @pytest.mark.asyncio
    async def test_failing_exchange_does_not_stop_others(self, network):
        broken = DummyExchange("broken", fail_with=TransportError("HTTP 502"))
        healthy = DummyExchange("healthy")
        manager = ExchangeManager([broken, healthy])

        reports = await manager.scrape(network)

        assert reports["broken"].error == "HTTP 502"
        assert reports["broken"].pools is None
        assert broken.calls == ["assets"]
        assert reports["healthy"].ok

    @pytest.mark.asyncio
    async def test_scrape_selected_exchanges(self, network):
        first, second = DummyExchange("first"), DummyExchange("second")
        manager = ExchangeManager([first, second])

        reports = await manager.scrape(network, ["SECOND"])

        assert list(reports) == ["second"]
        assert first.calls == []

    @pytest.mark.asyncio
    async def test_scrape_unknown_exchange(self, network):
        with pytest.raises(ValueError):
            await ExchangeManager([DummyExchange()]).scrape(network, ["astroport"])
