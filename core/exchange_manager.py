"""
Exchange Manager

Holds one instance of every DEX backend, keyed by lowercase name, and runs
scrapes against a network.

Scrape order per exchange:
    register_assets -> register_contracts -> register_pools

Assets go first so that pools find their canonical names. Different
exchanges are scraped concurrently; each keeps its own pool-list cache.

Example Usage:
    manager = ExchangeManager()
    await manager.initialize_all()
    reports = await manager.scrape(network)
    await manager.shutdown_all()
"""

import asyncio
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from core.exchange_interface import ExchangeInterface
from core.logging import logger
from core.schemas import ScrapeReport

if TYPE_CHECKING:
    from networks.network import Network


class ExchangeManager:
    """
    Registry of DEX backends.

    Attributes:
        exchanges: Exchange instances by lowercase name
                   Example: {"osmosis": OsmosisExchange()}

    Example:
        >>> manager = ExchangeManager()
        >>> manager.list_exchanges()
        ['osmosis']
    """

    def __init__(self, exchanges: Optional[Iterable[ExchangeInterface]] = None):
        """
        Args:
            exchanges: Exchange instances to manage. Defaults to every
                       backend shipped with the project.
        """
        if exchanges is None:
            # Import here to avoid circular imports
            from exchanges.osmosis import OsmosisExchange

            exchanges = [OsmosisExchange()]

        self.exchanges: Dict[str, ExchangeInterface] = {
            exchange.name.lower(): exchange for exchange in exchanges
        }

        logger.info(f"ExchangeManager ready with {len(self.exchanges)} exchange(s): {', '.join(self.exchanges)}")

    # ============================================
    # Lookup
    # ============================================

    def get_exchange(self, name: str) -> ExchangeInterface:
        """
        Exchange by name, case-insensitive.

        Raises:
            ValueError: If the exchange is not supported
        """
        exchange = self.exchanges.get(name.lower())
        if exchange is None:
            available = ", ".join(self.exchanges)
            logger.error(f"Exchange '{name}' not found. Available: {available}")
            raise ValueError(f"Exchange '{name}' is not supported. Available exchanges: {available}")
        return exchange

    def has_exchange(self, name: str) -> bool:
        return name.lower() in self.exchanges

    def list_exchanges(self) -> List[str]:
        return list(self.exchanges)

    # ============================================
    # Lifecycle
    # ============================================

    async def _run_hook(self, hook: str, done: str) -> None:
        """Await `hook` on every exchange; one failure does not stop the rest."""
        for name, exchange in self.exchanges.items():
            try:
                await getattr(exchange, hook)()
                logger.info(f"✓ {name} {done}")
            except Exception as e:
                logger.error(f"✗ {hook} failed for {name}: {e}")

    async def initialize_all(self) -> None:
        logger.info("Initializing exchanges...")
        await self._run_hook("initialize", "initialized")

    async def shutdown_all(self) -> None:
        logger.info("Shutting down exchanges...")
        await self._run_hook("shutdown", "shut down")

    async def health_check_all(self) -> Dict[str, bool]:
        """Health of every exchange; a raising check counts as unhealthy."""
        status = {}
        for name, exchange in self.exchanges.items():
            try:
                status[name] = await exchange.health_check()
            except Exception as e:
                logger.error(f"Health check failed for {name}: {e}")
                status[name] = False
        return status

    # ============================================
    # Scraping
    # ============================================

    async def scrape_exchange(self, exchange: ExchangeInterface, network: "Network") -> ScrapeReport:
        """
        Run one exchange against a network.

        A failure (e.g. the pool list cannot be fetched) ends this exchange's
        run and is recorded in the report's `error`.
        """
        report = ScrapeReport(exchange=exchange.name, network_id=network.network_id)
        logger.info(f"Scraping {exchange.name} on {network.network_id}")

        try:
            report.assets = await exchange.register_assets(network)
            await exchange.register_contracts(network)
            report.pools = await exchange.register_pools(network)
        except Exception as e:
            logger.error(f"✗ Scrape of {exchange.name} on {network.network_id} failed: {e}")
            report.error = str(e)

        return report

    async def scrape(self, network: "Network", names: Optional[Iterable[str]] = None) -> Dict[str, ScrapeReport]:
        """
        Scrape several exchanges concurrently.

        Args:
            network: Target network and its registries
            names: Exchanges to run (default: all)

        Returns:
            Dict[str, ScrapeReport]: One report per exchange

        Raises:
            ValueError: If a requested exchange is not supported
        """
        selected = [self.get_exchange(name) for name in names] if names else list(self.exchanges.values())

        reports = await asyncio.gather(
            *(self.scrape_exchange(exchange, network) for exchange in selected)
        )
        return {report.exchange: report for report in reports}

    def __repr__(self) -> str:
        return f"<ExchangeManager(exchanges={self.list_exchanges()})>"

    def __len__(self) -> int:
        return len(self.exchanges)


# ============================================
# Global Manager Instance
# ============================================

_manager: Optional[ExchangeManager] = None


def get_manager() -> ExchangeManager:
    """Process-wide ExchangeManager, created on first call."""
    global _manager
    if _manager is None:
        _manager = ExchangeManager()
    return _manager
