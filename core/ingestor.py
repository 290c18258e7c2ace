"""
Pool Ingestion

Runs every ranked pool through classify -> resolve -> commit and sorts it into
exactly one outcome bucket:

    skipped    pool type unknown (already diagnosed by the classifier)
    pending    some asset is not onboarded yet; parked in the unknown bucket
    dropped    the contract or pool registry rejected the pool
    committed  written to the pool registry (or already there, unchanged)

Pools are independent of each other; there are no retries inside a pass.
Only errors outside the documented per-pool ones abort the run.
"""

from enum import Enum
from typing import Optional, Sequence, TYPE_CHECKING

from core.classifier import determine_pool_type
from core.errors import NotFoundError, RegistrationError
from core.logging import get_logger, log_ingestion_summary
from core.resolver import AssetResolver
from core.schemas import IngestionReport, PoolEntry, PoolId, RawPool

if TYPE_CHECKING:
    from core.exchange_interface import ExchangeInterface
    from networks.network import Network


logger = get_logger(__name__)


class PoolOutcome(str, Enum):
    COMMITTED = "committed"
    PENDING = "pending"
    DROPPED = "dropped"
    SKIPPED = "skipped"


class PoolIngestor:
    """
    Writes ranked pools of one exchange into a network's registries.

    Example:
        >>> ingestor = PoolIngestor(network)
        >>> report = ingestor.ingest(ranked.pools, exchange)
        >>> report.committed_count
        70
    """

    def __init__(self, network: "Network", resolver: Optional[AssetResolver] = None):
        self.network = network
        self.resolver = resolver or AssetResolver(network)

    def ingest(self, pools: Sequence[RawPool], exchange: "ExchangeInterface") -> IngestionReport:
        report = IngestionReport(exchange=exchange.name, network_id=self.network.network_id)

        for pool in pools:
            outcome = self.ingest_pool(pool, exchange)
            getattr(report, outcome.value).append(pool.id)

        log_ingestion_summary(report)
        return report

    def ingest_pool(self, pool: RawPool, exchange: "ExchangeInterface") -> PoolOutcome:
        denoms = pool.denoms
        pool_type = determine_pool_type(pool)
        if pool_type is None:
            return PoolOutcome.SKIPPED

        dex = exchange.name.lower()
        pool_id = PoolId.number(pool.id)

        try:
            asset_names = self.resolver.resolve_all(denoms)
        except NotFoundError as e:
            logger.info(f"Skipping pool {pool.id} because not all denoms are registered: {', '.join(e.denoms)}")
            self.network.pool_registry.unknown(
                PoolEntry(pool_id=pool_id, dex=dex, pool_type=pool_type, assets=denoms, resolved=False)
            )
            return PoolOutcome.PENDING

        entry = PoolEntry(pool_id=pool_id, dex=dex, pool_type=pool_type, assets=asset_names)

        # A pool and its staking contract are committed together or not at all
        existing = self.network.pool_registry.get(dex, pool_id)
        if existing is not None and existing != entry:
            logger.warning(f"Failed to register pool {pool.id}: id already registered with {', '.join(existing.assets)}")
            return PoolOutcome.DROPPED

        contract = exchange.staking_contract_entry(asset_names, pool)
        contract_added = False
        if contract is not None:
            try:
                contract_added = self.network.contract_registry.register(contract)
            except RegistrationError as e:
                logger.warning(f"Failed to register staking contract for pool {pool.id}: {e}")
                return PoolOutcome.DROPPED

        try:
            self.network.pool_registry.register(entry)
        except RegistrationError as e:
            if contract_added:
                self.network.contract_registry.remove(contract.protocol, contract.name)
            logger.warning(f"Failed to register pool {pool.id}: {e}")
            return PoolOutcome.DROPPED

        logger.debug(f"Registered pool {pool.id} ({pool_type.value}): {', '.join(asset_names)}")
        return PoolOutcome.COMMITTED
