"""
Asset Resolution

Maps pool token denominations to canonical asset names and onboards unknown
denominations from chain metadata.
"""

import asyncio
from typing import Iterable, List, Sequence, TYPE_CHECKING

from core.errors import AssetLookupError, NotFoundError, RegistrationError, TransportError
from core.logging import get_logger, log_asset_summary
from core.schemas import AssetReport

if TYPE_CHECKING:
    from networks.network import Network


logger = get_logger(__name__)


class AssetResolver:
    """
    Lookup and onboarding of assets against a network's asset registry.

    Batch resolution is all or nothing: either every denomination of a pool
    has a canonical name, or NotFoundError is raised. The pool ingestor
    relies on that to park whole pools instead of registering partial ones.
    """

    def __init__(self, network: "Network"):
        self.network = network

    def resolve_all(self, denoms: Sequence[str]) -> List[str]:
        """
        Resolve denominations to canonical names, preserving order.

        Raises:
            NotFoundError: If any denomination is unknown
        """
        names = self.network.asset_registry.get_names_by_denoms(denoms)

        # Guard against registries that hand back partial mappings
        if names is None or len(names) != len(denoms) or not all(names):
            resolved = names or []
            missing = [
                denom for i, denom in enumerate(denoms)
                if i >= len(resolved) or not resolved[i]
            ]
            raise NotFoundError(missing or denoms)

        return list(names)

    async def register_if_absent(self, denom: str) -> bool:
        """
        Register a denomination from chain metadata unless already known.

        Returns:
            True if a registration happened, False if the denom was known

        Raises:
            AssetLookupError: If chain metadata has no entry for the denom
            TransportError: If chain metadata could not be fetched
            RegistrationError: If the registry rejects the new entry
        """
        if self.network.asset_registry.has_denom(denom):
            return False

        await self.network.register_native_asset(denom)
        return True

    async def register_all(self, denoms: Iterable[str], exchange_name: str) -> AssetReport:
        """
        Register every distinct denomination concurrently.

        Per-denomination failures are logged and recorded; they never abort
        the other registrations. Unexpected errors propagate.
        """
        distinct = list(dict.fromkeys(denoms))
        report = AssetReport(exchange=exchange_name, network_id=self.network.network_id)

        async def register(denom: str) -> None:
            try:
                if await self.register_if_absent(denom):
                    report.registered.append(denom)
                else:
                    report.known.append(denom)
            except (AssetLookupError, TransportError, RegistrationError) as e:
                logger.warning(f"couldn't register asset {denom}: {e}")
                report.failed.append(denom)

        await asyncio.gather(*(register(denom) for denom in distinct))

        log_asset_summary(report)
        return report
