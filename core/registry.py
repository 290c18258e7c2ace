"""
In-Memory Registries

Reference implementations of the three registries a network exposes to the
ingestion pipeline:

    AssetRegistry:    canonical asset name <-> on-chain asset
    PoolRegistry:     resolved pools, plus a pending bucket for pools whose
                      assets are not onboarded yet
    ContractRegistry: named protocol contracts (e.g. LP staking contracts)

Registries are the only place where key uniqueness is enforced. They are
plain synchronous objects, so within one event loop every write is atomic.

`export()` returns JSON-friendly dicts; how they are persisted is up to the
caller.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from core.errors import DuplicateIdError, NotFoundError, RegistrationError
from core.logging import get_logger
from core.schemas import AssetEntry, ContractEntry, PoolEntry, PoolId


logger = get_logger(__name__)


class AssetRegistry:
    """
    Asset name directory.

    Each denomination maps to at most one canonical name and each name to at
    most one asset.

    Example:
        >>> registry = AssetRegistry()
        >>> registry.register(AssetEntry(name="osmosis>osmo", info=AssetInfo.native("uosmo")))
        >>> registry.get_names_by_denoms(["uosmo"])
        ['osmosis>osmo']
    """

    def __init__(self):
        self._entries: Dict[str, AssetEntry] = {}
        self._names_by_denom: Dict[str, str] = {}

    def has_denom(self, denom: str) -> bool:
        return denom in self._names_by_denom

    def get_name_by_denom(self, denom: str) -> str:
        try:
            return self._names_by_denom[denom]
        except KeyError:
            raise NotFoundError([denom]) from None

    def get_names_by_denoms(self, denoms: Sequence[str]) -> List[str]:
        """
        Resolve a batch of denominations, all or nothing.

        Raises:
            NotFoundError: Listing every denomination that is not registered
        """
        missing = [denom for denom in denoms if denom not in self._names_by_denom]
        if missing:
            raise NotFoundError(missing)
        return [self._names_by_denom[denom] for denom in denoms]

    def get(self, name: str) -> Optional[AssetEntry]:
        return self._entries.get(name)

    def register(self, entry: AssetEntry) -> bool:
        """
        Add an asset.

        Returns:
            True if added, False if the identical entry was already present

        Raises:
            RegistrationError: If the name or the denomination is already
                               bound to something else
        """
        existing = self._entries.get(entry.name)
        if existing is not None:
            if existing == entry:
                return False
            raise RegistrationError(
                f"Asset name '{entry.name}' already registered for {existing.info}, "
                f"cannot rebind to {entry.info}"
            )

        if entry.info.kind == "native":
            bound = self._names_by_denom.get(entry.info.value)
            if bound is not None:
                raise RegistrationError(
                    f"Denom {entry.info.value} already registered as '{bound}'"
                )
            self._names_by_denom[entry.info.value] = entry.name

        self._entries[entry.name] = entry
        logger.debug(f"Registered asset {entry.name} -> {entry.info}")
        return True

    def export(self) -> Dict[str, str]:
        return {name: str(entry.info) for name, entry in sorted(self._entries.items())}

    def __len__(self) -> int:
        return len(self._entries)


class PoolRegistry:
    """
    Pool name directory and pending bucket.

    Pools are keyed by (dex, pool id). A committed pool is removed from the
    pending bucket.
    """

    def __init__(self):
        self._pools: Dict[Tuple[str, PoolId], PoolEntry] = {}
        self._unknown: Dict[Tuple[str, PoolId], PoolEntry] = {}

    def register(self, entry: PoolEntry) -> bool:
        """
        Commit a resolved pool.

        Returns:
            True if added, False if the identical entry was already present

        Raises:
            RegistrationError: If the entry still references raw denominations
            DuplicateIdError: If the pool id is registered for this dex with
                              different contents
        """
        if not entry.resolved:
            raise RegistrationError(f"Pool {entry.pool_id} has unresolved assets, use unknown()")

        key = (entry.dex, entry.pool_id)
        existing = self._pools.get(key)
        if existing is not None:
            if existing == entry:
                return False
            raise DuplicateIdError(f"Pool {entry.pool_id} already registered for {entry.dex}")

        self._pools[key] = entry
        self._unknown.pop(key, None)
        return True

    def unknown(self, entry: PoolEntry) -> None:
        """Park a pool whose assets are not all registered yet."""
        self._unknown[(entry.dex, entry.pool_id)] = entry

    def get(self, dex: str, pool_id: PoolId) -> Optional[PoolEntry]:
        return self._pools.get((dex, pool_id))

    @property
    def pools(self) -> List[PoolEntry]:
        return list(self._pools.values())

    @property
    def unknown_pools(self) -> List[PoolEntry]:
        return list(self._unknown.values())

    def export(self) -> Dict[str, list]:
        def dump(entries: Dict[Tuple[str, PoolId], PoolEntry]) -> list:
            return [
                {
                    "dex": entry.dex,
                    "pool_id": str(entry.pool_id),
                    "pool_type": entry.pool_type.value,
                    "assets": list(entry.assets),
                }
                for entry in entries.values()
            ]

        return {"pools": dump(self._pools), "unknown": dump(self._unknown)}

    def __len__(self) -> int:
        return len(self._pools)


class ContractRegistry:
    """Contract directory keyed by (protocol, name)."""

    def __init__(self):
        self._contracts: Dict[Tuple[str, str], ContractEntry] = {}

    def register(self, entry: ContractEntry) -> bool:
        """
        Add a contract.

        Returns:
            True if added, False if the identical entry was already present

        Raises:
            RegistrationError: If the entry has no address
            DuplicateIdError: If the name is bound to a different address
        """
        if not entry.address:
            raise RegistrationError(f"Contract {entry.protocol}:{entry.name} has no address")

        key = (entry.protocol, entry.name)
        existing = self._contracts.get(key)
        if existing is not None:
            if existing.address == entry.address:
                return False
            raise DuplicateIdError(
                f"Contract {entry.protocol}:{entry.name} already registered at {existing.address}"
            )

        self._contracts[key] = entry
        return True

    def get(self, protocol: str, name: str) -> Optional[ContractEntry]:
        return self._contracts.get((protocol, name))

    def remove(self, protocol: str, name: str) -> None:
        self._contracts.pop((protocol, name), None)

    def export(self) -> Dict[str, str]:
        return {
            f"{protocol}:{name}": entry.address
            for (protocol, name), entry in sorted(self._contracts.items())
        }

    def __len__(self) -> int:
        return len(self._contracts)
