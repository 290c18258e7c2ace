"""
Pool Ranking

Orders the raw pool list before ingestion and decides which pools are kept.

Two strategies, picked by whether volume data is available:

    volume: sort by trailing 7-day volume (descending) and keep the top
            `max_pools`. Volume already favors the canonical pool of each
            pair, so no deduplication happens here.

    weight: sort by total weight (descending, compared as decimal strings),
            then keep only the first pool of each asset pair. Pools without
            any token entries are dropped.

Both sorts are stable: ties keep their input order.
"""

from functools import cmp_to_key
from typing import Dict, List, Optional, Sequence

from core.logging import get_logger
from core.schemas import PoolVolumeEntry, RankedPoolList, RawPool


DEFAULT_MAX_POOLS = 75

logger = get_logger(__name__)


def compare_large_numbers(a: str, b: str) -> int:
    """
    Compare two non-negative integer strings of arbitrary size.

    A longer string is the larger number; equal-length strings are compared
    character by character. Leading zeros are not normalized ("099" is longer
    than "99" and therefore larger).

    Returns:
        Positive if a > b, negative if a < b, 0 if equal

    Example:
        >>> compare_large_numbers("202566047707685524082948766", "1073741824000000") > 0
        True
        >>> compare_large_numbers("100", "099") > 0
        True
    """
    if len(a) != len(b):
        return len(a) - len(b)
    for char_a, char_b in zip(a, b):
        if char_a != char_b:
            return 1 if char_a > char_b else -1
    return 0


def pair_key(pool: RawPool) -> str:
    """Order-insensitive key of a pool's asset set ("uatom,uosmo")."""
    return ",".join(sorted(pool.denoms))


class PoolRanker:
    """
    Ranks raw pools by volume or, without volume data, by weight.

    Attributes:
        max_pools: Pools kept after volume ranking. None keeps as many pools
                   as there are entries in the volume dataset.

    Example:
        >>> ranker = PoolRanker(max_pools=75)
        >>> ranked = ranker.rank(pool_list.pools, volume_list.data)
        >>> ranked.strategy
        'volume'
    """

    def __init__(self, max_pools: Optional[int] = DEFAULT_MAX_POOLS):
        self.max_pools = max_pools

    def rank(
        self,
        pools: Sequence[RawPool],
        volume_data: Optional[Sequence[PoolVolumeEntry]] = None
    ) -> RankedPoolList:
        """Rank pools; the input sequence is left untouched."""
        if volume_data is not None:
            ranked = self.rank_by_volume(pools, volume_data)
            logger.debug(f"Ranked {len(pools)} pools by volume, kept {len(ranked)}")
            return RankedPoolList(strategy="volume", pools=ranked)

        ranked = self.rank_by_weight(pools)
        logger.debug(f"Ranked {len(pools)} pools by weight, kept {len(ranked)} unique pairs")
        return RankedPoolList(strategy="weight", pools=ranked)

    def rank_by_volume(
        self,
        pools: Sequence[RawPool],
        volume_data: Sequence[PoolVolumeEntry]
    ) -> List[RawPool]:
        volumes: Dict[str, float] = {}
        for entry in volume_data:
            # First entry for a pool id wins
            volumes.setdefault(entry.pool_id, entry.volume_7d)

        ordered = sorted(pools, key=lambda pool: volumes.get(pool.id, 0), reverse=True)

        limit = self.max_pools if self.max_pools is not None else len(volume_data)
        return ordered[:limit]

    def rank_by_weight(self, pools: Sequence[RawPool]) -> List[RawPool]:
        ordered = sorted(
            pools,
            key=cmp_to_key(
                lambda a, b: compare_large_numbers(b.total_weight or "0", a.total_weight or "0")
            )
        )

        seen_pairs = set()
        unique: List[RawPool] = []
        for pool in ordered:
            if not pool.pool_assets:
                continue
            key = pair_key(pool)
            if key in seen_pairs:
                continue
            seen_pairs.add(key)
            unique.append(pool)
        return unique
