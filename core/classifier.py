"""
Pool Classification

Derives the economic pool type from the shape of a raw pool.
"""

from typing import Optional

from core.logging import get_logger
from core.schemas import PoolType, RawPool


logger = get_logger(__name__)


def determine_pool_type(pool: RawPool) -> Optional[PoolType]:
    """
    Classify a raw pool.

    Rules, in order:
        1. No token entries             -> None (unknown, logged as a warning)
        2. Smooth weight change params  -> LiquidityBootstrap
        3. All weights equal            -> ConstantProduct
        4. Otherwise                    -> Weighted

    Args:
        pool: Raw pool from the exchange backend

    Returns:
        PoolType, or None when the type cannot be determined
    """
    if not pool.pool_assets:
        logger.warning(
            f"Id: {pool.id} has unknown pool type "
            f"(type={pool.type_url or '-'}, pool_assets={pool.pool_assets}, "
            f"pool_params={pool.pool_params.model_dump()})"
        )
        return None

    if pool.pool_params.smooth_weight_change_params is not None:
        return PoolType.LIQUIDITY_BOOTSTRAP

    weights = pool.weights
    if all(weight == weights[0] for weight in weights):
        return PoolType.CONSTANT_PRODUCT

    return PoolType.WEIGHTED
