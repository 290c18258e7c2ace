"""
Data Schemas

This module defines Pydantic models for every document and entry the
scraper handles.

Models fall into four groups:
    - Upstream documents: the raw pool list and pool volume list exactly as
      published by the exchange backend (RawPool, PoolVolumeEntry, ...)
    - Registry entries: the normalized records written into the name service
      registries (AssetEntry, PoolEntry, ContractEntry)
    - Chain metadata: the chain asset list used to name new denominations
    - Reports: outcome counts for asset and pool registration passes

Key Principle:
    Numeric strings from upstream (pool ids, weights, share amounts) stay
    strings. Observed magnitudes exceed 64-bit range, so nothing here parses
    them into numbers.
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.time import utc_now


# ============================================
# Upstream Pool Documents
# ============================================

class Coin(BaseModel):
    """A token denomination with an arbitrary-precision amount string."""

    denom: str
    amount: str = "0"


class PoolParams(BaseModel):
    """
    Pool fee configuration.

    `smooth_weight_change_params` is only set on liquidity bootstrap pools,
    which shift their weights over time.
    """

    model_config = ConfigDict(extra="ignore")

    swap_fee: str = "0"
    exit_fee: str = "0"
    smooth_weight_change_params: Optional[Any] = None


class PoolAsset(BaseModel):
    """One (token, weight) pair of a weighted pool."""

    token: Coin
    weight: str


class RawPool(BaseModel):
    """
    A pool exactly as listed by the exchange backend.

    Example:
        {
            "@type": "/osmosis.gamm.v1beta1.Pool",
            "address": "osmo1mw0ac6rwlp5r8wapwk3zs6g29h8fcscxqakdzw9emkne6c8wjp9q0t3v8t",
            "id": "1",
            "pool_params": {
                "swap_fee": "0.002000000000000000",
                "exit_fee": "0.000000000000000000",
                "smooth_weight_change_params": null
            },
            "future_pool_governor": "24h",
            "total_shares": {"denom": "gamm/pool/1", "amount": "202566047707685524082948766"},
            "pool_assets": [
                {"token": {"denom": "ibc/2739...", "amount": "1813583742408"}, "weight": "536870912000000"},
                {"token": {"denom": "uosmo", "amount": "32934163845630"}, "weight": "536870912000000"}
            ],
            "total_weight": "1073741824000000"
        }

    Notes:
        - Stableswap and concentrated pools carry no `pool_assets`
        - `id` is kept as a decimal string
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type_url: str = Field(
        default="",
        alias="@type",
        description="Protobuf type URL of the pool"
    )

    address: str = Field(
        default="",
        description="Pool module account address"
    )

    id: str = Field(
        ...,
        description="Numeric pool identifier as a decimal string"
    )

    pool_params: PoolParams = Field(default_factory=PoolParams)

    future_pool_governor: Optional[str] = None

    total_shares: Optional[Coin] = None

    pool_assets: Optional[List[PoolAsset]] = Field(
        default=None,
        description="Ordered token/weight pairs (absent for non-weighted pools)"
    )

    total_weight: Optional[str] = Field(
        default=None,
        description="Sum of all weights as an arbitrary-precision string"
    )

    pool_liquidity: Optional[List[Coin]] = None

    scaling_factors: Optional[List[str]] = None

    scaling_factor_controller: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> str:
        """Accept integer ids but keep them as strings"""
        if isinstance(v, bool):
            raise ValueError("pool id must be a decimal string")
        if isinstance(v, int):
            return str(v)
        return v

    @property
    def denoms(self) -> List[str]:
        """Token denominations in pool order (empty when the pool has no assets)."""
        return [asset.token.denom for asset in self.pool_assets or []]

    @property
    def weights(self) -> List[str]:
        return [asset.weight for asset in self.pool_assets or []]


class Pagination(BaseModel):
    next_key: Optional[str] = None
    total: Optional[str] = None


class RawPoolList(BaseModel):
    """The pool list document."""

    model_config = ConfigDict(extra="ignore")

    pools: List[RawPool] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class PoolVolumeEntry(BaseModel):
    """Trailing volume statistics for one pool."""

    model_config = ConfigDict(extra="ignore")

    pool_id: str
    volume_24h: float = 0.0
    volume_7d: float = 0.0
    fees_spent_24h: float = 0.0
    fees_spent_7d: float = 0.0
    fees_percentage: str = ""

    @field_validator("pool_id", mode="before")
    @classmethod
    def validate_pool_id(cls, v: Any) -> str:
        """Volume feeds sometimes publish ids as integers"""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class PoolVolumeList(BaseModel):
    """The pool volume document."""

    model_config = ConfigDict(extra="ignore")

    last_update_at: Optional[int] = None
    data: List[PoolVolumeEntry] = Field(default_factory=list)


class RankedPoolList(BaseModel):
    """
    Pools after ranking and deduplication.

    Order is significant: it is the order pools are ingested in and, for
    volume ranking, what decided which pools survived the size cap.
    """

    strategy: Literal["volume", "weight"]
    pools: List[RawPool] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pools)


# ============================================
# Registry Entries
# ============================================

class PoolType(str, Enum):
    """
    Economic pool type.

    A pool whose type cannot be determined has no PoolType at all
    (classifiers return None).
    """

    CONSTANT_PRODUCT = "ConstantProduct"
    WEIGHTED = "Weighted"
    LIQUIDITY_BOOTSTRAP = "LiquidityBootstrap"


class AssetInfo(BaseModel):
    """How an asset is held on chain: a native denom or a cw20 contract."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["native", "cw20"]
    value: str

    @classmethod
    def native(cls, denom: str) -> "AssetInfo":
        return cls(kind="native", value=denom)

    @classmethod
    def cw20(cls, address: str) -> "AssetInfo":
        return cls(kind="cw20", value=address)

    def __str__(self) -> str:
        return f"{self.kind}:{self.value}"


class AssetEntry(BaseModel):
    """A canonical asset name and the on-chain asset it refers to."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Canonical asset name",
        examples=["osmosis>osmo", "cosmoshub>atom"]
    )

    info: AssetInfo


class PoolId(BaseModel):
    """
    Pool identifier: a numeric id (pool-module DEXes) or a contract address.

    Example:
        >>> str(PoolId.number("1"))
        'id:1'
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["id", "contract"]
    value: str

    @classmethod
    def number(cls, pool_id: str) -> "PoolId":
        return cls(kind="id", value=str(pool_id))

    @classmethod
    def contract(cls, address: str) -> "PoolId":
        return cls(kind="contract", value=address)

    def __str__(self) -> str:
        return f"{self.kind}:{self.value}"


class PoolEntry(BaseModel):
    """
    A pool ready for the registry.

    Resolved entries reference canonical asset names and go into the primary
    pool registry. Unresolved entries reference raw denominations and go into
    the pending bucket until every asset is onboarded.

    Asset order always matches the token order of the raw pool.
    """

    model_config = ConfigDict(frozen=True)

    pool_id: PoolId
    dex: str
    pool_type: PoolType
    assets: List[str]
    resolved: bool = True


class ContractEntry(BaseModel):
    """A named contract (e.g. a staking contract) belonging to a protocol."""

    model_config = ConfigDict(frozen=True)

    protocol: str
    name: str
    address: str


# ============================================
# Chain Asset List
# ============================================

class TraceCounterparty(BaseModel):
    model_config = ConfigDict(extra="ignore")

    chain_name: str
    base_denom: Optional[str] = None


class AssetTrace(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    counterparty: Optional[TraceCounterparty] = None


class AssetListEntry(BaseModel):
    """One asset of a chain asset list."""

    model_config = ConfigDict(extra="ignore")

    base: str
    symbol: str
    name: Optional[str] = None
    display: Optional[str] = None
    traces: List[AssetTrace] = Field(default_factory=list)

    @property
    def origin_chain(self) -> Optional[str]:
        """Chain the asset was bridged from, None for assets native to the listing chain."""
        for trace in self.traces:
            if trace.counterparty is not None:
                return trace.counterparty.chain_name
        return None


class AssetList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    chain_name: str
    assets: List[AssetListEntry] = Field(default_factory=list)


# ============================================
# Run Reports
# ============================================

class IngestionReport(BaseModel):
    """
    Outcome of one pool ingestion pass, as lists of pool ids per bucket.

    Buckets:
        committed: written to the primary pool registry
        pending: routed to the unknown bucket (assets not yet onboarded)
        dropped: rejected by the contract or pool registry
        skipped: pool type could not be determined
    """

    exchange: str
    network_id: str
    committed: List[str] = Field(default_factory=list)
    pending: List[str] = Field(default_factory=list)
    dropped: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    finished_at: datetime = Field(default_factory=utc_now)

    @property
    def committed_count(self) -> int:
        return len(self.committed)

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class AssetReport(BaseModel):
    """Outcome of one asset registration pass, as lists of denominations."""

    exchange: str
    network_id: str
    registered: List[str] = Field(default_factory=list)
    known: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)


class ScrapeReport(BaseModel):
    """Combined outcome of running one exchange against one network."""

    exchange: str
    network_id: str
    assets: Optional[AssetReport] = None
    pools: Optional[IngestionReport] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
