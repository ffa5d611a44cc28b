"""Data models — all frozen (immutable)."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

CATEGORY_ALL = "all"


class Category(str, Enum):
    """Protocol category."""

    DEX = "DEX"
    LENDING = "Lending"
    YIELD = "Yield"
    DERIVATIVES = "Derivatives"


class RiskTier(str, Enum):
    """Coarse risk bucket derived from a 1-10 risk score."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# ---------------------------------------------------------------------------
# Source records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Protocol:
    """A DeFi protocol listing."""

    id: str
    name: str
    category: Category
    tvl: float
    apy: float
    risk_score: int
    volume_24h: float
    change_24h: float
    is_active: bool = True


@dataclass(frozen=True)
class Position:
    """A user's open position in a strategy."""

    strategy_id: str
    strategy_name: str
    amount: float
    current_value: float
    pnl: float
    pnl_percentage: float
    apy: float
    risk_level: int
    entry_date: datetime
    last_reward_claim: datetime
    pending_rewards: float


@dataclass(frozen=True)
class ArbitrageOpportunity:
    """A price discrepancy for a token pair across two exchanges."""

    id: str
    token_a: str
    token_b: str
    dex_a: str
    dex_b: str
    profit_potential: float
    profit_percentage: float
    timestamp: datetime
    is_executed: bool
    estimated_gas: float


@dataclass(frozen=True)
class Snapshot:
    """One atomic pull of all three source collections."""

    protocols: tuple[Protocol, ...]
    positions: tuple[Position, ...]
    opportunities: tuple[ArbitrageOpportunity, ...]
    fetched_at: datetime


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PortfolioMetrics:
    total_value: float
    total_pnl: float
    total_pnl_percentage: float
    total_pending_rewards: float
    weighted_apy: float
    average_risk: float
    position_count: int


@dataclass(frozen=True)
class RiskSlice:
    tier: RiskTier
    total_value_locked: float
    color: str


@dataclass(frozen=True)
class MarketMetrics:
    total_tvl: float
    total_volume_24h: float
    average_apy: float
    active_protocols: int
    open_arbitrage: int


@dataclass(frozen=True)
class ProtocolChartPoint:
    name: str
    tvl: float
    apy: float
    volume: float
    risk: int
    change: float


@dataclass(frozen=True)
class DashboardView:
    """Presentation-ready aggregate derived from one snapshot."""

    generated_at: datetime
    category: str
    protocols: tuple[Protocol, ...]
    protocol_chart: tuple[ProtocolChartPoint, ...]
    risk_distribution: tuple[RiskSlice, ...]
    portfolio: PortfolioMetrics | None
    top_arbitrage: tuple[ArbitrageOpportunity, ...]
    market: MarketMetrics

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return _jsonable(dataclasses.asdict(self))


@dataclass(frozen=True)
class RefreshError:
    """A failed refresh, surfaced as data rather than an exception."""

    message: str
    occurred_at: datetime
    retryable: bool = True


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value
