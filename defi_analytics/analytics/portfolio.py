"""Portfolio-level totals over a user's positions."""
from __future__ import annotations

from collections.abc import Iterable

from ..models import PortfolioMetrics, Position


def calc_pnl_percentage(total_value: float, total_pnl: float) -> float:
    """P/L relative to cost basis (value - pnl); 0 when the cost basis is 0."""
    cost_basis = total_value - total_pnl
    if cost_basis == 0:
        return 0.0
    return total_pnl / cost_basis * 100


def calc_weighted_apy(positions: Iterable[Position], total_value: float) -> float:
    """Value-weighted APY; 0 when the portfolio is worth nothing."""
    if total_value == 0:
        return 0.0
    weighted = sum(p.apy * p.current_value for p in positions)
    return weighted / total_value


def aggregate_portfolio(positions: Iterable[Position]) -> PortfolioMetrics | None:
    """Reduce positions into portfolio totals, or ``None`` when there are none.

    Args:
        positions: Every position the user holds. Portfolio metrics are
            user-scoped, so callers pass the unfiltered collection.
    """
    positions = tuple(positions)
    if not positions:
        return None

    total_value = sum(p.current_value for p in positions)
    total_pnl = sum(p.pnl for p in positions)

    return PortfolioMetrics(
        total_value=total_value,
        total_pnl=total_pnl,
        total_pnl_percentage=calc_pnl_percentage(total_value, total_pnl),
        total_pending_rewards=sum(p.pending_rewards for p in positions),
        weighted_apy=calc_weighted_apy(positions, total_value),
        average_risk=sum(p.risk_level for p in positions) / len(positions),
        position_count=len(positions),
    )
