"""Arbitrage opportunity ranking."""
from __future__ import annotations

from collections.abc import Iterable

from ..models import ArbitrageOpportunity

DEFAULT_ARBITRAGE_LIMIT = 5


def rank_arbitrage_opportunities(
    opportunities: Iterable[ArbitrageOpportunity],
    limit: int = DEFAULT_ARBITRAGE_LIMIT,
) -> list[ArbitrageOpportunity]:
    """Unexecuted opportunities by profit potential, highest first.

    The sort is stable, so equal profits keep their discovery order.
    """
    open_opps = [o for o in opportunities if not o.is_executed]
    ranked = sorted(open_opps, key=lambda o: o.profit_potential, reverse=True)
    return ranked[: max(limit, 0)]
