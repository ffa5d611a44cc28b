"""Assemble a DashboardView from a snapshot."""
from __future__ import annotations

from datetime import datetime, timezone

from ..models import CATEGORY_ALL, Category, DashboardView, Snapshot
from .arbitrage import DEFAULT_ARBITRAGE_LIMIT, rank_arbitrage_opportunities
from .filters import build_protocol_chart, filter_protocols_by_category
from .market import summarize_market
from .portfolio import aggregate_portfolio
from .risk import classify_risk_distribution


def build_view(
    snapshot: Snapshot,
    category: Category | str = CATEGORY_ALL,
    arbitrage_limit: int = DEFAULT_ARBITRAGE_LIMIT,
    now: datetime | None = None,
) -> DashboardView:
    """Derive every dashboard metric from one snapshot.

    Only the protocol list and its chart series follow the category
    selector; risk distribution, market totals and the portfolio always
    cover the full collections.
    """
    filtered = filter_protocols_by_category(snapshot.protocols, category)
    selector = category.value if isinstance(category, Category) else str(category)

    return DashboardView(
        generated_at=now or datetime.now(timezone.utc),
        category=selector,
        protocols=tuple(filtered),
        protocol_chart=tuple(build_protocol_chart(filtered)),
        risk_distribution=tuple(classify_risk_distribution(snapshot.protocols)),
        portfolio=aggregate_portfolio(snapshot.positions),
        top_arbitrage=tuple(
            rank_arbitrage_opportunities(snapshot.opportunities, arbitrage_limit)
        ),
        market=summarize_market(snapshot.protocols, snapshot.opportunities),
    )
