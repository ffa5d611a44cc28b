"""Pure derivations over analytics snapshots."""
from .arbitrage import DEFAULT_ARBITRAGE_LIMIT, rank_arbitrage_opportunities
from .filters import build_protocol_chart, filter_protocols_by_category
from .market import summarize_market
from .portfolio import aggregate_portfolio
from .risk import (
    classify_risk_distribution,
    risk_score_color,
    risk_tier,
    risk_tier_totals,
)
from .view import build_view

__all__ = [
    "DEFAULT_ARBITRAGE_LIMIT",
    "aggregate_portfolio",
    "build_protocol_chart",
    "build_view",
    "classify_risk_distribution",
    "filter_protocols_by_category",
    "rank_arbitrage_opportunities",
    "risk_score_color",
    "risk_tier",
    "risk_tier_totals",
    "summarize_market",
]
