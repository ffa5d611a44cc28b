"""DeFi portfolio and market analytics engine."""
from .analytics import (
    aggregate_portfolio,
    build_view,
    classify_risk_distribution,
    filter_protocols_by_category,
    rank_arbitrage_opportunities,
)
from .errors import SourceFetchError
from .services import RefreshController

__all__ = [
    "RefreshController",
    "SourceFetchError",
    "aggregate_portfolio",
    "build_view",
    "classify_risk_distribution",
    "filter_protocols_by_category",
    "rank_arbitrage_opportunities",
]
