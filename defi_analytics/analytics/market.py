"""Market-level totals over the protocol listing."""
from __future__ import annotations

from collections.abc import Iterable

from ..models import ArbitrageOpportunity, MarketMetrics, Protocol


def summarize_market(
    protocols: Iterable[Protocol],
    opportunities: Iterable[ArbitrageOpportunity] = (),
) -> MarketMetrics:
    protocols = tuple(protocols)
    average_apy = (
        sum(p.apy for p in protocols) / len(protocols) if protocols else 0.0
    )
    return MarketMetrics(
        total_tvl=sum(p.tvl for p in protocols),
        total_volume_24h=sum(p.volume_24h for p in protocols),
        average_apy=average_apy,
        active_protocols=sum(1 for p in protocols if p.is_active),
        open_arbitrage=sum(1 for o in opportunities if not o.is_executed),
    )
