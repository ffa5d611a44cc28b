"""Protocol filtering and chart series — pure functions, no I/O."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models import CATEGORY_ALL, Category, Protocol, ProtocolChartPoint

logger = logging.getLogger(__name__)


def filter_protocols_by_category(
    protocols: Iterable[Protocol], category: Category | str
) -> list[Protocol]:
    """Return protocols in ``category``, preserving order.

    ``"all"`` returns every protocol. An unrecognized selector matches
    nothing and yields an empty list.
    """
    if category == CATEGORY_ALL:
        return list(protocols)

    try:
        selected = Category(category)
    except ValueError:
        logger.debug("Unknown category selector %r, matching nothing", category)
        return []

    return [p for p in protocols if p.category is selected]


def build_protocol_chart(protocols: Iterable[Protocol]) -> list[ProtocolChartPoint]:
    """Project protocols onto the fields plotted per protocol."""
    return [
        ProtocolChartPoint(
            name=p.name,
            tvl=p.tvl,
            apy=p.apy,
            volume=p.volume_24h,
            risk=p.risk_score,
            change=p.change_24h,
        )
        for p in protocols
    ]
