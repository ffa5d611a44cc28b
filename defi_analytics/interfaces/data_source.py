"""Analytics source protocol — upstream collection provider."""
from typing import Protocol as TypingProtocol

from ..models import ArbitrageOpportunity, Position, Protocol


class AnalyticsSource(TypingProtocol):
    """Abstract interface for pulling the three analytics collections.

    Each call may raise ``SourceFetchError``.
    """

    async def fetch_protocols(self) -> list[Protocol]: ...

    async def fetch_positions(self, wallet_address: str) -> list[Position]: ...

    async def fetch_arbitrage_opportunities(self) -> list[ArbitrageOpportunity]: ...
