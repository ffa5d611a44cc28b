"""HTTP analytics API client."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import HttpSourceConfig
from ..errors import SourceFetchError
from ..models import ArbitrageOpportunity, Position, Protocol
from . import parser

logger = logging.getLogger(__name__)


class HttpAnalyticsSource:
    """Fetch protocols, positions and arbitrage opportunities from a JSON API."""

    def __init__(self, config: HttpSourceConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout

    async def _get_json(self, path: str) -> Any:
        """GET ``base_url + path`` and decode the JSON body."""
        url = f"{self.base_url}{path}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(
                connector=connector, timeout=timeout
            ) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        raise SourceFetchError(
                            f"GET {path} failed: HTTP {response.status}"
                        )
                    return await response.json()
        except SourceFetchError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("Error fetching %s: %s", url, e)
            raise SourceFetchError(f"GET {path} failed: {e}") from e

    async def fetch_protocols(self) -> list[Protocol]:
        payload = await self._get_json("/protocols")
        protocols = parser.parse_records(
            parser.unwrap_records(payload), parser.parse_protocol, "protocol"
        )
        logger.debug("Fetched %d protocols", len(protocols))
        return protocols

    async def fetch_positions(self, wallet_address: str) -> list[Position]:
        payload = await self._get_json(f"/positions/{wallet_address}")
        positions = parser.parse_records(
            parser.unwrap_records(payload), parser.parse_position, "position"
        )
        logger.debug("Fetched %d positions for %s", len(positions), wallet_address)
        return positions

    async def fetch_arbitrage_opportunities(self) -> list[ArbitrageOpportunity]:
        payload = await self._get_json("/arbitrage")
        opportunities = parser.parse_records(
            parser.unwrap_records(payload), parser.parse_opportunity, "arbitrage"
        )
        logger.debug("Fetched %d arbitrage opportunities", len(opportunities))
        return opportunities
