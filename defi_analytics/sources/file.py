"""YAML snapshot file source."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..config import FileSourceConfig
from ..errors import SourceFetchError
from ..models import ArbitrageOpportunity, Position, Protocol
from . import parser

logger = logging.getLogger(__name__)


class FileAnalyticsSource:
    """Serve collections from a YAML document, re-read on every fetch.

    ``positions`` may be a plain list (any wallet) or a mapping of wallet
    address to list.
    """

    def __init__(self, config: FileSourceConfig) -> None:
        self.path = Path(config.path)

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.path) as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Error reading snapshot file %s: %s", self.path, e)
            raise SourceFetchError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise SourceFetchError(f"{self.path} must contain a mapping")
        return raw

    async def fetch_protocols(self) -> list[Protocol]:
        records = parser.unwrap_records(self._load().get("protocols"))
        return parser.parse_records(records, parser.parse_protocol, "protocol")

    async def fetch_positions(self, wallet_address: str) -> list[Position]:
        raw = self._load().get("positions")
        if isinstance(raw, dict):
            raw = raw.get(wallet_address, [])
        records = parser.unwrap_records(raw)
        return parser.parse_records(records, parser.parse_position, "position")

    async def fetch_arbitrage_opportunities(self) -> list[ArbitrageOpportunity]:
        records = parser.unwrap_records(self._load().get("arbitrage_opportunities"))
        return parser.parse_records(records, parser.parse_opportunity, "arbitrage")
