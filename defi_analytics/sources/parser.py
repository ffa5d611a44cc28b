"""Pure parsing functions for analytics API records — no I/O.

Records use the camelCase keys of the dashboard API, e.g.::

    {"id": "aero", "name": "Aerodrome", "category": "DEX", "tvl": 1.2e9,
     "apy": 14.5, "riskScore": 4, "volume24h": 3.1e8, "change24h": -2.3,
     "isActive": true}
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any, TypeVar

from ..errors import SourceFetchError
from ..models import ArbitrageOpportunity, Category, Position, Protocol

T = TypeVar("T")


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 string, epoch seconds, or datetime into aware UTC.

    Examples:
        "2024-05-01T12:00:00Z" → 2024-05-01 12:00:00+00:00
        1714564800 → 2024-05-01 12:00:00+00:00
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Timestamp out of range: {value!r}") from e
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_protocol(raw: dict[str, Any]) -> Protocol:
    return Protocol(
        id=str(raw["id"]),
        name=str(raw["name"]),
        category=Category(raw["category"]),
        tvl=float(raw.get("tvl", 0.0)),
        apy=float(raw.get("apy", 0.0)),
        risk_score=int(raw["riskScore"]),
        volume_24h=float(raw.get("volume24h", 0.0)),
        change_24h=float(raw.get("change24h", 0.0)),
        is_active=bool(raw.get("isActive", True)),
    )


def parse_position(raw: dict[str, Any]) -> Position:
    return Position(
        strategy_id=str(raw["strategyId"]),
        strategy_name=str(raw.get("strategyName", raw["strategyId"])),
        amount=float(raw.get("amount", 0.0)),
        current_value=float(raw["currentValue"]),
        pnl=float(raw.get("pnl", 0.0)),
        pnl_percentage=float(raw.get("pnlPercentage", 0.0)),
        apy=float(raw.get("apy", 0.0)),
        risk_level=int(raw["riskLevel"]),
        entry_date=parse_timestamp(raw["entryDate"]),
        last_reward_claim=parse_timestamp(
            raw.get("lastRewardClaim", raw["entryDate"])
        ),
        pending_rewards=float(raw.get("pendingRewards", 0.0)),
    )


def parse_opportunity(raw: dict[str, Any]) -> ArbitrageOpportunity:
    return ArbitrageOpportunity(
        id=str(raw["id"]),
        token_a=str(raw["tokenA"]),
        token_b=str(raw["tokenB"]),
        dex_a=str(raw["dexA"]),
        dex_b=str(raw["dexB"]),
        profit_potential=float(raw["profitPotential"]),
        profit_percentage=float(raw.get("profitPercentage", 0.0)),
        timestamp=parse_timestamp(raw["timestamp"]),
        is_executed=bool(raw.get("isExecuted", False)),
        estimated_gas=float(raw.get("estimatedGas", 0.0)),
    )


def unwrap_records(payload: Any) -> list[dict[str, Any]]:
    """Accept a bare JSON list or an envelope with the list under ``data``."""
    if isinstance(payload, dict):
        payload = payload.get("data")
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise SourceFetchError(
            f"Expected a list of records, got {type(payload).__name__}"
        )
    return payload


def parse_records(
    records: list[dict[str, Any]],
    parse: Callable[[dict[str, Any]], T],
    kind: str,
) -> list[T]:
    """Parse every record, failing the whole collection on the first bad one."""
    parsed: list[T] = []
    for index, record in enumerate(records):
        try:
            parsed.append(parse(record))
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            raise SourceFetchError(
                f"Malformed {kind} record at index {index}: {e!r}"
            ) from e
    return parsed
