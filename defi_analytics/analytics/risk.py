"""Risk tiering and TVL distribution by tier."""
from __future__ import annotations

import math
from collections.abc import Iterable

from ..models import Protocol, RiskSlice, RiskTier

# Dashboard palette
COLOR_SUCCESS = "#22C55E"
COLOR_WARNING = "#F59E0B"
COLOR_DANGER = "#EF4444"

TIER_COLORS: dict[RiskTier, str] = {
    RiskTier.LOW: COLOR_SUCCESS,
    RiskTier.MEDIUM: COLOR_WARNING,
    RiskTier.HIGH: COLOR_DANGER,
}

# Per-score palette for individual risk indicators (1 = safest).
RISK_SCORE_COLORS: dict[int, str] = {
    1: "#22C55E",
    2: "#22C55E",
    3: "#84CC16",
    4: "#84CC16",
    5: "#F59E0B",
    6: "#F59E0B",
    7: "#F97316",
    8: "#F97316",
    9: "#EF4444",
    10: "#EF4444",
}

LOW_MAX_SCORE = 3
MEDIUM_MAX_SCORE = 6


def risk_tier(score: float) -> RiskTier:
    """Map a risk score to its tier: <=3 Low, 4-6 Medium, >=7 High."""
    if score <= LOW_MAX_SCORE:
        return RiskTier.LOW
    if score <= MEDIUM_MAX_SCORE:
        return RiskTier.MEDIUM
    return RiskTier.HIGH


def risk_score_color(score: float) -> str:
    """Color for a (possibly fractional) risk score, rounded half-up into 1-10."""
    rounded = int(math.floor(score + 0.5))
    return RISK_SCORE_COLORS[min(max(rounded, 1), 10)]


def risk_tier_totals(protocols: Iterable[Protocol]) -> dict[RiskTier, float]:
    """Sum TVL per tier; every tier is present, empty tiers hold 0.0."""
    totals = {tier: 0.0 for tier in RiskTier}
    for protocol in protocols:
        totals[risk_tier(protocol.risk_score)] += protocol.tvl
    return totals


def classify_risk_distribution(protocols: Iterable[Protocol]) -> list[RiskSlice]:
    """TVL per risk tier as chart slices, Low → Medium → High.

    Tiers without any protocol are omitted.
    """
    protocols = list(protocols)
    totals = risk_tier_totals(protocols)
    populated = {risk_tier(p.risk_score) for p in protocols}

    return [
        RiskSlice(tier=tier, total_value_locked=totals[tier], color=TIER_COLORS[tier])
        for tier in RiskTier
        if tier in populated
    ]
