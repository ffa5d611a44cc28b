"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from datetime import datetime, timezone
from pathlib import Path

import pytest

from defi_analytics.config import (
    AppConfig,
    DashboardConfig,
    FileSourceConfig,
    HttpSourceConfig,
    SourceConfig,
    WalletConfig,
)
from defi_analytics.models import (
    ArbitrageOpportunity,
    Category,
    Position,
    Protocol,
    Snapshot,
)

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Model builders
# ---------------------------------------------------------------------------


def make_protocol(
    id: str = "p1",
    category: Category = Category.DEX,
    tvl: float = 1000.0,
    risk_score: int = 3,
    apy: float = 10.0,
    is_active: bool = True,
) -> Protocol:
    return Protocol(
        id=id,
        name=id.upper(),
        category=category,
        tvl=tvl,
        apy=apy,
        risk_score=risk_score,
        volume_24h=tvl / 10,
        change_24h=1.5,
        is_active=is_active,
    )


def make_position(
    id: str = "s1",
    current_value: float = 100.0,
    pnl: float = 10.0,
    apy: float = 5.0,
    risk_level: int = 2,
    pending_rewards: float = 1.0,
) -> Position:
    return Position(
        strategy_id=id,
        strategy_name=f"Strategy {id}",
        amount=current_value - pnl,
        current_value=current_value,
        pnl=pnl,
        pnl_percentage=0.0,
        apy=apy,
        risk_level=risk_level,
        entry_date=T0,
        last_reward_claim=T0,
        pending_rewards=pending_rewards,
    )


def make_opportunity(
    id: str = "a1",
    profit_potential: float = 10.0,
    is_executed: bool = False,
) -> ArbitrageOpportunity:
    return ArbitrageOpportunity(
        id=id,
        token_a="WETH",
        token_b="USDC",
        dex_a="Aerodrome",
        dex_b="Uniswap",
        profit_potential=profit_potential,
        profit_percentage=0.5,
        timestamp=T0,
        is_executed=is_executed,
        estimated_gas=200000,
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_protocols() -> list[Protocol]:
    return [
        make_protocol("aero", Category.DEX, tvl=1200.0, risk_score=4, apy=18.0),
        make_protocol("moon", Category.LENDING, tvl=400.0, risk_score=3, apy=6.0),
        make_protocol("uni", Category.DEX, tvl=900.0, risk_score=2, apy=9.0),
        make_protocol("beefy", Category.YIELD, tvl=150.0, risk_score=6, apy=24.0),
        make_protocol(
            "snx", Category.DERIVATIVES, tvl=90.0, risk_score=8, apy=31.0, is_active=False
        ),
    ]


@pytest.fixture()
def sample_positions() -> list[Position]:
    return [
        make_position("s1", current_value=100.0, pnl=10.0, apy=5.0, risk_level=2, pending_rewards=1.0),
        make_position("s2", current_value=300.0, pnl=-30.0, apy=8.0, risk_level=6, pending_rewards=2.0),
    ]


@pytest.fixture()
def sample_opportunities() -> list[ArbitrageOpportunity]:
    return [
        make_opportunity("a1", profit_potential=5.0),
        make_opportunity("a2", profit_potential=20.0),
        make_opportunity("a3", profit_potential=1.0),
        make_opportunity("a4", profit_potential=20.0, is_executed=True),
    ]


@pytest.fixture()
def sample_snapshot(
    sample_protocols: list[Protocol],
    sample_positions: list[Position],
    sample_opportunities: list[ArbitrageOpportunity],
) -> Snapshot:
    return Snapshot(
        protocols=tuple(sample_protocols),
        positions=tuple(sample_positions),
        opportunities=tuple(sample_opportunities),
        fetched_at=T0,
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config() -> AppConfig:
    return AppConfig(
        dashboard=DashboardConfig(
            refresh_interval_seconds=30.0,
            auto_refresh=True,
            arbitrage_limit=5,
            default_category="all",
        ),
        wallet=WalletConfig(label="test-wallet", address="0xWALLET123"),
        source=SourceConfig(
            provider="http",
            http=HttpSourceConfig(base_url="https://api.example.com/v1", timeout=10),
            file=FileSourceConfig(),
        ),
    )


SAMPLE_YAML = textwrap.dedent("""\
    dashboard:
      refresh_interval_seconds: 15
      auto_refresh: false
      arbitrage_limit: 3
      default_category: Lending
    wallet:
      label: test-wallet
      address: "0xTEST"
    source:
      provider: http
      http:
        base_url: "https://api.example.com/v1/"
        timeout: 10
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Raw API records
# ---------------------------------------------------------------------------


@pytest.fixture()
def raw_protocol() -> dict:
    return {
        "id": "aero",
        "name": "Aerodrome",
        "category": "DEX",
        "tvl": 1250000000,
        "apy": 18.4,
        "riskScore": 4,
        "volume24h": 310000000,
        "change24h": -2.1,
        "isActive": True,
    }


@pytest.fixture()
def raw_position() -> dict:
    return {
        "strategyId": "aero-weth-usdc",
        "strategyName": "Aerodrome WETH/USDC LP",
        "amount": 5000,
        "currentValue": 5420,
        "pnl": 420,
        "pnlPercentage": 8.4,
        "apy": 18.4,
        "riskLevel": 4,
        "entryDate": "2024-03-01T09:00:00Z",
        "lastRewardClaim": "2024-04-28T18:30:00Z",
        "pendingRewards": 36.2,
    }


@pytest.fixture()
def raw_opportunity() -> dict:
    return {
        "id": "arb-1",
        "tokenA": "WETH",
        "tokenB": "USDC",
        "dexA": "Aerodrome",
        "dexB": "Uniswap V3",
        "profitPotential": 184.5,
        "profitPercentage": 0.42,
        "timestamp": "2024-05-01T12:00:00Z",
        "isExecuted": False,
        "estimatedGas": 210000,
    }
