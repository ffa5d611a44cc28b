"""Plain-text dashboard report."""
from __future__ import annotations

from .analytics import risk_score_color
from .formatting import format_currency, format_number, format_percentage
from .models import DashboardView, RefreshError


def _format_wallet(address: str) -> str:
    if len(address) > 16:
        return f"{address[:10]}...{address[-6:]}"
    return address


def _time_str(view: DashboardView) -> str:
    return view.generated_at.strftime("%Y-%m-%d %H:%M:%S")


def _market_section(view: DashboardView) -> str:
    market = view.market
    return (
        f"━━ Market ━━\n"
        f"Total TVL: {format_currency(market.total_tvl, compact=True)}\n"
        f"24h Volume: {format_currency(market.total_volume_24h, compact=True)}\n"
        f"Average APY: {format_percentage(market.average_apy)}\n"
        f"Active protocols: {format_number(market.active_protocols)}"
        f" · Open arbitrage: {format_number(market.open_arbitrage)}"
    )


def _portfolio_section(view: DashboardView) -> str:
    metrics = view.portfolio
    if metrics is None:
        return "━━ Portfolio ━━\nNo open positions."

    trend = "📈" if metrics.total_pnl >= 0 else "📉"
    return (
        f"━━ Portfolio ━━\n"
        f"Total Value: {format_currency(metrics.total_value)}\n"
        f"{trend} P&L: {format_currency(metrics.total_pnl)}"
        f" ({format_percentage(metrics.total_pnl_percentage, signed=True)})\n"
        f"Pending Rewards: {format_currency(metrics.total_pending_rewards)}\n"
        f"Weighted APY: {format_percentage(metrics.weighted_apy)}\n"
        f"Risk Level: {metrics.average_risk:.1f}/10"
        f" ({risk_score_color(metrics.average_risk)})\n"
        f"Positions: {metrics.position_count}"
    )


def _protocol_section(view: DashboardView) -> str:
    lines = [f"━━ Protocols ({view.category}) ━━"]
    if not view.protocols:
        lines.append("No protocols in this category.")
    for p in view.protocols:
        lines.append(
            f"{p.name} [{p.category.value}] · TVL {format_currency(p.tvl, compact=True)}"
            f" · APY {format_percentage(p.apy)}"
            f" · Risk {p.risk_score}/10"
            f" · 24h {format_percentage(p.change_24h, signed=True)}"
        )
    return "\n".join(lines)


def _risk_section(view: DashboardView) -> str:
    lines = ["━━ Risk Distribution ━━"]
    total = sum(s.total_value_locked for s in view.risk_distribution)
    for s in view.risk_distribution:
        share = s.total_value_locked / total * 100 if total else 0.0
        lines.append(
            f"{s.tier.value}: {format_currency(s.total_value_locked, compact=True)}"
            f" ({format_percentage(share, decimals=1)})"
        )
    if len(lines) == 1:
        lines.append("No protocols.")
    return "\n".join(lines)


def _arbitrage_section(view: DashboardView) -> str:
    lines = ["━━ Top Arbitrage ━━"]
    if not view.top_arbitrage:
        lines.append("No open opportunities.")
    for o in view.top_arbitrage:
        lines.append(
            f"{o.token_a}/{o.token_b} · {o.dex_a} → {o.dex_b}"
            f" · {format_currency(o.profit_potential)}"
            f" ({format_percentage(o.profit_percentage)})"
            f" · gas {format_number(o.estimated_gas)}"
        )
    return "\n".join(lines)


def render_dashboard(view: DashboardView, wallet_label: str = "", wallet_address: str = "") -> str:
    """Render a view as a multi-section text report."""
    header = "📊 DeFi Analytics Dashboard"
    wallet_parts = [part for part in (wallet_label, _format_wallet(wallet_address)) if part]
    if wallet_parts:
        header += "\n" + " · ".join(wallet_parts)

    sections = [
        header,
        _portfolio_section(view),
        _market_section(view),
        _protocol_section(view),
        _risk_section(view),
        _arbitrage_section(view),
        f"Last updated: {_time_str(view)} UTC",
    ]
    return "\n\n".join(sections)


def render_error(error: RefreshError) -> str:
    hint = "Will retry on next refresh." if error.retryable else "Not retryable."
    return (
        f"🚨 Error Loading Data\n"
        f"\n"
        f"{error.message}\n"
        f"{hint}\n"
        f"\n"
        f"{error.occurred_at.strftime('%Y-%m-%d %H:%M:%S')} UTC"
    )
