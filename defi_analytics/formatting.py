"""Display formatting for currency, percentages and counts."""
from __future__ import annotations

_COMPACT_UNITS = ((1e9, "B"), (1e6, "M"), (1e3, "K"))


def _compact(value: float, decimals: int) -> str | None:
    magnitude = abs(value)
    for threshold, suffix in _COMPACT_UNITS:
        if magnitude >= threshold:
            return f"{magnitude / threshold:.{decimals}f}{suffix}"
    return None


def format_currency(value: float, compact: bool = False) -> str:
    """Format a USD amount, e.g. ``$1,234.56`` or ``$1.23M`` when compact."""
    sign = "-" if value < 0 else ""
    body = _compact(value, 2) if compact else None
    if body is None:
        body = f"{abs(value):,.2f}"
    return f"{sign}${body}"


def format_percentage(value: float, decimals: int = 2, signed: bool = False) -> str:
    """Format a percentage value already expressed in percent, e.g. ``7.25%``."""
    if signed:
        return f"{value:+.{decimals}f}%"
    return f"{value:.{decimals}f}%"


def format_number(value: float, compact: bool = False) -> str:
    """Format a count, e.g. ``1,234`` or ``1.2K`` when compact."""
    if compact:
        body = _compact(value, 1)
        if body is not None:
            return f"-{body}" if value < 0 else body
    return f"{value:,.0f}"
