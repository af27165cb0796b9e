"""Display formatters. Pure functions, no I/O, never raise on numeric input."""

from __future__ import annotations

import math
import time
from typing import Optional, Union

Number = Union[int, float]


def shorten_address(s: str, n: int = 4) -> str:
    """``head...tail`` using the first and last ``n`` characters."""
    return f"{s[:n]}...{s[-n:] if n > 0 else ''}"


def relative_time(epoch_seconds: Number, now: Optional[float] = None) -> str:
    """Elapsed time since ``epoch_seconds`` as ``30s ago`` / ``5m ago`` / ``2h ago`` / ``3d ago``."""
    if now is None:
        now = time.time()
    elapsed = now - epoch_seconds
    if not math.isfinite(elapsed):
        return "unknown"
    s = math.floor(elapsed)
    if s < 60:
        return f"{s}s ago"
    if s < 3600:
        return f"{s // 60}m ago"
    if s < 86400:
        return f"{s // 3600}h ago"
    return f"{s // 86400}d ago"


def parse_price(value: Union[str, Number]) -> float:
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return math.nan
    return float(value)


def _exponential(value: float, digits: int) -> str:
    # 5.0000e-05 -> 5.0000e-5
    mantissa, exp = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exp):+d}"


def format_usd_price(price: Union[str, Number]) -> str:
    """
    Format a USD price for display.

    Below $0.0001 uses exponent notation (``$5.0000e-5``), below $1 six
    decimals (``$0.500000``), otherwise grouped with two decimals
    (``$1,234.50``).
    """
    p = parse_price(price)
    if math.isnan(p):
        return "$NaN"
    if math.isinf(p):
        return "$-Infinity" if p < 0 else "$Infinity"
    if p < 0.0001:
        return f"${_exponential(p, 4)}"
    if p < 1:
        return f"${p:.6f}"
    return f"${p:,.2f}"


def abbreviate_usd(n: Number) -> str:
    """``$2.50B`` / ``$1.20M`` / ``$3.40K``, or ``$999.00`` below a thousand."""
    if n >= 1_000_000_000:
        return f"${n / 1_000_000_000:.2f}B"
    if n >= 1_000_000:
        return f"${n / 1_000_000:.2f}M"
    if n >= 1_000:
        return f"${n / 1_000:.2f}K"
    return f"${n:.2f}"


def format_sol(amount: Number) -> str:
    return f"{amount:.4f}"


def format_percent_change(change: Optional[Number]) -> tuple[str, bool]:
    """Return (``"12.34%"`` magnitude, is_positive). Missing change counts as 0."""
    change = change or 0
    return f"{abs(change):.2f}%", change >= 0


def format_token_amount(amount: Number) -> str:
    """Grouped, at most three decimals, trailing zeros dropped: ``1,234.5``."""
    text = f"{amount:,.3f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
