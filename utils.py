"""
Utility functions for Bill Splitter application
"""
from __future__ import annotations
import os
from decimal import Decimal, ROUND_HALF_UP, localcontext


def safe_float(x, default: float = 0.0) -> float:
    """Convert value to float safely, returning default on error"""
    try:
        v = float(x)
    except (TypeError, ValueError):
        return default
    # nan/inf are not usable amounts
    if v != v or v in (float("inf"), float("-inf")):
        return default
    return v


def clamp(v: float, low: float, high: float) -> float:
    """Clamp v into [low, high]"""
    return max(low, min(high, v))


def round_money(x: float) -> float:
    """Round to 2 decimals, half-up (display rounding); nan/inf pass through"""
    d = Decimal(str(x))
    if not d.is_finite():
        return x
    with localcontext() as ctx:
        # enough digits for the integer part plus cents
        ctx.prec = max(28, d.adjusted() + 4)
        return float(d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_percent(v: float) -> str:
    """Format a percentage without a trailing .0 for whole numbers"""
    return f"{v:g}%"


def app_dir() -> str:
    """
    Get application config directory: ~/.config/BillSplitter
    (or $XDG_CONFIG_HOME/BillSplitter). The directory is not created.
    """
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return os.path.join(base, "BillSplitter")
