"""Display formatting for outcome figures.

Undefined results (None) and non-finite floats render as a placeholder,
never as zero.
"""

from __future__ import annotations

import math
from typing import Optional

PLACEHOLDER = "—"


def _is_displayable(x: Optional[float]) -> bool:
    return x is not None and math.isfinite(x)


def format_currency(x: Optional[float], symbol: str = "$") -> str:
    if not _is_displayable(x):
        return PLACEHOLDER
    amount = round(float(x))
    return f"-{symbol}{abs(amount):,}" if amount < 0 else f"{symbol}{amount:,}"


def format_number(x: Optional[float]) -> str:
    if not _is_displayable(x):
        return PLACEHOLDER
    x = float(x)
    if x.is_integer():
        return f"{int(x):,}"
    return f"{x:,.3f}".rstrip("0").rstrip(".")


def format_months(x: Optional[float]) -> str:
    if not _is_displayable(x):
        return PLACEHOLDER
    return f"{x:.2f}"


def format_roi(roi: Optional[float]) -> str:
    """ROI ratio as a percentage, e.g. 7.528 -> '752.8%'."""
    if not _is_displayable(roi):
        return PLACEHOLDER
    return f"{roi * 100:.1f}%"
