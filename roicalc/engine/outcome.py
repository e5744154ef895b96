from __future__ import annotations

from typing import Optional

from roicalc.engine.result import FinancialOutcome

MONTHS_PER_YEAR = 12


def derive_outcome(
    monthly_gp: float,
    fee: float,
    components: Optional[dict[str, float]] = None,
) -> FinancialOutcome:
    """Annualize monthly GP and derive payback and ROI against a one-time fee.

    Degenerate inputs resolve to None fields rather than raising.
    """
    annual_gp = monthly_gp * MONTHS_PER_YEAR
    payback = fee / monthly_gp if monthly_gp > 0 else None
    roi = (annual_gp - fee) / fee if fee > 0 else None
    return FinancialOutcome(
        monthly_gp=monthly_gp,
        annual_gp=annual_gp,
        fee=fee,
        payback_months=payback,
        roi=roi,
        components=dict(components or {}),
    )
