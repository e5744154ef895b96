"""Immutable outcome and sweep result data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from roicalc.models.enums import Scenario, ServiceType


@dataclass(frozen=True)
class FinancialOutcome:
    """Gross-profit lift, payback and ROI for one evaluation.

    payback_months is None when monthly_gp <= 0 (never pays back).
    roi is None when fee <= 0 (not computable).
    """

    monthly_gp: float
    annual_gp: float
    fee: float
    payback_months: Optional[float] = None
    roi: Optional[float] = None
    components: dict[str, float] = field(default_factory=dict)

    @property
    def roi_percentage(self) -> Optional[float]:
        if self.roi is None:
            return None
        return self.roi * 100

    @property
    def pays_back(self) -> bool:
        return self.payback_months is not None


@dataclass(frozen=True)
class ChartPoint:
    """One bar group in the scenario comparison charts."""

    scenario: Scenario
    monthly_gp: float
    payback_months: Optional[float]
    roi_pct: Optional[float]
    color: str


@dataclass(frozen=True)
class SweepResult:
    """Outcomes for the same inputs under every scenario."""

    service: ServiceType
    fee: float
    scenarios: dict[Scenario, FinancialOutcome]

    def series(self) -> list[tuple[Scenario, FinancialOutcome]]:
        """Outcomes in Low, Base, High order."""
        return [(s, self.scenarios[s]) for s in Scenario if s in self.scenarios]
