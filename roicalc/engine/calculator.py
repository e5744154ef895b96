"""Core calculation engine.

Takes baseline + fee + KPI rows + scenario -> FinancialOutcome for the chosen
service, and sweeps the same inputs across Low/Base/High for charting.
"""

from __future__ import annotations

import logging

# Ensure all service formulas are registered on import
import roicalc.kpi_library.formulas  # noqa: F401
from roicalc.engine.result import ChartPoint, FinancialOutcome, SweepResult
from roicalc.engine.scaler import ScenarioLike, scenario_multiplier
from roicalc.kpi_library.registry import ServiceDefinition, get_service
from roicalc.models.baseline import Baseline, FeeSchedule
from roicalc.models.enums import Scenario, ServiceType
from roicalc.models.kpi import KPIRow, KPISet

logger = logging.getLogger(__name__)

SCENARIO_COLORS = {
    Scenario.LOW: "#38bdf8",
    Scenario.BASE: "#22c55e",
    Scenario.HIGH: "#f59e0b",
}


class CalculationEngine:
    """Stateless engine that runs service ROI calculations."""

    def evaluate(
        self,
        service: ServiceType,
        scenario: ScenarioLike,
        baseline: Baseline,
        fee: float,
        kpis: list[KPIRow],
    ) -> FinancialOutcome:
        """Run one service formula for one scenario."""
        definition = self._service(service)
        multiplier = scenario_multiplier(scenario)
        outcome = definition.formula_fn(baseline, fee, kpis, multiplier)
        logger.debug(
            "Evaluated %s at x%s: monthly_gp=%.2f payback=%s roi=%s",
            definition.service.value,
            multiplier,
            outcome.monthly_gp,
            outcome.payback_months,
            outcome.roi,
        )
        return outcome

    def sweep(
        self,
        service: ServiceType,
        baseline: Baseline,
        fees: FeeSchedule,
        kpi_sets: KPISet,
    ) -> SweepResult:
        """Evaluate the service once per scenario.

        Each scenario aggregates the unscaled rows with its own multiplier, so
        scaling is applied exactly once, by the same table as evaluate().
        """
        service = ServiceType(service)
        fee = fees.fee_for(service)
        kpis = kpi_sets.for_service(service)
        outcomes = {
            scenario: self.evaluate(service, scenario, baseline, fee, kpis)
            for scenario in Scenario
        }
        return SweepResult(service=service, fee=fee, scenarios=outcomes)

    @staticmethod
    def _service(service: ServiceType) -> ServiceDefinition:
        definition = get_service(ServiceType(service))
        if definition is None:
            raise ValueError(f"Service '{service}' has no registered formula")
        return definition


def build_chart_series(result: SweepResult) -> list[ChartPoint]:
    """Shape a sweep into bar-chart points, keeping undefined values as None."""
    points: list[ChartPoint] = []
    for scenario, outcome in result.series():
        payback = outcome.payback_months
        points.append(
            ChartPoint(
                scenario=scenario,
                monthly_gp=max(0.0, outcome.monthly_gp),
                payback_months=round(payback, 2) if payback is not None else None,
                roi_pct=outcome.roi_percentage,
                color=SCENARIO_COLORS[scenario],
            )
        )
    return points


_engine = CalculationEngine()


def evaluate(
    service: ServiceType,
    scenario: ScenarioLike,
    baseline: Baseline,
    fee: float,
    kpis: list[KPIRow],
) -> FinancialOutcome:
    return _engine.evaluate(service, scenario, baseline, fee, kpis)


def sweep(
    service: ServiceType,
    baseline: Baseline,
    fees: FeeSchedule,
    kpi_sets: KPISet,
) -> SweepResult:
    return _engine.sweep(service, baseline, fees, kpi_sets)
