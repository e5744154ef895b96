"""Session-scoped editable state seeded from a preset."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from roicalc.engine.calculator import CalculationEngine
from roicalc.engine.result import FinancialOutcome, SweepResult
from roicalc.models import kpi as kpi_ops
from roicalc.models.baseline import Baseline, FeeSchedule
from roicalc.models.enums import EffectKind, Scenario, ServiceType
from roicalc.models.kpi import KPIRow, KPISet
from roicalc.models.preset import Preset


@dataclass
class SessionState:
    """Everything one user is editing: the inputs to every evaluation.

    KPI edits apply to the active service's list.
    """

    preset_id: str
    baseline: Baseline
    fees: FeeSchedule
    kpis: KPISet
    service: ServiceType = ServiceType.BLUEPRINT
    scenario: Scenario = Scenario.BASE
    _engine: CalculationEngine = field(default_factory=CalculationEngine, repr=False, compare=False)

    @classmethod
    def from_preset(
        cls,
        preset: Preset,
        service: ServiceType = ServiceType.BLUEPRINT,
        scenario: Scenario = Scenario.BASE,
    ) -> SessionState:
        return cls(
            preset_id=preset.id,
            baseline=preset.baseline,
            fees=preset.fees,
            kpis=preset.kpis,
            service=ServiceType(service),
            scenario=Scenario(scenario),
        )

    def apply_preset(self, preset: Preset) -> None:
        """Reseed baseline, fees and KPI lists; service and scenario are kept."""
        self.preset_id = preset.id
        self.baseline = preset.baseline
        self.fees = preset.fees
        self.kpis = preset.kpis

    @property
    def active_kpis(self) -> list[KPIRow]:
        return self.kpis.for_service(self.service)

    @property
    def active_fee(self) -> float:
        return self.fees.fee_for(self.service)

    def _set_active_kpis(self, rows: list[KPIRow]) -> None:
        self.kpis = self.kpis.with_service(self.service, rows)

    def add_kpi(
        self,
        label: str = "New KPI",
        effect: EffectKind = EffectKind.CONVERSION_UPLIFT_PCT,
        value: float = 1.0,
        enabled: bool = True,
    ) -> KPIRow:
        rows = kpi_ops.add_kpi(self.active_kpis, label=label, effect=effect, value=value, enabled=enabled)
        self._set_active_kpis(rows)
        return rows[-1]

    def remove_kpi(self, kpi_id: str) -> bool:
        before = self.active_kpis
        after = kpi_ops.remove_kpi(before, kpi_id)
        self._set_active_kpis(after)
        return len(after) != len(before)

    def update_kpi(self, kpi_id: str, **changes: Any) -> Optional[KPIRow]:
        rows = kpi_ops.update_kpi(self.active_kpis, kpi_id, **changes)
        self._set_active_kpis(rows)
        return next((k for k in rows if k.id == kpi_id), None)

    def evaluate(self) -> FinancialOutcome:
        """Outcome for the active service under the selected scenario."""
        return self._engine.evaluate(
            self.service, self.scenario, self.baseline, self.active_fee, self.active_kpis
        )

    def sweep(self) -> SweepResult:
        return self._engine.sweep(self.service, self.baseline, self.fees, self.kpis)
