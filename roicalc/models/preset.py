from __future__ import annotations

from dataclasses import dataclass

from .baseline import Baseline, FeeSchedule
from .enums import PresetCategory
from .kpi import KPISet


@dataclass(frozen=True)
class Preset:
    """Reusable starting configuration: baseline, fees and KPI lists."""

    id: str
    name: str
    category: PresetCategory
    baseline: Baseline
    fees: FeeSchedule
    kpis: KPISet
