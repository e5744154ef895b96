"""Reduce a KPI list to one magnitude per effect bucket."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from roicalc.engine.scaler import scaled_value
from roicalc.kpi_library.registry import require_effect
from roicalc.models.kpi import KPIRow

logger = logging.getLogger(__name__)

DEFAULT_UTILIZATION = 0.6


@dataclass(frozen=True)
class AggregateEffects:
    """Summed effect magnitudes, one canonical unit per bucket.

    Percent buckets stay in percent form (5.0 == +5%). error_reduction,
    capacity_increase and utilization are fractions (0.4 == 40%).
    """

    conversion_uplift_pct: float = 0.0
    aov_uplift_pct: float = 0.0
    gross_margin_pp: float = 0.0
    roas_uplift_pct: float = 0.0
    churn_reduction_pp: float = 0.0
    retention_uplift_pct: float = 0.0
    hours_saved_per_week: float = 0.0
    error_reduction: float = 0.0
    capacity_increase: float = 0.0
    utilization: float = DEFAULT_UTILIZATION
    overtime_hours: float = 0.0
    implementation_cost: float = 0.0
    custom_gross_profit: float = 0.0


def _resolve_utilization(total: float) -> float:
    # Zero means "not specified", not "none of the added capacity is used".
    if total == 0:
        return DEFAULT_UTILIZATION
    return max(0.0, min(total, 1.0))


def aggregate_effects(kpis: list[KPIRow], multiplier: float = 1.0) -> AggregateEffects:
    """Sum enabled KPI rows into effect buckets for one scenario multiplier."""
    totals: dict[str, float] = {f.name: 0.0 for f in fields(AggregateEffects)}

    for kpi in kpis:
        if not kpi.enabled:
            continue
        definition = require_effect(kpi.effect)
        value = scaled_value(kpi.effect, kpi.value, multiplier)
        totals[definition.bucket] += definition.normalize(value)

    totals["utilization"] = _resolve_utilization(totals["utilization"])
    logger.debug("Aggregated %d KPI rows at x%s: %s", len(kpis), multiplier, totals)
    return AggregateEffects(**totals)
