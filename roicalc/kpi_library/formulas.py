"""Service formula implementations.

Each function is a pure calculation with no side effects. It aggregates the
service's KPI rows for one scenario multiplier, composes the monthly gross
profit lift from named terms, and hands off to the outcome deriver. All
monetary values are in the same currency as the baseline.
"""

from __future__ import annotations

from roicalc.engine.aggregator import AggregateEffects, aggregate_effects
from roicalc.engine.outcome import derive_outcome
from roicalc.engine.result import FinancialOutcome
from roicalc.kpi_library.registry import register_service
from roicalc.models.baseline import Baseline
from roicalc.models.enums import EffectKind, ServiceType
from roicalc.models.kpi import KPIRow

WEEKS_PER_MONTH = 4.33

_SHARED_EFFECTS = [
    EffectKind.CUSTOM_GROSS_PROFIT_FLAT,
    EffectKind.IMPLEMENTATION_COST_MONTHLY,
]


def _revenue_growth_gp(b: Baseline, a: AggregateEffects, margin_pct: float) -> float:
    """GP on the revenue delta from conversion and AOV uplift at margin_pct."""
    new_cr = b.conversion_rate * (1 + a.conversion_uplift_pct / 100)
    new_aov = b.aov * (1 + a.aov_uplift_pct / 100)
    revenue_new = b.traffic * (new_cr / 100) * new_aov
    return (revenue_new - b.monthly_revenue) * (margin_pct / 100)


def _roas_uplift_gp(b: Baseline, a: AggregateEffects, margin_pct: float) -> float:
    """GP on the extra ad-attributed revenue from a ROAS uplift at margin_pct."""
    attributed_new = b.ad_spend * (b.roas * (1 + a.roas_uplift_pct / 100))
    attributed_base = b.ad_spend * b.roas
    return (attributed_new - attributed_base) * (margin_pct / 100)


def _finish(components: dict[str, float], a: AggregateEffects, fee: float) -> FinancialOutcome:
    components["custom_gross_profit"] = a.custom_gross_profit
    components["implementation_cost"] = -a.implementation_cost
    monthly_gp = sum(components.values())
    return derive_outcome(monthly_gp, fee, components)


@register_service(
    service=ServiceType.BLUEPRINT,
    label="Growth Blueprint",
    description=(
        "Revenue and margin growth: conversion, AOV, gross-margin, ROAS and "
        "churn improvements, all valued at the improved gross margin."
    ),
    effects=[
        EffectKind.CONVERSION_UPLIFT_PCT,
        EffectKind.AOV_UPLIFT_PCT,
        EffectKind.GROSS_MARGIN_PP,
        EffectKind.ROAS_UPLIFT_PCT,
        EffectKind.CHURN_REDUCTION_PP,
        *_SHARED_EFFECTS,
    ],
)
def calc_blueprint(
    baseline: Baseline,
    fee: float,
    kpis: list[KPIRow],
    multiplier: float = 1.0,
) -> FinancialOutcome:
    """Monthly_GP = GP_revenue + GP_roas + GP_churn + custom - implementation"""
    a = aggregate_effects(kpis, multiplier)
    new_gm = baseline.gross_margin + a.gross_margin_pp
    new_aov = baseline.aov * (1 + a.aov_uplift_pct / 100)

    components = {
        "gp_revenue_growth": _revenue_growth_gp(baseline, a, new_gm),
        "gp_roas_uplift": _roas_uplift_gp(baseline, a, new_gm),
        "gp_churn_reduction": (
            baseline.subscribers
            * (a.churn_reduction_pp / 100)
            * (new_aov * (new_gm / 100))
        ),
    }
    return _finish(components, a, fee)


@register_service(
    service=ServiceType.OPERATIONS_DEV_LAB,
    label="Operations Development Lab",
    description=(
        "Efficiency and capacity: hours saved, fewer errors, utilized added "
        "capacity and reduced overtime."
    ),
    effects=[
        EffectKind.HOURS_SAVED_PER_WEEK,
        EffectKind.ERROR_REDUCTION_PCT,
        EffectKind.CAPACITY_INCREASE_PCT,
        EffectKind.UTILIZATION_PCT,
        EffectKind.OVERTIME_HOURS_PER_MONTH,
        *_SHARED_EFFECTS,
    ],
)
def calc_operations_dev_lab(
    baseline: Baseline,
    fee: float,
    kpis: list[KPIRow],
    multiplier: float = 1.0,
) -> FinancialOutcome:
    """Monthly_GP = hours + errors + added capacity + overtime + custom - implementation"""
    a = aggregate_effects(kpis, multiplier)
    gp_per_order = baseline.aov * (baseline.gross_margin / 100)
    added_orders = baseline.monthly_orders * a.capacity_increase * a.utilization

    components = {
        "gp_hours_saved": a.hours_saved_per_week * baseline.hourly_rate * WEEKS_PER_MONTH,
        "gp_error_reduction": baseline.monthly_errors * a.error_reduction * baseline.cost_per_error,
        "gp_added_capacity": added_orders * gp_per_order,
        "gp_overtime_reduction": a.overtime_hours * baseline.hourly_rate,
    }
    return _finish(components, a, fee)


@register_service(
    service=ServiceType.ACCELERATOR,
    label="Growth Accelerator",
    description=(
        "Growth and retention: conversion, AOV, retention and ROAS uplift at "
        "the unchanged baseline gross margin."
    ),
    effects=[
        EffectKind.CONVERSION_UPLIFT_PCT,
        EffectKind.AOV_UPLIFT_PCT,
        EffectKind.RETENTION_UPLIFT_PCT,
        EffectKind.ROAS_UPLIFT_PCT,
        *_SHARED_EFFECTS,
    ],
)
def calc_accelerator(
    baseline: Baseline,
    fee: float,
    kpis: list[KPIRow],
    multiplier: float = 1.0,
) -> FinancialOutcome:
    """Monthly_GP = GP_revenue + GP_retention + GP_roas + custom - implementation"""
    a = aggregate_effects(kpis, multiplier)
    gm = baseline.gross_margin

    components = {
        "gp_revenue_growth": _revenue_growth_gp(baseline, a, gm),
        "gp_retention": baseline.monthly_revenue * (a.retention_uplift_pct / 100) * (gm / 100),
        "gp_roas_uplift": _roas_uplift_gp(baseline, a, gm),
    }
    return _finish(components, a, fee)
