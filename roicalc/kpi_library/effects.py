"""The closed table of KPI effect kinds.

Each entry fixes the effect's input unit, the aggregate bucket it sums into,
whether scenario multipliers apply, and whether it is normalized from a
percentage to a fraction during aggregation.
"""

from roicalc.kpi_library.registry import register_effect
from roicalc.models.enums import EffectGroup, EffectKind, EffectUnit

# Revenue drivers
register_effect(
    EffectKind.CONVERSION_UPLIFT_PCT,
    label="Conversion uplift %",
    unit=EffectUnit.PERCENT,
    bucket="conversion_uplift_pct",
)
register_effect(
    EffectKind.AOV_UPLIFT_PCT,
    label="AOV/ARPU uplift %",
    unit=EffectUnit.PERCENT,
    bucket="aov_uplift_pct",
)
register_effect(
    EffectKind.RETENTION_UPLIFT_PCT,
    label="Retention / repeat uplift %",
    unit=EffectUnit.PERCENT,
    bucket="retention_uplift_pct",
)
register_effect(
    EffectKind.ROAS_UPLIFT_PCT,
    label="ROAS uplift %",
    unit=EffectUnit.PERCENT,
    bucket="roas_uplift_pct",
)
register_effect(
    EffectKind.GROSS_MARGIN_PP,
    label="Gross margin improvement (pp)",
    unit=EffectUnit.PERCENTAGE_POINTS,
    bucket="gross_margin_pp",
)
register_effect(
    EffectKind.CHURN_REDUCTION_PP,
    label="Churn reduction (pp)",
    unit=EffectUnit.PERCENTAGE_POINTS,
    bucket="churn_reduction_pp",
)

# Operations drivers
register_effect(
    EffectKind.HOURS_SAVED_PER_WEEK,
    label="Weekly hours saved",
    unit=EffectUnit.HOURS,
    bucket="hours_saved_per_week",
    group=EffectGroup.OPERATIONS,
)
register_effect(
    EffectKind.ERROR_REDUCTION_PCT,
    label="Error reduction %",
    unit=EffectUnit.PERCENT,
    bucket="error_reduction",
    as_fraction=True,
    group=EffectGroup.OPERATIONS,
)
register_effect(
    EffectKind.CAPACITY_INCREASE_PCT,
    label="Capacity increase %",
    unit=EffectUnit.PERCENT,
    bucket="capacity_increase",
    as_fraction=True,
    group=EffectGroup.OPERATIONS,
)
register_effect(
    EffectKind.UTILIZATION_PCT,
    label="Utilization of added capacity %",
    unit=EffectUnit.PERCENT,
    bucket="utilization",
    scalable=False,
    as_fraction=True,
    group=EffectGroup.OPERATIONS,
)
register_effect(
    EffectKind.OVERTIME_HOURS_PER_MONTH,
    label="Overtime hours reduced (monthly)",
    unit=EffectUnit.HOURS,
    bucket="overtime_hours",
    group=EffectGroup.OPERATIONS,
)

# Other
register_effect(
    EffectKind.IMPLEMENTATION_COST_MONTHLY,
    label="Implementation cost ($/mo)",
    unit=EffectUnit.CURRENCY,
    bucket="implementation_cost",
    scalable=False,
    group=EffectGroup.OTHER,
)
register_effect(
    EffectKind.CUSTOM_GROSS_PROFIT_FLAT,
    label="Custom GP add ($/mo)",
    unit=EffectUnit.CURRENCY,
    bucket="custom_gross_profit",
    group=EffectGroup.OTHER,
)
