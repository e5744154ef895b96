from enum import Enum


class ServiceType(str, Enum):
    BLUEPRINT = "blueprint"
    OPERATIONS_DEV_LAB = "operations_dev_lab"
    ACCELERATOR = "accelerator"


class Scenario(str, Enum):
    LOW = "low"
    BASE = "base"
    HIGH = "high"

    @property
    def multiplier(self) -> float:
        return _SCENARIO_MULTIPLIERS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_SCENARIO_MULTIPLIERS = {
    Scenario.LOW: 0.5,
    Scenario.BASE: 1.0,
    Scenario.HIGH: 1.5,
}


class EffectKind(str, Enum):
    CONVERSION_UPLIFT_PCT = "conversion_uplift_pct"
    AOV_UPLIFT_PCT = "aov_uplift_pct"
    GROSS_MARGIN_PP = "gross_margin_pp"
    ROAS_UPLIFT_PCT = "roas_uplift_pct"
    CHURN_REDUCTION_PP = "churn_reduction_pp"
    RETENTION_UPLIFT_PCT = "retention_uplift_pct"
    HOURS_SAVED_PER_WEEK = "hours_saved_per_week"
    ERROR_REDUCTION_PCT = "error_reduction_pct"
    CAPACITY_INCREASE_PCT = "capacity_increase_pct"
    UTILIZATION_PCT = "utilization_pct"
    OVERTIME_HOURS_PER_MONTH = "overtime_hours_per_month"
    IMPLEMENTATION_COST_MONTHLY = "implementation_cost_monthly"
    CUSTOM_GROSS_PROFIT_FLAT = "custom_gross_profit_flat"


class EffectUnit(str, Enum):
    PERCENT = "percent"
    PERCENTAGE_POINTS = "percentage_points"
    HOURS = "hours"
    CURRENCY = "currency"


class EffectGroup(str, Enum):
    REVENUE = "revenue"
    OPERATIONS = "operations"
    OTHER = "other"


class PresetCategory(str, Enum):
    INDUSTRY = "industry"
    CLIENT = "client"
