"""Shared test fixtures for the ROI calculator test suite."""

import pytest

from roicalc.engine.calculator import CalculationEngine
from roicalc.models.baseline import Baseline, FeeSchedule
from roicalc.models.enums import EffectKind
from roicalc.models.kpi import KPIRow, KPISet


def make_kpi(effect, value, enabled=True, kpi_id=None, label=""):
    """Helper to create a KPIRow with minimal boilerplate."""
    return KPIRow(
        id=kpi_id or f"{effect.value}-{value}",
        label=label,
        effect=effect,
        value=value,
        enabled=enabled,
    )


@pytest.fixture
def engine():
    return CalculationEngine()


@pytest.fixture
def dtc_baseline() -> Baseline:
    """DTC ecommerce store -- the worked example used across the suite."""
    return Baseline(
        traffic=20_000,
        conversion_rate=2.5,
        aov=80.0,
        gross_margin=55.0,
        subscribers=0,
        churn_rate=6.0,
        ad_spend=10_000,
        roas=3.0,
        hourly_rate=45.0,
        wasted_hours_per_week=60,
        monthly_errors=40,
        cost_per_error=25.0,
    )


@pytest.fixture
def dtc_fees() -> FeeSchedule:
    return FeeSchedule(blueprint=6_000, operations_dev_lab=8_000, accelerator=9_000)


@pytest.fixture
def blueprint_kpis() -> list[KPIRow]:
    return [
        make_kpi(EffectKind.CONVERSION_UPLIFT_PCT, 5, kpi_id="bp-conversion"),
        make_kpi(EffectKind.AOV_UPLIFT_PCT, 7.5, kpi_id="bp-aov"),
        make_kpi(EffectKind.GROSS_MARGIN_PP, 1.0, kpi_id="bp-margin"),
        make_kpi(EffectKind.ROAS_UPLIFT_PCT, 10, kpi_id="bp-roas"),
        make_kpi(EffectKind.CHURN_REDUCTION_PP, 1.0, kpi_id="bp-churn"),
        make_kpi(EffectKind.IMPLEMENTATION_COST_MONTHLY, 300, kpi_id="bp-implementation"),
    ]


@pytest.fixture
def odl_kpis() -> list[KPIRow]:
    return [
        make_kpi(EffectKind.HOURS_SAVED_PER_WEEK, 50, kpi_id="odl-hours"),
        make_kpi(EffectKind.ERROR_REDUCTION_PCT, 40, kpi_id="odl-errors"),
        make_kpi(EffectKind.CAPACITY_INCREASE_PCT, 15, kpi_id="odl-capacity"),
        make_kpi(EffectKind.UTILIZATION_PCT, 60, kpi_id="odl-utilization"),
        make_kpi(EffectKind.OVERTIME_HOURS_PER_MONTH, 20, kpi_id="odl-overtime"),
    ]


@pytest.fixture
def accelerator_kpis() -> list[KPIRow]:
    return [
        make_kpi(EffectKind.CONVERSION_UPLIFT_PCT, 8, kpi_id="ga-conversion"),
        make_kpi(EffectKind.AOV_UPLIFT_PCT, 10, kpi_id="ga-aov"),
        make_kpi(EffectKind.RETENTION_UPLIFT_PCT, 5, kpi_id="ga-retention"),
        make_kpi(EffectKind.ROAS_UPLIFT_PCT, 15, kpi_id="ga-roas"),
    ]


@pytest.fixture
def dtc_kpis(blueprint_kpis, odl_kpis, accelerator_kpis) -> KPISet:
    return KPISet(
        blueprint=blueprint_kpis,
        operations_dev_lab=odl_kpis,
        accelerator=accelerator_kpis,
    )
