"""Unit tests for KPI effect aggregation."""

import pytest

from roicalc.engine.aggregator import DEFAULT_UTILIZATION, AggregateEffects, aggregate_effects
from roicalc.models.enums import EffectKind, Scenario
from roicalc.models.kpi import KPIRow


def _kpi(effect, value, enabled=True, kpi_id=None):
    return KPIRow(id=kpi_id or effect.value, label="", effect=effect, value=value, enabled=enabled)


class TestDisabledRows:
    def test_empty_list_is_all_zero_with_default_utilization(self):
        assert aggregate_effects([], 1.0) == AggregateEffects()

    def test_all_disabled_contributes_nothing(self):
        rows = [_kpi(kind, 10, enabled=False, kpi_id=kind.value) for kind in EffectKind]
        result = aggregate_effects(rows, 1.5)
        assert result.utilization == DEFAULT_UTILIZATION
        for name, value in result.__dict__.items():
            if name != "utilization":
                assert value == 0.0, name

    def test_disabled_row_skipped_among_enabled(self):
        rows = [
            _kpi(EffectKind.CONVERSION_UPLIFT_PCT, 3, kpi_id="a"),
            _kpi(EffectKind.CONVERSION_UPLIFT_PCT, 50, enabled=False, kpi_id="b"),
        ]
        assert aggregate_effects(rows).conversion_uplift_pct == 3


class TestAccumulation:
    def test_same_effect_rows_sum(self):
        rows = [
            _kpi(EffectKind.CONVERSION_UPLIFT_PCT, 3, kpi_id="organic"),
            _kpi(EffectKind.CONVERSION_UPLIFT_PCT, 2, kpi_id="paid"),
        ]
        assert aggregate_effects(rows).conversion_uplift_pct == pytest.approx(5)

    def test_order_does_not_matter(self):
        rows = [
            _kpi(EffectKind.AOV_UPLIFT_PCT, 2.5, kpi_id="a"),
            _kpi(EffectKind.HOURS_SAVED_PER_WEEK, 12, kpi_id="b"),
            _kpi(EffectKind.AOV_UPLIFT_PCT, 4, kpi_id="c"),
            _kpi(EffectKind.CAPACITY_INCREASE_PCT, 10, kpi_id="d"),
        ]
        forward = aggregate_effects(rows, 1.5)
        backward = aggregate_effects(list(reversed(rows)), 1.5)
        assert forward == backward

    def test_splitting_a_row_is_equivalent(self):
        whole = aggregate_effects([_kpi(EffectKind.ROAS_UPLIFT_PCT, 10)])
        split = aggregate_effects([
            _kpi(EffectKind.ROAS_UPLIFT_PCT, 6, kpi_id="a"),
            _kpi(EffectKind.ROAS_UPLIFT_PCT, 4, kpi_id="b"),
        ])
        assert split.roas_uplift_pct == pytest.approx(whole.roas_uplift_pct)

    def test_percent_effects_stay_in_percent(self):
        result = aggregate_effects([
            _kpi(EffectKind.CONVERSION_UPLIFT_PCT, 5),
            _kpi(EffectKind.GROSS_MARGIN_PP, 1.0),
            _kpi(EffectKind.RETENTION_UPLIFT_PCT, 7),
        ])
        assert result.conversion_uplift_pct == 5
        assert result.gross_margin_pp == 1.0
        assert result.retention_uplift_pct == 7

    def test_fraction_effects_divided_by_100(self):
        result = aggregate_effects([
            _kpi(EffectKind.ERROR_REDUCTION_PCT, 40),
            _kpi(EffectKind.CAPACITY_INCREASE_PCT, 15),
            _kpi(EffectKind.UTILIZATION_PCT, 55),
        ])
        assert result.error_reduction == pytest.approx(0.40)
        assert result.capacity_increase == pytest.approx(0.15)
        assert result.utilization == pytest.approx(0.55)

    def test_label_has_no_effect(self):
        a = KPIRow(id="x", label="Organic conversion", effect=EffectKind.CONVERSION_UPLIFT_PCT, value=4)
        b = KPIRow(id="x", label="something else entirely", effect=EffectKind.CONVERSION_UPLIFT_PCT, value=4)
        assert aggregate_effects([a]) == aggregate_effects([b])


class TestScenarioScaling:
    def test_scalable_effects_scale(self):
        rows = [_kpi(EffectKind.HOURS_SAVED_PER_WEEK, 50)]
        assert aggregate_effects(rows, Scenario.LOW.multiplier).hours_saved_per_week == 25
        assert aggregate_effects(rows, Scenario.HIGH.multiplier).hours_saved_per_week == 75

    def test_fixed_effects_identical_across_scenarios(self):
        rows = [
            _kpi(EffectKind.UTILIZATION_PCT, 70),
            _kpi(EffectKind.IMPLEMENTATION_COST_MONTHLY, 300),
        ]
        results = [aggregate_effects(rows, s.multiplier) for s in Scenario]
        assert {r.utilization for r in results} == {0.7}
        assert {r.implementation_cost for r in results} == {300}

    def test_scaling_applied_before_fraction_normalization(self):
        rows = [_kpi(EffectKind.ERROR_REDUCTION_PCT, 40)]
        assert aggregate_effects(rows, 1.5).error_reduction == pytest.approx(0.60)


class TestUtilization:
    def test_unset_defaults_to_sixty_percent(self):
        assert aggregate_effects([_kpi(EffectKind.CAPACITY_INCREASE_PCT, 10)]).utilization == 0.6

    def test_rows_summing_to_zero_use_default(self):
        rows = [
            _kpi(EffectKind.UTILIZATION_PCT, 30, kpi_id="a"),
            _kpi(EffectKind.UTILIZATION_PCT, -30, kpi_id="b"),
        ]
        assert aggregate_effects(rows).utilization == DEFAULT_UTILIZATION

    def test_explicit_zero_uses_default(self):
        assert aggregate_effects([_kpi(EffectKind.UTILIZATION_PCT, 0)]).utilization == DEFAULT_UTILIZATION

    def test_clamped_above_one(self):
        rows = [
            _kpi(EffectKind.UTILIZATION_PCT, 80, kpi_id="a"),
            _kpi(EffectKind.UTILIZATION_PCT, 70, kpi_id="b"),
        ]
        assert aggregate_effects(rows).utilization == 1.0

    def test_negative_clamped_to_zero(self):
        assert aggregate_effects([_kpi(EffectKind.UTILIZATION_PCT, -20)]).utilization == 0.0
