"""Tests for SessionState -- preset seeding, KPI editing, evaluation."""

import pytest

from roicalc.models.baseline import FeeSchedule
from roicalc.models.enums import EffectKind, Scenario, ServiceType
from roicalc.presets.loader import get_default_presets
from roicalc.session import SessionState


@pytest.fixture
def presets():
    return {p.id: p for p in get_default_presets()}


@pytest.fixture
def session(presets):
    return SessionState.from_preset(presets["dtc"])


class TestSeeding:
    def test_defaults_to_blueprint_base(self, session):
        assert session.preset_id == "dtc"
        assert session.service == ServiceType.BLUEPRINT
        assert session.scenario == Scenario.BASE

    def test_active_fee_follows_service(self, session):
        assert session.active_fee == 6_000
        session.service = ServiceType.ACCELERATOR
        assert session.active_fee == 9_000

    def test_apply_preset_keeps_service_and_scenario(self, session, presets):
        session.service = ServiceType.OPERATIONS_DEV_LAB
        session.scenario = Scenario.HIGH
        session.apply_preset(presets["saas"])
        assert session.preset_id == "saas"
        assert session.baseline.subscribers == 500
        assert session.service == ServiceType.OPERATIONS_DEV_LAB
        assert session.scenario == Scenario.HIGH


class TestKPIEditing:
    def test_add_goes_to_active_service_only(self, session):
        session.service = ServiceType.ACCELERATOR
        row = session.add_kpi(label="Referral uplift", effect=EffectKind.CUSTOM_GROSS_PROFIT_FLAT, value=250)
        assert session.active_kpis[-1] == row
        assert len(session.kpis.accelerator) == 5
        assert len(session.kpis.blueprint) == 6

    def test_added_row_changes_outcome(self, session):
        before = session.evaluate().monthly_gp
        session.add_kpi(effect=EffectKind.CUSTOM_GROSS_PROFIT_FLAT, value=100)
        assert session.evaluate().monthly_gp == pytest.approx(before + 100)

    def test_remove(self, session):
        assert session.remove_kpi("bp-implementation") is True
        assert session.remove_kpi("bp-implementation") is False
        assert session.evaluate().monthly_gp == pytest.approx(4_564)

    def test_update_value_and_toggle(self, session):
        row = session.update_kpi("bp-implementation", value=0)
        assert row.value == 0
        assert session.evaluate().monthly_gp == pytest.approx(4_564)
        session.update_kpi("bp-implementation", value=300, enabled=False)
        assert session.evaluate().monthly_gp == pytest.approx(4_564)

    def test_update_unknown_returns_none(self, session):
        assert session.update_kpi("nope", value=1) is None

    def test_edits_do_not_leak_into_preset(self, session, presets):
        session.remove_kpi("bp-conversion")
        assert len(presets["dtc"].kpis.blueprint) == 6


class TestEvaluation:
    def test_evaluate_uses_selected_scenario(self, session):
        assert session.evaluate().monthly_gp == pytest.approx(4_264)
        session.scenario = Scenario.LOW
        assert session.evaluate().monthly_gp == pytest.approx(1_940.8125)

    def test_sweep_ignores_selected_scenario(self, session):
        session.scenario = Scenario.HIGH
        result = session.sweep()
        assert result.scenarios[Scenario.BASE].monthly_gp == pytest.approx(4_264)
        assert result.scenarios[Scenario.HIGH].monthly_gp == pytest.approx(6_670.6875)

    def test_fee_change_moves_roi_only(self, session):
        session.fees = FeeSchedule(blueprint=12_000)
        outcome = session.evaluate()
        assert outcome.monthly_gp == pytest.approx(4_264)
        assert outcome.roi == pytest.approx(51_168 / 12_000 - 1)
