"""Scenario scaling: which effect kinds move with the Low/Base/High multiplier."""

from __future__ import annotations

from dataclasses import replace
from typing import Union

# Ensure all effect kinds are registered on import
import roicalc.kpi_library.effects  # noqa: F401
from roicalc.kpi_library.registry import require_effect
from roicalc.models.enums import EffectKind, Scenario
from roicalc.models.kpi import KPIRow

ScenarioLike = Union[Scenario, str, float]


def scenario_multiplier(scenario: ScenarioLike) -> float:
    """Accept a Scenario member, its tag ("low"/"base"/"high") or a raw multiplier."""
    if isinstance(scenario, Scenario):
        return scenario.multiplier
    if isinstance(scenario, str):
        return Scenario(scenario).multiplier
    return float(scenario)


def is_scenario_scalable(kind: EffectKind) -> bool:
    return require_effect(kind).scalable


def scaled_value(kind: EffectKind, value: float, multiplier: float) -> float:
    """Apply the multiplier to value if the effect kind is scalable."""
    if is_scenario_scalable(kind):
        return value * multiplier
    return value


def scale_kpis(kpis: list[KPIRow], scenario: ScenarioLike) -> list[KPIRow]:
    """Return a copy of kpis with scalable values multiplied for the scenario.

    Disabled rows are scaled too; they stay disabled.
    """
    multiplier = scenario_multiplier(scenario)
    return [replace(k, value=scaled_value(k.effect, k.value, multiplier)) for k in kpis]
