from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from roicalc.models.enums import EffectGroup, EffectKind, EffectUnit, ServiceType

# Global registries -- effect kind -> EffectDefinition, service -> ServiceDefinition
_EFFECTS: dict[EffectKind, EffectDefinition] = {}
_SERVICES: dict[ServiceType, ServiceDefinition] = {}


@dataclass(frozen=True)
class EffectDefinition:
    """How one effect kind is scaled, normalized and bucketed."""

    kind: EffectKind
    label: str
    unit: EffectUnit
    bucket: str  # AggregateEffects field name
    scalable: bool = True
    as_fraction: bool = False  # divide by 100 during aggregation
    group: EffectGroup = EffectGroup.REVENUE

    def normalize(self, value: float) -> float:
        return value / 100 if self.as_fraction else value


@dataclass(frozen=True)
class ServiceDefinition:
    """A fixed service formula in the library."""

    service: ServiceType
    label: str
    description: str
    effects: list[EffectKind]  # effect kinds the formula reads
    formula_fn: Callable[..., object]


def register_effect(
    kind: EffectKind,
    label: str,
    unit: EffectUnit,
    bucket: str,
    scalable: bool = True,
    as_fraction: bool = False,
    group: EffectGroup = EffectGroup.REVENUE,
) -> EffectDefinition:
    """Add an effect kind to the table."""
    definition = EffectDefinition(
        kind=kind,
        label=label,
        unit=unit,
        bucket=bucket,
        scalable=scalable,
        as_fraction=as_fraction,
        group=group,
    )
    _EFFECTS[kind] = definition
    return definition


def register_service(
    service: ServiceType,
    label: str,
    description: str,
    effects: list[EffectKind],
) -> Callable:
    """Decorator to register a formula function as a service calculator."""

    def decorator(fn: Callable[..., object]) -> Callable[..., object]:
        _SERVICES[service] = ServiceDefinition(
            service=service,
            label=label,
            description=description,
            effects=effects,
            formula_fn=fn,
        )
        return fn

    return decorator


def get_effect(kind: EffectKind) -> Optional[EffectDefinition]:
    """Look up an effect definition by kind."""
    return _EFFECTS.get(kind)


def require_effect(kind: EffectKind) -> EffectDefinition:
    definition = get_effect(kind)
    if definition is None:
        raise ValueError(f"Effect '{kind}' is not registered in the effect table")
    return definition


def get_all_effects() -> dict[EffectKind, EffectDefinition]:
    """Return the full effect table (read-only copy)."""
    return dict(_EFFECTS)


def get_service(service: ServiceType) -> Optional[ServiceDefinition]:
    """Look up a service formula by service type."""
    return _SERVICES.get(service)


def get_all_services() -> dict[ServiceType, ServiceDefinition]:
    """Return the full service registry (read-only copy)."""
    return dict(_SERVICES)
