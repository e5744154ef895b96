from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional
from uuid import uuid4

from .enums import EffectKind, ServiceType


@dataclass(frozen=True)
class KPIRow:
    """A single assumed improvement. Only effect and value drive the math."""

    id: str
    label: str
    effect: EffectKind
    value: float
    enabled: bool = True


@dataclass(frozen=True)
class KPISet:
    """One KPI list per service."""

    blueprint: list[KPIRow] = field(default_factory=list)
    operations_dev_lab: list[KPIRow] = field(default_factory=list)
    accelerator: list[KPIRow] = field(default_factory=list)

    def for_service(self, service: ServiceType) -> list[KPIRow]:
        return getattr(self, ServiceType(service).value)

    def with_service(self, service: ServiceType, kpis: list[KPIRow]) -> KPISet:
        """Return a copy with the given service's list replaced."""
        return replace(self, **{ServiceType(service).value: list(kpis)})


def new_kpi_id(existing: list[KPIRow]) -> str:
    taken = {k.id for k in existing}
    while True:
        candidate = f"kpi-{uuid4().hex[:8]}"
        if candidate not in taken:
            return candidate


def add_kpi(
    kpis: list[KPIRow],
    label: str = "New KPI",
    effect: EffectKind = EffectKind.CONVERSION_UPLIFT_PCT,
    value: float = 1.0,
    enabled: bool = True,
    kpi_id: Optional[str] = None,
) -> list[KPIRow]:
    """Append a row. Raises ValueError if kpi_id is already taken."""
    if kpi_id is None:
        kpi_id = new_kpi_id(kpis)
    elif any(k.id == kpi_id for k in kpis):
        raise ValueError(f"KPI id '{kpi_id}' already exists in this list")
    row = KPIRow(id=kpi_id, label=label, effect=EffectKind(effect), value=value, enabled=enabled)
    return [*kpis, row]


def remove_kpi(kpis: list[KPIRow], kpi_id: str) -> list[KPIRow]:
    """Drop the row with kpi_id. Unknown ids leave the list unchanged."""
    return [k for k in kpis if k.id != kpi_id]


def update_kpi(kpis: list[KPIRow], kpi_id: str, **changes: Any) -> list[KPIRow]:
    """Patch label/effect/value/enabled on the row with kpi_id."""
    unknown = set(changes) - {"label", "effect", "value", "enabled"}
    if unknown:
        raise ValueError(f"Cannot update KPI fields: {sorted(unknown)}")
    if "effect" in changes:
        changes["effect"] = EffectKind(changes["effect"])
    return [replace(k, **changes) if k.id == kpi_id else k for k in kpis]
