"""Pydantic models for preset validation and API payloads."""

from __future__ import annotations

from dataclasses import asdict

from pydantic import BaseModel, Field, field_validator, model_validator

from roicalc.models.baseline import Baseline, FeeSchedule
from roicalc.models.enums import EffectKind, PresetCategory
from roicalc.models.kpi import KPIRow, KPISet
from roicalc.models.preset import Preset


class BaselineConfig(BaseModel):
    """Baseline business metrics, monthly where applicable."""

    traffic: float = Field(default=0.0, description="Monthly traffic / leads")
    conversion_rate: float = Field(default=0.0, description="Conversion rate, %")
    aov: float = Field(default=0.0, description="Average order value / ARPU")
    gross_margin: float = Field(default=0.0, description="Gross margin, %")
    subscribers: float = Field(default=0.0, description="Monthly subscribers")
    churn_rate: float = Field(default=0.0, description="Monthly churn rate, %")
    ad_spend: float = Field(default=0.0, description="Monthly ad spend")
    roas: float = Field(default=0.0, description="Return on ad spend, e.g. 3.0")
    hourly_rate: float = Field(default=0.0, description="Loaded hourly labor cost")
    wasted_hours_per_week: float = Field(default=0.0, description="Process hours wasted per week")
    monthly_errors: float = Field(default=0.0, description="Monthly error / defect count")
    cost_per_error: float = Field(default=0.0, description="Cost per error / defect")

    def to_domain(self) -> Baseline:
        return Baseline(**self.model_dump())

    @classmethod
    def from_domain(cls, baseline: Baseline) -> BaselineConfig:
        return cls(**asdict(baseline))


class FeeConfig(BaseModel):
    """One-time fee per service."""

    blueprint: float = 0.0
    operations_dev_lab: float = 0.0
    accelerator: float = 0.0

    def to_domain(self) -> FeeSchedule:
        return FeeSchedule(**self.model_dump())

    @classmethod
    def from_domain(cls, fees: FeeSchedule) -> FeeConfig:
        return cls(**asdict(fees))


class KPIConfig(BaseModel):
    """A single KPI row."""

    id: str = Field(min_length=1)
    label: str = ""
    effect: EffectKind
    value: float
    enabled: bool = True

    def to_domain(self) -> KPIRow:
        return KPIRow(
            id=self.id,
            label=self.label,
            effect=self.effect,
            value=self.value,
            enabled=self.enabled,
        )

    @classmethod
    def from_domain(cls, row: KPIRow) -> KPIConfig:
        return cls(id=row.id, label=row.label, effect=row.effect, value=row.value, enabled=row.enabled)


def check_unique_ids(rows: list[KPIConfig]) -> list[KPIConfig]:
    seen: set[str] = set()
    for row in rows:
        if row.id in seen:
            raise ValueError(f"Duplicate KPI id '{row.id}'")
        seen.add(row.id)
    return rows


class KPISetConfig(BaseModel):
    """KPI lists keyed by service."""

    blueprint: list[KPIConfig] = Field(default_factory=list)
    operations_dev_lab: list[KPIConfig] = Field(default_factory=list)
    accelerator: list[KPIConfig] = Field(default_factory=list)

    @field_validator("blueprint", "operations_dev_lab", "accelerator")
    @classmethod
    def ids_unique_per_list(cls, v: list[KPIConfig]) -> list[KPIConfig]:
        return check_unique_ids(v)

    def to_domain(self) -> KPISet:
        return KPISet(
            blueprint=[k.to_domain() for k in self.blueprint],
            operations_dev_lab=[k.to_domain() for k in self.operations_dev_lab],
            accelerator=[k.to_domain() for k in self.accelerator],
        )

    @classmethod
    def from_domain(cls, kpis: KPISet) -> KPISetConfig:
        return cls(
            blueprint=[KPIConfig.from_domain(k) for k in kpis.blueprint],
            operations_dev_lab=[KPIConfig.from_domain(k) for k in kpis.operations_dev_lab],
            accelerator=[KPIConfig.from_domain(k) for k in kpis.accelerator],
        )


class PresetConfig(BaseModel):
    """A named starting configuration."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: PresetCategory = PresetCategory.CLIENT
    baseline: BaselineConfig
    fees: FeeConfig
    kpis: KPISetConfig

    def to_domain(self) -> Preset:
        return Preset(
            id=self.id,
            name=self.name,
            category=self.category,
            baseline=self.baseline.to_domain(),
            fees=self.fees.to_domain(),
            kpis=self.kpis.to_domain(),
        )

    @classmethod
    def from_domain(cls, preset: Preset) -> PresetConfig:
        return cls(
            id=preset.id,
            name=preset.name,
            category=preset.category,
            baseline=BaselineConfig.from_domain(preset.baseline),
            fees=FeeConfig.from_domain(preset.fees),
            kpis=KPISetConfig.from_domain(preset.kpis),
        )


class PresetFile(BaseModel):
    """Top-level preset file: a list of presets with unique ids."""

    presets: list[PresetConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def preset_ids_unique(self) -> PresetFile:
        ids = [p.id for p in self.presets]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ValueError(f"Duplicate preset ids: {dupes}")
        return self
