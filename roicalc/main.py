"""FastAPI application for the ROI calculator -- evaluation, sweeps, presets, sessions."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from functools import lru_cache
from typing import Any, Optional
from uuid import uuid4

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, field_validator

from roicalc.config.settings import get_settings
from roicalc.engine.calculator import CalculationEngine, build_chart_series
from roicalc.engine.result import FinancialOutcome, SweepResult
from roicalc.engine.scaler import scale_kpis
from roicalc.formatting import format_currency, format_months, format_number, format_roi
from roicalc.kpi_library.registry import get_all_effects, get_all_services
from roicalc.models.baseline import baseline_summary
from roicalc.models.enums import EffectKind, Scenario, ServiceType
from roicalc.models.kpi import KPIRow
from roicalc.presets.schema import (
    BaselineConfig,
    FeeConfig,
    KPIConfig,
    KPISetConfig,
    PresetConfig,
    check_unique_ids,
)
from roicalc.presets.store import PresetStore, client_preset
from roicalc.session import SessionState

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="ROI Calculator API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

engine = CalculationEngine()

# In-memory session store (single user, single process)
_sessions: dict[str, SessionState] = {}


@lru_cache
def get_preset_store() -> PresetStore:
    return PresetStore(cache_path=settings.presets_cache_path)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class EvaluateRequest(BaseModel):
    service: ServiceType
    scenario: Scenario = Scenario.BASE
    baseline: BaselineConfig
    fee: float
    kpis: list[KPIConfig] = []

    @field_validator("kpis")
    @classmethod
    def kpi_ids_unique(cls, v: list[KPIConfig]) -> list[KPIConfig]:
        return check_unique_ids(v)


class SweepRequest(BaseModel):
    service: ServiceType
    baseline: BaselineConfig
    fees: FeeConfig
    kpis: KPISetConfig


class CreateSessionRequest(BaseModel):
    preset_id: Optional[str] = None
    service: ServiceType = ServiceType.BLUEPRINT
    scenario: Scenario = Scenario.BASE


class UpdateSessionRequest(BaseModel):
    preset_id: Optional[str] = None
    service: Optional[ServiceType] = None
    scenario: Optional[Scenario] = None
    baseline: Optional[BaselineConfig] = None
    fees: Optional[FeeConfig] = None


class AddKPIRequest(BaseModel):
    label: str = "New KPI"
    effect: EffectKind = EffectKind.CONVERSION_UPLIFT_PCT
    value: float = 1.0
    enabled: bool = True


class UpdateKPIRequest(BaseModel):
    label: Optional[str] = None
    effect: Optional[EffectKind] = None
    value: Optional[float] = None
    enabled: Optional[bool] = None


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _finite(x: Optional[float]) -> Optional[float]:
    """Non-finite floats cannot go over JSON; they mean 'undefined' here."""
    if x is None or not math.isfinite(x):
        return None
    return x


def _outcome_to_dict(outcome: FinancialOutcome) -> dict[str, Any]:
    return {
        "monthly_gp": _finite(outcome.monthly_gp),
        "annual_gp": _finite(outcome.annual_gp),
        "fee": _finite(outcome.fee),
        "payback_months": _finite(outcome.payback_months),
        "roi": _finite(outcome.roi),
        "roi_percentage": _finite(outcome.roi_percentage),
        "components": {k: _finite(v) for k, v in outcome.components.items()},
        "formatted": {
            "monthly_gp": format_currency(outcome.monthly_gp),
            "annual_gp": format_currency(outcome.annual_gp),
            "payback_months": format_months(outcome.payback_months),
            "roi": format_roi(outcome.roi),
        },
    }


def _sweep_to_dict(result: SweepResult) -> dict[str, Any]:
    return {
        "service": result.service.value,
        "fee": _finite(result.fee),
        "scenarios": {
            scenario.value: _outcome_to_dict(outcome)
            for scenario, outcome in result.series()
        },
        "chart": [
            {
                "scenario": point.scenario.label,
                "monthly_gp": _finite(point.monthly_gp),
                "payback_months": _finite(point.payback_months),
                "roi_pct": _finite(point.roi_pct),
                "color": point.color,
            }
            for point in build_chart_series(result)
        ],
    }


def _kpi_to_dict(row: KPIRow) -> dict[str, Any]:
    return KPIConfig.from_domain(row).model_dump(mode="json")


def _session_to_dict(session_id: str, session: SessionState) -> dict[str, Any]:
    return {
        "session_id": session_id,
        "preset_id": session.preset_id,
        "service": session.service.value,
        "scenario": session.scenario.value,
        "baseline": BaselineConfig.from_domain(session.baseline).model_dump(),
        "fees": FeeConfig.from_domain(session.fees).model_dump(),
        "kpis": KPISetConfig.from_domain(session.kpis).model_dump(mode="json"),
    }


def _get_session(session_id: str) -> SessionState:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return session


# ---------------------------------------------------------------------------
# Library
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/effects")
async def list_effects():
    """The closed table of KPI effect kinds."""
    return [
        {
            "kind": d.kind.value,
            "label": d.label,
            "group": d.group.value,
            "unit": d.unit.value,
            "scalable": d.scalable,
            "as_fraction": d.as_fraction,
        }
        for d in get_all_effects().values()
    ]


@app.get("/api/services")
async def list_services():
    """The three service formulas and the effects each one reads."""
    return [
        {
            "service": d.service.value,
            "label": d.label,
            "description": d.description,
            "effects": [e.value for e in d.effects],
        }
        for d in get_all_services().values()
    ]


# ---------------------------------------------------------------------------
# Stateless calculation
# ---------------------------------------------------------------------------


@app.post("/api/evaluate")
async def evaluate(body: EvaluateRequest):
    """Evaluate one service under one scenario."""
    outcome = engine.evaluate(
        body.service,
        body.scenario,
        body.baseline.to_domain(),
        body.fee,
        [k.to_domain() for k in body.kpis],
    )
    return {
        "service": body.service.value,
        "scenario": body.scenario.value,
        "outcome": _outcome_to_dict(outcome),
    }


@app.post("/api/sweep")
async def sweep(body: SweepRequest):
    """Evaluate one service under Low, Base and High."""
    result = engine.sweep(
        body.service,
        body.baseline.to_domain(),
        body.fees.to_domain(),
        body.kpis.to_domain(),
    )
    return _sweep_to_dict(result)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


@app.get("/api/presets")
async def list_presets(store: PresetStore = Depends(get_preset_store)):
    return [PresetConfig.from_domain(p).model_dump(mode="json") for p in store.list()]


@app.post("/api/presets")
async def save_preset(body: PresetConfig, store: PresetStore = Depends(get_preset_store)):
    """Save a client preset to the local cache."""
    try:
        preset = store.save(client_preset(body.to_domain()))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    logger.info(f"Saved preset {preset.id}")
    return PresetConfig.from_domain(preset).model_dump(mode="json")


@app.delete("/api/presets/{preset_id}")
async def delete_preset(preset_id: str, store: PresetStore = Depends(get_preset_store)):
    try:
        removed = store.delete(preset_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not removed:
        raise HTTPException(status_code=404, detail=f"Preset '{preset_id}' not found")
    return {"deleted": preset_id}


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@app.post("/api/sessions")
async def create_session(
    body: CreateSessionRequest,
    store: PresetStore = Depends(get_preset_store),
):
    """Start an editing session seeded from a preset."""
    preset_id = body.preset_id or settings.default_preset_id
    preset = store.get(preset_id)
    if preset is None:
        raise HTTPException(status_code=404, detail=f"Preset '{preset_id}' not found")

    session_id = str(uuid4())
    _sessions[session_id] = SessionState.from_preset(
        preset, service=body.service, scenario=body.scenario
    )
    logger.info(f"Created session {session_id} from preset {preset_id}")
    return _session_to_dict(session_id, _sessions[session_id])


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str):
    return _session_to_dict(session_id, _get_session(session_id))


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    _get_session(session_id)
    del _sessions[session_id]
    logger.info(f"Deleted session {session_id}")
    return {"deleted": session_id}


@app.patch("/api/sessions/{session_id}")
async def update_session(
    session_id: str,
    body: UpdateSessionRequest,
    store: PresetStore = Depends(get_preset_store),
):
    """Switch preset, service or scenario, or replace baseline / fees."""
    session = _get_session(session_id)
    if body.preset_id is not None:
        preset = store.get(body.preset_id)
        if preset is None:
            raise HTTPException(status_code=404, detail=f"Preset '{body.preset_id}' not found")
        session.apply_preset(preset)
    if body.service is not None:
        session.service = body.service
    if body.scenario is not None:
        session.scenario = body.scenario
    if body.baseline is not None:
        session.baseline = body.baseline.to_domain()
    if body.fees is not None:
        session.fees = body.fees.to_domain()
    return _session_to_dict(session_id, session)


@app.post("/api/sessions/{session_id}/kpis")
async def add_session_kpi(session_id: str, body: AddKPIRequest):
    """Append a KPI row to the active service's list."""
    session = _get_session(session_id)
    row = session.add_kpi(
        label=body.label, effect=body.effect, value=body.value, enabled=body.enabled
    )
    return _kpi_to_dict(row)


@app.patch("/api/sessions/{session_id}/kpis/{kpi_id}")
async def update_session_kpi(session_id: str, kpi_id: str, body: UpdateKPIRequest):
    session = _get_session(session_id)
    changes = body.model_dump(exclude_none=True)
    row = session.update_kpi(kpi_id, **changes)
    if row is None:
        raise HTTPException(status_code=404, detail=f"KPI '{kpi_id}' not found")
    return _kpi_to_dict(row)


@app.delete("/api/sessions/{session_id}/kpis/{kpi_id}")
async def remove_session_kpi(session_id: str, kpi_id: str):
    session = _get_session(session_id)
    if not session.remove_kpi(kpi_id):
        raise HTTPException(status_code=404, detail=f"KPI '{kpi_id}' not found")
    return {"removed": kpi_id}


@app.get("/api/sessions/{session_id}/result")
async def get_session_result(session_id: str):
    """Current-scenario outcome, the Low/Base/High sweep and chart series.

    scaled_kpis shows the active rows as the selected scenario applies them.
    """
    session = _get_session(session_id)
    summary = asdict(baseline_summary(session.baseline))
    return {
        "session_id": session_id,
        "service": session.service.value,
        "scenario": session.scenario.value,
        "baseline_summary": {k: _finite(v) for k, v in summary.items()},
        "baseline_summary_formatted": {
            "revenue": format_currency(summary["revenue"]),
            "gross_profit": format_currency(summary["gross_profit"]),
            "orders": format_number(summary["orders"]),
        },
        "scaled_kpis": [_kpi_to_dict(k) for k in scale_kpis(session.active_kpis, session.scenario)],
        "outcome": _outcome_to_dict(session.evaluate()),
        "sweep": _sweep_to_dict(session.sweep()),
    }


def run() -> None:
    uvicorn.run("roicalc.main:app", host="127.0.0.1", port=8000)
