from __future__ import annotations

"""
API surface for the riskcurve service.

Design intent:
- Keep API orchestration thin and typed.
- Delegate arithmetic to the configured calculator provider.
- Recompute from scratch on every request; the only server state is the
  per-session current selection.
"""

import logging
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from riskcurve.internal_core.calculators import CalculatorError, RiskCurveProvider, build_calculator
from riskcurve.internal_core.config import load_config
from riskcurve.internal_core.contracts import PatientInputPayload, RiskCurveResponse
from riskcurve.internal_core.selection_store import InMemorySelectionStore
from riskcurve.risk.curve import (
    DEFAULT_BASE_RISK,
    MAX_AGE_YEARS,
    MEDICATION_ALIASES,
    MEDICATION_BASE_RISK,
    InvalidPatientInputError,
    PatientInput,
    RiskCurveResult,
    is_known_medication,
)
from riskcurve.risk.panels import build_panel_view


class MedicationInfo(BaseModel):
    medication: str
    base_risk_percent: float


class MedicationsResponse(BaseModel):
    medications: list[MedicationInfo] = Field(default_factory=list)
    default_base_risk_percent: float
    aliases: dict[str, str] = Field(default_factory=dict)


class ChartSeriesPayload(BaseModel):
    label: str
    data: list[float] = Field(default_factory=list)


class ChartPayload(BaseModel):
    labels: list[str] = Field(default_factory=list)
    series: list[ChartSeriesPayload] = Field(default_factory=list)


class PanelTextPayload(BaseModel):
    dose_text: str
    risk_diff_text: str
    recommendation_text: str
    metabolism_text: str


class RiskPanelResponse(BaseModel):
    selection: PatientInputPayload
    result: RiskCurveResponse
    panels: PanelTextPayload
    chart: ChartPayload
    debug: dict[str, Any] = Field(default_factory=dict)


class SelectionResponse(RiskPanelResponse):
    session_id: str


class SelectionUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sex: Literal["male", "female"] | None = None
    age: int | None = Field(default=None, ge=0, le=MAX_AGE_YEARS)
    medication: str | None = Field(default=None, min_length=1, max_length=64)
    dose: float | None = Field(default=None, ge=0.0)


app = FastAPI(title="riskcurve service")
logger = logging.getLogger(__name__)
_CONFIG = load_config()

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_CONFIG.RISKCURVE_CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_calculator() -> RiskCurveProvider:
    existing = getattr(app.state, "risk_curve_calculator", None)
    if isinstance(existing, RiskCurveProvider):
        return existing
    created = build_calculator(_CONFIG)
    logger.info("risk curve calculator provider=%s", created.name())
    setattr(app.state, "risk_curve_calculator", created)
    return created


def _get_selection_store() -> InMemorySelectionStore:
    existing = getattr(app.state, "selection_store", None)
    if isinstance(existing, InMemorySelectionStore):
        return existing
    created = InMemorySelectionStore(ttl_seconds=_CONFIG.RISKCURVE_SELECTION_TTL_SECONDS)
    setattr(app.state, "selection_store", created)
    return created


def _to_patient(payload: PatientInputPayload) -> PatientInput:
    try:
        return payload.to_patient()
    except InvalidPatientInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _compute(patient: PatientInput) -> tuple[RiskCurveResult, str]:
    calculator = _get_calculator()
    try:
        return calculator.compute(patient), calculator.name()
    except CalculatorError as exc:
        logger.warning(
            "risk curve calculator failed provider=%s code=%s detail=%s",
            exc.provider_name,
            exc.code,
            exc.message,
        )
        raise HTTPException(status_code=502, detail=f"Risk curve calculator failed: {exc.message}") from exc


def _panel_fields(patient: PatientInput, result: RiskCurveResult, provider: str) -> dict[str, Any]:
    view = build_panel_view(patient, result)
    return {
        "selection": PatientInputPayload.from_patient(patient),
        "result": RiskCurveResponse.from_result(result),
        "panels": PanelTextPayload(
            dose_text=view.dose_text,
            risk_diff_text=view.risk_diff_text,
            recommendation_text=view.recommendation_text,
            metabolism_text=view.metabolism_text,
        ),
        "chart": ChartPayload(
            labels=view.labels,
            series=[ChartSeriesPayload(label=item.label, data=item.data) for item in view.series],
        ),
        "debug": {
            "provider": provider,
            "known_medication": is_known_medication(patient.medication),
        },
    }


def _selection_response(session_id: str, patient: PatientInput) -> SelectionResponse:
    result, provider = _compute(patient)
    return SelectionResponse(session_id=session_id, **_panel_fields(patient, result, provider))


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/medications", response_model=MedicationsResponse)
async def medications() -> MedicationsResponse:
    return MedicationsResponse(
        medications=[
            MedicationInfo(medication=name, base_risk_percent=base)
            for name, base in MEDICATION_BASE_RISK.items()
        ],
        default_base_risk_percent=DEFAULT_BASE_RISK,
        aliases=dict(MEDICATION_ALIASES),
    )


@app.post("/api/predict", response_model=RiskCurveResponse)
def predict(payload: PatientInputPayload) -> RiskCurveResponse:
    result, _ = _compute(_to_patient(payload))
    return RiskCurveResponse.from_result(result)


@app.post("/api/panel", response_model=RiskPanelResponse)
def panel(payload: PatientInputPayload) -> RiskPanelResponse:
    patient = _to_patient(payload)
    result, provider = _compute(patient)
    return RiskPanelResponse(**_panel_fields(patient, result, provider))


@app.post("/selection", response_model=SelectionResponse)
def selection_create() -> SelectionResponse:
    store = _get_selection_store()
    store.purge_expired()
    session_id = store.create_session()
    return _selection_response(session_id, store.get(session_id))


@app.get("/selection/{session_id}", response_model=SelectionResponse)
def selection_get(session_id: str) -> SelectionResponse:
    store = _get_selection_store()
    try:
        patient = store.get(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Selection session not found: {session_id}") from exc
    return _selection_response(session_id, patient)


@app.patch("/selection/{session_id}", response_model=SelectionResponse)
def selection_update(session_id: str, payload: SelectionUpdateRequest) -> SelectionResponse:
    changes = payload.model_dump(exclude_none=True)
    store = _get_selection_store()
    try:
        patient = store.update(session_id, **changes)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Selection session not found: {session_id}") from exc
    except InvalidPatientInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _selection_response(session_id, patient)


@app.delete("/selection/{session_id}")
def selection_delete(session_id: str) -> dict[str, str]:
    store = _get_selection_store()
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Selection session not found: {session_id}")
    return {"status": "deleted", "session_id": session_id}
