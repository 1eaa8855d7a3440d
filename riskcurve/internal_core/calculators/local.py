from __future__ import annotations

from riskcurve.risk.curve import PatientInput, RiskCurveResult, compute_risk_curve

from .base import RiskCurveProvider


class LocalRiskCurveProvider(RiskCurveProvider):
    def compute(self, patient: PatientInput) -> RiskCurveResult:
        return compute_risk_curve(patient)

    def name(self) -> str:
        return "local"
