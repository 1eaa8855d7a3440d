from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from riskcurve.risk.curve import (
    MAX_AGE_YEARS,
    MAX_RISK_PERCENT,
    TIMES_HOURS,
    PatientInput,
    Recommendation,
    RiskCurveResult,
)


class PatientInputPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sex: Literal["male", "female"]
    age: int = Field(ge=0, le=MAX_AGE_YEARS)
    medication: str = Field(min_length=1, max_length=64)
    dose: float = Field(ge=0.0)

    @classmethod
    def from_patient(cls, patient: PatientInput) -> "PatientInputPayload":
        return cls(sex=patient.sex, age=patient.age, medication=patient.medication, dose=patient.dose)

    def to_patient(self) -> PatientInput:
        return PatientInput(sex=self.sex, age=self.age, medication=self.medication, dose=self.dose)


class RecommendationPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str
    dose_mg: float = Field(ge=0.0)


class RiskCurveResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    times_hours: list[int]
    female_curve: list[float]
    male_curve: list[float]
    diff_percent: int
    recommendation: RecommendationPayload
    metabolism_note: str

    @model_validator(mode="after")
    def _validate_curves(self) -> "RiskCurveResponse":
        if self.times_hours != list(TIMES_HOURS):
            raise ValueError(f"times_hours must be {list(TIMES_HOURS)}")
        for name, curve in (("female_curve", self.female_curve), ("male_curve", self.male_curve)):
            if len(curve) != len(TIMES_HOURS):
                raise ValueError(f"{name} must have {len(TIMES_HOURS)} entries")
            if any(value < 0.0 or value > MAX_RISK_PERCENT for value in curve):
                raise ValueError(f"{name} values must lie in [0, {MAX_RISK_PERCENT:g}]")
        return self

    @classmethod
    def from_result(cls, result: RiskCurveResult) -> "RiskCurveResponse":
        return cls(
            times_hours=list(result.times_hours),
            female_curve=list(result.female_curve),
            male_curve=list(result.male_curve),
            diff_percent=result.diff_percent,
            recommendation=RecommendationPayload(
                text=result.recommendation.text,
                dose_mg=result.recommendation.dose_mg,
            ),
            metabolism_note=result.metabolism_note,
        )

    def to_result(self) -> RiskCurveResult:
        return RiskCurveResult(
            times_hours=list(self.times_hours),
            female_curve=list(self.female_curve),
            male_curve=list(self.male_curve),
            diff_percent=self.diff_percent,
            recommendation=Recommendation(
                text=self.recommendation.text,
                dose_mg=self.recommendation.dose_mg,
            ),
            metabolism_note=self.metabolism_note,
        )
