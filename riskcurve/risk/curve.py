from __future__ import annotations

"""
Compute a toy sex-stratified risk-over-time curve for one patient input.

Design intent:
- Keep the calculator pure: identical input gives bit-identical output.
- Recompute every field from scratch per call; nothing is cached.
- Keep the medication table explicit with a documented fallback.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Literal

import numpy as np


Sex = Literal["male", "female"]

TIMES_HOURS: tuple[int, ...] = (1, 4, 8, 12, 48)
TIME_LABELS: tuple[str, ...] = ("1 hour", "4 hours", "8 hours", "12 hours", "48 hours")

# Base risk in percent, before any multiplier. Unknown names use DEFAULT_BASE_RISK.
MEDICATION_BASE_RISK: dict[str, float] = {
    "sertraline": 12.0,
    "amlodipine": 8.0,
    "metformin": 4.0,
}
DEFAULT_BASE_RISK = 6.0

# Placeholder identifiers used by the demo's API contract.
MEDICATION_ALIASES: dict[str, str] = {
    "drugA": "sertraline",
    "drugB": "amlodipine",
    "drugC": "metformin",
}

MAX_AGE_YEARS = 150

FEMALE_SEX_MULTIPLIER = 1.26
TIME_FACTOR_STEP = 0.06
MAX_RISK_PERCENT = 95.0
COMPARISON_INDEX = 2  # 8 hours
DIFF_DENOMINATOR_FLOOR = 1.0
RECOMMEND_DIFF_THRESHOLD = 15
RECOMMEND_DOSE_SCALE = 0.8
MIN_RECOMMENDED_DOSE_MG = 1

_METABOLISM_NOTES = {
    "sertraline": (
        "Women metabolize sertraline ~25% slower in this demo model, "
        "which can increase plasma concentrations."
    ),
}
_GENERIC_METABOLISM_NOTE = "Pharmacokinetic sex differences may alter drug exposure."


class InvalidPatientInputError(ValueError):
    pass


@dataclass(frozen=True)
class PatientInput:
    sex: Sex
    age: int
    medication: str
    dose: float

    def __post_init__(self) -> None:
        if self.sex not in ("male", "female"):
            raise InvalidPatientInputError(f"sex must be 'male' or 'female', got {self.sex!r}")
        if not isinstance(self.age, int) or isinstance(self.age, bool):
            raise InvalidPatientInputError(f"age must be an integer, got {self.age!r}")
        if not 0 <= self.age <= MAX_AGE_YEARS:
            raise InvalidPatientInputError(f"age must be between 0 and {MAX_AGE_YEARS}, got {self.age}")
        if not isinstance(self.medication, str):
            raise InvalidPatientInputError(f"medication must be a string, got {self.medication!r}")
        if not isinstance(self.dose, numbers.Real) or isinstance(self.dose, bool):
            raise InvalidPatientInputError(f"dose must be a number, got {self.dose!r}")
        try:
            dose = float(self.dose)
        except OverflowError as exc:
            raise InvalidPatientInputError(f"dose is too large, got {self.dose}") from exc
        if not math.isfinite(dose) or dose < 0:
            raise InvalidPatientInputError(f"dose must be a finite number >= 0, got {self.dose}")


@dataclass(frozen=True)
class Recommendation:
    text: str
    dose_mg: float


@dataclass(frozen=True)
class RiskCurveResult:
    times_hours: list[int]
    female_curve: list[float]
    male_curve: list[float]
    diff_percent: int
    recommendation: Recommendation
    metabolism_note: str


def format_number(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def canonical_medication(medication: str) -> str:
    return MEDICATION_ALIASES.get(medication, medication)


def is_known_medication(medication: str) -> bool:
    return canonical_medication(medication) in MEDICATION_BASE_RISK


def base_risk_for(medication: str) -> float:
    return MEDICATION_BASE_RISK.get(canonical_medication(medication), DEFAULT_BASE_RISK)


def sex_multiplier(sex: str) -> float:
    return FEMALE_SEX_MULTIPLIER if sex == "female" else 1.0


def age_multiplier(age: int) -> float:
    return 1 + max(0, age - 30) / 100


def dose_multiplier(dose: float) -> float:
    # Saturating growth; undefined below dose = -20.
    return 1 + math.log(1 + dose / 20) / 3


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _build_curve(base: float, sex_mult: float, age_mult: float, dose_mult: float) -> list[float]:
    t_factors = 1 + np.arange(len(TIMES_HOURS)) * TIME_FACTOR_STEP
    raw = base * t_factors * sex_mult * age_mult * dose_mult
    rounded = np.floor(raw * 10 + 0.5) / 10
    return [float(value) for value in np.minimum(MAX_RISK_PERCENT, rounded)]


def _diff_percent(female_curve: list[float], male_curve: list[float]) -> int:
    female_value = female_curve[COMPARISON_INDEX]
    male_value = male_curve[COMPARISON_INDEX]
    return _round_half_up(((female_value - male_value) / max(male_value, DIFF_DENOMINATOR_FLOOR)) * 100)


def recommend_dose(sex: str, dose: float, diff_percent: int) -> Recommendation:
    if sex == "female" and diff_percent > RECOMMEND_DIFF_THRESHOLD:
        recommended = max(MIN_RECOMMENDED_DOSE_MG, _round_half_up(dose * RECOMMEND_DOSE_SCALE))
        return Recommendation(
            text=f"Recommended: {format_number(recommended)} mg (optimized for female metabolism)",
            dose_mg=recommended,
        )
    return Recommendation(
        text=f"Recommended: {format_number(dose)} mg (no change)",
        dose_mg=dose,
    )


def metabolism_note_for(medication: str) -> str:
    return _METABOLISM_NOTES.get(canonical_medication(medication), _GENERIC_METABOLISM_NOTE)


def compute_risk_curve(patient: PatientInput) -> RiskCurveResult:
    """Map one patient input to female/male curves, 8-hour gap, dose advice and note.

    The female curve always carries the female multiplier and the male curve never
    does; ``patient.sex`` only drives the recommendation.
    """
    base = base_risk_for(patient.medication)
    age_mult = age_multiplier(patient.age)
    dose_mult = dose_multiplier(patient.dose)

    female_curve = _build_curve(base, FEMALE_SEX_MULTIPLIER, age_mult, dose_mult)
    male_curve = _build_curve(base, sex_multiplier("male"), age_mult, dose_mult)
    diff_percent = _diff_percent(female_curve, male_curve)

    return RiskCurveResult(
        times_hours=list(TIMES_HOURS),
        female_curve=female_curve,
        male_curve=male_curve,
        diff_percent=diff_percent,
        recommendation=recommend_dose(patient.sex, patient.dose, diff_percent),
        metabolism_note=metabolism_note_for(patient.medication),
    )
