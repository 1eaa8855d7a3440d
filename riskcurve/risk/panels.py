from __future__ import annotations

"""
Turn a risk curve result into the strings and series the demo UI renders.

Design intent:
- Keep UI-facing text deterministic and free of markup.
- Print numbers the way the browser demo did (50, not 50.0).
"""

from dataclasses import dataclass

from riskcurve.risk.curve import TIME_LABELS, PatientInput, RiskCurveResult, format_number


@dataclass(frozen=True)
class ChartSeries:
    label: str
    data: list[float]


@dataclass(frozen=True)
class RiskPanelView:
    dose_text: str
    risk_diff_text: str
    recommendation_text: str
    metabolism_text: str
    labels: list[str]
    series: list[ChartSeries]


def format_dose_label(dose: float) -> str:
    return f"{format_number(dose)} mg"


def format_risk_diff(diff_percent: int, dose: float) -> str:
    return f"{diff_percent}% higher risk for women at ~{format_number(dose)}mg"


def build_panel_view(patient: PatientInput, result: RiskCurveResult) -> RiskPanelView:
    return RiskPanelView(
        dose_text=format_dose_label(patient.dose),
        risk_diff_text=format_risk_diff(result.diff_percent, patient.dose),
        recommendation_text=result.recommendation.text,
        metabolism_text=result.metabolism_note,
        labels=list(TIME_LABELS),
        series=[
            ChartSeries(label="Female", data=list(result.female_curve)),
            ChartSeries(label="Male", data=list(result.male_curve)),
        ],
    )
