import itertools

import pytest

from riskcurve.risk.curve import (
    DEFAULT_BASE_RISK,
    TIMES_HOURS,
    InvalidPatientInputError,
    PatientInput,
    _diff_percent,
    base_risk_for,
    compute_risk_curve,
    dose_multiplier,
    format_number,
    recommend_dose,
)


def test_male_reference_vector() -> None:
    result = compute_risk_curve(PatientInput(sex="male", age=35, medication="sertraline", dose=50))
    assert result.times_hours == [1, 4, 8, 12, 48]
    assert result.male_curve == [17.9, 18.9, 20.0, 21.1, 22.1]
    assert result.female_curve == [22.5, 23.9, 25.2, 26.6, 27.9]
    assert result.diff_percent == 26
    assert result.recommendation.dose_mg == 50
    assert result.recommendation.text == "Recommended: 50 mg (no change)"
    assert result.metabolism_note.startswith("Women metabolize sertraline ~25% slower")


def test_female_with_large_gap_gets_reduced_dose() -> None:
    result = compute_risk_curve(PatientInput(sex="female", age=35, medication="sertraline", dose=50))
    assert result.diff_percent > 15
    assert result.recommendation.dose_mg == 40
    assert result.recommendation.text == "Recommended: 40 mg (optimized for female metabolism)"


def test_amlodipine_reference_vector() -> None:
    result = compute_risk_curve(PatientInput(sex="male", age=30, medication="amlodipine", dose=20))
    assert result.male_curve == [9.8, 10.4, 11.0, 11.6, 12.2]
    assert result.female_curve == [12.4, 13.2, 13.9, 14.6, 15.4]
    assert result.diff_percent == 26
    assert result.metabolism_note == "Pharmacokinetic sex differences may alter drug exposure."


def test_zero_dose_recommendation_never_drops_below_one_mg() -> None:
    result = compute_risk_curve(PatientInput(sex="female", age=20, medication="metformin", dose=0))
    assert result.male_curve == [4.0, 4.2, 4.5, 4.7, 5.0]
    assert result.female_curve == [5.0, 5.3, 5.6, 5.9, 6.2]
    assert result.diff_percent == 24
    assert result.recommendation.dose_mg == 1
    assert result.recommendation.text == "Recommended: 1 mg (optimized for female metabolism)"


def test_cap_at_95_narrows_gap_and_suppresses_dose_change() -> None:
    result = compute_risk_curve(PatientInput(sex="female", age=130, medication="sertraline", dose=10000))
    assert max(result.female_curve) == 95.0
    assert result.female_curve[2] == 95.0
    assert result.male_curve[2] == 82.6
    assert result.diff_percent == 15
    assert result.recommendation.dose_mg == 10000
    assert result.recommendation.text == "Recommended: 10000 mg (no change)"


def test_unknown_medication_uses_default_base_risk() -> None:
    assert base_risk_for("ibuprofen") == DEFAULT_BASE_RISK == 6.0
    result = compute_risk_curve(PatientInput(sex="male", age=35, medication="ibuprofen", dose=50))
    assert result.male_curve[0] == 8.9
    assert result.metabolism_note == "Pharmacokinetic sex differences may alter drug exposure."


@pytest.mark.parametrize(
    "sex,age,medication,dose",
    list(
        itertools.product(
            ["male", "female"],
            [0, 30, 55, 90],
            ["sertraline", "amlodipine", "metformin", "unlisted"],
            [0, 5, 50, 400],
        )
    ),
)
def test_curve_invariants(sex: str, age: int, medication: str, dose: float) -> None:
    patient = PatientInput(sex=sex, age=age, medication=medication, dose=dose)
    result = compute_risk_curve(patient)

    assert len(result.female_curve) == len(TIMES_HOURS)
    assert len(result.male_curve) == len(TIMES_HOURS)
    for curve in (result.female_curve, result.male_curve):
        assert all(0.0 <= value <= 95.0 for value in curve)
        assert all(later >= earlier for earlier, later in zip(curve, curve[1:]))
    assert all(m <= f for m, f in zip(result.male_curve, result.female_curve))
    if sex == "male":
        assert result.recommendation.dose_mg == dose
    elif result.diff_percent > 15:
        assert 1 <= result.recommendation.dose_mg <= max(1, dose)
    assert compute_risk_curve(patient) == result


def test_diff_percent_floors_small_denominator_at_one() -> None:
    assert _diff_percent([0.0, 0.0, 2.0, 0.0, 0.0], [0.0, 0.0, 0.0, 0.0, 0.0]) == 200
    assert _diff_percent([0.0, 0.0, 0.9, 0.0, 0.0], [0.0, 0.0, 0.5, 0.0, 0.0]) == 40


def test_recommendation_rounds_half_up() -> None:
    assert recommend_dose("female", 13.125, 20).dose_mg == 11
    assert recommend_dose("female", 12.5, 16).text == "Recommended: 10 mg (optimized for female metabolism)"
    assert recommend_dose("female", 12.5, 15).text == "Recommended: 12.5 mg (no change)"
    assert recommend_dose("male", 12.5, 80).dose_mg == 12.5


def test_dose_multiplier_saturates() -> None:
    assert dose_multiplier(0) == 1.0
    assert dose_multiplier(400) - dose_multiplier(200) < dose_multiplier(200) - dose_multiplier(0)


def test_format_number_drops_integral_decimal() -> None:
    assert format_number(50.0) == "50"
    assert format_number(12.5) == "12.5"
    assert format_number(40) == "40"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sex": "other", "age": 35, "medication": "sertraline", "dose": 50},
        {"sex": "male", "age": -1, "medication": "sertraline", "dose": 50},
        {"sex": "female", "age": 35, "medication": "sertraline", "dose": -0.5},
        {"sex": "female", "age": 35, "medication": "sertraline", "dose": float("nan")},
        {"sex": "female", "age": 35, "medication": "sertraline", "dose": float("inf")},
        {"sex": "male", "age": 35.5, "medication": "sertraline", "dose": 50},
        {"sex": "male", "age": "35", "medication": "sertraline", "dose": 50},
        {"sex": "male", "age": True, "medication": "sertraline", "dose": 50},
        {"sex": "male", "age": 151, "medication": "sertraline", "dose": 50},
        {"sex": "male", "age": 10**400, "medication": "sertraline", "dose": 50},
        {"sex": "male", "age": 35, "medication": None, "dose": 50},
        {"sex": "male", "age": 35, "medication": "sertraline", "dose": "abc"},
        {"sex": "male", "age": 35, "medication": "sertraline", "dose": False},
        {"sex": "male", "age": 35, "medication": "sertraline", "dose": 10**400},
    ],
)
def test_out_of_contract_input_is_rejected(kwargs: dict) -> None:
    with pytest.raises(InvalidPatientInputError):
        PatientInput(**kwargs)


def test_placeholder_names_resolve_to_listed_medications() -> None:
    for alias, name in (("drugA", "sertraline"), ("drugB", "amlodipine"), ("drugC", "metformin")):
        by_alias = compute_risk_curve(PatientInput(sex="female", age=35, medication=alias, dose=50))
        by_name = compute_risk_curve(PatientInput(sex="female", age=35, medication=name, dose=50))
        assert by_alias == by_name

    result = compute_risk_curve(PatientInput(sex="male", age=35, medication="drugA", dose=50))
    assert result.male_curve == [17.9, 18.9, 20.0, 21.1, 22.1]
    assert result.metabolism_note.startswith("Women metabolize sertraline ~25% slower")
    assert base_risk_for("drugD") == DEFAULT_BASE_RISK


def test_age_at_upper_bound_is_accepted() -> None:
    result = compute_risk_curve(PatientInput(sex="male", age=150, medication="metformin", dose=10))
    assert all(0.0 <= value <= 95.0 for value in result.male_curve)
