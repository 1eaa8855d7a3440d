from __future__ import annotations

import argparse
import logging
from typing import Sequence

from riskcurve.internal_core.calculators import CalculatorError, build_calculator
from riskcurve.internal_core.config import load_config
from riskcurve.internal_core.contracts import RiskCurveResponse
from riskcurve.risk.curve import TIME_LABELS, InvalidPatientInputError, PatientInput, RiskCurveResult
from riskcurve.risk.panels import build_panel_view


logger = logging.getLogger(__name__)


def format_table(result: RiskCurveResult) -> str:
    rows = [f"{'time':<10} {'female %':>9} {'male %':>9}"]
    for label, female, male in zip(TIME_LABELS, result.female_curve, result.male_curve):
        rows.append(f"{label:<10} {female:>9.1f} {male:>9.1f}")
    return "\n".join(rows)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Print the demo risk curve for one patient input."
    )
    parser.add_argument("--sex", choices=["male", "female"], default="male")
    parser.add_argument("--age", type=int, default=35)
    parser.add_argument(
        "--medication",
        default="sertraline",
        help="Medication name; unknown names use the default base risk.",
    )
    parser.add_argument("--dose", type=float, default=50.0, help="Dose in mg (default: 50)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result JSON instead of the table.",
    )
    args = parser.parse_args(argv)

    config = load_config()
    logging.basicConfig(level=config.log_level_name())

    try:
        patient = PatientInput(sex=args.sex, age=args.age, medication=args.medication, dose=args.dose)
    except InvalidPatientInputError as exc:
        raise SystemExit(f"invalid input: {exc}") from exc

    calculator = build_calculator(config)
    try:
        result = calculator.compute(patient)
    except CalculatorError as exc:
        logger.error("calculator failed provider=%s code=%s", exc.provider_name, exc.code)
        raise SystemExit(f"calculator failed: {exc.message}") from exc

    if args.json:
        print(RiskCurveResponse.from_result(result).model_dump_json(indent=2))
        return

    view = build_panel_view(patient, result)
    print(format_table(result))
    print(f"risk_diff: {view.risk_diff_text}")
    print(f"recommendation: {view.recommendation_text}")
    print(f"metabolism: {view.metabolism_text}")


if __name__ == "__main__":
    main()
