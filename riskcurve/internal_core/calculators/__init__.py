from __future__ import annotations

from riskcurve.internal_core.config import RiskCurveConfig

from .base import CalculatorError, RiskCurveProvider
from .local import LocalRiskCurveProvider
from .remote import RemoteRiskCurveProvider

SUPPORTED_CALCULATORS = ("local", "remote")


def build_calculator(config: RiskCurveConfig) -> RiskCurveProvider:
    name = config.RISKCURVE_CALCULATOR
    if name == "local":
        return LocalRiskCurveProvider()
    if name == "remote":
        if not config.RISKCURVE_REMOTE_URL:
            raise ValueError("RISKCURVE_REMOTE_URL is required when RISKCURVE_CALCULATOR=remote.")
        return RemoteRiskCurveProvider(
            config.RISKCURVE_REMOTE_URL,
            timeout_sec=config.RISKCURVE_REMOTE_TIMEOUT_SEC,
        )
    raise ValueError(
        f"Unsupported RISKCURVE_CALCULATOR: {name!r} (expected one of {', '.join(SUPPORTED_CALCULATORS)})"
    )


__all__ = [
    "CalculatorError",
    "LocalRiskCurveProvider",
    "RemoteRiskCurveProvider",
    "RiskCurveProvider",
    "SUPPORTED_CALCULATORS",
    "build_calculator",
]
