from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _getenv_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _getenv_opt_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class RiskCurveConfig:
    RISKCURVE_CALCULATOR: str
    RISKCURVE_REMOTE_URL: Optional[str]
    RISKCURVE_REMOTE_TIMEOUT_SEC: float
    RISKCURVE_SELECTION_TTL_SECONDS: int
    RISKCURVE_CORS_ORIGINS: list[str]
    RISKCURVE_LOG_LEVEL: str

    def log_level_name(self) -> str:
        return self.RISKCURVE_LOG_LEVEL.strip().upper() or "INFO"


def load_config() -> RiskCurveConfig:
    return RiskCurveConfig(
        RISKCURVE_CALCULATOR=_getenv_str("RISKCURVE_CALCULATOR", "local").strip().lower(),
        RISKCURVE_REMOTE_URL=_getenv_opt_str("RISKCURVE_REMOTE_URL"),
        RISKCURVE_REMOTE_TIMEOUT_SEC=_getenv_float("RISKCURVE_REMOTE_TIMEOUT_SEC", 10.0),
        RISKCURVE_SELECTION_TTL_SECONDS=_getenv_int("RISKCURVE_SELECTION_TTL_SECONDS", 14400),
        RISKCURVE_CORS_ORIGINS=_getenv_list("RISKCURVE_CORS_ORIGINS", ["*"]),
        RISKCURVE_LOG_LEVEL=_getenv_str("RISKCURVE_LOG_LEVEL", "INFO"),
    )
