from __future__ import annotations

from abc import ABC, abstractmethod

from riskcurve.risk.curve import PatientInput, RiskCurveResult


class CalculatorError(RuntimeError):
    def __init__(self, code: str, message: str, provider_name: str):
        super().__init__(message)
        self.code = code
        self.message = message
        self.provider_name = provider_name


class RiskCurveProvider(ABC):
    @abstractmethod
    def compute(self, patient: PatientInput) -> RiskCurveResult: ...

    @abstractmethod
    def name(self) -> str: ...
