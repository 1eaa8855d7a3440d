from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from riskcurve.internal_core.contracts import PatientInputPayload, RiskCurveResponse
from riskcurve.risk.curve import PatientInput, RiskCurveResult

from .base import CalculatorError, RiskCurveProvider

logger = logging.getLogger(__name__)


class RemoteRiskCurveProvider(RiskCurveProvider):
    """Delegate the calculation to an HTTP endpoint with the /api/predict contract.

    The endpoint takes the PatientInput JSON and must answer with a RiskCurveResponse
    body; anything else surfaces as ``CalculatorError``.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_sec: float = 10.0,
        session: Optional[Any] = None,
    ) -> None:
        self._url = url
        self._timeout_sec = timeout_sec
        self._session = session if session is not None else requests.Session()

    def compute(self, patient: PatientInput) -> RiskCurveResult:
        payload = PatientInputPayload.from_patient(patient).model_dump()
        logger.debug("remote_calculator_request url=%s payload=%s", self._url, payload)
        try:
            response = self._session.post(self._url, json=payload, timeout=self._timeout_sec)
        except requests.RequestException as exc:
            raise CalculatorError(
                "REMOTE_UNREACHABLE",
                f"Remote calculator request failed: {exc}",
                self.name(),
            ) from exc

        if response.status_code >= 400:
            raise CalculatorError(
                "REMOTE_HTTP_ERROR",
                f"Remote calculator returned HTTP {response.status_code}",
                self.name(),
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise CalculatorError(
                "REMOTE_INVALID_JSON",
                f"Remote calculator returned non-JSON body: {exc}",
                self.name(),
            ) from exc
        try:
            parsed = RiskCurveResponse.model_validate(body)
        except ValidationError as exc:
            raise CalculatorError(
                "REMOTE_INVALID_RESULT",
                f"Remote calculator returned an invalid result: {exc}",
                self.name(),
            ) from exc
        return parsed.to_result()

    def name(self) -> str:
        return "remote"
