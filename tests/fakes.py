"""Stand-ins for the AI flows so tests never reach a model."""
from __future__ import annotations

from typing import List

from services.models import (
    AnswerQuestionInput,
    AnswerQuestionOutput,
    CarrierPrediction,
    PredictSignalStrengthInput,
    PredictSignalStrengthOutput,
)


class FakeAnswerFlow:
    """Echoes questions back and remembers what it was asked."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.questions: List[str] = []

    def __call__(self, payload: AnswerQuestionInput) -> AnswerQuestionOutput:
        self.questions.append(payload.question)
        if self.fail:
            raise RuntimeError("GOOGLE_API_KEY not set")
        return AnswerQuestionOutput(answer=f"Answer to: {payload.question}")


class FakePredictFlow:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[PredictSignalStrengthInput] = []

    def __call__(self, payload: PredictSignalStrengthInput) -> PredictSignalStrengthOutput:
        self.calls.append(payload)
        if self.fail:
            raise TimeoutError("prediction timed out")
        return PredictSignalStrengthOutput(
            predictions=[
                CarrierPrediction(operator="Airtel", rating=5, download_speed=80.0, upload_speed=20.0),
                CarrierPrediction(operator="Jio", rating=4, download_speed=60.0, upload_speed=15.0),
            ]
        )
