from __future__ import annotations

import logging
from typing import Callable, Optional

from services.models import (
    CarrierPrediction,
    PredictSignalStrengthInput,
    PredictSignalStrengthOutput,
)


logger = logging.getLogger(__name__)

PredictFlow = Callable[[PredictSignalStrengthInput], PredictSignalStrengthOutput]

FALLBACK_PREDICTIONS = PredictSignalStrengthOutput(
    predictions=[
        CarrierPrediction(operator="Jio", rating=4, download_speed=25.5, upload_speed=8.2),
        CarrierPrediction(operator="Airtel", rating=4.5, download_speed=32.8, upload_speed=10.5),
        CarrierPrediction(operator="Vi", rating=3.5, download_speed=18.3, upload_speed=6.8),
        CarrierPrediction(operator="BSNL", rating=3, download_speed=12.5, upload_speed=4.2),
    ]
)


class SignalPredictionService:
    """Per-carrier signal predictions for a location.

    Never raises: when the prediction flow fails for any reason (missing API
    key, timeout, malformed model output) the fixed fallback dataset is
    returned instead.
    """

    def __init__(self, predict_flow: Optional[PredictFlow] = None):
        if predict_flow is None:
            from agent.flows.predict_signal import predict_signal_strength as predict_flow
        self.predict_flow = predict_flow

    def predict(self, latitude: float, longitude: float) -> PredictSignalStrengthOutput:
        try:
            result = self.predict_flow(PredictSignalStrengthInput(latitude=latitude, longitude=longitude))
        except Exception as exc:
            logger.exception("Signal prediction failed at lat=%.5f lon=%.5f: %s", latitude, longitude, exc)
            logger.warning("Using fallback signal prediction data")
            return FALLBACK_PREDICTIONS.model_copy(deep=True)

        logger.info(
            "Signal prediction at lat=%.5f lon=%.5f returned %s carriers",
            latitude,
            longitude,
            len(result.predictions),
        )
        return result
