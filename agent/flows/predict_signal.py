from __future__ import annotations

from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate

from agent.agent import build_llm
from agent.core.prompt import SIGNAL_SYSTEM_PROMPT
from services.models import PredictSignalStrengthInput, PredictSignalStrengthOutput


prompt = ChatPromptTemplate.from_messages(
    [
        ("system", SIGNAL_SYSTEM_PROMPT),
        ("human", "Latitude: {latitude}  Longitude: {longitude}"),
    ]
)


def predict_signal_strength(
    payload: PredictSignalStrengthInput,
    llm: Optional[BaseChatModel] = None,
) -> PredictSignalStrengthOutput:
    structured = (llm or build_llm(temperature=0)).with_structured_output(PredictSignalStrengthOutput)
    result = (prompt | structured).invoke(payload.model_dump())
    if not isinstance(result, PredictSignalStrengthOutput):
        result = PredictSignalStrengthOutput.model_validate(result)
    if not result.predictions:
        raise ValueError("Model returned no carrier predictions")
    return result
