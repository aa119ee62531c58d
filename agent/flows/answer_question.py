from __future__ import annotations

from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from agent.agent import build_llm
from agent.core.prompt import ANSWER_SYSTEM_PROMPT
from services.models import AnswerQuestionInput, AnswerQuestionOutput


prompt = ChatPromptTemplate.from_messages(
    [
        ("system", ANSWER_SYSTEM_PROMPT),
        ("human", "{question}"),
    ]
)


def answer_mobile_plan_question(
    payload: AnswerQuestionInput,
    llm: Optional[BaseChatModel] = None,
) -> AnswerQuestionOutput:
    chain = prompt | (llm or build_llm()) | StrOutputParser()
    answer = chain.invoke({"question": payload.question}).strip()
    if not answer:
        raise ValueError("Model returned an empty answer")
    return AnswerQuestionOutput(answer=answer)
