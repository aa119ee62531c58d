from __future__ import annotations

import logging
from typing import Callable, List, Optional

from services.models import (
    AnswerQuestionInput,
    AnswerQuestionOutput,
    AskResult,
    ErrorKind,
    Message,
)
from store.chat_history import ChatHistoryStore


logger = logging.getLogger(__name__)

AnswerFlow = Callable[[AnswerQuestionInput], AnswerQuestionOutput]

EMPTY_QUESTION_MESSAGE = "Please provide a question."
UNAUTHENTICATED_MESSAGE = "User not authenticated."
APOLOGY_MESSAGE = "I'm sorry, but I encountered an error. Please try again."


class ConversationService:
    """Records each question and answer around a call to the answer flow."""

    def __init__(self, history: ChatHistoryStore, answer_flow: Optional[AnswerFlow] = None):
        if answer_flow is None:
            from agent.flows.answer_question import answer_mobile_plan_question as answer_flow
        self.history = history
        self.answer_flow = answer_flow

    def ask(self, question: str, user_id: str) -> AskResult:
        """
        Answer ``question`` for ``user_id`` and store both sides of the exchange.

        Never raises. Empty input comes back as a VALIDATION result and leaves
        history untouched. A failing model or history store comes back as
        EXTERNAL_SERVICE; when the model fails the user message is already
        stored and no assistant message is.
        """
        if not question:
            return AskResult(text=EMPTY_QUESTION_MESSAGE, error=ErrorKind.VALIDATION)
        if not user_id:
            return AskResult(text=UNAUTHENTICATED_MESSAGE, error=ErrorKind.VALIDATION)

        try:
            self.history.ensure(user_id)
            self.history.append(user_id, Message(role="user", content=question))
            response = self.answer_flow(AnswerQuestionInput(question=question))
            self.history.append(user_id, Message(role="assistant", content=response.answer))
        except Exception as exc:
            logger.exception("Answering failed for user_id=%s: %s", user_id, exc)
            return AskResult(text=APOLOGY_MESSAGE, error=ErrorKind.EXTERNAL_SERVICE)

        logger.info(
            "Answered user_id=%s question_len=%s answer_len=%s",
            user_id,
            len(question),
            len(response.answer),
        )
        return AskResult(text=response.answer)

    def get_history(self, user_id: str) -> List[Message]:
        if not user_id:
            return []
        try:
            return self.history.list(user_id)
        except Exception as exc:
            logger.exception("Fetching chat history failed for user_id=%s: %s", user_id, exc)
            return []
