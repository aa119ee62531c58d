from __future__ import annotations

from typing import Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import get_settings


def build_llm(temperature: Optional[float] = None) -> ChatGoogleGenerativeAI:
    settings = get_settings()
    if not settings.google_api_key:
        raise RuntimeError(
            "GOOGLE_API_KEY not set. Please configure it in environment or .env"
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=settings.temperature if temperature is None else temperature,
        top_p=settings.top_p,
        timeout=settings.model_timeout,
        max_retries=settings.model_max_retries,
    )
