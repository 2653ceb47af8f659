# symptom_intake/llm/client.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Dict, Optional

from openai import OpenAI, OpenAIError

from symptom_intake.config import get_settings
from symptom_intake.errors import UpstreamError

logger = logging.getLogger(__name__)


class LLMClient(ABC):
    """
    Simple abstraction so we can swap providers (and fake them in tests).
    """

    @abstractmethod
    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        """
        messages: list of {"role": "system"|"user"|"assistant", "content": "..."}
        json_mode: ask the provider for a single JSON object reply
        returns: assistant content as a string

        Raises UpstreamError if the provider cannot be reached or
        answers with a non-success status.
        """
        ...


class OpenAILLMClient(LLMClient):
    """
    OpenAI implementation using the official Python client.
    """

    def __init__(self, model: Optional[str] = None):
        settings = get_settings()
        if not settings.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set in environment (.env)."
            )

        # max_retries=0: a failed call is reported, never retried
        self.client = OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            max_retries=0,
        )
        self.default_model = model or settings.llm_model

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        json_mode: bool = False,
    ) -> str:
        kwargs: Dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = self.client.chat.completions.create(
                model=model or self.default_model,
                messages=messages,
                temperature=temperature,
                **kwargs,
            )
        except OpenAIError as exc:
            logger.error("Completion provider error: %s", exc)
            raise UpstreamError() from exc

        if not completion.choices:
            logger.error("Completion provider returned no choices")
            raise UpstreamError()

        content = completion.choices[0].message.content
        return content or ""
