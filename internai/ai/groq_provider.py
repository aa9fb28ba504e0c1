from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from openai import OpenAI, OpenAIError

from internai.ai.types import AIConfigurationError, AIServiceError, ChatMessage
from internai.core.config import looks_like_placeholder

logger = logging.getLogger(__name__)


class GroqProvider:
    """Chat completions against Groq's OpenAI-compatible endpoint.

    The SDK client is built on first use so a missing key fails fast with a
    configuration error and no network call. Failed calls are not retried.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
    ):
        self._model = model
        self._api_key = (api_key or "").strip()
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._client: OpenAI | None = None

    @property
    def model(self) -> str:
        return self._model

    def is_configured(self) -> bool:
        return not looks_like_placeholder(self._api_key)

    def _get_client(self) -> OpenAI:
        if not self.is_configured():
            raise AIConfigurationError()
        if self._client is None:
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout_s,
                max_retries=0,
            )
        return self._client

    def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str:
        client = self._get_client()
        create_kwargs = {
            "model": self._model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            create_kwargs["response_format"] = {"type": "json_object"}

        started = time.perf_counter()
        try:
            response = client.chat.completions.create(**create_kwargs)
        except OpenAIError as exc:
            logger.warning("groq_completion_failed model=%s: %s", self._model, exc)
            raise AIServiceError(f"AI service error: {exc}") from exc

        content = response.choices[0].message.content if response.choices else ""
        logger.info(
            "groq_completion model=%s latency_ms=%s chars=%s",
            self._model,
            int((time.perf_counter() - started) * 1000),
            len(content or ""),
        )
        return content or ""
