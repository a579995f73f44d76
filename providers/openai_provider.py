"""OpenAI provider implementation."""

import os
from typing import Optional

from config import settings

from .base import LLMProvider, LLMResponse


class OpenAIProvider(LLMProvider):
    """Provider for OpenAI models."""

    MODELS = {
        "gpt-4o": "gpt-4o",
        "gpt-4o-mini": "gpt-4o-mini",
        "gpt-4-turbo": "gpt-4-turbo",
        "gpt-4.1": "gpt-4.1",
        "gpt-4.1-mini": "gpt-4.1-mini",
    }

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key. Falls back to the configured key, then OPENAI_API_KEY.
            timeout: Per-request timeout in seconds. Defaults to the generation timeout.
        """
        self.api_key = api_key or settings.openai_api_key or os.environ.get("OPENAI_API_KEY")
        self.timeout = timeout if timeout is not None else settings.get_request_timeout()
        self._client = None

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o"

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI
            kwargs = {"api_key": self.api_key}
            if self.timeout:
                kwargs["timeout"] = self.timeout
            self._client = OpenAI(**kwargs)
        return self._client

    def _resolve_model(self, model: Optional[str]) -> str:
        if model is None:
            return self.default_model
        return self.MODELS.get(model, model)

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        client = self._get_client()
        resolved_model = self._resolve_model(model)

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_message})

        kwargs = {
            "model": resolved_model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        response = client.chat.completions.create(**kwargs)

        return LLMResponse(
            content=response.choices[0].message.content,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
            model=getattr(response, "model", None) or resolved_model,
            provider=self.name,
        )

    def is_available(self) -> bool:
        return bool(self.api_key)
