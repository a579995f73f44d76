"""Anthropic (Claude) provider implementation."""

import os
from typing import Optional

from config import settings

from .base import LLMProvider, LLMResponse


class AnthropicProvider(LLMProvider):
    """Provider for Anthropic Claude models."""

    MODELS = {
        "claude-sonnet": "claude-sonnet-4-20250514",
        "claude-opus": "claude-opus-4-20250514",
        "claude-haiku": "claude-3-5-haiku-20241022",
        "sonnet": "claude-sonnet-4-20250514",
        "opus": "claude-opus-4-20250514",
        "haiku": "claude-3-5-haiku-20241022",
    }

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key. Falls back to the configured key, then ANTHROPIC_API_KEY.
            timeout: Per-request timeout in seconds. Defaults to the generation timeout.
        """
        self.api_key = api_key or settings.anthropic_api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.timeout = timeout if timeout is not None else settings.get_request_timeout()
        self._client = None

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    def _get_client(self):
        if self._client is None:
            from anthropic import Anthropic
            kwargs = {"api_key": self.api_key}
            if self.timeout:
                kwargs["timeout"] = self.timeout
            self._client = Anthropic(**kwargs)
        return self._client

    def _resolve_model(self, model: Optional[str]) -> str:
        """Resolve model alias to full model name."""
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

        kwargs = {
            "model": resolved_model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": user_message}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt
        if temperature is not None:
            kwargs["temperature"] = temperature

        response = client.messages.create(**kwargs)

        # First text block wins; tool-use or empty answers carry no text.
        content = next(
            (block.text for block in response.content if getattr(block, "type", None) == "text"),
            None,
        )

        return LLMResponse(
            content=content,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=getattr(response, "model", None) or resolved_model,
            provider=self.name,
        )

    def is_available(self) -> bool:
        return bool(self.api_key)
