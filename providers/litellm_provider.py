"""LiteLLM-backed provider. One implementation for any backend LiteLLM can reach."""

from typing import Optional

from config import settings

from .base import LLMProvider, LLMResponse


# LiteLLM model strings: provider/model-name (OpenAI can omit prefix)
DEFAULT_MODELS = {
    "anthropic": "anthropic/claude-sonnet-4-20250514",
    "openai": "gpt-4o",
}

# Map provider + optional model -> LiteLLM model string
MODEL_ALIASES = {
    "anthropic": {
        None: "anthropic/claude-sonnet-4-20250514",
        "claude-sonnet": "anthropic/claude-sonnet-4-20250514",
        "claude-opus": "anthropic/claude-opus-4-20250514",
        "claude-haiku": "anthropic/claude-3-5-haiku-20241022",
    },
    "openai": {
        None: "gpt-4o",
        "gpt-4o": "gpt-4o",
        "gpt-4o-mini": "gpt-4o-mini",
        "gpt-4-turbo": "gpt-4-turbo",
    },
}


def to_litellm_model(provider_name: Optional[str], model: Optional[str]) -> str:
    """Map provider + model to LiteLLM model string."""
    if provider_name:
        key = provider_name.lower()
        if key == "claude":
            key = "anthropic"
        elif key == "gpt":
            key = "openai"
        if key in MODEL_ALIASES:
            aliases = MODEL_ALIASES[key]
            if model:
                # Longest alias first so gpt-4o-mini wins over gpt-4o
                for alias in sorted((a for a in aliases if a), key=len, reverse=True):
                    if model.lower() == alias:
                        return aliases[alias]
                if key == "openai" or "/" in model:
                    return model
                return f"{key}/{model}"
            return aliases[None]
    if model:
        return model
    return DEFAULT_MODELS["anthropic"]


class LiteLLMProvider(LLMProvider):
    """Single provider that delegates to litellm.completion()."""

    def __init__(
        self,
        default_model: Optional[str] = None,
        metadata: Optional[dict] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize with the LiteLLM model string to use by default.

        Args:
            default_model: LiteLLM model string (e.g. gpt-4o, anthropic/claude-sonnet-4-20250514).
            metadata: Optional dict passed to litellm (e.g. pipeline name) for cost logging.
            timeout: Per-request timeout in seconds. Defaults to the generation timeout.
        """
        self._default_model = default_model or DEFAULT_MODELS["anthropic"]
        self._metadata = metadata or {}
        self.timeout = timeout if timeout is not None else settings.get_request_timeout()

    @property
    def name(self) -> str:
        return "litellm"

    @property
    def default_model(self) -> str:
        return self._default_model

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        import litellm

        resolved_model = model or self._default_model
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_message})
        kwargs = {
            "model": resolved_model,
            "messages": messages,
            "max_tokens": max_tokens,
            "metadata": {**self._metadata},
        }
        if self.timeout:
            kwargs["timeout"] = self.timeout
        if temperature is not None:
            kwargs["temperature"] = temperature
        response = litellm.completion(**kwargs)

        content = response.choices[0].message.content
        usage = getattr(response, "usage", None)
        input_tokens = getattr(usage, "prompt_tokens", 0) or 0
        output_tokens = getattr(usage, "completion_tokens", 0) or 0
        hidden = getattr(response, "_hidden_params", None) or {}
        cost = float(hidden.get("response_cost", 0) or 0)
        model_id = getattr(response, "model", None) or resolved_model

        return LLMResponse(
            content=content,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model=model_id,
            provider=self.name,
            cost=cost,
        )

    def is_available(self) -> bool:
        """LiteLLM reads API keys from env; we consider it available if the model is set."""
        return bool(self._default_model)
