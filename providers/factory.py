"""Factory for creating LLM providers."""

from typing import Optional, Dict, Type

from .base import LLMProvider
from .anthropic_provider import AnthropicProvider
from .openai_provider import OpenAIProvider
from .litellm_provider import LiteLLMProvider


# Registry of available providers
PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "anthropic": AnthropicProvider,
    "claude": AnthropicProvider,
    "openai": OpenAIProvider,
    "gpt": OpenAIProvider,
    "litellm": LiteLLMProvider,
}

ALIASES = ("claude", "gpt")

# Model to provider mapping for auto-detection
MODEL_PROVIDERS: Dict[str, str] = {
    # Anthropic
    "claude": "anthropic",
    "sonnet": "anthropic",
    "opus": "anthropic",
    "haiku": "anthropic",
    # OpenAI
    "gpt-": "openai",
    "o1": "openai",
    "o3": "openai",
}


def get_provider(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
) -> LLMProvider:
    """Get an LLM provider instance.

    Args:
        provider_name: Explicit provider name (anthropic, openai, litellm)
        model: Model name - if provided without provider, will auto-detect provider

    Returns:
        LLMProvider instance

    Examples:
        # Explicit provider
        get_provider("anthropic")
        get_provider("litellm", model="anthropic/claude-sonnet-4-20250514")

        # Auto-detect from model
        get_provider(model="gpt-4o")  # Returns OpenAI provider
        get_provider(model="claude-sonnet")  # Returns Anthropic provider

        # Default (Anthropic)
        get_provider()
    """
    # If provider explicitly specified
    if provider_name:
        provider_key = provider_name.lower()
        if provider_key not in PROVIDERS:
            raise ValueError(
                f"Unknown provider: {provider_name}. "
                f"Available: {list(PROVIDERS.keys())}"
            )
        if provider_key == "litellm":
            return LiteLLMProvider(default_model=model)
        return PROVIDERS[provider_key]()

    # Try to detect from model name
    if model:
        model_lower = model.lower()
        if "/" in model_lower:
            return LiteLLMProvider(default_model=model)
        for prefix, provider in MODEL_PROVIDERS.items():
            if model_lower.startswith(prefix):
                return PROVIDERS[provider]()

    # Default to Anthropic
    return AnthropicProvider()


def list_providers() -> Dict[str, bool]:
    """List all providers and their availability.

    Returns:
        Dict mapping provider name to availability status
    """
    result = {}
    for name, provider_class in PROVIDERS.items():
        # Skip aliases
        if name in ALIASES:
            continue
        try:
            provider = provider_class()
            result[name] = provider.is_available()
        except Exception:
            result[name] = False
    return result
