"""LLM providers behind one ``complete()`` interface.

The document agent only talks to ``LLMProvider``; tests inject fakes.
"""

from .base import LLMProvider, LLMResponse
from .anthropic_provider import AnthropicProvider
from .openai_provider import OpenAIProvider
from .litellm_provider import LiteLLMProvider, to_litellm_model
from .factory import get_provider, list_providers

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "AnthropicProvider",
    "OpenAIProvider",
    "LiteLLMProvider",
    "to_litellm_model",
    "get_provider",
    "list_providers",
]
