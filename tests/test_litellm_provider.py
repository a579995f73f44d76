"""Tests for LiteLLM provider and model mapping."""

import pytest
from unittest.mock import patch, MagicMock

from providers.litellm_provider import to_litellm_model, LiteLLMProvider
from providers.base import LLMResponse


class TestToLiteLLMModel:
    """Test to_litellm_model mapping."""

    def test_openai_default(self):
        assert to_litellm_model("openai", None) == "gpt-4o"

    def test_openai_explicit_model(self):
        assert to_litellm_model("openai", "gpt-4o") == "gpt-4o"
        assert to_litellm_model("openai", "gpt-4o-mini") == "gpt-4o-mini"

    def test_openai_unknown_model_passes_through(self):
        assert to_litellm_model("gpt", "gpt-4.1") == "gpt-4.1"

    def test_anthropic_default(self):
        assert to_litellm_model("anthropic", None) == "anthropic/claude-sonnet-4-20250514"

    def test_anthropic_haiku(self):
        assert to_litellm_model("claude", "claude-haiku") == "anthropic/claude-3-5-haiku-20241022"

    def test_anthropic_unknown_model_prefixed(self):
        assert to_litellm_model("anthropic", "claude-future") == "anthropic/claude-future"

    def test_prefixed_model_kept(self):
        assert to_litellm_model("anthropic", "bedrock/claude-x") == "bedrock/claude-x"

    def test_no_provider_model_only(self):
        assert to_litellm_model(None, "gpt-4o-mini") == "gpt-4o-mini"

    def test_no_provider_no_model(self):
        assert to_litellm_model(None, None) == "anthropic/claude-sonnet-4-20250514"


class TestLiteLLMProvider:
    """Test LiteLLMProvider with mocked litellm."""

    @pytest.fixture
    def mock_completion_response(self):
        resp = MagicMock()
        resp.choices = [MagicMock()]
        resp.choices[0].message.content = '{"ok": true}'
        resp.usage = MagicMock(prompt_tokens=10, completion_tokens=5)
        resp._hidden_params = {"response_cost": 0.001}
        resp.model = "gpt-4o-mini"
        return resp

    def test_complete_returns_llm_response(self, mock_completion_response):
        with patch("litellm.completion", return_value=mock_completion_response):
            provider = LiteLLMProvider(default_model="gpt-4o-mini")
            result = provider.complete("You are helpful.", "Hi", max_tokens=100)
        assert isinstance(result, LLMResponse)
        assert result.content == '{"ok": true}'
        assert result.input_tokens == 10
        assert result.output_tokens == 5
        assert result.cost == 0.001
        assert result.model == "gpt-4o-mini"
        assert result.provider == "litellm"

    def test_complete_passes_metadata(self, mock_completion_response):
        with patch("litellm.completion", return_value=mock_completion_response) as mock_completion:
            provider = LiteLLMProvider(default_model="gpt-4o", metadata={"pipeline": "generate_de_design"})
            provider.complete("", "Hi")
        assert mock_completion.call_args.kwargs["metadata"] == {"pipeline": "generate_de_design"}

    def test_empty_system_prompt_omitted(self, mock_completion_response):
        with patch("litellm.completion", return_value=mock_completion_response) as mock_completion:
            LiteLLMProvider().complete("", "Write the document", temperature=0.5)
        kwargs = mock_completion.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "Write the document"}]
        assert kwargs["temperature"] == 0.5
        assert kwargs["model"] == "anthropic/claude-sonnet-4-20250514"

    def test_request_timeout_forwarded(self, mock_completion_response):
        with patch("litellm.completion", return_value=mock_completion_response) as mock_completion:
            LiteLLMProvider(default_model="gpt-4o", timeout=30).complete("", "Hi")
        assert mock_completion.call_args.kwargs["timeout"] == 30

    def test_system_prompt_sent_first(self, mock_completion_response):
        with patch("litellm.completion", return_value=mock_completion_response) as mock_completion:
            LiteLLMProvider().complete("Be brief.", "Hi")
        messages = mock_completion.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "Be brief."}

    def test_temperature_omitted_when_unset(self, mock_completion_response):
        with patch("litellm.completion", return_value=mock_completion_response) as mock_completion:
            LiteLLMProvider().complete("", "Hi")
        assert "temperature" not in mock_completion.call_args.kwargs

    def test_model_override(self, mock_completion_response):
        with patch("litellm.completion", return_value=mock_completion_response) as mock_completion:
            LiteLLMProvider(default_model="gpt-4o").complete("", "Hi", model="gpt-4o-mini")
        assert mock_completion.call_args.kwargs["model"] == "gpt-4o-mini"

    def test_missing_cost_defaults_to_zero(self, mock_completion_response):
        mock_completion_response._hidden_params = {}
        with patch("litellm.completion", return_value=mock_completion_response):
            result = LiteLLMProvider().complete("", "Hi")
        assert result.cost == 0.0

    def test_default_model(self):
        assert LiteLLMProvider().default_model == "anthropic/claude-sonnet-4-20250514"
        assert LiteLLMProvider(default_model="gpt-4o").is_available()
