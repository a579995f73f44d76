"""Configuration settings for the document generation pipeline."""

from dotenv import load_dotenv

from pydantic_settings import BaseSettings
from pydantic import Field
from pathlib import Path
from typing import Optional

# Load .env into os.environ so provider SDKs (e.g. ANTHROPIC_API_KEY) see it
load_dotenv()


class Settings(BaseSettings):
    """Global settings for document generation.

    Settings can be overridden via environment variables with DE_DOCGEN_ prefix.
    Example: DE_DOCGEN_TEMPERATURE=0.3
    """

    # Model config
    provider: str = Field(
        default="anthropic",
        description="LLM provider used for document generation"
    )
    document_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used for narrative document generation"
    )
    max_output_tokens: int = Field(
        default=8000,
        description="Maximum tokens in the generated document response"
    )
    temperature: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Sampling temperature; balances variety against structural fidelity"
    )
    generation_timeout_seconds: float = Field(
        default=120.0,
        description="Upper bound on one generation call; a timeout falls back like any failure"
    )
    fallback_model_marker: str = Field(
        default="fallback",
        description="Model id recorded when the document was synthesized without the LLM"
    )

    # Document defaults
    default_language: str = Field(
        default="en",
        description="Narrative language when the caller does not pass one"
    )
    document_author: str = Field(
        default="Freeday Implementation Team",
        description="Author shown in the base document metadata"
    )

    # Token pricing (per 1M tokens) - Claude Sonnet
    input_token_cost_per_million: float = Field(
        default=3.00,
        description="Cost per 1M input tokens"
    )
    output_token_cost_per_million: float = Field(
        default=15.00,
        description="Cost per 1M output tokens"
    )

    # Paths
    data_dir: str = Field(
        default="./data",
        description="Root of the JSON file store (design weeks, documents, operation log)"
    )
    output_dir: str = Field(
        default="./outputs",
        description="Directory for exported documents"
    )

    # API settings (env: DE_DOCGEN_<KEY> or standard env var)
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key (env: DE_DOCGEN_ANTHROPIC_API_KEY)",
    )
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (env: DE_DOCGEN_OPENAI_API_KEY)",
    )

    model_config = {
        "env_prefix": "DE_DOCGEN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_data_path(self) -> Path:
        """Get data path as Path object."""
        return Path(self.data_dir)

    def get_output_path(self) -> Path:
        """Get output path as Path object."""
        return Path(self.output_dir)

    def get_request_timeout(self) -> Optional[float]:
        """Per-request timeout for provider clients; None when generation is unbounded."""
        if self.generation_timeout_seconds > 0:
            return self.generation_timeout_seconds
        return None

    def calculate_cost(self, input_tokens: int, output_tokens: int) -> float:
        """Calculate cost in USD for given token usage."""
        input_cost = (input_tokens / 1_000_000) * self.input_token_cost_per_million
        output_cost = (output_tokens / 1_000_000) * self.output_token_cost_per_million
        return input_cost + output_cost


# Create singleton instance
settings = Settings()
