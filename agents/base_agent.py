"""Base agent class for LLM-backed generators.

Every agent:
- Sends one prompt to its LLM provider (exactly one attempt, no retry)
- Recovers the first balanced JSON object from the free-form answer
- Validates it against the expected Pydantic contract
- Reports token usage and latency measured on an injected clock
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from providers import get_provider, LLMProvider
from config import settings

T = TypeVar("T", bound=BaseModel)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def elapsed_ms(start: datetime, end: datetime) -> int:
    """Milliseconds between two clock readings, never negative."""
    return max(0, int((end - start).total_seconds() * 1000))


class GenerationError(RuntimeError):
    """The backend answered, but not with usable content."""


class NoTextContent(GenerationError):
    """The backend response carried no text payload."""


class UnparsableContent(GenerationError):
    """No balanced JSON object, invalid JSON, or the object failed validation."""


def extract_json_object(text: str) -> Dict[str, Any]:
    """Recover the first balanced JSON object embedded in free-form text.

    Handles markdown fences and surrounding prose. Braces inside JSON strings
    (including escaped quotes) do not count toward the balance.

    Raises:
        UnparsableContent: If there is no balanced object or it is not valid JSON
    """
    start = text.find("{")
    if start == -1:
        raise UnparsableContent("No JSON object found in response")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                try:
                    return json.loads(text[start:index + 1])
                except json.JSONDecodeError as e:
                    raise UnparsableContent(f"Invalid JSON in response: {e}") from e

    raise UnparsableContent("Unbalanced JSON object in response")


class TokenUsage(BaseModel):
    """Track token usage for cost calculation."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_cost(self) -> float:
        """Calculate cost based on current token pricing."""
        return settings.calculate_cost(self.input_tokens, self.output_tokens)


class AgentResult(BaseModel):
    """Result from an agent run, including output and metadata."""
    output: Any
    token_usage: TokenUsage
    model: str
    provider: str = "anthropic"
    raw_response: Optional[str] = None
    latency_ms: int = 0


class BaseAgent(ABC, Generic[T]):
    """Base class for all LLM-backed agents.

    The provider is an explicit collaborator: pass one in (tests inject fakes)
    or let the agent build the configured one.
    """

    def __init__(
        self,
        role: str,
        output_schema: Type[T],
        provider: Optional[LLMProvider] = None,
        model: Optional[str] = None,
        clock: Optional[Clock] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        """Initialize the agent.

        Args:
            role: Agent role, used in log lines
            output_schema: Pydantic model class for validating output
            provider: LLM provider; defaults to settings.provider
            model: Override the configured model
            clock: Returns the current time; used for latency
            max_tokens: Override settings.max_output_tokens
            temperature: Override settings.temperature
        """
        self.role = role
        self.output_schema = output_schema

        if provider is None:
            self.model = model or settings.document_model
            self.llm_provider: LLMProvider = get_provider(
                provider_name=settings.provider,
                model=self.model,
            )
        else:
            self.llm_provider = provider
            self.model = model or provider.default_model

        self.clock: Clock = clock or utc_now
        self.max_tokens = max_tokens if max_tokens is not None else settings.max_output_tokens
        self.temperature = temperature if temperature is not None else settings.temperature

        self.total_usage = TokenUsage()

    def _parse_and_validate(self, response_text: str) -> T:
        """Parse LLM response and validate against schema.

        Raises:
            UnparsableContent: If no valid JSON object matches the schema
        """
        data = extract_json_object(response_text)
        try:
            return self.output_schema.model_validate(data)
        except ValidationError as e:
            raise UnparsableContent(
                f"Response does not match {self.output_schema.__name__}: "
                f"{e.error_count()} validation error(s)"
            ) from e

    def run(self, user_message: str, system_prompt: str = "") -> AgentResult:
        """Execute the agent once.

        Args:
            user_message: The full prompt
            system_prompt: Optional system prompt

        Returns:
            AgentResult with validated output and metadata

        Raises:
            NoTextContent: If the response has no text
            UnparsableContent: If the text holds no valid output object
            Exception: Provider errors propagate unchanged
        """
        start = self.clock()
        response = self.llm_provider.complete(
            system_prompt=system_prompt,
            user_message=user_message,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        latency_ms = elapsed_ms(start, self.clock())

        usage = TokenUsage(
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
        )
        self.total_usage.input_tokens += usage.input_tokens
        self.total_usage.output_tokens += usage.output_tokens

        if not response.content:
            raise NoTextContent(f"No text content in {response.provider} response")

        output = self._parse_and_validate(response.content)

        return AgentResult(
            output=output,
            token_usage=usage,
            model=response.model,
            provider=response.provider,
            raw_response=response.content,
            latency_ms=latency_ms,
        )

    @abstractmethod
    def get_task_description(self) -> str:
        """Return a description of what this agent does.

        Used for logging and debugging.
        """
        pass
