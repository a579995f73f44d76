"""Document Agent - narrative content for Digital Employee design documents.

Turns a GenerationContext into GeneratedContent with one LLM call. Failures
are raised, not hidden: the orchestrator decides when to fall back.
"""

from typing import Optional

from agents.base_agent import BaseAgent, Clock
from agents.prompt_sections import build_generation_prompt
from contracts import GenerationContext, GeneratedContent, GenerationMetadata
from providers import LLMProvider


class DocumentAgent(BaseAgent):
    """Writes the twelve narrative sections of a design document.

    Args:
        provider: LLM provider; tests inject a fake
        model: Override settings.document_model
        clock: Returns the current time; drives latency and ``generated_at``
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        model: Optional[str] = None,
        clock: Optional[Clock] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        super().__init__(
            role="document",
            output_schema=GeneratedContent,
            provider=provider,
            model=model,
            clock=clock,
            max_tokens=max_tokens,
            temperature=temperature,
        )

    def get_task_description(self) -> str:
        return "Generate long-form design document narrative from design-week data"

    def generate(self, context: GenerationContext) -> GeneratedContent:
        """Generate narrative content for one context.

        Raises:
            NoTextContent: The backend returned no text
            UnparsableContent: No valid GeneratedContent in the answer
            Exception: Provider errors propagate unchanged
        """
        print(f"[Document Generation] Starting generation for {context.digital_employee_name}...")
        prompt = build_generation_prompt(context)
        result = self.run(user_message=prompt)

        content: GeneratedContent = result.output
        content = content.model_copy(update={
            "generation_metadata": GenerationMetadata(
                generated_at=self.clock(),
                model=result.model,
                is_fallback=False,
                source_item_count=context.source_item_count,
                input_tokens=result.token_usage.input_tokens,
                output_tokens=result.token_usage.output_tokens,
                latency_ms=result.latency_ms,
            ),
        })

        print(
            f"[Document Generation] Generated content: "
            f"{result.token_usage.input_tokens} input, {result.token_usage.output_tokens} output tokens, "
            f"{result.latency_ms}ms"
        )
        return content
