"""Document Pipeline - entry point for design document generation.

One sequential run per request:
1. Load the design week and check there is something approved to work from
2. Map it to a generation context and a base document
3. Ask the document agent for narrative (bounded by a timeout)
4. Fall back to synthesized content on any failure or timeout
5. Check KPI consistency of real LLM output
6. Merge, store a new document version and log the operation
"""

import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple, Union

from agents import DocumentAgent, check_kpi_consistency, synthesize_fallback
from agents.base_agent import Clock, elapsed_ms, utc_now
from config import settings
from contracts import (
    DesignDocument,
    DocumentLanguage,
    DocumentRecord,
    DocumentType,
    GeneratedContent,
    GenerationContext,
    GenerationResult,
    OperationLogEntry,
    UsageSummary,
    build_base_document,
    build_generation_context,
    missing_fields,
)
from providers import get_provider
from store import DesignWeekStore

from orchestrator.document_merger import merge_generated_content


class DesignWeekNotFound(ValueError):
    """No design week with the requested id."""


class NoApprovedItems(ValueError):
    """The design week has no approved extracted items to generate from."""


def new_document_id() -> str:
    return uuid.uuid4().hex


class DocumentPipeline:
    """Generates, versions and logs design documents for design weeks.

    Args:
        store: Persistence collaborator
        agent: Document agent; built from settings when omitted
        clock: Returns the current time; drives dates, metadata and latency
        timeout_seconds: Bound on the agent call; <= 0 disables it
        offline: Never call the agent, always synthesize
        id_factory: Produces document ids
    """

    def __init__(
        self,
        store: DesignWeekStore,
        agent: Optional[DocumentAgent] = None,
        clock: Optional[Clock] = None,
        timeout_seconds: Optional[float] = None,
        offline: bool = False,
        id_factory: Callable[[], str] = new_document_id,
    ):
        self.store = store
        self.clock: Clock = clock or utc_now
        self.offline = offline
        if agent is None and not offline:
            agent = DocumentAgent(clock=self.clock)
        self.agent = agent
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.generation_timeout_seconds
        )
        self.id_factory = id_factory

    def generate(
        self,
        design_week_id: str,
        document_type: Union[DocumentType, str] = DocumentType.DE_DESIGN,
        language: Union[DocumentLanguage, str] = DocumentLanguage.EN,
    ) -> GenerationResult:
        """Generate and store a new document version.

        Args:
            design_week_id: Design week to document
            document_type: Record type label for the stored version
            language: Narrative language

        Returns:
            GenerationResult with the stored record, usage, missing fields and warnings

        Raises:
            DesignWeekNotFound: Unknown design week id
            NoApprovedItems: Nothing approved to generate from
            ValueError: Unsupported document type or language
        """
        document_type = DocumentType(document_type)
        language = DocumentLanguage(language)

        design_week = self.store.get_design_week(design_week_id)
        if design_week is None:
            raise DesignWeekNotFound(f"Design week not found: {design_week_id}")

        approved_count = len(design_week.approved_items())
        if approved_count == 0:
            raise NoApprovedItems(
                "No approved extracted items found. Review and approve items first."
            )

        missing = missing_fields(design_week)
        context = build_generation_context(design_week, language)
        base = build_base_document(design_week, context, self.clock)

        print(f"[Document Generation] {document_type.value} for {context.digital_employee_name} "
              f"({approved_count} approved items)")

        content, warnings = self._generate_content(context)
        metadata = content.generation_metadata
        document = merge_generated_content(base, content)

        version = self.store.latest_version(design_week_id, document_type) + 1
        record = self.store.append_document(DocumentRecord(
            id=self.id_factory(),
            design_week_id=design_week_id,
            type=document_type,
            version=version,
            status="DRAFT",
            content=document.model_dump(mode="json"),
            created_at=self.clock(),
            input_tokens=metadata.input_tokens,
            output_tokens=metadata.output_tokens,
            latency_ms=metadata.latency_ms,
        ))

        usage = UsageSummary(
            input_tokens=metadata.input_tokens or 0,
            output_tokens=metadata.output_tokens or 0,
            latency_ms=metadata.latency_ms or 0,
        )
        self.store.log_operation(OperationLogEntry(
            pipeline_name=f"generate_{document_type.value.lower()}",
            model=metadata.model,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            latency_ms=usage.latency_ms,
            cost_usd=settings.calculate_cost(usage.input_tokens, usage.output_tokens),
            success=not metadata.is_fallback,
            metadata={
                "design_week_id": design_week_id,
                "document_id": record.id,
                "version": record.version,
                "approved_items_count": approved_count,
                "is_fallback": metadata.is_fallback,
                "warning_count": len(warnings),
            },
            logged_at=self.clock(),
        ))

        print(f"[Document Generation] Stored {document_type.value} v{record.version} "
              f"({'fallback' if metadata.is_fallback else metadata.model})")

        return GenerationResult(
            document=record,
            usage=usage,
            missing_fields=missing,
            warnings=warnings,
        )

    def _generate_content(self, context: GenerationContext) -> Tuple[GeneratedContent, List[str]]:
        """LLM content with its consistency warnings, or fallback content with none."""
        if self.offline or self.agent is None:
            return synthesize_fallback(context, latency_ms=0, clock=self.clock), []

        start = self.clock()
        try:
            content = self._call_agent(context)
        except Exception as e:
            print(f"[Document Generation] Error: {type(e).__name__}: {e}")
            latency_ms = elapsed_ms(start, self.clock())
            return synthesize_fallback(context, latency_ms=latency_ms, clock=self.clock), []

        warnings = check_kpi_consistency(content, context.kpis)
        for warning in warnings:
            print(f"[Document Generation] KPI warning: {warning}")
        return content, warnings

    def _call_agent(self, context: GenerationContext) -> GeneratedContent:
        """Run the agent, raising TimeoutError when it exceeds the bound.

        A timed-out call is not cancelled: its worker thread runs until the
        provider request returns, and the interpreter joins it at exit. The
        provider clients carry the same bound as a request timeout (see
        ``Settings.get_request_timeout``) so that thread ends soon after.
        """
        if not self.timeout_seconds or self.timeout_seconds <= 0:
            return self.agent.generate(context)

        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(self.agent.generate, context)
            return future.result(timeout=self.timeout_seconds)
        finally:
            # Do not wait on a call that has already timed out.
            executor.shutdown(wait=False)


def load_document(record: DocumentRecord) -> DesignDocument:
    """Rehydrate the design document stored in a record."""
    return DesignDocument.model_validate(record.content)


def generate_document(
    store: DesignWeekStore,
    design_week_id: str,
    document_type: Union[DocumentType, str] = DocumentType.DE_DESIGN,
    language: Union[DocumentLanguage, str] = DocumentLanguage.EN,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    offline: bool = False,
) -> GenerationResult:
    """Convenience function to run the document pipeline once.

    Args:
        store: Persistence collaborator
        design_week_id: Design week to document
        document_type: DE_DESIGN, SOLUTION_DESIGN or TEST_PLAN
        language: en, nl, de, fr or es
        provider: LLM provider (anthropic, openai, litellm)
        model: Model name override
        offline: Skip the LLM and synthesize the narrative

    Returns:
        GenerationResult
    """
    agent = None
    if not offline:
        llm = get_provider(provider_name=provider, model=model) if provider or model else None
        agent = DocumentAgent(provider=llm, model=model)
    pipeline = DocumentPipeline(store, agent=agent, offline=offline)
    return pipeline.generate(design_week_id, document_type, language)
