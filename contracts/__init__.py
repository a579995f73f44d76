"""Pydantic contracts for the document generation pipeline.

Every handoff between mapper, agents and orchestrator is typed through these
contracts.
"""

from .extraction_contracts import (
    ExtractedItemType,
    ItemStatus,
    ScopeClassification,
    ItemPayload,
    StakeholderPayload,
    GoalPayload,
    KpiPayload,
    VolumePayload,
    ProcessStepPayload,
    ExceptionPayload,
    IntegrationPayload,
    BusinessRulePayload,
    PersonaTraitPayload,
    EscalationScriptPayload,
    MonitoringMetricPayload,
    LaunchCriterionPayload,
    PAYLOAD_MODELS,
    ExtractedItem,
    ScopeItemRecord,
    IntegrationRecord,
    BusinessRuleRecord,
    Company,
    DigitalEmployee,
    Session,
    DesignWeek,
)

from .context_contracts import (
    DocumentLanguage,
    LANGUAGE_NAMES,
    GuardrailKind,
    StakeholderInfo,
    GoalInfo,
    KpiInfo,
    VolumeInfo,
    ProcessStepInfo,
    ExceptionInfo,
    InScopeInfo,
    OutOfScopeInfo,
    GuardrailInfo,
    IntegrationInfo,
    BusinessRuleInfo,
    PersonaTraitInfo,
    EscalationScriptInfo,
    MonitoringMetricInfo,
    LaunchCriterionInfo,
    GenerationContext,
)

from .document_contracts import (
    RiskLevel,
    GenerationMetadata,
    ExecutiveSummarySection,
    Challenge,
    CurrentStateAnalysis,
    FutureBenefit,
    FutureStateVision,
    ProcessAnalysis,
    ScopeAnalysis,
    TechnicalFoundation,
    Risk,
    RiskAssessment,
    ImplementationPhase,
    TrainingSession,
    TrainingPlan,
    ImplementationApproach,
    SuccessMetrics,
    NextStep,
    Conclusion,
    EscalationTrigger,
    KeyContact,
    QuickReference,
    KeyBenefit,
    ExecutiveOnePager,
    DecisionPoint,
    ProcessFlowSummary,
    GeneratedContent,
    DocumentMetadata,
    ExecutiveSummaryBlock,
    BusinessContext,
    ProcessDesign,
    DocumentScope,
    TechnicalRequirements,
    DesignDocument,
)

from .pipeline_contracts import (
    DocumentType,
    DocumentRecord,
    OperationLogEntry,
    UsageSummary,
    GenerationResult,
)

from .adapters import (
    extract_title,
    parse_stakeholder,
    build_generation_context,
    missing_fields,
)

from .document_mapper import (
    build_base_document,
    calculate_completeness,
)

__all__ = [
    # Extraction
    "ExtractedItemType",
    "ItemStatus",
    "ScopeClassification",
    "ItemPayload",
    "StakeholderPayload",
    "GoalPayload",
    "KpiPayload",
    "VolumePayload",
    "ProcessStepPayload",
    "ExceptionPayload",
    "IntegrationPayload",
    "BusinessRulePayload",
    "PersonaTraitPayload",
    "EscalationScriptPayload",
    "MonitoringMetricPayload",
    "LaunchCriterionPayload",
    "PAYLOAD_MODELS",
    "ExtractedItem",
    "ScopeItemRecord",
    "IntegrationRecord",
    "BusinessRuleRecord",
    "Company",
    "DigitalEmployee",
    "Session",
    "DesignWeek",
    # Generation context
    "DocumentLanguage",
    "LANGUAGE_NAMES",
    "GuardrailKind",
    "StakeholderInfo",
    "GoalInfo",
    "KpiInfo",
    "VolumeInfo",
    "ProcessStepInfo",
    "ExceptionInfo",
    "InScopeInfo",
    "OutOfScopeInfo",
    "GuardrailInfo",
    "IntegrationInfo",
    "BusinessRuleInfo",
    "PersonaTraitInfo",
    "EscalationScriptInfo",
    "MonitoringMetricInfo",
    "LaunchCriterionInfo",
    "GenerationContext",
    # Generated content
    "RiskLevel",
    "GenerationMetadata",
    "ExecutiveSummarySection",
    "Challenge",
    "CurrentStateAnalysis",
    "FutureBenefit",
    "FutureStateVision",
    "ProcessAnalysis",
    "ScopeAnalysis",
    "TechnicalFoundation",
    "Risk",
    "RiskAssessment",
    "ImplementationPhase",
    "TrainingSession",
    "TrainingPlan",
    "ImplementationApproach",
    "SuccessMetrics",
    "NextStep",
    "Conclusion",
    "EscalationTrigger",
    "KeyContact",
    "QuickReference",
    "KeyBenefit",
    "ExecutiveOnePager",
    "DecisionPoint",
    "ProcessFlowSummary",
    "GeneratedContent",
    # Base document
    "DocumentMetadata",
    "ExecutiveSummaryBlock",
    "BusinessContext",
    "ProcessDesign",
    "DocumentScope",
    "TechnicalRequirements",
    "DesignDocument",
    # Pipeline
    "DocumentType",
    "DocumentRecord",
    "OperationLogEntry",
    "UsageSummary",
    "GenerationResult",
    # Mapping
    "extract_title",
    "parse_stakeholder",
    "build_generation_context",
    "missing_fields",
    "build_base_document",
    "calculate_completeness",
]
