"""Extraction contracts: requirement records captured during a design week.

Extracted items arrive loosely typed: a type tag, free text and an optional
structured payload whose keys depend on the type. Each type that carries a
payload has its own model here; ``ExtractedItem.payload()`` resolves it.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class ExtractedItemType(str, Enum):
    """Closed vocabulary of extracted item types."""
    STAKEHOLDER = "STAKEHOLDER"
    GOAL = "GOAL"
    BUSINESS_CASE = "BUSINESS_CASE"
    KPI_TARGET = "KPI_TARGET"
    VOLUME_EXPECTATION = "VOLUME_EXPECTATION"
    HAPPY_PATH_STEP = "HAPPY_PATH_STEP"
    EXCEPTION_CASE = "EXCEPTION_CASE"
    DECISION = "DECISION"
    GUARDRAIL_NEVER = "GUARDRAIL_NEVER"
    GUARDRAIL_ALWAYS = "GUARDRAIL_ALWAYS"
    FINANCIAL_LIMIT = "FINANCIAL_LIMIT"
    LEGAL_RESTRICTION = "LEGAL_RESTRICTION"
    COMPLIANCE_REQUIREMENT = "COMPLIANCE_REQUIREMENT"
    SECURITY_REQUIREMENT = "SECURITY_REQUIREMENT"
    CHANNEL = "CHANNEL"
    PERSONA_TRAIT = "PERSONA_TRAIT"
    ESCALATION_SCRIPT = "ESCALATION_SCRIPT"
    MONITORING_METRIC = "MONITORING_METRIC"
    LAUNCH_CRITERION = "LAUNCH_CRITERION"
    SYSTEM_INTEGRATION = "SYSTEM_INTEGRATION"
    BUSINESS_RULE = "BUSINESS_RULE"
    TIMELINE_CONSTRAINT = "TIMELINE_CONSTRAINT"


class ItemStatus(str, Enum):
    """Review status of an extracted item."""
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"
    NEEDS_CLARIFICATION = "NEEDS_CLARIFICATION"


class ScopeClassification(str, Enum):
    """Classification of a scope item."""
    IN_SCOPE = "IN_SCOPE"
    OUT_OF_SCOPE = "OUT_OF_SCOPE"
    AMBIGUOUS = "AMBIGUOUS"


# --- Typed payloads -------------------------------------------------------


class ItemPayload(BaseModel):
    """Base for type-specific payloads. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
        frozen=True,
    )


class StakeholderPayload(ItemPayload):
    name: Optional[str] = None
    role: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    is_key_decision_maker: Optional[bool] = None


class GoalPayload(ItemPayload):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None


class KpiPayload(ItemPayload):
    name: Optional[str] = None
    target: Optional[str] = None
    unit: Optional[str] = None
    owner: Optional[str] = None
    alert_threshold: Optional[str] = None
    frequency: Optional[str] = None


class VolumePayload(ItemPayload):
    metric: Optional[str] = None
    value: Optional[str] = None
    period: Optional[str] = None


class ProcessStepPayload(ItemPayload):
    step_number: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    owner: Optional[str] = None
    is_automatable: Optional[bool] = None


class ExceptionPayload(ItemPayload):
    name: Optional[str] = None
    description: Optional[str] = None
    handling: Optional[str] = None
    frequency: Optional[str] = None


class IntegrationPayload(ItemPayload):
    system_name: Optional[str] = None
    purpose: Optional[str] = None
    connection_type: Optional[str] = None


class BusinessRulePayload(ItemPayload):
    name: Optional[str] = None
    category: Optional[str] = None
    condition: Optional[str] = None
    action: Optional[str] = None
    priority: Optional[str] = None


class PersonaTraitPayload(ItemPayload):
    name: Optional[str] = None
    description: Optional[str] = None
    example_phrase: Optional[str] = None


class EscalationScriptPayload(ItemPayload):
    context: Optional[str] = None
    trigger: Optional[str] = None
    script: Optional[str] = None


class MonitoringMetricPayload(ItemPayload):
    name: Optional[str] = None
    target: Optional[str] = None
    owner: Optional[str] = None
    perspective: Optional[str] = None


class LaunchCriterionPayload(ItemPayload):
    criterion: Optional[str] = None
    phase: Optional[str] = None
    owner: Optional[str] = None


PAYLOAD_MODELS: Dict[ExtractedItemType, Type[ItemPayload]] = {
    ExtractedItemType.STAKEHOLDER: StakeholderPayload,
    ExtractedItemType.GOAL: GoalPayload,
    ExtractedItemType.KPI_TARGET: KpiPayload,
    ExtractedItemType.VOLUME_EXPECTATION: VolumePayload,
    ExtractedItemType.HAPPY_PATH_STEP: ProcessStepPayload,
    ExtractedItemType.EXCEPTION_CASE: ExceptionPayload,
    ExtractedItemType.SYSTEM_INTEGRATION: IntegrationPayload,
    ExtractedItemType.BUSINESS_RULE: BusinessRulePayload,
    ExtractedItemType.PERSONA_TRAIT: PersonaTraitPayload,
    ExtractedItemType.ESCALATION_SCRIPT: EscalationScriptPayload,
    ExtractedItemType.MONITORING_METRIC: MonitoringMetricPayload,
    ExtractedItemType.LAUNCH_CRITERION: LaunchCriterionPayload,
}


# --- Records --------------------------------------------------------------


class ExtractedItem(BaseModel):
    """One atomic, typed requirement fact."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique item id")
    type: Union[ExtractedItemType, str] = Field(
        ...,
        union_mode="left_to_right",
        description="Item type tag; unknown tags are kept as plain strings",
    )
    content: str = Field(default="", description="Free-text content of the item")
    structured_data: Optional[Dict[str, Any]] = Field(
        None,
        description="Type-specific named fields captured upstream",
    )
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    status: Optional[Union[ItemStatus, str]] = Field(
        None,
        union_mode="left_to_right",
        description="Review status; None means status-less, unknown statuses are kept as plain strings",
    )

    @property
    def is_approved(self) -> bool:
        """APPROVED and status-less items participate in generation."""
        return self.status is None or self.status == ItemStatus.APPROVED

    def payload(self) -> Optional[ItemPayload]:
        """Return the typed payload for this item, or None when absent.

        A field that fails validation is dropped on its own; the remaining
        fields still make up the payload.
        """
        model = PAYLOAD_MODELS.get(self.type)
        if model is None or not self.structured_data:
            return None
        try:
            return model.model_validate(self.structured_data)
        except ValidationError:
            pass
        usable = {}
        for key, value in self.structured_data.items():
            try:
                model.model_validate({key: value})
            except ValidationError:
                continue
            usable[key] = value
        return model.model_validate(usable)


class ScopeItemRecord(BaseModel):
    """A scope decision recorded during the design week."""
    id: str
    description: str
    classification: ScopeClassification
    skill: Optional[str] = None
    conditions: Optional[str] = None
    notes: Optional[str] = None
    exclude_from_document: bool = False


class IntegrationRecord(BaseModel):
    """A system integration from the dedicated integrations source."""
    id: str
    system_name: str
    purpose: str = "read_write"
    connection_type: str = "API"
    auth_method: Optional[str] = None
    notes: Optional[str] = None


class BusinessRuleRecord(BaseModel):
    """A business rule from the dedicated rules source."""
    id: str
    name: str
    category: str = "other"
    condition: str
    action: str
    priority: str = "medium"


class Company(BaseModel):
    name: str


class DigitalEmployee(BaseModel):
    """The automation agent being specified."""
    id: str
    name: str
    description: Optional[str] = None
    company: Company


class Session(BaseModel):
    """A facilitated design-week session and the items extracted from it."""
    id: str
    extracted_items: List[ExtractedItem] = Field(default_factory=list)


class DesignWeek(BaseModel):
    """Design-week aggregate read from the persistence layer."""
    id: str
    digital_employee: DigitalEmployee
    sessions: List[Session] = Field(default_factory=list)
    scope_items: List[ScopeItemRecord] = Field(default_factory=list)
    integrations: List[IntegrationRecord] = Field(default_factory=list)
    business_rules: List[BusinessRuleRecord] = Field(default_factory=list)

    def all_items(self) -> List[ExtractedItem]:
        """Flatten extracted items across sessions, in session order."""
        return [item for session in self.sessions for item in session.extracted_items]

    def approved_items(self) -> List[ExtractedItem]:
        """Items that participate in generation (APPROVED or status-less)."""
        return [item for item in self.all_items() if item.is_approved]

    def document_scope_items(self) -> List[ScopeItemRecord]:
        """Scope items not excluded from documents."""
        return [s for s in self.scope_items if not s.exclude_from_document]
