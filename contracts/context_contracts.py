"""Generation context contracts.

The context is the normalized, typed view of a design week that the prompt
assembler and the fallback writer consume. It is built fresh per request.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class DocumentLanguage(str, Enum):
    """Supported narrative languages."""
    EN = "en"
    NL = "nl"
    DE = "de"
    FR = "fr"
    ES = "es"


LANGUAGE_NAMES: Dict[DocumentLanguage, str] = {
    DocumentLanguage.EN: "English",
    DocumentLanguage.NL: "Nederlands",
    DocumentLanguage.DE: "Deutsch",
    DocumentLanguage.FR: "Français",
    DocumentLanguage.ES: "Español",
}


class GuardrailKind(str, Enum):
    """Tag for the four guardrail item types folded into one list."""
    NEVER = "NEVER"
    ALWAYS = "ALWAYS"
    FINANCIAL_LIMIT = "FINANCIAL LIMIT"
    LEGAL = "LEGAL"


class StakeholderInfo(BaseModel):
    name: str
    role: str
    email: Optional[str] = None


class GoalInfo(BaseModel):
    title: str
    description: str


class KpiInfo(BaseModel):
    name: str
    target: str
    unit: Optional[str] = None
    owner: Optional[str] = None
    alert_threshold: Optional[str] = None

    def formatted(self) -> str:
        """Render as '<name>: <target> <unit>'."""
        return f"{self.name}: {self.formatted_target()}"

    def formatted_target(self) -> str:
        return f"{self.target} {self.unit}" if self.unit else self.target


class VolumeInfo(BaseModel):
    metric: str
    value: str
    period: str = "monthly"


class ProcessStepInfo(BaseModel):
    step_number: int
    name: str
    description: str


class ExceptionInfo(BaseModel):
    name: str
    description: str
    handling: str = "Escalate to human operator"


class InScopeInfo(BaseModel):
    description: str
    skill: Optional[str] = None
    conditions: Optional[str] = None


class OutOfScopeInfo(BaseModel):
    description: str
    notes: Optional[str] = None


class GuardrailInfo(BaseModel):
    type: GuardrailKind
    description: str


class IntegrationInfo(BaseModel):
    system_name: str
    purpose: str
    connection_type: str


class BusinessRuleInfo(BaseModel):
    name: str
    condition: str
    action: str


class PersonaTraitInfo(BaseModel):
    name: str
    description: str
    example_phrase: Optional[str] = None


class EscalationScriptInfo(BaseModel):
    context: str
    script: str


class MonitoringMetricInfo(BaseModel):
    name: str
    target: str
    owner: Optional[str] = None
    perspective: Optional[str] = None


class LaunchCriterionInfo(BaseModel):
    criterion: str
    phase: Optional[str] = None
    owner: Optional[str] = None


class GenerationContext(BaseModel):
    """Everything the generator knows about one Digital Employee.

    Every field traces back to an approved (or status-less) extracted item or
    to a dedicated relational source; nothing here is invented.
    """
    company_name: str = Field(..., description="Client organization")
    digital_employee_name: str = Field(..., description="Name of the Digital Employee")
    description: Optional[str] = Field(None, description="Initiative description")
    language: DocumentLanguage = Field(default=DocumentLanguage.EN)

    stakeholders: List[StakeholderInfo] = Field(default_factory=list)
    goals: List[GoalInfo] = Field(default_factory=list)
    kpis: List[KpiInfo] = Field(default_factory=list)
    volumes: List[VolumeInfo] = Field(default_factory=list)
    process_steps: List[ProcessStepInfo] = Field(default_factory=list)
    exceptions: List[ExceptionInfo] = Field(default_factory=list)
    in_scope: List[InScopeInfo] = Field(default_factory=list)
    out_of_scope: List[OutOfScopeInfo] = Field(default_factory=list)
    guardrails: List[GuardrailInfo] = Field(default_factory=list)
    integrations: List[IntegrationInfo] = Field(default_factory=list)
    business_rules: List[BusinessRuleInfo] = Field(default_factory=list)
    security_requirements: List[str] = Field(default_factory=list)
    channels: List[str] = Field(default_factory=list)
    persona_traits: List[PersonaTraitInfo] = Field(default_factory=list)
    escalation_scripts: List[EscalationScriptInfo] = Field(default_factory=list)
    monitoring_metrics: List[MonitoringMetricInfo] = Field(default_factory=list)
    launch_criteria: List[LaunchCriterionInfo] = Field(default_factory=list)

    @property
    def source_item_count(self) -> int:
        """Items counted as generation sources in metadata."""
        return (
            len(self.stakeholders)
            + len(self.goals)
            + len(self.kpis)
            + len(self.process_steps)
            + len(self.integrations)
        )
