"""Document contracts: generated narrative content and the exported document.

Field descriptions on the generated-content models are also the instructions
shown to the model in the prompt's schema skeleton, so keep them short and
written for the model.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .context_contracts import (
    StakeholderInfo,
    GoalInfo,
    KpiInfo,
    VolumeInfo,
    ProcessStepInfo,
    ExceptionInfo,
    GuardrailInfo,
    IntegrationInfo,
    BusinessRuleInfo,
)
from .extraction_contracts import ScopeItemRecord


RiskLevel = Literal["Low", "Medium", "High"]


# --- Generated content ----------------------------------------------------


class GenerationMetadata(BaseModel):
    """Audit trail for how a piece of generated content came to be."""
    generated_at: datetime
    model: str
    is_fallback: bool
    source_item_count: int = Field(..., ge=0)
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    latency_ms: Optional[int] = None


class ExecutiveSummarySection(BaseModel):
    opening: str = Field(..., description="A powerful opening statement (1-2 sentences) that captures attention.")
    overview: str = Field(..., description="1-2 paragraphs providing a focused overview. Cover what, why, and expected impact.")
    key_objectives: List[str] = Field(default_factory=list, description="3-5 objectives, each as a sentence")
    value_proposition: str = Field(..., description="1 paragraph explaining why this matters strategically.")
    expected_outcomes: List[str] = Field(default_factory=list, description="3-5 specific expected outcomes, grounded in the KPIs provided")


class Challenge(BaseModel):
    challenge: str = Field(..., description="Name of challenge")
    impact: str = Field(..., description="Business impact")
    frequency: str = Field(..., description="How often")


class CurrentStateAnalysis(BaseModel):
    introduction: str = Field(..., description="1-2 sentences setting up the current state analysis.")
    challenges: List[Challenge] = Field(default_factory=list)
    inefficiencies: str = Field(..., description="1 paragraph on current process inefficiencies.")
    opportunity_cost: str = Field(..., description="1 paragraph on what the current state costs.")


class FutureBenefit(BaseModel):
    benefit: str = Field(..., description="Benefit name")
    description: str = Field(..., description="Brief explanation")
    metric: Optional[str] = Field(None, description="Measurement")


class FutureStateVision(BaseModel):
    introduction: str = Field(..., description="1-2 sentences painting what success looks like.")
    transformation_narrative: str = Field(..., description="1-2 paragraphs describing the transformed state.")
    day_in_the_life: str = Field(..., description="1 paragraph describing a typical day after go-live.")
    benefits: List[FutureBenefit] = Field(default_factory=list)


class ProcessAnalysis(BaseModel):
    introduction: str = Field(..., description="1-2 sentences on process design approach.")
    process_overview: str = Field(..., description="1 paragraph on the end-to-end process.")
    step_by_step_narrative: str = Field(..., description="1-2 paragraphs walking through key process steps briefly.")
    automation_benefits: str = Field(..., description="1 paragraph on what gets automated and why.")
    exception_handling_approach: str = Field(..., description="1 paragraph on exception handling and escalation.")
    human_machine_collaboration: str = Field(..., description="1 paragraph on human-machine collaboration.")


class ScopeAnalysis(BaseModel):
    introduction: str = Field(..., description="1-2 sentences on scope importance.")
    in_scope_rationale: str = Field(..., description="1 paragraph on what's in scope and why.")
    out_of_scope_rationale: str = Field(..., description="1 paragraph on what's out of scope and why.")
    guardrails_explanation: str = Field(..., description="1 paragraph on guardrails and rules of engagement.")
    boundary_management: str = Field(..., description="1-2 sentences on edge case handling.")


class TechnicalFoundation(BaseModel):
    introduction: str = Field(..., description="1-2 sentences on technical approach.")
    architecture_overview: str = Field(..., description="1 paragraph on solution architecture in business terms.")
    integration_strategy: str = Field(..., description="1 paragraph on integration approach.")
    data_flow_narrative: str = Field(..., description="1 paragraph on data flow.")
    security_approach: str = Field(..., description="1 paragraph on security measures.")


class Risk(BaseModel):
    risk: str = Field(..., description="Risk")
    likelihood: RiskLevel = Field(..., description="Low/Medium/High")
    impact: RiskLevel = Field(..., description="Low/Medium/High")
    mitigation: str = Field(..., description="Mitigation")

    @field_validator("likelihood", "impact", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str):
            return value.strip().capitalize()
        return value


class RiskAssessment(BaseModel):
    introduction: str = Field(..., description="1-2 sentences on risk management.")
    risks: List[Risk] = Field(default_factory=list)
    overall_risk_posture: str = Field(..., description="1 paragraph on overall risk assessment.")


class ImplementationPhase(BaseModel):
    phase: str = Field(..., description="Phase name")
    description: str = Field(..., description="Brief description")
    deliverables: List[str] = Field(default_factory=list, description="Key deliverables")


class TrainingSession(BaseModel):
    topic: str = Field(..., description="Training topic")
    audience: str = Field(..., description="Target audience")
    duration: str = Field(..., description="Duration")
    delivery_method: str = Field(..., description="Delivery method")
    key_content: List[str] = Field(default_factory=list, description="Key topics")


class TrainingPlan(BaseModel):
    overview: str = Field(..., description="1 paragraph on training approach.")
    sessions: List[TrainingSession] = Field(default_factory=list)
    materials: List[str] = Field(default_factory=list, description="Training materials")
    support_plan: str = Field(..., description="1-2 sentences on ongoing support.")


class ImplementationApproach(BaseModel):
    introduction: str = Field(..., description="1-2 sentences on implementation philosophy.")
    phases: List[ImplementationPhase] = Field(default_factory=list)
    success_factors: List[str] = Field(default_factory=list, description="3-5 critical success factors")
    change_management: str = Field(..., description="1 paragraph on change management.")
    training_plan: TrainingPlan


class SuccessMetrics(BaseModel):
    introduction: str = Field(..., description="1-2 sentences on measurement philosophy.")
    kpi_narrative: str = Field(..., description="1 paragraph describing KPIs and targets.")
    measurement_approach: str = Field(..., description="1-2 sentences on metric collection.")
    reporting_cadence: str = Field(..., description="1-2 sentences on reporting cadence.")


class NextStep(BaseModel):
    step: str = Field(..., description="Next step")
    owner: str = Field(..., description="Owner")
    timeline: str = Field(..., description="Timeline")


class Conclusion(BaseModel):
    summary: str = Field(..., description="1 paragraph summary tying everything together.")
    call_to_action: str = Field(..., description="2-3 sentences calling stakeholders to action.")
    next_steps: List[NextStep] = Field(default_factory=list)
    closing_statement: str = Field(..., description="A memorable closing statement (1-2 sentences).")


class EscalationTrigger(BaseModel):
    trigger: str = Field(..., description="Situation requiring escalation")
    action: str = Field(..., description="What to do")
    contact_method: str = Field(..., description="How to escalate")


class KeyContact(BaseModel):
    role: str = Field(..., description="Role name")
    name: str = Field(..., description="Contact name")
    responsibility: str = Field(..., description="What they handle")


class QuickReference(BaseModel):
    agent_name: str = Field(..., description="The Digital Employee name")
    purpose: str = Field(..., description="1-2 sentence clear summary of what this agent does")
    can_do: List[str] = Field(default_factory=list, description="5-7 specific things the agent CAN do")
    cannot_do: List[str] = Field(default_factory=list, description="5-7 specific things the agent CANNOT do")
    escalation_triggers: List[EscalationTrigger] = Field(default_factory=list)
    key_contacts: List[KeyContact] = Field(default_factory=list)
    quick_tips: List[str] = Field(default_factory=list, description="3-5 practical tips for working with the Digital Employee")


class KeyBenefit(BaseModel):
    benefit: str = Field(..., description="Benefit name")
    metric: Optional[str] = Field(None, description="Quantified impact taken from the KPIs provided")


class ExecutiveOnePager(BaseModel):
    headline: str = Field(..., description="Compelling 5-10 word headline")
    problem: str = Field(..., description="2-3 sentences describing the business problem")
    solution: str = Field(..., description="2-3 sentences describing the solution")
    key_benefits: List[KeyBenefit] = Field(default_factory=list)
    investment: str = Field(..., description="Brief description of investment level")
    timeline: str = Field(..., description="Clear timeline summary")
    bottom_line: str = Field(..., description="1-2 sentence compelling 'bottom line' statement")


class DecisionPoint(BaseModel):
    point: str = Field(..., description="Key decision point")
    options: List[str] = Field(default_factory=list, description="Options at this point")
    criteria: str = Field(..., description="How the decision is made")


class ProcessFlowSummary(BaseModel):
    happy_path_flow: str = Field(..., description="Text-based flow of the main process steps, e.g. 'Step 1 → Step 2 → Step 3'")
    escalation_flow: str = Field(..., description="Clear explanation of when and how escalation happens")
    decision_points: List[DecisionPoint] = Field(default_factory=list)


class GeneratedContent(BaseModel):
    """Long-form narrative content for a Digital Employee design document.

    The shape is identical whether the model wrote it or the fallback writer
    synthesized it; ``generation_metadata`` says which.
    """
    executive_summary: ExecutiveSummarySection
    current_state_analysis: CurrentStateAnalysis
    future_state_vision: FutureStateVision
    process_analysis: ProcessAnalysis
    scope_analysis: ScopeAnalysis
    technical_foundation: TechnicalFoundation
    risk_assessment: RiskAssessment
    implementation_approach: ImplementationApproach
    success_metrics: SuccessMetrics
    conclusion: Conclusion
    quick_reference: QuickReference
    executive_one_pager: ExecutiveOnePager
    process_flow_summary: ProcessFlowSummary

    generation_metadata: Optional[GenerationMetadata] = Field(
        None,
        description="Added by the pipeline, never by the model",
    )


# --- Base document --------------------------------------------------------


class DocumentMetadata(BaseModel):
    title: str
    subtitle: Optional[str] = None
    version: str = "1.0"
    date: str
    author: str
    company: str
    digital_employee_name: str
    status: Literal["DRAFT", "IN_REVIEW", "APPROVED", "PUBLISHED"] = "DRAFT"
    completeness_score: int = Field(..., ge=0, le=100)


class ExecutiveSummaryBlock(BaseModel):
    overview: str
    key_objectives: List[str] = Field(default_factory=list)
    timeline: Optional[str] = None


class BusinessContext(BaseModel):
    goals: List[GoalInfo] = Field(default_factory=list)
    kpis: List[KpiInfo] = Field(default_factory=list)
    volumes: List[VolumeInfo] = Field(default_factory=list)
    pain_points: List[str] = Field(default_factory=list)


class ProcessDesign(BaseModel):
    to_be_steps: List[ProcessStepInfo] = Field(default_factory=list)
    exceptions: List[ExceptionInfo] = Field(default_factory=list)
    decision_points: List[str] = Field(default_factory=list)


class DocumentScope(BaseModel):
    in_scope: List[ScopeItemRecord] = Field(default_factory=list)
    out_of_scope: List[ScopeItemRecord] = Field(default_factory=list)
    ambiguous: List[ScopeItemRecord] = Field(default_factory=list)
    guardrails: List[GuardrailInfo] = Field(default_factory=list)


class TechnicalRequirements(BaseModel):
    integrations: List[IntegrationInfo] = Field(default_factory=list)
    security_requirements: List[str] = Field(default_factory=list)
    channels: List[str] = Field(default_factory=list)


class DesignDocument(BaseModel):
    """The Digital Employee design document handed to rendering and persistence.

    Tabular fields are assembled straight from design-week data; the
    ``generated`` block carries the narrative and its metadata.
    """
    metadata: DocumentMetadata
    executive_summary: ExecutiveSummaryBlock
    stakeholders: List[StakeholderInfo] = Field(default_factory=list)
    business_context: BusinessContext = Field(default_factory=BusinessContext)
    process_design: ProcessDesign = Field(default_factory=ProcessDesign)
    scope: DocumentScope = Field(default_factory=DocumentScope)
    technical_requirements: TechnicalRequirements = Field(default_factory=TechnicalRequirements)
    business_rules: List[BusinessRuleInfo] = Field(default_factory=list)
    generated: Optional[GeneratedContent] = None

    def to_markdown(self) -> str:
        """Convert the document to a human-readable markdown report."""
        meta = self.metadata
        sections = [
            f"# {meta.title}",
        ]
        if meta.subtitle:
            sections.append(f"\n_{meta.subtitle}_")
        sections.extend([
            f"\n**Client:** {meta.company}",
            f"**Prepared by:** {meta.author}",
            f"**Date:** {meta.date}",
            f"**Version:** {meta.version} ({meta.status})",
            f"**Completeness:** {meta.completeness_score}%",
        ])

        gen = self.generated
        if gen and gen.generation_metadata and gen.generation_metadata.is_fallback:
            sections.append(
                "\n> Narrative sections were synthesized from design-week data only. "
                "Bracketed text marks information still to be confirmed."
            )

        sections.extend([
            "\n---\n",
            "## Executive Summary",
        ])
        if gen:
            sections.append(f"\n**{gen.executive_summary.opening}**\n")
        sections.append(self.executive_summary.overview)
        if self.executive_summary.key_objectives:
            sections.append("\n### Key Objectives\n")
            sections.extend(f"- {o}" for o in self.executive_summary.key_objectives)
        if self.executive_summary.timeline:
            sections.append(f"\n**Timeline:** {self.executive_summary.timeline}")

        if gen:
            if gen.executive_summary.expected_outcomes:
                sections.append("\n### Expected Outcomes\n")
                sections.extend(f"- {o}" for o in gen.executive_summary.expected_outcomes)
            sections.extend([
                "\n## Current State",
                gen.current_state_analysis.introduction,
                gen.current_state_analysis.inefficiencies,
                "\n## Future State",
                gen.future_state_vision.transformation_narrative,
                "\n## Process",
                gen.process_analysis.step_by_step_narrative,
                f"\n**Flow:** {gen.process_flow_summary.happy_path_flow}",
                f"\n**Escalation:** {gen.process_flow_summary.escalation_flow}",
            ])

        if self.stakeholders:
            sections.append("\n## Stakeholders\n")
            sections.append("| Name | Role |")
            sections.append("|------|------|")
            for s in self.stakeholders:
                sections.append(f"| {s.name} | {s.role} |")

        if self.business_context.kpis:
            sections.append("\n## KPIs\n")
            sections.append("| KPI | Target |")
            sections.append("|-----|--------|")
            for k in self.business_context.kpis:
                sections.append(f"| {k.name} | {k.formatted_target()} |")

        if self.scope.in_scope or self.scope.out_of_scope:
            sections.append("\n## Scope\n")
            sections.extend(f"- In scope: {s.description}" for s in self.scope.in_scope)
            sections.extend(f"- Out of scope: {s.description}" for s in self.scope.out_of_scope)
        if self.scope.guardrails:
            sections.append("\n### Guardrails\n")
            sections.extend(f"- **{g.type.value}**: {g.description}" for g in self.scope.guardrails)

        if self.technical_requirements.integrations:
            sections.append("\n## Integrations\n")
            for i in self.technical_requirements.integrations:
                sections.append(f"- **{i.system_name}** ({i.purpose}, {i.connection_type})")

        if gen:
            if gen.risk_assessment.risks:
                sections.append("\n## Key Risks\n")
                sections.append("| Risk | Likelihood | Impact | Mitigation |")
                sections.append("|------|------------|--------|------------|")
                for r in gen.risk_assessment.risks:
                    sections.append(f"| {r.risk} | {r.likelihood} | {r.impact} | {r.mitigation} |")
            if gen.conclusion.next_steps:
                sections.append("\n## Next Steps\n")
                for n in gen.conclusion.next_steps:
                    sections.append(f"- {n.step} ({n.owner}, {n.timeline})")
            sections.append(f"\n{gen.conclusion.closing_statement}")

        return "\n".join(sections)
