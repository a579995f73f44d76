"""Deterministic fallback content for when the LLM cannot be used.

Produces a complete, schema-valid GeneratedContent from the context alone.
Every figure is either taken from the context or written as a bracketed
placeholder, so a reviewer can tell at a glance what still needs confirming.
Apart from ``latency_ms`` and the clock reading, the output depends only on
the context.
"""

from typing import List, Optional

from agents.base_agent import Clock, utc_now
from config import settings
from contracts import (
    GenerationContext,
    GeneratedContent,
    GenerationMetadata,
    GuardrailKind,
    KpiInfo,
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
)

MAX_OBJECTIVES = 7
MAX_KPI_ITEMS = 4
MAX_CHALLENGES = 5
MAX_QUICK_REFERENCE_ITEMS = 7

NO_OBJECTIVES = "[Objectives to be defined during Design Week sessions]"
DEFAULT_HAPPY_PATH = "Request received → Validation → Processing → Completion → Notification"

STANDARD_OUTCOMES = [
    "24/7 operational capability",
    "Enhanced compliance and audit trails",
]

PLACEHOLDER_OUTCOMES = [
    "Processing time reduction [to be baselined]",
    "Error rate improvement [to be baselined]",
    "Improved customer response times",
]

PLACEHOLDER_BENEFITS = [
    KeyBenefit(benefit="Processing Speed", metric="[To be measured during pilot]"),
    KeyBenefit(benefit="Error Reduction", metric="[To be measured during pilot]"),
    KeyBenefit(benefit="Availability", metric="24/7 operation capability"),
    KeyBenefit(benefit="Scalability", metric="[Capacity to be determined]"),
]

DEFAULT_CAN_DO = [
    "Process standard requests within defined parameters",
    "Validate and verify incoming data",
    "Route requests to appropriate teams",
    "Generate automated responses",
    "Track and log all interactions",
]

DEFAULT_CANNOT_DO = [
    "Handle exceptions outside defined rules",
    "Make decisions on edge cases",
    "Access systems outside integration scope",
    "Override business rules",
    "Handle escalated complaints",
]

DEFAULT_ESCALATION_TRIGGERS = [
    EscalationTrigger(
        trigger="Customer requests human assistance",
        action="Transfer to available team member",
        contact_method="Standard escalation queue",
    ),
    EscalationTrigger(
        trigger="Request falls outside scope",
        action="Route to supervisor",
        contact_method="Priority queue",
    ),
    EscalationTrigger(
        trigger="System error or timeout",
        action="Report to technical support",
        contact_method="IT help desk",
    ),
]

DEFAULT_KEY_CONTACTS = [
    KeyContact(role="Technical Support", name="IT Help Desk", responsibility="System issues and errors"),
    KeyContact(role="Process Questions", name="Operations Manager", responsibility="Business rules and exceptions"),
    KeyContact(role="Escalations", name="Team Supervisor", responsibility="Customer escalations"),
]


def expected_outcomes(kpis: List[KpiInfo]) -> List[str]:
    """KPI-grounded outcomes, or bracketed placeholders when there are none."""
    if kpis:
        return [k.formatted() for k in kpis[:MAX_KPI_ITEMS]] + STANDARD_OUTCOMES
    return PLACEHOLDER_OUTCOMES + STANDARD_OUTCOMES


def key_benefits(kpis: List[KpiInfo]) -> List[KeyBenefit]:
    if kpis:
        return [
            KeyBenefit(benefit=k.name, metric=k.formatted_target())
            for k in kpis[:MAX_KPI_ITEMS]
        ]
    return [b.model_copy() for b in PLACEHOLDER_BENEFITS]


def _executive_summary(ctx: GenerationContext) -> ExecutiveSummarySection:
    de, company = ctx.digital_employee_name, ctx.company_name
    description = ctx.description or "[Initiative description to be confirmed]"
    objectives = [f"{g.title}: {g.description}" for g in ctx.goals[:MAX_OBJECTIVES]]
    return ExecutiveSummarySection(
        opening=f"Introducing {de}: a Digital Employee for {company}.",
        overview=(
            f"This document outlines the design specifications for {de}, a Digital Employee "
            f"being implemented for {company}. {description}\n\n"
            f"The design below is assembled from the requirements captured during the Design Week."
        ),
        key_objectives=objectives or [NO_OBJECTIVES],
        value_proposition=(
            f"{de} automates routine yet critical work for {company}, so that people can focus "
            f"on the cases that need their judgement."
        ),
        expected_outcomes=expected_outcomes(ctx.kpis),
    )


def _current_state(ctx: GenerationContext) -> CurrentStateAnalysis:
    return CurrentStateAnalysis(
        introduction="Understanding the current operational landscape is essential for designing an effective solution.",
        challenges=[
            Challenge(challenge=e.name, impact=e.description, frequency="[Frequency to be quantified]")
            for e in ctx.exceptions[:MAX_CHALLENGES]
        ],
        inefficiencies="The current process involves manual intervention. [Inefficiencies to be quantified]",
        opportunity_cost="[Cost of the current state to be quantified during baselining]",
    )


def _future_state(ctx: GenerationContext) -> FutureStateVision:
    de, company = ctx.digital_employee_name, ctx.company_name
    return FutureStateVision(
        introduction="The future state shifts routine work to the Digital Employee.",
        transformation_narrative=(
            f"With {de} in place, {company} handles routine tasks automatically while people "
            f"focus on higher-value activities."
        ),
        day_in_the_life=(
            f"At the start of the day, {de} has already processed incoming requests and prepared "
            f"exceptions for review."
        ),
        benefits=[
            FutureBenefit(benefit="Speed", description="Faster processing times", metric="Processing time reduction"),
            FutureBenefit(benefit="Accuracy", description="Reduced error rates", metric="Error rate"),
            FutureBenefit(benefit="Availability", description="24/7 operation", metric="Uptime"),
        ],
    )


def _process_analysis(ctx: GenerationContext) -> ProcessAnalysis:
    steps = "\n\n".join(
        f"Step {s.step_number}: {s.name} - {s.description}" for s in ctx.process_steps
    )
    return ProcessAnalysis(
        introduction="The process design below follows the happy path captured during the Design Week.",
        process_overview=(
            f"The Digital Employee will handle {len(ctx.process_steps)} key process steps, "
            f"from intake through completion."
        ),
        step_by_step_narrative=steps or "[Process steps to be mapped]",
        automation_benefits="Each automated step reduces cycle time and removes manual handling of routine operations.",
        exception_handling_approach=(
            f"{len(ctx.exceptions)} exception scenarios have been identified and will be handled "
            f"through routing and escalation."
        ),
        human_machine_collaboration=(
            "Humans remain in control of complex decisions while the Digital Employee handles routine execution."
        ),
    )


def _scope_analysis(ctx: GenerationContext) -> ScopeAnalysis:
    return ScopeAnalysis(
        introduction="Clear scope boundaries keep delivery focused and success measurable.",
        in_scope_rationale=f"{len(ctx.in_scope)} capabilities are in scope.",
        out_of_scope_rationale=f"{len(ctx.out_of_scope)} items are explicitly out of scope.",
        guardrails_explanation=f"{len(ctx.guardrails)} guardrails define the boundaries of safe operation.",
        boundary_management="Edge cases are routed to the appropriate human experts.",
    )


def _technical_foundation(ctx: GenerationContext) -> TechnicalFoundation:
    strategy = ". ".join(
        f"{i.system_name}: {i.purpose} via {i.connection_type}" for i in ctx.integrations
    )
    security = "; ".join(ctx.security_requirements)
    return TechnicalFoundation(
        introduction="The technical architecture connects the Digital Employee to the systems it works in.",
        architecture_overview=(
            f"The solution integrates with {len(ctx.integrations)} systems to enable end-to-end automation."
        ),
        integration_strategy=strategy or "[Integrations to be mapped]",
        data_flow_narrative="Data flows between the integrated systems with audit trails. [Data flows to be detailed]",
        security_approach=security or "[Security requirements to be defined]",
    )


def _risk_assessment() -> RiskAssessment:
    return RiskAssessment(
        introduction="Risks are tracked from design through go-live.",
        risks=[
            Risk(
                risk="Integration complexity",
                likelihood="Medium",
                impact="Medium",
                mitigation="Early integration testing and contingency planning",
            ),
            Risk(
                risk="Change adoption",
                likelihood="Medium",
                impact="High",
                mitigation="Structured change management program",
            ),
        ],
        overall_risk_posture="[Overall risk posture to be assessed with stakeholders]",
    )


def _implementation_approach() -> ImplementationApproach:
    return ImplementationApproach(
        introduction="A phased approach keeps delivery controlled and shows value early.",
        phases=[
            ImplementationPhase(
                phase="Design & Setup",
                description="Finalize design and configure systems",
                deliverables=["Design document approval", "Environment setup"],
            ),
            ImplementationPhase(
                phase="Build & Test",
                description="Develop and test the solution",
                deliverables=["Working solution", "Test results"],
            ),
            ImplementationPhase(
                phase="UAT & Go-Live",
                description="User acceptance and deployment",
                deliverables=["User sign-off", "Production deployment"],
            ),
        ],
        success_factors=[
            "Executive sponsorship and engagement",
            "Clear communication throughout",
            "Adequate testing time",
            "User training and support",
        ],
        change_management="A change management program will support adoption. [Plan to be detailed]",
        training_plan=TrainingPlan(
            overview="Training combines instructor-led sessions with self-paced materials.",
            sessions=[
                TrainingSession(
                    topic="Introduction to the Digital Employee",
                    audience="All affected team members",
                    duration="[to be scheduled]",
                    delivery_method="Virtual presentation",
                    key_content=[
                        "What the Digital Employee does",
                        "How it fits into daily work",
                    ],
                ),
                TrainingSession(
                    topic="Working with the Digital Employee",
                    audience="Operations team",
                    duration="[to be scheduled]",
                    delivery_method="Interactive workshop",
                    key_content=[
                        "Step-by-step workflows",
                        "Escalation procedures",
                        "Common scenarios and handling",
                    ],
                ),
            ],
            materials=["Quick reference card", "FAQ document"],
            support_plan="[Post-launch support model to be agreed]",
        ),
    )


def _success_metrics(ctx: GenerationContext) -> SuccessMetrics:
    narrative = ". ".join(f"{k.name}: Target of {k.formatted_target()}" for k in ctx.kpis)
    return SuccessMetrics(
        introduction="Success is measured against the KPIs agreed during the Design Week.",
        kpi_narrative=narrative or "[KPIs to be defined]",
        measurement_approach="[Measurement approach to be agreed]",
        reporting_cadence="[Reporting cadence to be agreed]",
    )


def _conclusion(ctx: GenerationContext) -> Conclusion:
    de, company = ctx.digital_employee_name, ctx.company_name
    return Conclusion(
        summary=f"This document captures the design of {de} for {company} as agreed so far.",
        call_to_action="Review the bracketed items and confirm the open requirements before build starts.",
        next_steps=[
            NextStep(step="Review and approve this design document", owner="Project Sponsor", timeline="[to be scheduled]"),
            NextStep(step="Begin technical integration setup", owner="Technical Team", timeline="[to be scheduled]"),
            NextStep(step="Schedule UAT sessions", owner="Project Manager", timeline="[to be scheduled]"),
        ],
        closing_statement=f"{de} is ready to move from design to build once the open items are confirmed.",
    )


def _quick_reference(ctx: GenerationContext) -> QuickReference:
    de = ctx.digital_employee_name
    can_do = [i.description for i in ctx.in_scope[:MAX_QUICK_REFERENCE_ITEMS]]
    never = [g.description for g in ctx.guardrails if g.type == GuardrailKind.NEVER]
    cannot_do = ([o.description for o in ctx.out_of_scope] + never)[:MAX_QUICK_REFERENCE_ITEMS]
    triggers = [
        EscalationTrigger(trigger=s.context, action=s.script, contact_method="Standard escalation queue")
        for s in ctx.escalation_scripts
    ]
    contacts = [
        KeyContact(role=s.role, name=s.name, responsibility="[Responsibility to be confirmed]")
        for s in ctx.stakeholders
    ]
    return QuickReference(
        agent_name=de,
        purpose=f"{de} handles routine tasks automatically, freeing up time for complex cases.",
        can_do=can_do or list(DEFAULT_CAN_DO),
        cannot_do=cannot_do or list(DEFAULT_CANNOT_DO),
        escalation_triggers=triggers or [t.model_copy() for t in DEFAULT_ESCALATION_TRIGGERS],
        key_contacts=contacts or [c.model_copy() for c in DEFAULT_KEY_CONTACTS],
        quick_tips=[
            "Check the Digital Employee status before assuming a system issue",
            "Document unusual cases for future improvements",
            "Use the escalation queue for time-sensitive matters",
        ],
    )


def _one_pager(ctx: GenerationContext) -> ExecutiveOnePager:
    de, company = ctx.digital_employee_name, ctx.company_name
    return ExecutiveOnePager(
        headline=f"{de}: Digital Employee for {company}",
        problem=f"Manual processes limit how far {company} can scale its operations. [Problem statement to be confirmed]",
        solution=f"{de} automates routine tasks within agreed guardrails, with people handling the exceptions.",
        key_benefits=key_benefits(ctx.kpis),
        investment="[Investment to be confirmed]",
        timeline="Design complete. [Build, UAT and go-live dates to be scheduled]",
        bottom_line=f"{de} lets {company} handle routine work automatically while people focus on exceptions.",
    )


def _process_flow(ctx: GenerationContext) -> ProcessFlowSummary:
    return ProcessFlowSummary(
        happy_path_flow=" → ".join(s.name for s in ctx.process_steps) or DEFAULT_HAPPY_PATH,
        escalation_flow=(
            "If a request is outside scope or the customer asks for a person, route it to the "
            "appropriate team member via the escalation queue"
        ),
        decision_points=[
            DecisionPoint(
                point="Scope Check",
                options=["In scope: Continue automated processing", "Out of scope: Escalate to human"],
                criteria="Based on defined scope boundaries",
            ),
            DecisionPoint(
                point="Validation",
                options=["Valid: Proceed", "Invalid: Request correction"],
                criteria="Based on business rules",
            ),
        ],
    )


def synthesize_fallback(
    context: GenerationContext,
    latency_ms: int = 0,
    clock: Optional[Clock] = None,
) -> GeneratedContent:
    """Build schema-valid content without calling the LLM.

    Args:
        context: The generation context
        latency_ms: Time already spent on the failed attempt
        clock: Returns the current time for ``generated_at``

    Returns:
        GeneratedContent flagged ``is_fallback=True``
    """
    clock = clock or utc_now
    print("[Document Generation] Using FALLBACK content: metrics are placeholders unless taken from KPIs")

    return GeneratedContent(
        executive_summary=_executive_summary(context),
        current_state_analysis=_current_state(context),
        future_state_vision=_future_state(context),
        process_analysis=_process_analysis(context),
        scope_analysis=_scope_analysis(context),
        technical_foundation=_technical_foundation(context),
        risk_assessment=_risk_assessment(),
        implementation_approach=_implementation_approach(),
        success_metrics=_success_metrics(context),
        conclusion=_conclusion(context),
        quick_reference=_quick_reference(context),
        executive_one_pager=_one_pager(context),
        process_flow_summary=_process_flow(context),
        generation_metadata=GenerationMetadata(
            generated_at=clock(),
            model=settings.fallback_model_marker,
            is_fallback=True,
            source_item_count=context.source_item_count,
            latency_ms=latency_ms,
        ),
    )
