"""Assemble the base design document from design-week data.

The base document holds the tabular sections taken straight from the record
(stakeholders, KPIs, scope, integrations). Narrative content is merged in
later by the orchestrator.
"""

from datetime import datetime
from typing import Callable, List, Optional

from config import settings

from .adapters import group_items
from .context_contracts import GenerationContext, GoalInfo
from .document_contracts import (
    BusinessContext,
    DesignDocument,
    DocumentMetadata,
    DocumentScope,
    ExecutiveSummaryBlock,
    ProcessDesign,
    TechnicalRequirements,
)
from .extraction_contracts import DesignWeek, ExtractedItemType, ScopeClassification

T = ExtractedItemType

MAX_KEY_OBJECTIVES = 5
MAX_PAIN_POINTS = 5

# Weights sum to 100; test cases belong to the separate test-plan document.
COMPLETENESS_WEIGHTS = {
    "stakeholders": 10,
    "goals": 15,
    "kpis": 10,
    "process_steps": 15,
    "scope_items": 15,
    "integrations": 10,
    "business_rules": 10,
    "test_cases": 10,
    "guardrails": 5,
}


def format_document_date(moment: datetime) -> str:
    """Long US date, e.g. 'January 5, 2026'."""
    return f"{moment:%B} {moment.day}, {moment.year}"


def calculate_completeness(design_week: DesignWeek) -> int:
    """Score 0-100 for how much of the design week has been captured."""
    present = {item.type for item in design_week.approved_items()}
    checks = {
        "stakeholders": T.STAKEHOLDER in present,
        "goals": T.GOAL in present,
        "kpis": T.KPI_TARGET in present,
        "process_steps": T.HAPPY_PATH_STEP in present,
        "scope_items": bool(design_week.scope_items),
        "integrations": bool(design_week.integrations) or T.SYSTEM_INTEGRATION in present,
        "business_rules": bool(design_week.business_rules) or T.BUSINESS_RULE in present,
        "test_cases": False,
        "guardrails": T.GUARDRAIL_NEVER in present or T.GUARDRAIL_ALWAYS in present,
    }
    return sum(COMPLETENESS_WEIGHTS[name] for name, ok in checks.items() if ok)


def build_overview(context: GenerationContext, goals: List[GoalInfo], pain_points: List[str]) -> str:
    parts = [
        f"This document outlines the design specifications for {context.digital_employee_name}, "
        f"a Digital Employee being implemented for {context.company_name}."
    ]
    if goals:
        parts.append(f"The primary objective is to {goals[0].title.lower()}.")
    if pain_points:
        challenges = " and ".join(pain_points[:2]).lower()
        parts.append(f"This implementation addresses key business challenges including {challenges}.")
    return " ".join(parts)


def build_base_document(
    design_week: DesignWeek,
    context: GenerationContext,
    clock: Callable[[], datetime],
    author: Optional[str] = None,
) -> DesignDocument:
    """Build the DE design document without any generated narrative.

    Args:
        design_week: Source design week
        context: Context already mapped from the same design week
        clock: Source of the document date
        author: Overrides the configured document author

    Returns:
        DesignDocument with ``generated`` left empty
    """
    if author is None:
        author = settings.document_author

    grouped = group_items(design_week.all_items())
    de = design_week.digital_employee
    scope_items = design_week.document_scope_items()

    pain_points = [item.content for item in grouped.get(T.BUSINESS_CASE, [])]
    timeline_items = grouped.get(T.TIMELINE_CONSTRAINT, [])

    metadata = DocumentMetadata(
        title=f"{de.name} Design Document",
        subtitle=de.description or None,
        date=format_document_date(clock()),
        author=author,
        company=de.company.name,
        digital_employee_name=de.name,
        completeness_score=calculate_completeness(design_week),
    )

    return DesignDocument(
        metadata=metadata,
        executive_summary=ExecutiveSummaryBlock(
            overview=build_overview(context, context.goals, pain_points),
            key_objectives=[g.title for g in context.goals[:MAX_KEY_OBJECTIVES]],
            timeline=timeline_items[0].content if timeline_items else None,
        ),
        stakeholders=list(context.stakeholders),
        business_context=BusinessContext(
            goals=list(context.goals),
            kpis=list(context.kpis),
            volumes=list(context.volumes),
            pain_points=pain_points[:MAX_PAIN_POINTS],
        ),
        process_design=ProcessDesign(
            to_be_steps=list(context.process_steps),
            exceptions=list(context.exceptions),
            decision_points=[item.content for item in grouped.get(T.DECISION, [])],
        ),
        scope=DocumentScope(
            in_scope=[s for s in scope_items if s.classification == ScopeClassification.IN_SCOPE],
            out_of_scope=[s for s in scope_items if s.classification == ScopeClassification.OUT_OF_SCOPE],
            ambiguous=[s for s in scope_items if s.classification == ScopeClassification.AMBIGUOUS],
            guardrails=list(context.guardrails),
        ),
        technical_requirements=TechnicalRequirements(
            integrations=list(context.integrations),
            security_requirements=list(context.security_requirements),
            channels=list(context.channels),
        ),
        business_rules=list(context.business_rules),
    )
