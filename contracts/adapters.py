"""Adapters from design-week records to the generation context.

Pure functions: no I/O, no clock, nothing invented. Structured payload fields
win over parsing the free-text content; the text parse only runs when the
payload (or the specific field) is absent.
"""

import re
from collections import defaultdict
from typing import Dict, List, Optional, Tuple, Union

from .extraction_contracts import (
    DesignWeek,
    ExtractedItem,
    ExtractedItemType,
    ScopeClassification,
)
from .context_contracts import (
    DocumentLanguage,
    GenerationContext,
    StakeholderInfo,
    GoalInfo,
    KpiInfo,
    VolumeInfo,
    ProcessStepInfo,
    ExceptionInfo,
    InScopeInfo,
    OutOfScopeInfo,
    GuardrailKind,
    GuardrailInfo,
    IntegrationInfo,
    BusinessRuleInfo,
    PersonaTraitInfo,
    EscalationScriptInfo,
    MonitoringMetricInfo,
    LaunchCriterionInfo,
)

T = ExtractedItemType

_TITLE_PATTERN = re.compile(r"^([^:\-\n]+)")
TITLE_MAX_LENGTH = 100

# Order matters: guardrails are listed NEVER, ALWAYS, FINANCIAL, LEGAL.
GUARDRAIL_TYPES: List[Tuple[ExtractedItemType, GuardrailKind]] = [
    (T.GUARDRAIL_NEVER, GuardrailKind.NEVER),
    (T.GUARDRAIL_ALWAYS, GuardrailKind.ALWAYS),
    (T.FINANCIAL_LIMIT, GuardrailKind.FINANCIAL_LIMIT),
    (T.LEGAL_RESTRICTION, GuardrailKind.LEGAL),
]


def extract_title(content: str) -> str:
    """Leading clause before the first colon, dash or newline, capped at 100 chars."""
    match = _TITLE_PATTERN.match(content)
    if match:
        return match.group(1).strip()[:TITLE_MAX_LENGTH]
    return content[:TITLE_MAX_LENGTH]


def parse_stakeholder(content: str) -> Tuple[str, str]:
    """Split 'Name - Role' text into (name, role)."""
    parts = content.split(" - ")
    name = parts[0] or content
    role = parts[1] if len(parts) > 1 and parts[1] else "Stakeholder"
    return name, role


def group_items(items: List[ExtractedItem]) -> Dict[Union[ExtractedItemType, str], List[ExtractedItem]]:
    """Group approved items by type, preserving order."""
    grouped: Dict[Union[ExtractedItemType, str], List[ExtractedItem]] = defaultdict(list)
    for item in items:
        if item.is_approved:
            grouped[item.type].append(item)
    return grouped


def _field(item: ExtractedItem, name: str) -> Optional[str]:
    """Non-empty payload field, or None."""
    payload = item.payload()
    value = getattr(payload, name, None) if payload is not None else None
    return value or None


def map_stakeholder(item: ExtractedItem) -> StakeholderInfo:
    name, role = parse_stakeholder(item.content)
    return StakeholderInfo(
        name=_field(item, "name") or name,
        role=_field(item, "role") or role,
        email=_field(item, "email"),
    )


def map_goal(item: ExtractedItem) -> GoalInfo:
    return GoalInfo(
        title=_field(item, "title") or extract_title(item.content),
        description=_field(item, "description") or item.content,
    )


def map_kpi(item: ExtractedItem) -> KpiInfo:
    return KpiInfo(
        name=_field(item, "name") or extract_title(item.content),
        target=_field(item, "target") or item.content,
        unit=_field(item, "unit"),
        owner=_field(item, "owner"),
        alert_threshold=_field(item, "alert_threshold"),
    )


def map_volume(item: ExtractedItem) -> VolumeInfo:
    return VolumeInfo(
        metric=_field(item, "metric") or extract_title(item.content),
        value=_field(item, "value") or item.content,
        period=_field(item, "period") or "monthly",
    )


def map_process_step(item: ExtractedItem, index: int) -> ProcessStepInfo:
    return ProcessStepInfo(
        step_number=_field(item, "step_number") or index + 1,
        name=_field(item, "name") or extract_title(item.content),
        description=_field(item, "description") or item.content,
    )


def map_exception(item: ExtractedItem) -> ExceptionInfo:
    return ExceptionInfo(
        name=_field(item, "name") or extract_title(item.content),
        description=_field(item, "description") or item.content,
        handling=_field(item, "handling") or "Escalate to human operator",
    )


def map_integration(item: ExtractedItem) -> IntegrationInfo:
    return IntegrationInfo(
        system_name=_field(item, "system_name") or extract_title(item.content),
        purpose=_field(item, "purpose") or "read_write",
        connection_type=_field(item, "connection_type") or "rest_api",
    )


def map_business_rule(item: ExtractedItem) -> BusinessRuleInfo:
    return BusinessRuleInfo(
        name=_field(item, "name") or extract_title(item.content),
        condition=_field(item, "condition") or item.content,
        action=_field(item, "action") or "Apply rule",
    )


def map_persona_trait(item: ExtractedItem) -> PersonaTraitInfo:
    return PersonaTraitInfo(
        name=_field(item, "name") or extract_title(item.content),
        description=_field(item, "description") or item.content,
        example_phrase=_field(item, "example_phrase"),
    )


def map_escalation_script(item: ExtractedItem) -> EscalationScriptInfo:
    return EscalationScriptInfo(
        context=_field(item, "context") or _field(item, "trigger") or extract_title(item.content),
        script=_field(item, "script") or item.content,
    )


def map_monitoring_metric(item: ExtractedItem) -> MonitoringMetricInfo:
    return MonitoringMetricInfo(
        name=_field(item, "name") or extract_title(item.content),
        target=_field(item, "target") or item.content,
        owner=_field(item, "owner"),
        perspective=_field(item, "perspective"),
    )


def map_launch_criterion(item: ExtractedItem) -> LaunchCriterionInfo:
    return LaunchCriterionInfo(
        criterion=_field(item, "criterion") or item.content,
        phase=_field(item, "phase"),
        owner=_field(item, "owner"),
    )


def map_guardrails(grouped: Dict[Union[ExtractedItemType, str], List[ExtractedItem]]) -> List[GuardrailInfo]:
    """Union the four guardrail item types into one tagged list."""
    return [
        GuardrailInfo(type=kind, description=item.content)
        for item_type, kind in GUARDRAIL_TYPES
        for item in grouped.get(item_type, [])
    ]


def build_generation_context(
    design_week: DesignWeek,
    language: Union[DocumentLanguage, str] = DocumentLanguage.EN,
) -> GenerationContext:
    """Normalize a design week into the context consumed by generation.

    Args:
        design_week: Design-week aggregate with sessions, scope, integrations, rules
        language: Narrative language; unsupported codes raise ValueError

    Returns:
        GenerationContext built only from approved/status-less items and
        relational records
    """
    grouped = group_items(design_week.all_items())
    de = design_week.digital_employee
    scope_items = design_week.document_scope_items()

    integrations = [
        IntegrationInfo(
            system_name=i.system_name,
            purpose=i.purpose,
            connection_type=i.connection_type,
        )
        for i in design_week.integrations
    ]
    if not integrations:
        integrations = [map_integration(item) for item in grouped.get(T.SYSTEM_INTEGRATION, [])]

    business_rules = [
        BusinessRuleInfo(name=r.name, condition=r.condition, action=r.action)
        for r in design_week.business_rules
    ]
    if not business_rules:
        business_rules = [map_business_rule(item) for item in grouped.get(T.BUSINESS_RULE, [])]

    return GenerationContext(
        company_name=de.company.name,
        digital_employee_name=de.name,
        description=de.description or None,
        language=DocumentLanguage(language),
        stakeholders=[map_stakeholder(i) for i in grouped.get(T.STAKEHOLDER, [])],
        goals=[map_goal(i) for i in grouped.get(T.GOAL, [])],
        kpis=[map_kpi(i) for i in grouped.get(T.KPI_TARGET, [])],
        volumes=[map_volume(i) for i in grouped.get(T.VOLUME_EXPECTATION, [])],
        process_steps=[
            map_process_step(item, index)
            for index, item in enumerate(grouped.get(T.HAPPY_PATH_STEP, []))
        ],
        exceptions=[map_exception(i) for i in grouped.get(T.EXCEPTION_CASE, [])],
        in_scope=[
            InScopeInfo(description=s.description, skill=s.skill or None, conditions=s.conditions or None)
            for s in scope_items
            if s.classification == ScopeClassification.IN_SCOPE
        ],
        out_of_scope=[
            OutOfScopeInfo(description=s.description, notes=s.notes or None)
            for s in scope_items
            if s.classification == ScopeClassification.OUT_OF_SCOPE
        ],
        guardrails=map_guardrails(grouped),
        integrations=integrations,
        business_rules=business_rules,
        security_requirements=[i.content for i in grouped.get(T.SECURITY_REQUIREMENT, [])],
        channels=[i.content for i in grouped.get(T.CHANNEL, [])],
        persona_traits=[map_persona_trait(i) for i in grouped.get(T.PERSONA_TRAIT, [])],
        escalation_scripts=[map_escalation_script(i) for i in grouped.get(T.ESCALATION_SCRIPT, [])],
        monitoring_metrics=[map_monitoring_metric(i) for i in grouped.get(T.MONITORING_METRIC, [])],
        launch_criteria=[map_launch_criterion(i) for i in grouped.get(T.LAUNCH_CRITERION, [])],
    )


def missing_fields(design_week: DesignWeek) -> List[str]:
    """Names of requirement areas with no approved data yet."""
    present = {item.type for item in design_week.approved_items()}
    missing: List[str] = []
    if T.STAKEHOLDER not in present:
        missing.append("Stakeholders")
    if T.GOAL not in present and T.BUSINESS_CASE not in present:
        missing.append("Goals")
    if T.KPI_TARGET not in present:
        missing.append("KPIs")
    if T.HAPPY_PATH_STEP not in present:
        missing.append("Process Steps")
    if not design_week.document_scope_items():
        missing.append("Scope Items")
    if not design_week.integrations and T.SYSTEM_INTEGRATION not in present:
        missing.append("Technical Integrations")
    if T.SECURITY_REQUIREMENT not in present and T.COMPLIANCE_REQUIREMENT not in present:
        missing.append("Security Requirements")
    return missing
