"""Prompt sections for narrative document generation.

The prompt is assembled from fixed sections in a fixed order so the same
context always produces the same text:

1. persona and quality bar
2. language directive (empty for English)
3. project framing
4. the extracted requirements data, with a placeholder for every empty block
5. the JSON skeleton of ``GeneratedContent``
6. writing guidelines naming the client
7. quality requirements and the generation instruction
"""

import json
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from contracts import (
    DocumentLanguage,
    GenerationContext,
    GeneratedContent,
    LANGUAGE_NAMES,
)

RULE = "═" * 79

# Never requested from the model; the pipeline fills it in.
PIPELINE_OWNED_FIELDS: Tuple[str, ...] = ("generation_metadata",)


def _banner(title: str) -> str:
    return f"{RULE}\n{title}\n{RULE}"


PERSONA_SECTION = """You are a senior management consultant at a top-tier consulting firm. You are writing a focused Digital Employee design document that will be presented to C-level executives.

This document must be:
- CONCISE: Target 12-15 pages total. Be impactful, not verbose.
- Professionally written with compelling storytelling
- Self-explanatory so anyone can understand it without context
- Visionary yet practical
- Grounded in the requirements data below; do not invent figures
- Written for executives with limited time: every word must earn its place"""


def build_language_instruction(language: DocumentLanguage) -> str:
    """Directive to write in the requested language; empty for English."""
    language = DocumentLanguage(language)
    if language == DocumentLanguage.EN:
        return ""
    name = LANGUAGE_NAMES[language]
    return (
        f"\nCRITICAL LANGUAGE REQUIREMENT: Write ALL content in {name}. "
        f"Every word, phrase, section title and narrative must be in {name}. "
        f"Do not use English except for proper nouns and technical system names."
    )


def build_project_context(
    company_name: str,
    digital_employee_name: str,
    description: Optional[str] = None,
) -> str:
    lines = [
        _banner("PROJECT CONTEXT"),
        "",
        f"**Client Organization:** {company_name}",
        f"**Digital Employee Name:** {digital_employee_name}",
    ]
    if description:
        lines.append(f"**Initiative Description:** {description}")
    return "\n".join(lines)


def _bullets(lines: List[str], placeholder: str, separator: str = "\n") -> str:
    return separator.join(lines) if lines else placeholder


def build_extracted_data_section(ctx: GenerationContext) -> str:
    """Render every context collection; empty ones get a 'to be ...' placeholder."""
    stakeholders = [
        f"• {s.name} ({s.role})" + (f" <{s.email}>" if s.email else "")
        for s in ctx.stakeholders
    ]
    goals = [f"• **{g.title}**\n  {g.description}" for g in ctx.goals]
    kpis = [f"• {k.name}: Target {k.formatted_target()}" for k in ctx.kpis]
    volumes = [f"• {v.metric}: {v.value} per {v.period}" for v in ctx.volumes]
    steps = [f"{s.step_number}. **{s.name}**\n   {s.description}" for s in ctx.process_steps]
    exceptions = [
        f"• **{e.name}**\n  Scenario: {e.description}\n  Handling: {e.handling}"
        for e in ctx.exceptions
    ]
    in_scope = [
        f"• {i.description}"
        + (f"\n  Skill Required: {i.skill}" if i.skill else "")
        + (f"\n  Conditions: {i.conditions}" if i.conditions else "")
        for i in ctx.in_scope
    ]
    out_of_scope = [
        f"• {o.description}" + (f" ({o.notes})" if o.notes else "")
        for o in ctx.out_of_scope
    ]
    guardrails = [f"• **{g.type.value}**: {g.description}" for g in ctx.guardrails]
    integrations = [
        f"• **{i.system_name}**\n  Purpose: {i.purpose}\n  Connection: {i.connection_type}"
        for i in ctx.integrations
    ]
    rules = [f"• **{r.name}**\n  When: {r.condition}\n  Then: {r.action}" for r in ctx.business_rules]
    security = [f"• {s}" for s in ctx.security_requirements]

    blocks = [
        _banner("EXTRACTED REQUIREMENTS DATA"),
        "",
        "### Key Stakeholders",
        _bullets(stakeholders, "• Stakeholder information to be confirmed"),
        "",
        "### Strategic Goals & Objectives",
        _bullets(goals, "• Goals to be defined", "\n\n"),
        "",
        "### Key Performance Indicators",
        _bullets(kpis, "• KPIs to be defined"),
        "",
        "### Volume Expectations",
        _bullets(volumes, "• Volume metrics to be quantified"),
        "",
        "### Process Steps (Happy Path)",
        _bullets(steps, "• Process to be mapped", "\n\n"),
        "",
        "### Exception Scenarios",
        _bullets(exceptions, "• Exceptions to be identified", "\n\n"),
        "",
        "### Capabilities In Scope",
        _bullets(in_scope, "• Scope to be defined"),
        "",
        "### Explicitly Out of Scope",
        _bullets(out_of_scope, "• Out-of-scope items to be defined"),
        "",
        "### Operational Guardrails",
        _bullets(guardrails, "• Guardrails to be established"),
        "",
        "### System Integrations Required",
        _bullets(integrations, "• Integrations to be mapped", "\n\n"),
        "",
        "### Business Rules",
        _bullets(rules, "• Business rules to be documented", "\n\n"),
        "",
        "### Security & Compliance Requirements",
        _bullets(security, "• Security requirements to be defined"),
        "",
        "### Communication Channels",
        ", ".join(ctx.channels) if ctx.channels else "To be determined",
    ]

    # Optional blocks only appear when the design week captured them.
    if ctx.persona_traits:
        blocks += ["", "### Persona & Conversational Design"]
        blocks += [
            f"• **{t.name}**: {t.description}"
            + (f'\n  Example: "{t.example_phrase}"' if t.example_phrase else "")
            for t in ctx.persona_traits
        ]
    if ctx.escalation_scripts:
        blocks += ["", "### Escalation Scripts"]
        blocks.append("\n\n".join(f'• **{s.context}**\n  "{s.script}"' for s in ctx.escalation_scripts))
    if ctx.monitoring_metrics:
        blocks += ["", "### Monitoring Metrics"]
        blocks += [
            f"• {m.name}: Target {m.target}"
            + (f" (Owner: {m.owner})" if m.owner else "")
            + (f" [{m.perspective}]" if m.perspective else "")
            for m in ctx.monitoring_metrics
        ]
    if ctx.launch_criteria:
        blocks += ["", "### Launch Criteria"]
        blocks += [
            f"• {c.criterion}"
            + (f" (Phase: {c.phase})" if c.phase else "")
            + (f", Owner: {c.owner}" if c.owner else "")
            for c in ctx.launch_criteria
        ]

    return "\n".join(blocks)


# --- Schema skeleton ------------------------------------------------------


def _describe(annotation: Any, field: FieldInfo) -> Any:
    """Example value for one field: nested skeleton, one-item list, or its description."""
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Union:
        non_null = [a for a in args if a is not type(None)]
        return _describe(non_null[0], field)
    if origin in (list, List):
        return [_describe(args[0] if args else str, field)]
    if origin is Literal:
        return field.description or "/".join(str(a) for a in args)
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return build_schema_skeleton(annotation)
    return field.description or "string"


def build_schema_skeleton(
    model: Type[BaseModel] = GeneratedContent,
    exclude: Tuple[str, ...] = PIPELINE_OWNED_FIELDS,
) -> Dict[str, Any]:
    """Example JSON object for ``model`` with field descriptions as values."""
    return {
        name: _describe(field.annotation, field)
        for name, field in model.model_fields.items()
        if name not in exclude
    }


def build_schema_section() -> str:
    skeleton = json.dumps(build_schema_skeleton(), indent=2, ensure_ascii=False)
    return "\n".join([
        _banner("YOUR TASK: Generate Comprehensive Document Content"),
        "",
        "Create a JSON object with exactly the following structure and keys. "
        "Each section should be FOCUSED and IMPACTFUL. Think 1-2 paragraphs where "
        "paragraph content is expected: concise but substantive.",
        "",
        skeleton,
    ])


def build_writing_guidelines(company_name: str) -> str:
    return "\n".join([
        _banner("WRITING GUIDELINES"),
        "",
        "1. CONCISE: Target 12-15 pages total. Cut filler.",
        "2. NARRATIVE STYLE: Write in flowing paragraphs, not bullet points (except where arrays are specified).",
        "3. CONCRETE & SPECIFIC: Use specific examples and the numbers provided. No generic statements.",
        "4. BUSINESS VALUE: Connect technical elements back to business value.",
        "5. PROFESSIONAL TONE: Write as a senior consultant would for busy executives.",
        "6. SELF-EXPLANATORY: Readers with no context should understand.",
        "7. IMPACTFUL: Make key points clearly and move on. No repetition.",
        "8. ACTIVE VOICE: Use active, engaging language.",
        f"9. CLIENT FOCUSED: This is about {company_name}, not technology for technology's sake.",
    ])


QUALITY_REQUIREMENTS_SECTION = f"""{_banner("CRITICAL QUALITY REQUIREMENTS")}

STAKEHOLDER ROLES: When mentioning stakeholders, ALWAYS use their specific role titles (e.g. "Claims Operations Director"), never generic terms like "Stakeholder" or "Team Member".

KPI CONSISTENCY: Every metric must come from the Key Performance Indicators above.
   - Do not invent percentages or figures that are not in the requirements data
   - Keep KPI values identical across sections
   - Always include the unit of measurement (%, hours, count, etc.)
   - If no KPIs were provided, describe outcomes qualitatively

NO TECHNICAL PLACEHOLDERS: Never write placeholder text like "<brand>_service" or "{{system_name}}". Use the real system names given above, or a descriptive term such as "the claims management system".

ACTIONABLE CONTENT:
   - Training plans name specific session topics and target audiences
   - Escalation triggers tell frontline staff exactly when and how to escalate
   - Next steps have clear owners and realistic timelines

FRONTLINE FRIENDLY: Include content for the teams who will work with the Digital Employee daily: when to escalate, clear "can do" and "cannot do" lists, practical tips.

Respond with the JSON object only.

Now generate the comprehensive JSON content:"""


def build_generation_prompt(ctx: GenerationContext) -> str:
    """Assemble the full generation prompt for one context.

    Pure and deterministic: identical contexts yield identical prompts.
    """
    return "\n\n".join([
        PERSONA_SECTION + build_language_instruction(ctx.language),
        build_project_context(ctx.company_name, ctx.digital_employee_name, ctx.description),
        build_extracted_data_section(ctx),
        build_schema_section(),
        build_writing_guidelines(ctx.company_name),
        QUALITY_REQUIREMENTS_SECTION,
    ])
