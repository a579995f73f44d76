"""Tests for the design week to generation context adapters."""

import pytest

from contracts import (
    BusinessRuleRecord,
    DocumentLanguage,
    ExtractedItemType as T,
    GuardrailKind,
    ItemStatus,
    Session,
    build_generation_context,
    extract_title,
    missing_fields,
    parse_stakeholder,
)
from contracts.adapters import TITLE_MAX_LENGTH, group_items, map_escalation_script

from tests.conftest import item, make_design_week


class TestExtractTitle:
    def test_stops_at_colon(self):
        assert extract_title("Reduce Claim Time: process claims faster") == "Reduce Claim Time"

    def test_stops_at_dash(self):
        assert extract_title("Receive claim - via email") == "Receive claim"

    def test_stops_at_newline(self):
        assert extract_title("First line\nsecond line") == "First line"

    def test_plain_text_unchanged(self):
        assert extract_title("Send confirmation") == "Send confirmation"

    def test_capped_length(self):
        assert len(extract_title("x" * 250)) == TITLE_MAX_LENGTH

    def test_leading_separator_falls_back_to_content(self):
        assert extract_title(": odd") == ": odd"


class TestParseStakeholder:
    def test_name_and_role(self):
        assert parse_stakeholder("Jane Smith - CEO") == ("Jane Smith", "CEO")

    def test_default_role(self):
        assert parse_stakeholder("Jane Smith") == ("Jane Smith", "Stakeholder")

    def test_hyphenated_name_is_not_split(self):
        assert parse_stakeholder("Anne-Marie Vos") == ("Anne-Marie Vos", "Stakeholder")


class TestGroupItems:
    def test_only_approved_and_status_less(self):
        items = [
            item("a", T.GOAL, "approved"),
            item("b", T.GOAL, "no status", status=None),
            item("c", T.GOAL, "pending", status=ItemStatus.PENDING),
            item("d", T.GOAL, "rejected", status=ItemStatus.REJECTED),
            item("e", T.GOAL, "unclear", status=ItemStatus.NEEDS_CLARIFICATION),
            item("f", T.GOAL, "parked", status="ON_HOLD"),
        ]
        grouped = group_items(items)
        assert [i.id for i in grouped[T.GOAL]] == ["a", "b"]

    def test_missing_type_is_empty(self):
        assert group_items([]).get(T.KPI_TARGET, []) == []


class TestBuildGenerationContext:
    """Mapping a full design week."""

    def test_identity_fields(self, context):
        assert context.company_name == "Acme Insurance"
        assert context.digital_employee_name == "ClaimBot"
        assert context.description == "Automates first-line claim intake"
        assert context.language is DocumentLanguage.EN

    def test_stakeholders_from_text_and_payload(self, context):
        assert [(s.name, s.role) for s in context.stakeholders] == [
            ("Jane Smith", "Claims Director"),
            ("Bob Jones", "IT Lead"),
        ]
        assert context.stakeholders[1].email == "bob@acme.test"

    def test_rejected_and_pending_items_dropped(self, context):
        assert [g.title for g in context.goals] == ["Reduce Claim Time"]
        assert [k.name for k in context.kpis] == ["Claim handling time"]

    def test_goal_description_is_full_content(self, context):
        assert context.goals[0].description == "Reduce Claim Time: process claims faster"

    def test_kpi_payload(self, context):
        kpi = context.kpis[0]
        assert kpi.target == "40%"
        assert kpi.unit == "reduction"

    def test_volume_defaults_to_monthly(self, context):
        volume = context.volumes[0]
        assert volume.metric == "Claims"
        assert volume.value == "1200"
        assert volume.period == "monthly"

    def test_process_step_numbers(self, context):
        steps = [(s.step_number, s.name) for s in context.process_steps]
        assert steps == [(1, "Receive claim"), (5, "Validate policy")]

    def test_exception_default_handling(self, context):
        exception = context.exceptions[0]
        assert exception.name == "Missing documents"
        assert exception.handling == "Escalate to human operator"

    def test_guardrails_in_fixed_order(self, context):
        assert [g.type for g in context.guardrails] == [
            GuardrailKind.NEVER,
            GuardrailKind.ALWAYS,
            GuardrailKind.FINANCIAL_LIMIT,
            GuardrailKind.LEGAL,
        ]
        assert context.guardrails[0].description == "Never approve claims above 10k"

    def test_scope_split_and_exclusion(self, context):
        assert [s.description for s in context.in_scope] == ["Register new claims"]
        assert context.in_scope[0].skill == "intake"
        assert [(s.description, s.notes) for s in context.out_of_scope] == [
            ("Settle disputes", "Legal team"),
        ]

    def test_relational_integrations_win(self, context):
        assert [i.system_name for i in context.integrations] == ["Guidewire ClaimCenter"]
        assert context.integrations[0].connection_type == "REST"

    def test_business_rules_fall_back_to_items(self, context):
        rule = context.business_rules[0]
        assert rule.name == "Fraud check"
        assert rule.condition == "Fraud check: flag duplicate claims"
        assert rule.action == "Apply rule"

    def test_relational_business_rules_win(self, design_week, business_rule_record):
        dw = design_week.model_copy(update={"business_rules": [business_rule_record]})
        ctx = build_generation_context(dw)
        assert [r.name for r in ctx.business_rules] == ["High value review"]
        assert ctx.business_rules[0].action == "Route to senior handler"

    def test_integrations_fall_back_to_items(self, design_week):
        dw = design_week.model_copy(update={"integrations": []})
        ctx = build_generation_context(dw)
        integration = ctx.integrations[0]
        assert integration.system_name == "Guidewire"
        assert integration.purpose == "read_write"
        assert integration.connection_type == "rest_api"

    def test_channels_and_security(self, context):
        assert context.channels == ["Email", "Portal"]
        assert context.security_requirements == ["SSO required"]

    def test_source_item_count(self, context):
        # 2 stakeholders, 1 goal, 1 kpi, 2 steps, 1 integration
        assert context.source_item_count == 7

    def test_language_from_code(self, design_week):
        assert build_generation_context(design_week, "nl").language is DocumentLanguage.NL

    def test_unsupported_language_rejected(self, design_week):
        with pytest.raises(ValueError):
            build_generation_context(design_week, "it")

    def test_sparse_design_week(self, empty_context):
        assert empty_context.description is None
        assert empty_context.goals == []
        assert empty_context.channels == ["Phone"]

    def test_optional_collections(self):
        dw = make_design_week(sessions=[Session(id="s", extracted_items=[
            item("pt", T.PERSONA_TRAIT, "Friendly", data={"examplePhrase": "Happy to help!"}),
            item("es", T.ESCALATION_SCRIPT, "Angry customer: I will connect you", data={"trigger": "Angry customer"}),
            item("mm", T.MONITORING_METRIC, "Uptime", data={"target": 99.5, "perspective": "IT"}),
            item("lc", T.LAUNCH_CRITERION, "UAT signed off", data={"phase": "Go-live"}),
        ])])
        ctx = build_generation_context(dw)
        assert ctx.persona_traits[0].example_phrase == "Happy to help!"
        assert ctx.escalation_scripts[0].context == "Angry customer"
        assert ctx.escalation_scripts[0].script == "Angry customer: I will connect you"
        assert ctx.monitoring_metrics[0].target == "99.5"
        assert ctx.launch_criteria[0].criterion == "UAT signed off"
        assert ctx.launch_criteria[0].phase == "Go-live"

    def test_bad_payload_field_keeps_the_rest(self):
        dw = make_design_week(sessions=[Session(id="s", extracted_items=[
            item("p", T.HAPPY_PATH_STEP, "Receive claim - by email",
                 data={"stepNumber": "first", "name": "Intake", "description": "Read the claim"}),
            item("st", T.STAKEHOLDER, "J - X",
                 data={"name": "Jane Smith", "role": "CEO", "isKeyDecisionMaker": "maybe"}),
        ])])
        ctx = build_generation_context(dw)
        step = ctx.process_steps[0]
        assert (step.step_number, step.name, step.description) == (1, "Intake", "Read the claim")
        assert [(s.name, s.role) for s in ctx.stakeholders] == [("Jane Smith", "CEO")]


class TestEscalationScriptContext:
    def test_context_preferred_over_trigger(self):
        script = map_escalation_script(
            item("es", T.ESCALATION_SCRIPT, "text", data={"context": "Legal threat", "trigger": "Other"})
        )
        assert script.context == "Legal threat"

    def test_title_when_no_payload(self):
        script = map_escalation_script(item("es", T.ESCALATION_SCRIPT, "Refund demand - offer callback"))
        assert script.context == "Refund demand"


class TestMissingFields:
    def test_complete_design_week(self, design_week):
        assert missing_fields(design_week) == []

    def test_everything_missing(self, sparse_design_week):
        assert missing_fields(sparse_design_week) == [
            "Stakeholders",
            "Goals",
            "KPIs",
            "Process Steps",
            "Scope Items",
            "Technical Integrations",
            "Security Requirements",
        ]

    def test_business_case_counts_as_goal(self):
        dw = make_design_week(sessions=[Session(id="s", extracted_items=[
            item("bc", T.BUSINESS_CASE, "Costs too high"),
        ])])
        assert "Goals" not in missing_fields(dw)

    def test_compliance_counts_as_security(self):
        dw = make_design_week(sessions=[Session(id="s", extracted_items=[
            item("c", T.COMPLIANCE_REQUIREMENT, "ISO 27001"),
        ])])
        assert "Security Requirements" not in missing_fields(dw)

    def test_excluded_scope_items_do_not_count(self, design_week):
        hidden = [s.model_copy(update={"exclude_from_document": True}) for s in design_week.scope_items]
        dw = design_week.model_copy(update={"scope_items": hidden})
        assert missing_fields(dw) == ["Scope Items"]

    def test_relational_integrations_count(self, sparse_design_week, design_week):
        dw = sparse_design_week.model_copy(update={"integrations": design_week.integrations})
        assert "Technical Integrations" not in missing_fields(dw)
