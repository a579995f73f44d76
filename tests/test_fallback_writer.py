"""Tests for deterministic fallback content."""

from agents import synthesize_fallback
from agents.fallback_writer import (
    DEFAULT_CAN_DO,
    DEFAULT_CANNOT_DO,
    DEFAULT_HAPPY_PATH,
    NO_OBJECTIVES,
    PLACEHOLDER_OUTCOMES,
    STANDARD_OUTCOMES,
    expected_outcomes,
    key_benefits,
)
from contracts import GeneratedContent, KpiInfo

from tests.conftest import FIXED_NOW, SteppingClock


def _fixed_clock():
    return FIXED_NOW


class TestSynthesizeFallback:
    """Schema-valid content without the LLM."""

    def test_schema_valid_round_trip(self, context):
        content = synthesize_fallback(context, clock=_fixed_clock)
        restored = GeneratedContent.model_validate(content.model_dump(mode="json"))
        assert restored == content

    def test_metadata(self, context):
        meta = synthesize_fallback(context, latency_ms=1234, clock=_fixed_clock).generation_metadata
        assert meta.is_fallback is True
        assert meta.model == "fallback"
        assert meta.latency_ms == 1234
        assert meta.generated_at == FIXED_NOW
        assert meta.source_item_count == context.source_item_count
        assert meta.input_tokens is None

    def test_deterministic_apart_from_latency(self, context):
        first = synthesize_fallback(context, latency_ms=10, clock=_fixed_clock)
        second = synthesize_fallback(context, latency_ms=99, clock=_fixed_clock)
        exclude = {"generation_metadata": {"latency_ms"}}
        assert first.model_dump(exclude=exclude) == second.model_dump(exclude=exclude)

    def test_uses_injected_clock(self, context):
        clock = SteppingClock()
        synthesize_fallback(context, clock=clock)
        assert clock.readings == 1

    def test_objectives_from_goals(self, context):
        summary = synthesize_fallback(context, clock=_fixed_clock).executive_summary
        assert summary.key_objectives == ["Reduce Claim Time: Reduce Claim Time: process claims faster"]
        assert "Automates first-line claim intake" in summary.overview

    def test_kpis_projected_into_outcomes_and_benefits(self, context):
        content = synthesize_fallback(context, clock=_fixed_clock)
        assert content.executive_summary.expected_outcomes[0] == "Claim handling time: 40% reduction"
        benefit = content.executive_one_pager.key_benefits[0]
        assert (benefit.benefit, benefit.metric) == ("Claim handling time", "40% reduction")
        assert content.success_metrics.kpi_narrative == "Claim handling time: Target of 40% reduction"

    def test_process_projection(self, context):
        content = synthesize_fallback(context, clock=_fixed_clock)
        assert content.process_flow_summary.happy_path_flow == "Receive claim → Validate policy"
        assert "Step 5: Validate policy - Check policy status" in content.process_analysis.step_by_step_narrative
        assert content.current_state_analysis.challenges[0].challenge == "Missing documents"

    def test_technical_projection(self, context):
        tech = synthesize_fallback(context, clock=_fixed_clock).technical_foundation
        assert tech.integration_strategy == "Guidewire ClaimCenter: read via REST"
        assert tech.security_approach == "SSO required"

    def test_quick_reference_projection(self, context):
        ref = synthesize_fallback(context, clock=_fixed_clock).quick_reference
        assert ref.agent_name == "ClaimBot"
        assert ref.can_do == ["Register new claims"]
        assert ref.cannot_do == ["Settle disputes", "Never approve claims above 10k"]
        assert [(c.name, c.role) for c in ref.key_contacts] == [
            ("Jane Smith", "Claims Director"),
            ("Bob Jones", "IT Lead"),
        ]
        # No escalation scripts captured: defaults apply
        assert len(ref.escalation_triggers) == 3


class TestEmptyContextPlaceholders:
    """Nothing invented when the design week is sparse."""

    def test_placeholders(self, empty_context):
        content = synthesize_fallback(empty_context, clock=_fixed_clock)
        assert content.executive_summary.key_objectives == [NO_OBJECTIVES]
        assert content.executive_summary.expected_outcomes == PLACEHOLDER_OUTCOMES + STANDARD_OUTCOMES
        assert "[Initiative description to be confirmed]" in content.executive_summary.overview
        assert content.process_analysis.step_by_step_narrative == "[Process steps to be mapped]"
        assert content.technical_foundation.integration_strategy == "[Integrations to be mapped]"
        assert content.technical_foundation.security_approach == "[Security requirements to be defined]"
        assert content.success_metrics.kpi_narrative == "[KPIs to be defined]"
        assert content.process_flow_summary.happy_path_flow == DEFAULT_HAPPY_PATH
        assert content.current_state_analysis.challenges == []

    def test_quick_reference_defaults(self, empty_context):
        ref = synthesize_fallback(empty_context, clock=_fixed_clock).quick_reference
        assert ref.can_do == DEFAULT_CAN_DO
        assert ref.cannot_do == DEFAULT_CANNOT_DO
        assert len(ref.key_contacts) == 3

    def test_schedules_left_open(self, empty_context):
        content = synthesize_fallback(empty_context, clock=_fixed_clock)
        sessions = content.implementation_approach.training_plan.sessions
        assert all(s.duration == "[to be scheduled]" for s in sessions)
        assert all(n.timeline == "[to be scheduled]" for n in content.conclusion.next_steps)

    def test_placeholder_benefits_are_copies(self, empty_context):
        first = synthesize_fallback(empty_context, clock=_fixed_clock)
        second = synthesize_fallback(empty_context, clock=_fixed_clock)
        assert first.executive_one_pager.key_benefits[0] is not second.executive_one_pager.key_benefits[0]


class TestKpiProjection:
    def test_outcomes_capped_at_four_kpis(self):
        kpis = [KpiInfo(name=f"KPI {n}", target=str(n)) for n in range(6)]
        outcomes = expected_outcomes(kpis)
        assert outcomes[:4] == ["KPI 0: 0", "KPI 1: 1", "KPI 2: 2", "KPI 3: 3"]
        assert outcomes[4:] == STANDARD_OUTCOMES

    def test_benefits_capped_at_four(self):
        kpis = [KpiInfo(name=f"KPI {n}", target=f"{n}%") for n in range(6)]
        assert [b.metric for b in key_benefits(kpis)] == ["0%", "1%", "2%", "3%"]
