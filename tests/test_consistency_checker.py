"""Tests for the KPI consistency check."""

import json

from agents import check_kpi_consistency
from contracts import GeneratedContent, KpiInfo

from tests.conftest import content_json


def _content(context, outcomes=None, benefits=None) -> GeneratedContent:
    data = json.loads(content_json(context))
    if outcomes is not None:
        data["executive_summary"]["expected_outcomes"] = outcomes
    if benefits is not None:
        data["executive_one_pager"]["key_benefits"] = benefits
    return GeneratedContent.model_validate(data)


HOURS_KPI = [KpiInfo(name="Handling time", target="2", unit="hours")]


class TestOutcomes:
    def test_matching_number_passes(self, context):
        content = _content(context, outcomes=["Cut handling time by 40%"], benefits=[])
        assert check_kpi_consistency(content, context.kpis) == []

    def test_ungrounded_percentage_flagged(self, context):
        content = _content(context, outcomes=["Reduce cost by 37%"], benefits=[])
        warnings = check_kpi_consistency(content, HOURS_KPI)
        assert len(warnings) == 1
        assert '"Reduce cost by 37%"' in warnings[0]
        assert "no matching extracted KPI" in warnings[0]

    def test_any_percent_target_grounds_percentages(self, context):
        content = _content(context, outcomes=["Reduce cost by 37%"], benefits=[])
        kpis = [KpiInfo(name="Automation rate", target="80%")]
        assert check_kpi_consistency(content, kpis) == []

    def test_outcomes_without_percentages_ignored(self, context):
        content = _content(context, outcomes=["Happier customers"], benefits=[])
        assert check_kpi_consistency(content, HOURS_KPI) == []

    def test_no_kpis_no_warnings(self, context):
        content = _content(
            context,
            outcomes=["Reduce cost by 37%"],
            benefits=[{"benefit": "Speed", "metric": "10x faster"}],
        )
        assert check_kpi_consistency(content, []) == []


class TestOnePagerBenefits:
    def test_metric_containing_target_passes(self, context):
        content = _content(context, outcomes=[], benefits=[{"benefit": "Speed", "metric": "Under 2 hours"}])
        assert check_kpi_consistency(content, HOURS_KPI) == []

    def test_first_word_inside_target_passes(self, context):
        kpis = [KpiInfo(name="Automation", target="80% automated")]
        content = _content(context, outcomes=[], benefits=[{"benefit": "Automation", "metric": "80% of requests"}])
        assert check_kpi_consistency(content, kpis) == []

    def test_unrelated_metric_flagged(self, context):
        content = _content(context, outcomes=[], benefits=[{"benefit": "Savings", "metric": "EUR 1M per year"}])
        warnings = check_kpi_consistency(content, HOURS_KPI)
        assert warnings == ['Ungrounded metric in one-pager: "Savings: EUR 1M per year"']

    def test_both_sections_reported(self, context):
        content = _content(
            context,
            outcomes=["Reduce cost by 37%"],
            benefits=[{"benefit": "Savings", "metric": "EUR 1M per year"}],
        )
        assert len(check_kpi_consistency(content, HOURS_KPI)) == 2

    def test_fallback_content_is_consistent(self, context):
        content = _content(context)
        assert check_kpi_consistency(content, context.kpis) == []
