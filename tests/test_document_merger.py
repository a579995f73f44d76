"""Tests for merging generated narrative into the base document."""

from agents import synthesize_fallback
from contracts import build_base_document
from orchestrator import merge_generated_content

from tests.conftest import FIXED_NOW


def _base_and_content(design_week, context):
    base = build_base_document(design_week, context, clock=lambda: FIXED_NOW)
    content = synthesize_fallback(context, clock=lambda: FIXED_NOW)
    return base, content


class TestMergeGeneratedContent:
    def test_summary_from_generated_content(self, design_week, context):
        base, content = _base_and_content(design_week, context)
        merged = merge_generated_content(base, content)
        assert merged.executive_summary.overview == content.executive_summary.overview
        assert merged.executive_summary.key_objectives == content.executive_summary.key_objectives

    def test_timeline_kept_from_base(self, design_week, context):
        base, content = _base_and_content(design_week, context)
        merged = merge_generated_content(base, content)
        assert merged.executive_summary.timeline == "Go-live by Q3 2026"

    def test_tabular_sections_untouched(self, design_week, context):
        base, content = _base_and_content(design_week, context)
        merged = merge_generated_content(base, content)
        assert merged.metadata == base.metadata
        assert merged.scope == base.scope
        assert merged.stakeholders == base.stakeholders
        assert merged.generated == content

    def test_base_not_mutated(self, design_week, context):
        base, content = _base_and_content(design_week, context)
        overview = base.executive_summary.overview
        merge_generated_content(base, content)
        assert base.executive_summary.overview == overview
        assert base.generated is None

    def test_idempotent(self, design_week, context):
        base, content = _base_and_content(design_week, context)
        once = merge_generated_content(base, content)
        twice = merge_generated_content(once, content)
        assert twice == once
