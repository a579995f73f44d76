"""Merge generated narrative into the base design document."""

from contracts import DesignDocument, ExecutiveSummaryBlock, GeneratedContent


def merge_generated_content(base: DesignDocument, generated: GeneratedContent) -> DesignDocument:
    """Return a copy of ``base`` enriched with ``generated``.

    The executive summary overview and key objectives come from the
    generated content; the timeline and every tabular section stay as in the
    base document. Merging the same content twice gives the same document.
    """
    summary = ExecutiveSummaryBlock(
        overview=generated.executive_summary.overview,
        key_objectives=list(generated.executive_summary.key_objectives),
        timeline=base.executive_summary.timeline,
    )
    return base.model_copy(update={
        "executive_summary": summary,
        "generated": generated,
    })
