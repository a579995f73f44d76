"""Orchestrator for design document generation runs."""

from .document_merger import merge_generated_content
from .document_pipeline import (
    DocumentPipeline,
    DesignWeekNotFound,
    NoApprovedItems,
    generate_document,
    load_document,
)

__all__ = [
    "merge_generated_content",
    "DocumentPipeline",
    "DesignWeekNotFound",
    "NoApprovedItems",
    "generate_document",
    "load_document",
]
