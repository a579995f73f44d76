"""Agents for design document generation.

The document agent writes narrative with the LLM; the fallback writer and
the consistency checker are deterministic and never call it.
"""

from .base_agent import (
    BaseAgent,
    AgentResult,
    TokenUsage,
    GenerationError,
    NoTextContent,
    UnparsableContent,
    extract_json_object,
)
from .prompt_sections import build_generation_prompt, build_schema_skeleton
from .document_agent import DocumentAgent
from .consistency_checker import check_kpi_consistency
from .fallback_writer import synthesize_fallback

__all__ = [
    # Base
    "BaseAgent",
    "AgentResult",
    "TokenUsage",
    "GenerationError",
    "NoTextContent",
    "UnparsableContent",
    "extract_json_object",
    # Prompt
    "build_generation_prompt",
    "build_schema_skeleton",
    # Generation
    "DocumentAgent",
    "synthesize_fallback",
    "check_kpi_consistency",
]
