"""Pipeline contracts: persisted document versions, operation log, results."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DocumentType(str, Enum):
    """Kinds of generated documents."""
    DE_DESIGN = "DE_DESIGN"
    SOLUTION_DESIGN = "SOLUTION_DESIGN"
    TEST_PLAN = "TEST_PLAN"


class DocumentRecord(BaseModel):
    """An immutable, versioned document as stored by the persistence layer."""
    id: str
    design_week_id: str
    type: DocumentType
    version: int = Field(..., ge=1)
    status: str = "DRAFT"
    content: Dict[str, Any]
    created_at: datetime
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    latency_ms: Optional[int] = None


class OperationLogEntry(BaseModel):
    """Operability record for one generation run."""
    pipeline_name: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    cost_usd: float = 0.0
    success: bool
    metadata: Dict[str, Any] = Field(default_factory=dict)
    logged_at: datetime


class UsageSummary(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0


class GenerationResult(BaseModel):
    """What a caller gets back from one generate request."""
    document: DocumentRecord
    usage: UsageSummary
    missing_fields: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
