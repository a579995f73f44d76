"""In-memory store, used by tests and one-off runs."""

from typing import Dict, Iterable, List, Optional

from contracts import DesignWeek, DocumentRecord, DocumentType, OperationLogEntry

from .base import DesignWeekStore


class InMemoryStore(DesignWeekStore):
    """Keeps everything in plain dicts and lists."""

    def __init__(self, design_weeks: Optional[Iterable[DesignWeek]] = None):
        self.design_weeks: Dict[str, DesignWeek] = {dw.id: dw for dw in design_weeks or []}
        self.documents: List[DocumentRecord] = []
        self.operations: List[OperationLogEntry] = []

    def add_design_week(self, design_week: DesignWeek) -> None:
        self.design_weeks[design_week.id] = design_week

    def get_design_week(self, design_week_id: str) -> Optional[DesignWeek]:
        return self.design_weeks.get(design_week_id)

    def latest_version(self, design_week_id: str, document_type: DocumentType) -> int:
        versions = [
            d.version for d in self.documents
            if d.design_week_id == design_week_id and d.type == document_type
        ]
        return max(versions, default=0)

    def append_document(self, record: DocumentRecord) -> DocumentRecord:
        self.documents.append(record)
        return record

    def log_operation(self, entry: OperationLogEntry) -> None:
        self.operations.append(entry)
