"""Persistence interface for design weeks, document versions and the operation log."""

from abc import ABC, abstractmethod
from typing import Optional

from contracts import DesignWeek, DocumentRecord, DocumentType, OperationLogEntry


class DesignWeekStore(ABC):
    """What the document pipeline needs from persistence.

    Document versions are append-only; the store owns version numbering.
    """

    @abstractmethod
    def get_design_week(self, design_week_id: str) -> Optional[DesignWeek]:
        """Load a design week with its sessions, items, scope, integrations and rules.

        Returns:
            The design week, or None when the id is unknown
        """
        pass

    @abstractmethod
    def latest_version(self, design_week_id: str, document_type: DocumentType) -> int:
        """Highest stored version for this design week and type, 0 if none."""
        pass

    @abstractmethod
    def append_document(self, record: DocumentRecord) -> DocumentRecord:
        """Persist a new document version. Existing versions are never modified."""
        pass

    @abstractmethod
    def log_operation(self, entry: OperationLogEntry) -> None:
        """Record one generation run."""
        pass
