"""JSON file store.

Layout under the data directory:

    design_weeks/<design_week_id>.json
    documents/<design_week_id>/<TYPE>_v<version>.json
    operations.jsonl
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from config import settings
from contracts import DesignWeek, DocumentRecord, DocumentType, OperationLogEntry

from .base import DesignWeekStore

_VERSION_PATTERN = re.compile(r"_v(\d+)\.json$")


class JsonFileStore(DesignWeekStore):
    """Reads design weeks and writes documents as JSON files on disk."""

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        self.data_dir = Path(data_dir) if data_dir else settings.get_data_path()
        self.design_weeks_dir = self.data_dir / "design_weeks"
        self.documents_dir = self.data_dir / "documents"
        self.operations_path = self.data_dir / "operations.jsonl"

    def list_design_weeks(self) -> List[str]:
        """Ids of all stored design weeks, sorted."""
        if not self.design_weeks_dir.exists():
            return []
        return sorted(p.stem for p in self.design_weeks_dir.glob("*.json"))

    def save_design_week(self, design_week: DesignWeek) -> Path:
        self.design_weeks_dir.mkdir(parents=True, exist_ok=True)
        path = self.design_weeks_dir / f"{design_week.id}.json"
        path.write_text(design_week.model_dump_json(indent=2), encoding="utf-8")
        return path

    def get_design_week(self, design_week_id: str) -> Optional[DesignWeek]:
        path = self.design_weeks_dir / f"{design_week_id}.json"
        if not path.exists():
            return None
        return DesignWeek.model_validate_json(path.read_text(encoding="utf-8"))

    def _document_dir(self, design_week_id: str) -> Path:
        return self.documents_dir / design_week_id

    def latest_version(self, design_week_id: str, document_type: DocumentType) -> int:
        doc_dir = self._document_dir(design_week_id)
        if not doc_dir.exists():
            return 0
        versions = []
        for path in doc_dir.glob(f"{document_type.value}_v*.json"):
            match = _VERSION_PATTERN.search(path.name)
            if match:
                versions.append(int(match.group(1)))
        return max(versions, default=0)

    def document_path(self, record: DocumentRecord) -> Path:
        return self._document_dir(record.design_week_id) / f"{record.type.value}_v{record.version}.json"

    def append_document(self, record: DocumentRecord) -> DocumentRecord:
        path = self.document_path(record)
        if path.exists():
            raise FileExistsError(f"Document version already stored: {path}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        return record

    def log_operation(self, entry: OperationLogEntry) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with self.operations_path.open("a", encoding="utf-8") as f:
            f.write(entry.model_dump_json() + "\n")

    def read_operations(self) -> List[OperationLogEntry]:
        if not self.operations_path.exists():
            return []
        return [
            OperationLogEntry.model_validate_json(line)
            for line in self.operations_path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]
