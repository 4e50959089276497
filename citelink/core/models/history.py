"""Citation navigation history entries."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass
class CitationHistoryEntry:
    """
    One distinct citation reference the user has navigated to.

    At most one entry exists per citation_reference; repeat visits bump
    access_count and last_accessed_at.
    """

    id: str
    exhibit_ref: str
    citation_reference: str
    last_accessed_at: datetime
    access_count: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "exhibit_ref": self.exhibit_ref,
            "citation_reference": self.citation_reference,
            "last_accessed_at": self.last_accessed_at.isoformat(),
            "access_count": self.access_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CitationHistoryEntry":
        last_accessed = data["last_accessed_at"]
        if isinstance(last_accessed, str):
            last_accessed = datetime.fromisoformat(last_accessed)
        return cls(
            id=data["id"],
            exhibit_ref=data["exhibit_ref"],
            citation_reference=data["citation_reference"],
            last_accessed_at=last_accessed,
            access_count=max(1, int(data.get("access_count", 1))),
        )
