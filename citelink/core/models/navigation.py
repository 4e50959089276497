"""
Navigation payloads and intents.

A click on a citation produces a CitationClickPayload; the resolver
turns it into a NavigationIntent the viewer panel consumes.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from citelink.core.models.citation import CitationToken, format_reference, parse_reference


class NavigationSource(str, Enum):
    """Where a navigation was triggered from."""
    EDITOR = "editor"
    BREADCRUMB = "breadcrumb"
    EXHIBIT_LIST = "exhibit_list"
    API = "api"


@dataclass(frozen=True)
class CitationClickPayload:
    """Data forwarded when a citation token is activated."""

    exhibit_ref: str
    citation_reference: str
    page_number: Optional[int] = None
    file_id: Optional[str] = None

    @classmethod
    def from_token(cls, token: CitationToken) -> "CitationClickPayload":
        return cls(
            exhibit_ref=token.exhibit_ref,
            citation_reference=token.citation_reference,
            page_number=token.page_number,
            file_id=token.file_id,
        )

    @classmethod
    def from_reference(cls, citation_reference: str, file_id: Optional[str] = None) -> "CitationClickPayload":
        exhibit_ref, page_number = parse_reference(citation_reference)
        return cls(
            exhibit_ref=exhibit_ref,
            citation_reference=format_reference(exhibit_ref, page_number),
            page_number=page_number,
            file_id=file_id,
        )


@dataclass(frozen=True)
class NavigationIntent:
    """
    Resolved instruction for the viewer panel.

    file_id is None when the exhibit has no linked file yet; viewers
    show a placeholder in that case rather than an error.
    """

    exhibit_reference: str
    source_description: str
    file_id: Optional[str] = None
    target_page: Optional[int] = None
    timestamp: Optional[str] = None

    @property
    def has_target(self) -> bool:
        return self.file_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_id": self.file_id,
            "target_page": self.target_page,
            "timestamp": self.timestamp,
            "exhibit_reference": self.exhibit_reference,
            "source_description": self.source_description,
        }
