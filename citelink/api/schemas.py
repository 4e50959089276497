"""
API Pydantic models for the citation service.

Request/response models used by the citation API endpoints.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from citelink.core.models.navigation import NavigationSource


class SuggestionModel(BaseModel):
    """One ranked exhibit completion"""

    exhibit_ref: str
    title: str
    exhibit_type: str
    file_id: Optional[str] = None
    is_key_evidence: bool = False
    relevance: int
    display_text: str


class DetectRequest(BaseModel):
    """Text before the caret; null when there is no collapsed selection"""

    text_before_caret: Optional[str] = Field(None, description="Text of the caret's run up to the caret")


class DetectResponse(BaseModel):
    """Detector result plus suggestions for the partial exhibit"""

    in_context: bool
    partial_exhibit: str = ""
    has_page_separator: bool = False
    partial_page: str = ""
    suggestions: List[SuggestionModel] = Field(default_factory=list)


class SuggestRequest(BaseModel):
    partial: str = Field("", description="Partial exhibit reference, e.g. '2'")


class SuggestResponse(BaseModel):
    suggestions: List[SuggestionModel] = Field(default_factory=list)


class ResolveRequest(BaseModel):
    """Clicked citation"""

    citation_reference: str = Field(..., min_length=1, description="Reference like '2B' or '2B:15'")
    file_id: Optional[str] = Field(None, description="File linked at insertion time")
    source: NavigationSource = Field(NavigationSource.API, description="Where the navigation started")


class NavigationIntentResponse(BaseModel):
    """Resolved viewer target; file_id null means show a placeholder"""

    file_id: Optional[str] = None
    target_page: Optional[int] = None
    timestamp: Optional[str] = None
    exhibit_reference: str
    source_description: str
    has_target: bool


class HistoryEntryResponse(BaseModel):
    id: str
    exhibit_ref: str
    citation_reference: str
    last_accessed_at: datetime
    access_count: int = Field(ge=1)


class HistoryResponse(BaseModel):
    entries: List[HistoryEntryResponse] = Field(default_factory=list)
    total: int = 0


class ManualEntryRequest(BaseModel):
    """Fields of the insert-citation dialog"""

    exhibit: str = Field("", description="Exhibit reference, e.g. '2B'")
    page: Optional[str] = Field(None, description="Optional positive page number")
    description: Optional[str] = None


class CitationRecordResponse(BaseModel):
    """Validated citation in its serialized document shape"""

    citation: Dict[str, Any]
    text: str
    tooltip: str


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    timestamp: datetime
    version: str
    uptime: float
    system_info: Dict[str, Any]
