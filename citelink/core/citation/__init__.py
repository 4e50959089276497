"""Citation engine: detection, ranking, commands, navigation and history."""
from citelink.core.citation.autocomplete import (
    AutocompleteState,
    AutocompleteStatus,
    CitationAutocomplete,
)
from citelink.core.citation.commands import CitationCommandBus, InsertCitationPayload
from citelink.core.citation.detector import (
    CitationContext,
    PatternDetector,
    detect_citation_context,
)
from citelink.core.citation.document_codec import (
    OpaqueNode,
    deserialize_document,
    serialize_document,
)
from citelink.core.citation.history import HistoryTracker
from citelink.core.citation.manual_entry import validate_manual_entry
from citelink.core.citation.navigator import CitationNavigator
from citelink.core.citation.ranker import Suggestion, SuggestionRanker
from citelink.core.citation.resolver import NavigationResolver, format_media_timestamp

__all__ = [
    "AutocompleteState",
    "AutocompleteStatus",
    "CitationAutocomplete",
    "CitationCommandBus",
    "InsertCitationPayload",
    "CitationContext",
    "PatternDetector",
    "detect_citation_context",
    "OpaqueNode",
    "serialize_document",
    "deserialize_document",
    "HistoryTracker",
    "validate_manual_entry",
    "CitationNavigator",
    "Suggestion",
    "SuggestionRanker",
    "NavigationResolver",
    "format_media_timestamp",
]
