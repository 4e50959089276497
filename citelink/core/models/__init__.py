"""Domain models and entities.

Citation tokens, exhibit directory records, navigation and history.
"""

from citelink.core.models.citation import (
    CitationToken,
    create_citation,
    deserialize_citation,
    format_reference,
    is_citation_record,
    is_valid_exhibit_ref,
    parse_reference,
    serialize_citation,
)
from citelink.core.models.exhibit import (
    ExhibitDirectoryEntry,
    ExhibitType,
    FileRecord,
    exhibit_options_from_files,
    find_linked_file_id,
)
from citelink.core.models.history import CitationHistoryEntry
from citelink.core.models.navigation import (
    CitationClickPayload,
    NavigationIntent,
    NavigationSource,
)

__all__ = [
    # citation.py
    "CitationToken",
    "create_citation",
    "serialize_citation",
    "deserialize_citation",
    "format_reference",
    "parse_reference",
    "is_citation_record",
    "is_valid_exhibit_ref",
    # exhibit.py
    "ExhibitType",
    "ExhibitDirectoryEntry",
    "FileRecord",
    "exhibit_options_from_files",
    "find_linked_file_id",
    # history.py
    "CitationHistoryEntry",
    # navigation.py
    "CitationClickPayload",
    "NavigationIntent",
    "NavigationSource",
]
