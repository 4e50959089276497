"""
Citation token model for inline exhibit references.

A token renders as "[2B]" or "[2B:15]" in the document. The citation
reference is stored alongside exhibit and page for serialization
stability, but is always derivable from them:

    create_citation("2B", 15).citation_reference  # "2B:15"

Serialized shape (embedded in saved documents):

    {"type": "citation", "version": 1, "exhibitId": "2B",
     "pageNumber": 15, "citationReference": "2B:15"}
"""
import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from citelink.config.citation_limits import CITATION_NODE_TYPE, CITATION_NODE_VERSION
from citelink.core.exceptions import SerializationError

logger = logging.getLogger(__name__)

EXHIBIT_REF_PATTERN = re.compile(r"^\d+[A-Z]+$")


def is_valid_exhibit_ref(exhibit_ref: str) -> bool:
    """Check exhibit grammar: digits followed by uppercase letters (e.g. "2B")."""
    return bool(exhibit_ref) and EXHIBIT_REF_PATTERN.match(exhibit_ref) is not None


def _normalize_page(page_number: Optional[int]) -> Optional[int]:
    """Pages are 1-based; anything else means no page."""
    if page_number is None or isinstance(page_number, bool):
        return None
    try:
        page = int(page_number)
    except (TypeError, ValueError):
        return None
    return page if page >= 1 else None


def format_reference(exhibit_ref: str, page_number: Optional[int] = None) -> str:
    """
    Build the canonical citation reference.

    Args:
        exhibit_ref: Exhibit identifier, e.g. "2B"
        page_number: Optional 1-based page

    Returns:
        "2B" or "2B:15"
    """
    page = _normalize_page(page_number)
    return f"{exhibit_ref}:{page}" if page else exhibit_ref


def parse_reference(citation_reference: str) -> Tuple[str, Optional[int]]:
    """
    Split a citation reference into exhibit and page.

    A reference that cannot be split sensibly ("2B:x", "2B:1:2", "2B:0")
    is kept whole as the exhibit with no page, so a damaged citation
    never blocks loading a document.

    Args:
        citation_reference: Reference like "2B" or "2B:15"

    Returns:
        (exhibit_ref, page_number or None)
    """
    reference = (citation_reference or "").strip()
    if ":" not in reference:
        return reference, None

    parts = reference.split(":")
    if len(parts) == 2 and parts[0] and parts[1].isdigit() and int(parts[1]) >= 1:
        return parts[0], int(parts[1])

    logger.warning(f"Malformed citation reference, keeping as exhibit: {reference!r}")
    return reference, None


def _normalize_identity(
    exhibit_ref: Optional[str], page_number: Optional[int]
) -> Tuple[str, Optional[int]]:
    """
    Bring exhibit and page into the form parse_reference() reads back.

    An exhibit holding a reference ("2B:3") is split; an explicit page
    wins over the embedded one. An exhibit that stays malformed keeps no
    page, otherwise its reference would not parse back to it.
    """
    exhibit = (exhibit_ref or "").strip()
    page = _normalize_page(page_number)
    if ":" in exhibit:
        exhibit, parsed_page = parse_reference(exhibit)
        if ":" in exhibit:
            return exhibit, None
        if page is None:
            page = parsed_page
    return exhibit, page


@dataclass(frozen=True)
class CitationToken:
    """
    One inline citation embedded in a document.

    Tokens are immutable values: every change returns a new token, and
    the host document swaps the old node for the new one. Build tokens
    with create_citation() so the stored reference matches exhibit/page.
    """

    exhibit_ref: str
    page_number: Optional[int] = None
    description: Optional[str] = None
    file_id: Optional[str] = None
    citation_reference: str = ""

    def __post_init__(self):
        exhibit_ref, page = _normalize_identity(self.exhibit_ref, self.page_number)
        if exhibit_ref != self.exhibit_ref:
            object.__setattr__(self, "exhibit_ref", exhibit_ref)
        if page != self.page_number:
            object.__setattr__(self, "page_number", page)
        expected = format_reference(exhibit_ref, page)
        if self.citation_reference != expected:
            object.__setattr__(self, "citation_reference", expected)

    @property
    def text(self) -> str:
        """Text content of the token inside the document."""
        return f"[{self.citation_reference}]"

    @property
    def is_well_formed(self) -> bool:
        return is_valid_exhibit_ref(self.exhibit_ref)

    def tooltip(self) -> str:
        """Hover text for the rendered token."""
        if self.description:
            return f"{self.text}: {self.description}"
        label = f"Citation to exhibit {self.exhibit_ref}"
        if self.page_number:
            label += f", page {self.page_number}"
        return label

    def with_reference(self, citation_reference: str) -> "CitationToken":
        """Return a token whose exhibit and page are re-read from the reference."""
        exhibit_ref, page_number = parse_reference(citation_reference)
        return replace(self, exhibit_ref=exhibit_ref, page_number=page_number, citation_reference="")

    def with_exhibit_ref(self, exhibit_ref: str) -> "CitationToken":
        return replace(self, exhibit_ref=exhibit_ref, citation_reference="")

    def with_page_number(self, page_number: Optional[int]) -> "CitationToken":
        return replace(self, page_number=_normalize_page(page_number), citation_reference="")

    def with_description(self, description: Optional[str]) -> "CitationToken":
        return replace(self, description=description)

    def with_file_id(self, file_id: Optional[str]) -> "CitationToken":
        return replace(self, file_id=file_id)

    def to_dict(self) -> Dict[str, Any]:
        return serialize_citation(self)


def create_citation(
    exhibit_ref: str,
    page_number: Optional[int] = None,
    description: Optional[str] = None,
    file_id: Optional[str] = None,
    citation_reference: Optional[str] = None,
) -> CitationToken:
    """
    Create a citation token.

    When citation_reference is supplied it is authoritative: exhibit and
    page are re-read from it, so the stored and derived forms never
    diverge.

    Args:
        exhibit_ref: Exhibit identifier, e.g. "2B"
        page_number: Optional 1-based page (or seconds for media)
        description: Optional tooltip annotation
        file_id: Linked file, if known at insertion time
        citation_reference: Optional full reference, e.g. "2B:15"

    Returns:
        CitationToken
    """
    exhibit_ref, page_number = _normalize_identity(exhibit_ref, page_number)
    if citation_reference:
        parsed_exhibit, parsed_page = parse_reference(citation_reference)
        if parsed_exhibit != exhibit_ref or parsed_page != page_number:
            logger.debug(
                f"Citation reference {citation_reference!r} overrides "
                f"exhibit={exhibit_ref!r} page={page_number!r}"
            )
        exhibit_ref, page_number = parsed_exhibit, parsed_page

    return CitationToken(
        exhibit_ref=exhibit_ref,
        page_number=page_number,
        description=description,
        file_id=file_id,
    )


def is_citation_record(record: Any) -> bool:
    """Check whether a serialized node record is a citation."""
    return isinstance(record, dict) and record.get("type") == CITATION_NODE_TYPE


def serialize_citation(token: CitationToken) -> Dict[str, Any]:
    """
    Serialize a token to its tagged record. Absent optional fields are omitted.

    Args:
        token: CitationToken to serialize

    Returns:
        Dict with type, version, exhibitId, citationReference and
        any of pageNumber, description, fileId that are set
    """
    record: Dict[str, Any] = {
        "type": CITATION_NODE_TYPE,
        "version": CITATION_NODE_VERSION,
        "exhibitId": token.exhibit_ref,
    }
    if token.page_number is not None:
        record["pageNumber"] = token.page_number
    if token.description is not None:
        record["description"] = token.description
    if token.file_id is not None:
        record["fileId"] = token.file_id
    record["citationReference"] = token.citation_reference
    return record


def deserialize_citation(record: Dict[str, Any]) -> CitationToken:
    """
    Rebuild a token from its tagged record via create_citation().

    Args:
        record: Serialized citation record

    Returns:
        CitationToken

    Raises:
        SerializationError: If the record is not tagged as a citation
    """
    if not is_citation_record(record):
        raise SerializationError(f"Not a citation record: {record!r}")

    version = record.get("version", CITATION_NODE_VERSION)
    if version != CITATION_NODE_VERSION:
        logger.warning(f"Loading citation record with unknown version {version}")

    return create_citation(
        exhibit_ref=str(record.get("exhibitId") or ""),
        page_number=record.get("pageNumber"),
        description=record.get("description"),
        file_id=record.get("fileId"),
        citation_reference=record.get("citationReference"),
    )
