"""
PatternDetector - Recognize a citation being typed at the caret.

Runs on every text change, since the match window slides with the
caret rather than being anchored to a trigger character.

Usage:
    from citelink.core.citation.detector import detect_citation_context

    context = detect_citation_context("See [2B:1")
    # context.in_context == True
    # context.partial_exhibit == "2B", context.partial_page == "1"
"""
import re
from dataclasses import dataclass
from typing import Optional

# Open bracket, not yet closed, holding a partial exhibit and optional ":page".
# Case-insensitive so "[2b" keeps the context open (with no suggestions).
PARTIAL_CITATION_PATTERN = re.compile(r"\[([A-Z0-9]*:?\d*)$", re.IGNORECASE)

# What can actually be ranked against exhibit references
EXHIBIT_PREFIX_PATTERN = re.compile(r"^[A-Z0-9]*$")


@dataclass(frozen=True)
class CitationContext:
    """Result of scanning the text before the caret."""

    in_context: bool
    partial_exhibit: str = ""
    has_page_separator: bool = False
    partial_page: str = ""
    match_length: int = 0  # characters of "[2B:1" before the caret

    @property
    def is_rankable(self) -> bool:
        """Whether the partial exhibit fits the uppercase exhibit grammar."""
        return self.in_context and EXHIBIT_PREFIX_PATTERN.match(self.partial_exhibit) is not None

    @property
    def page_number(self) -> Optional[int]:
        """Typed page as a positive integer, if any."""
        if self.partial_page.isdigit() and int(self.partial_page) >= 1:
            return int(self.partial_page)
        return None


NO_CONTEXT = CitationContext(in_context=False)


def detect_citation_context(text_before_caret: Optional[str]) -> CitationContext:
    """
    Decide whether the user is mid-way through typing a citation.

    Args:
        text_before_caret: Text of the current run up to the caret, or
            None when there is no collapsed selection

    Returns:
        CitationContext (NO_CONTEXT when not typing a citation)
    """
    if not text_before_caret:
        return NO_CONTEXT

    match = PARTIAL_CITATION_PATTERN.search(text_before_caret)
    if not match:
        return NO_CONTEXT

    partial = match.group(1)
    exhibit_part, _, page_part = partial.partition(":")
    return CitationContext(
        in_context=True,
        partial_exhibit=exhibit_part,
        has_page_separator=":" in partial,
        partial_page=page_part,
        match_length=len(match.group(0)),
    )


class PatternDetector:
    """Stateless wrapper so the detector can be injected like other services."""

    def detect(self, text_before_caret: Optional[str]) -> CitationContext:
        return detect_citation_context(text_before_caret)
