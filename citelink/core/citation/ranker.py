"""
SuggestionRanker - Order exhibit completions for a partial reference.

Scores each directory entry against the partial input:
- exact exhibit match (case-insensitive): 100
- exhibit starts with input: 90
- exhibit contains input: 70
- title contains input: 50

Usage:
    ranker = SuggestionRanker()
    suggestions = ranker.rank("2", directory.get_exhibits())
    # suggestions[0].citation_ref == "2B"
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from citelink.config.citation_limits import (
    MAX_SUGGESTIONS,
    SCORE_CONTAINS_MATCH,
    SCORE_EXACT_MATCH,
    SCORE_PREFIX_MATCH,
    SCORE_TITLE_MATCH,
)
from citelink.core.models.exhibit import ExhibitDirectoryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Suggestion:
    """One ranked completion candidate."""

    entry: ExhibitDirectoryEntry
    relevance: int

    @property
    def citation_ref(self) -> str:
        return self.entry.exhibit_ref

    @property
    def display_text(self) -> str:
        return self.entry.display_text


class SuggestionRanker:
    """
    Rank directory entries against a partial exhibit reference.

    Runs inside the keystroke notification, so it is a single pass over
    the directory and returns at most max_results entries.
    """

    def __init__(self, max_results: int = MAX_SUGGESTIONS):
        self.max_results = max_results

    def score(self, entry: ExhibitDirectoryEntry, partial: str) -> int:
        """
        Score one entry.

        Args:
            entry: Directory entry
            partial: Lowercased, stripped input

        Returns:
            Relevance score, 0 when unrelated
        """
        exhibit_ref = entry.exhibit_ref.lower()
        if exhibit_ref == partial:
            return SCORE_EXACT_MATCH
        if exhibit_ref.startswith(partial):
            return SCORE_PREFIX_MATCH
        if partial in exhibit_ref:
            return SCORE_CONTAINS_MATCH
        if entry.title and partial in entry.title.lower():
            return SCORE_TITLE_MATCH
        return 0

    def rank(
        self,
        partial_exhibit: str,
        directory: Optional[Iterable[ExhibitDirectoryEntry]],
    ) -> List[Suggestion]:
        """
        Produce ordered suggestions.

        Args:
            partial_exhibit: What the user has typed after "["
            directory: Current exhibit snapshot (None or empty while loading)

        Returns:
            Suggestions by relevance (desc) then exhibit_ref (asc).
            Empty for blank input rather than the whole directory.
        """
        partial = (partial_exhibit or "").strip().lower()
        if not partial:
            return []

        if not directory:
            logger.debug("Exhibit directory empty, no suggestions")
            return []

        suggestions = []
        for entry in directory:
            relevance = self.score(entry, partial)
            if relevance > 0:
                suggestions.append(Suggestion(entry=entry, relevance=relevance))

        suggestions.sort(key=lambda s: (-s.relevance, s.entry.exhibit_ref))
        return suggestions[: self.max_results]
