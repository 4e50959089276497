"""
CitationAutocomplete - Suggestion dropdown state machine.

States:
    idle        no dropdown
    suggesting  dropdown open with candidates and a selected index
    closing     dropdown just lost context (escape, pick, caret moved);
                the next text change settles it back to idle or reopens

Transitions are driven by detector results on each text change,
keyboard navigation, and selection/escape.
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from citelink.core.citation.commands import CitationCommandBus, InsertCitationPayload
from citelink.core.citation.detector import PatternDetector
from citelink.core.citation.ranker import Suggestion, SuggestionRanker
from citelink.core.models.citation import CitationToken
from citelink.core.ports.directory import ExhibitDirectoryPort

logger = logging.getLogger(__name__)


class AutocompleteStatus(str, Enum):
    IDLE = "idle"
    SUGGESTING = "suggesting"
    CLOSING = "closing"


@dataclass(frozen=True)
class AutocompleteState:
    """Snapshot of the dropdown."""

    status: AutocompleteStatus = AutocompleteStatus.IDLE
    partial_input: str = ""
    partial_page: Optional[int] = None
    candidates: Tuple[Suggestion, ...] = ()
    selected_index: int = 0

    @property
    def is_open(self) -> bool:
        return self.status == AutocompleteStatus.SUGGESTING and bool(self.candidates)

    @property
    def selected(self) -> Optional[Suggestion]:
        if not self.is_open:
            return None
        return self.candidates[self.selected_index]


IDLE_STATE = AutocompleteState()
CLOSING_STATE = AutocompleteState(status=AutocompleteStatus.CLOSING)


class CitationAutocomplete:
    """
    Drive the suggestion dropdown from editor events.

    The host calls on_text_changed() after every text change and
    handle_key() for navigation keys while the dropdown is open.
    """

    NAVIGATION_KEYS = ("ArrowDown", "ArrowUp", "Enter", "Tab", "Escape")

    def __init__(
        self,
        bus: CitationCommandBus,
        directory: ExhibitDirectoryPort,
        ranker: Optional[SuggestionRanker] = None,
        detector: Optional[PatternDetector] = None,
    ):
        self._bus = bus
        self._directory = directory
        self._ranker = ranker or SuggestionRanker()
        self._detector = detector or PatternDetector()
        self.state = IDLE_STATE

    def _close(self) -> AutocompleteState:
        if self.state.status == AutocompleteStatus.SUGGESTING:
            self.state = CLOSING_STATE
        else:
            self.state = IDLE_STATE
        return self.state

    def reset(self) -> AutocompleteState:
        self.state = IDLE_STATE
        return self.state

    def on_text_changed(self, text_before_caret: Optional[str]) -> AutocompleteState:
        """
        Re-evaluate after a text change or caret move.

        Args:
            text_before_caret: Text before the caret, or None when the
                selection is missing or expanded

        Returns:
            New state
        """
        context = self._detector.detect(text_before_caret)
        if not context.in_context or not context.is_rankable:
            return self._close()

        candidates = tuple(self._ranker.rank(context.partial_exhibit, self._directory.get_exhibits()))
        if not candidates:
            return self._close()

        self.state = AutocompleteState(
            status=AutocompleteStatus.SUGGESTING,
            partial_input=context.partial_exhibit,
            partial_page=context.page_number,
            candidates=candidates,
            selected_index=0,
        )
        return self.state

    def move_selection(self, delta: int) -> AutocompleteState:
        """Move the highlighted candidate, wrapping at both ends."""
        if not self.state.is_open:
            return self.state
        count = len(self.state.candidates)
        self.state = replace(self.state, selected_index=(self.state.selected_index + delta) % count)
        return self.state

    def dismiss(self) -> AutocompleteState:
        """Escape pressed."""
        return self._close()

    def accept(self, index: Optional[int] = None) -> Optional[CitationToken]:
        """
        Insert the chosen candidate, replacing the partial bracket text.

        Args:
            index: Candidate to insert (default: highlighted one)

        Returns:
            Inserted token, or None when nothing was open or the editor
            had no collapsed selection
        """
        if not self.state.is_open:
            return None

        if index is None:
            index = self.state.selected_index
        if not 0 <= index < len(self.state.candidates):
            logger.warning(f"Suggestion index {index} out of range")
            return None

        suggestion = self.state.candidates[index]
        payload = InsertCitationPayload(
            exhibit_ref=suggestion.citation_ref,
            page_number=self.state.partial_page,
            file_id=suggestion.entry.file_id,
            replace_partial=True,
        )
        self._close()
        return self._bus.insert_citation(payload)

    def handle_key(self, key: str) -> bool:
        """
        Handle a navigation key.

        Returns:
            True if the key was consumed by the dropdown
        """
        if not self.state.is_open or key not in self.NAVIGATION_KEYS:
            return False

        if key == "ArrowDown":
            self.move_selection(1)
        elif key == "ArrowUp":
            self.move_selection(-1)
        elif key in ("Enter", "Tab"):
            self.accept()
        else:
            self.dismiss()
        return True
