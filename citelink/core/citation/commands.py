"""
CitationCommandBus - Typed commands between the editor, tokens and viewer.

Three commands, each with one effect:
- insert_citation: create a token at the caret
- citation_clicked: notify click listeners (no document change)
- citation_reference_edited: re-derive a token from a new reference

Commands run synchronously inside the host editor's update cycle. A
command dispatched while another is running is dropped, so a listener
can never start an unbounded chain of commands.

Usage:
    bus = CitationCommandBus(editor=document, directory=directory)
    remove = bus.register_click_listener(navigator.handle_click)
    bus.insert_citation(InsertCitationPayload(exhibit_ref="2B"))
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from citelink.core.citation.detector import detect_citation_context
from citelink.core.models.citation import CitationToken, create_citation
from citelink.core.models.exhibit import find_linked_file_id
from citelink.core.models.navigation import CitationClickPayload
from citelink.core.ports.directory import ExhibitDirectoryPort
from citelink.core.ports.editor import EditorHostPort

logger = logging.getLogger(__name__)

ClickListener = Callable[[CitationClickPayload], None]


@dataclass(frozen=True)
class InsertCitationPayload:
    """Request to insert a citation at the caret."""

    exhibit_ref: str
    page_number: Optional[int] = None
    citation_reference: Optional[str] = None
    description: Optional[str] = None
    file_id: Optional[str] = None
    # True when triggered from an autocomplete pick: the partial "[2B"
    # before the caret is replaced by the token
    replace_partial: bool = False

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "InsertCitationPayload":
        """
        Translate an external insertion event (e.g. from the exhibit panel).

        Args:
            event: {exhibitId, pageNumber?, citationReference?, description?, fileId?}

        Returns:
            InsertCitationPayload for a fresh insertion
        """
        page = event.get("pageNumber")
        if isinstance(page, str):
            page = int(page) if page.strip().isdigit() else None
        return cls(
            exhibit_ref=str(event.get("exhibitId") or ""),
            page_number=page,
            citation_reference=event.get("citationReference"),
            description=event.get("description"),
            file_id=event.get("fileId"),
        )


class CitationCommandBus:
    """
    Explicit command interface owned by the citation subsystem.

    The host editor calls these methods directly; there is no global
    command table and no payload type checks at dispatch time.
    """

    def __init__(
        self,
        editor: EditorHostPort,
        directory: Optional[ExhibitDirectoryPort] = None,
    ):
        """
        Initialize bus.

        Args:
            editor: Host editor exposing the citation extension points
            directory: Optional exhibit directory used to link a file
                at insertion time when the payload carries none
        """
        self._editor = editor
        self._directory = directory
        self._click_listeners: List[ClickListener] = []
        self._active_command: Optional[str] = None

    def register_click_listener(self, listener: ClickListener) -> Callable[[], None]:
        """
        Subscribe to citation clicks.

        Returns:
            Callable that removes the listener
        """
        self._click_listeners.append(listener)

        def remove() -> None:
            if listener in self._click_listeners:
                self._click_listeners.remove(listener)

        return remove

    @contextmanager
    def _command(self, name: str) -> Iterator[bool]:
        """Run one command; yields False when another command is in flight."""
        if self._active_command is not None:
            logger.warning(f"Dropping {name} dispatched during {self._active_command}")
            yield False
            return
        self._active_command = name
        try:
            yield True
        finally:
            self._active_command = None

    def _lookup_file_id(self, exhibit_ref: str) -> Optional[str]:
        if self._directory is None:
            return None
        return find_linked_file_id(self._directory.get_exhibits(), exhibit_ref)

    def insert_citation(self, payload: InsertCitationPayload) -> Optional[CitationToken]:
        """
        Create a token at the caret.

        A missing or expanded selection means focus moved away before
        confirming; the command is then a silent no-op.

        Args:
            payload: What to insert

        Returns:
            The inserted token, or None when nothing was inserted
        """
        with self._command("InsertCitation") as allowed:
            if not allowed:
                return None

            text_before_caret = self._editor.get_text_before_caret()
            if text_before_caret is None:
                logger.debug("InsertCitation without a collapsed selection, ignoring")
                return None

            token = create_citation(
                exhibit_ref=payload.exhibit_ref,
                page_number=payload.page_number,
                description=payload.description,
                file_id=payload.file_id,
                citation_reference=payload.citation_reference,
            )
            if token.file_id is None:
                token = token.with_file_id(self._lookup_file_id(token.exhibit_ref))

            replace_length = 0
            if payload.replace_partial:
                replace_length = detect_citation_context(text_before_caret).match_length

            self._editor.insert_citation(token, replace_length=replace_length)
            logger.info(f"Inserted citation {token.text} (file={token.file_id})")
            return token

    def handle_insert_event(self, event: Dict[str, Any]) -> Optional[CitationToken]:
        """Dispatch an external insertion event as InsertCitation."""
        logger.debug(f"Received citation insertion event: {event}")
        return self.insert_citation(InsertCitationPayload.from_event(event))

    def citation_clicked(self, payload: CitationClickPayload) -> None:
        """
        Notify click listeners. No document mutation, safe to repeat.

        Listener failures are logged and do not reach the editor.
        """
        with self._command("CitationClicked") as allowed:
            if not allowed:
                return
            for listener in list(self._click_listeners):
                try:
                    listener(payload)
                except Exception as e:
                    logger.error(f"Citation click listener failed for {payload.citation_reference}: {e}")

    def citation_reference_edited(
        self, token: CitationToken, new_reference: str
    ) -> Optional[CitationToken]:
        """
        Re-derive a token's identity from an edited reference.

        Args:
            token: Token currently in the document
            new_reference: Edited reference, e.g. "2B:16"

        Returns:
            The updated token, or None if the token is no longer in the
            document
        """
        with self._command("CitationReferenceEdited") as allowed:
            if not allowed:
                return None

            updated = token.with_reference(new_reference)
            if updated == token:
                return token

            if not self._editor.replace_citation(token, updated):
                logger.warning(f"Citation {token.text} not found in document, edit dropped")
                return None

            logger.info(f"Citation {token.text} edited to {updated.text}")
            return updated
