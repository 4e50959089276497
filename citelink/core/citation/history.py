"""
HistoryTracker - Deduplicated log of citation navigations.

One entry per distinct citation reference; revisits bump the count and
refresh the timestamp. Entries are never expired, only cleared
wholesale.

Usage:
    tracker = HistoryTracker()
    tracker.record("2B:15", "2B")
    tracker.recent()  # newest first, breadcrumb-sized
"""
import itertools
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from citelink.config.citation_limits import RECENT_HISTORY_LIMIT
from citelink.core.exceptions import StorageError
from citelink.core.models.history import CitationHistoryEntry
from citelink.core.ports.history_storage import HistoryStoragePort

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HistoryTracker:
    """
    Track citation navigations for breadcrumb and history UI.

    The in-memory log is authoritative during a session; the optional
    storage backend mirrors it. Storage failures are logged and never
    interrupt navigation.
    """

    def __init__(
        self,
        storage: Optional[HistoryStoragePort] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize tracker.

        Args:
            storage: Optional persistence backend, loaded on startup
            clock: Time source (injectable for tests)
        """
        self._storage = storage
        self._clock = clock
        self._entries: Dict[str, CitationHistoryEntry] = {}
        # Touch order per reference, breaks ties between equal timestamps
        self._sequence: Dict[str, int] = {}
        self._counter = itertools.count()
        self._load()

    def _load(self) -> None:
        if self._storage is None:
            return
        try:
            entries = self._storage.load_entries()
        except StorageError as e:
            logger.warning(f"Failed to load citation history: {e}")
            return
        for entry in sorted(entries, key=lambda e: e.last_accessed_at):
            self._entries[entry.citation_reference] = entry
            self._touch(entry.citation_reference)

    def _touch(self, citation_reference: str) -> None:
        self._sequence[citation_reference] = next(self._counter)

    def _persist(self, entry: CitationHistoryEntry) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save_entry(entry)
        except StorageError as e:
            logger.warning(f"Failed to persist history for {entry.citation_reference}: {e}")

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, citation_reference: str) -> Optional[CitationHistoryEntry]:
        return self._entries.get(citation_reference)

    def record(self, citation_reference: str, exhibit_ref: str) -> CitationHistoryEntry:
        """
        Record a navigation.

        Args:
            citation_reference: Exact reference navigated to, e.g. "2B:15"
            exhibit_ref: Exhibit part, e.g. "2B"

        Returns:
            The created or updated entry
        """
        now = self._clock()
        entry = self._entries.get(citation_reference)
        if entry is None:
            entry = CitationHistoryEntry(
                id=str(uuid.uuid4()),
                exhibit_ref=exhibit_ref,
                citation_reference=citation_reference,
                last_accessed_at=now,
            )
            self._entries[citation_reference] = entry
        else:
            entry.access_count += 1
            entry.last_accessed_at = now

        self._touch(citation_reference)
        self._persist(entry)
        return entry

    def list(self) -> List[CitationHistoryEntry]:
        """All entries, most recently accessed first."""
        return sorted(
            self._entries.values(),
            key=lambda e: (e.last_accessed_at, self._sequence[e.citation_reference]),
            reverse=True,
        )

    def recent(self, limit: int = RECENT_HISTORY_LIMIT) -> List[CitationHistoryEntry]:
        """Prefix of list() for breadcrumbs."""
        return self.list()[: max(0, limit)]

    def clear(self) -> None:
        """Empty the log unconditionally. Not undoable."""
        self._entries.clear()
        self._sequence.clear()
        logger.info("Citation history cleared")
        if self._storage is None:
            return
        try:
            self._storage.clear()
        except StorageError as e:
            logger.warning(f"Failed to clear stored citation history: {e}")
