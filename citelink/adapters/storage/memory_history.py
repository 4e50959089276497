"""In-process implementation of HistoryStoragePort."""
from typing import Dict, List

from citelink.core.models.history import CitationHistoryEntry
from citelink.core.ports.history_storage import HistoryStoragePort


class InMemoryHistoryStore(HistoryStoragePort):
    """Keeps serialized entries in a dict keyed by citation reference."""

    def __init__(self):
        self._data: Dict[str, dict] = {}

    def load_entries(self) -> List[CitationHistoryEntry]:
        return [CitationHistoryEntry.from_dict(d) for d in self._data.values()]

    def save_entry(self, entry: CitationHistoryEntry) -> None:
        self._data[entry.citation_reference] = entry.to_dict()

    def clear(self) -> None:
        self._data.clear()
