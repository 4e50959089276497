"""History storage port interface.

Defines the contract for persisting citation navigation history. Core
code depends only on this abstraction, not on Redis.
"""
from abc import ABC, abstractmethod
from typing import List

from citelink.core.models.history import CitationHistoryEntry


class HistoryStoragePort(ABC):
    """Abstract interface for citation history persistence.

    Implementations: InMemoryHistoryStore, RedisHistoryStore

    Raises:
        StorageError: From any method when the backend fails
    """

    @abstractmethod
    def load_entries(self) -> List[CitationHistoryEntry]:
        """Load all stored entries (any order)."""
        pass

    @abstractmethod
    def save_entry(self, entry: CitationHistoryEntry) -> None:
        """Insert or overwrite the entry for entry.citation_reference."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete every stored entry."""
        pass
