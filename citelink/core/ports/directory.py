"""Exhibit directory port interface.

Defines the contract for reading the current project's exhibits and
files. Core code depends only on this abstraction; the project/file
store that owns the data lives elsewhere.
"""
from abc import ABC, abstractmethod
from typing import List

from citelink.core.models.exhibit import ExhibitDirectoryEntry, FileRecord


class ExhibitDirectoryPort(ABC):
    """Abstract read-only view of the selected project's exhibits and files.

    Implementations: InMemoryExhibitDirectory
    """

    @abstractmethod
    def get_exhibits(self) -> List[ExhibitDirectoryEntry]:
        """Snapshot of exhibits available for citation.

        Returns:
            Entries for the currently selected project (may be empty
            while the project is loading)
        """
        pass

    @abstractmethod
    def get_files(self) -> List[FileRecord]:
        """Snapshot of the project's file collection.

        Returns:
            File records, each optionally linked to an exhibit
        """
        pass
