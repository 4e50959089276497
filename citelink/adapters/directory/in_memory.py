"""In-memory implementation of ExhibitDirectoryPort.

Holds the snapshot the project/file store pushes for the selected
project. Callers always receive copies, so a query never observes a
snapshot swap half-way through.
"""
from typing import Iterable, List, Optional

from citelink.core.models.exhibit import (
    ExhibitDirectoryEntry,
    FileRecord,
    exhibit_options_from_files,
)
from citelink.core.ports.directory import ExhibitDirectoryPort


class InMemoryExhibitDirectory(ExhibitDirectoryPort):
    """Snapshot-backed exhibit directory.

    Args:
        exhibits: Directory entries for the selected project
        files: File collection for the selected project
    """

    def __init__(
        self,
        exhibits: Optional[Iterable[ExhibitDirectoryEntry]] = None,
        files: Optional[Iterable[FileRecord]] = None,
    ):
        self._exhibits: List[ExhibitDirectoryEntry] = list(exhibits or [])
        self._files: List[FileRecord] = list(files or [])

    @classmethod
    def from_files(cls, files: Iterable[FileRecord]) -> "InMemoryExhibitDirectory":
        """Build a directory whose exhibits come from "1-A: Title" file names."""
        files = list(files)
        return cls(exhibits=exhibit_options_from_files(files), files=files)

    def replace_snapshot(
        self,
        exhibits: Iterable[ExhibitDirectoryEntry],
        files: Optional[Iterable[FileRecord]] = None,
    ) -> None:
        """Swap in a new snapshot (e.g. when the selected project changes)."""
        self._exhibits = list(exhibits)
        if files is not None:
            self._files = list(files)

    def get_exhibits(self) -> List[ExhibitDirectoryEntry]:
        return list(self._exhibits)

    def get_files(self) -> List[FileRecord]:
        return list(self._files)
