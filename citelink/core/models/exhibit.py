"""
Exhibit directory and file records.

Read-only projections of the project's exhibits and files, supplied by
the external project/file store. The detector, ranker and resolver
query these snapshots and never write to them.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class ExhibitType(str, Enum):
    """Kind of evidence an exhibit holds."""
    DOCUMENT = "document"
    PHOTO = "photo"
    VIDEO = "video"
    AUDIO = "audio"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "ExhibitType":
        """Parse a stored type; unknown values fall back to DOCUMENT."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.DOCUMENT


TIME_BASED_FILE_TYPES = {"audio", "video"}


@dataclass(frozen=True)
class ExhibitDirectoryEntry:
    """One exhibit available for citation in the current project."""

    exhibit_ref: str
    title: str = ""
    exhibit_type: ExhibitType = ExhibitType.DOCUMENT
    file_id: Optional[str] = None
    is_key_evidence: bool = False
    description: Optional[str] = None

    @property
    def display_text(self) -> str:
        return f"{self.exhibit_ref} - {self.title}"


@dataclass(frozen=True)
class FileRecord:
    """A file in the project's file collection."""

    id: str
    name: str = ""
    file_type: str = "document"  # "pdf", "audio", "video", "image", or a MIME type
    exhibit_ref: Optional[str] = None

    @property
    def is_time_based(self) -> bool:
        """Audio and video files are addressed by timestamp, not page."""
        kind = (self.file_type or "").lower()
        return kind.split("/", 1)[0] in TIME_BASED_FILE_TYPES


# File names like "1-A: Deposition transcript"
EXHIBIT_FILE_NAME_PATTERN = re.compile(r"^(\d+)-([A-Z]):\s*(.*)$")


def exhibit_options_from_files(files: Iterable[FileRecord]) -> List[ExhibitDirectoryEntry]:
    """
    Derive directory entries from exhibit-style file names.

    "1-A: Contract" becomes exhibit "1A" titled "Contract", linked to
    the file. Files without the prefix are skipped.

    Args:
        files: File records of the current project

    Returns:
        Entries sorted by exhibit number, then reference
    """
    options = []
    for record in files:
        match = EXHIBIT_FILE_NAME_PATTERN.match(record.name or "")
        if not match:
            continue
        number, letter, title = match.groups()
        options.append(
            (
                int(number),
                ExhibitDirectoryEntry(
                    exhibit_ref=f"{number}{letter}",
                    title=title.strip(),
                    file_id=record.id,
                ),
            )
        )

    options.sort(key=lambda item: (item[0], item[1].exhibit_ref))
    return [entry for _, entry in options]


def find_linked_file_id(entries: Iterable[ExhibitDirectoryEntry], exhibit_ref: str) -> Optional[str]:
    """File linked to the directory entry for exhibit_ref, if any."""
    for entry in entries:
        if entry.exhibit_ref == exhibit_ref and entry.file_id:
            return entry.file_id
    return None
