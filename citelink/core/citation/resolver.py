"""
NavigationResolver - Turn a clicked citation into a viewer target.

Resolution order, first success wins:
1. payload.file_id looked up directly in the file collection
2. a file whose own exhibit_ref equals payload.exhibit_ref
3. no file: intent with file_id None (viewer shows a placeholder)

Citations do not distinguish pages from seconds when authored. For
audio/video targets a page number below one hour is read as a mm:ss
offset; everything else passes through as a page index.

Usage:
    resolver = NavigationResolver(directory)
    intent = resolver.resolve(CitationClickPayload("2B", "2B:15"))
"""
import logging
from typing import List, Optional

from citelink.config.citation_limits import MEDIA_TIMESTAMP_LIMIT_SECONDS
from citelink.core.models.exhibit import FileRecord
from citelink.core.models.navigation import (
    CitationClickPayload,
    NavigationIntent,
    NavigationSource,
)
from citelink.core.ports.directory import ExhibitDirectoryPort

logger = logging.getLogger(__name__)


def format_media_timestamp(seconds: int) -> str:
    """Format seconds as zero-padded mm:ss, e.g. 75 -> "01:15"."""
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class NavigationResolver:
    """Resolve citation payloads against the project's file collection."""

    def __init__(self, directory: ExhibitDirectoryPort):
        """
        Initialize resolver.

        Args:
            directory: Source of the file collection, read fresh per call
        """
        self._directory = directory

    def _find_file(self, payload: CitationClickPayload, files: List[FileRecord]) -> Optional[FileRecord]:
        if payload.file_id:
            for record in files:
                if record.id == payload.file_id:
                    return record
            logger.debug(f"File {payload.file_id} not in collection, searching by exhibit")

        for record in files:
            if record.exhibit_ref and record.exhibit_ref == payload.exhibit_ref:
                return record
        return None

    def resolve(
        self,
        payload: CitationClickPayload,
        source: NavigationSource = NavigationSource.EDITOR,
    ) -> NavigationIntent:
        """
        Resolve a citation to a navigation intent. Never raises for
        unknown exhibits.

        Args:
            payload: Clicked citation data
            source: Where the navigation started

        Returns:
            NavigationIntent (file_id None when no file is linked)
        """
        record = self._find_file(payload, self._directory.get_files())
        description = f"Citation [{payload.citation_reference}] from {NavigationSource(source).value}"

        if record is None:
            logger.info(f"No file linked to exhibit {payload.exhibit_ref}")
            return NavigationIntent(
                exhibit_reference=payload.citation_reference,
                source_description=description,
                target_page=payload.page_number,
            )

        page = payload.page_number
        # TODO: replace the one-hour heuristic once citations carry an explicit page/time unit
        if record.is_time_based and page is not None and page < MEDIA_TIMESTAMP_LIMIT_SECONDS:
            return NavigationIntent(
                exhibit_reference=payload.citation_reference,
                source_description=description,
                file_id=record.id,
                timestamp=format_media_timestamp(page),
            )

        return NavigationIntent(
            exhibit_reference=payload.citation_reference,
            source_description=description,
            file_id=record.id,
            target_page=page,
        )
