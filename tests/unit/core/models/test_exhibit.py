"""Tests for exhibit directory and file records."""
import pytest

from citelink.core.models.exhibit import (
    ExhibitDirectoryEntry,
    ExhibitType,
    FileRecord,
    exhibit_options_from_files,
    find_linked_file_id,
)


class TestExhibitType:

    def test_known_values(self):
        assert ExhibitType.from_value("video") is ExhibitType.VIDEO
        assert ExhibitType.from_value("PHOTO") is ExhibitType.PHOTO

    def test_unknown_falls_back_to_document(self):
        assert ExhibitType.from_value("spreadsheet") is ExhibitType.DOCUMENT
        assert ExhibitType.from_value(None) is ExhibitType.DOCUMENT


class TestFileRecord:

    @pytest.mark.parametrize("file_type", ["audio", "video", "VIDEO", "audio/mpeg", "video/mp4"])
    def test_time_based(self, file_type):
        assert FileRecord(id="f1", file_type=file_type).is_time_based is True

    @pytest.mark.parametrize("file_type", ["pdf", "document", "image", "application/pdf", ""])
    def test_not_time_based(self, file_type):
        assert FileRecord(id="f1", file_type=file_type).is_time_based is False


class TestDirectoryEntry:

    def test_display_text(self):
        entry = ExhibitDirectoryEntry(exhibit_ref="2B", title="Contract")
        assert entry.display_text == "2B - Contract"

    def test_find_linked_file_id(self):
        entries = [
            ExhibitDirectoryEntry(exhibit_ref="1A", title="Photo"),
            ExhibitDirectoryEntry(exhibit_ref="2B", title="Contract", file_id="f1"),
        ]
        assert find_linked_file_id(entries, "2B") == "f1"
        assert find_linked_file_id(entries, "1A") is None
        assert find_linked_file_id(entries, "9Z") is None


class TestExhibitOptionsFromFiles:
    """Exhibit entries derived from "1-A: Title" file names."""

    def test_parses_prefixed_names(self):
        files = [FileRecord(id="f1", name="2-B: Contract")]
        options = exhibit_options_from_files(files)
        assert len(options) == 1
        assert options[0].exhibit_ref == "2B"
        assert options[0].title == "Contract"
        assert options[0].file_id == "f1"

    def test_skips_unprefixed_names(self):
        files = [FileRecord(id="f1", name="notes.docx"), FileRecord(id="f2", name="2B Contract")]
        assert exhibit_options_from_files(files) == []

    def test_sorted_numerically(self):
        files = [
            FileRecord(id="f10", name="10-A: Later"),
            FileRecord(id="f2b", name="2-B: Second"),
            FileRecord(id="f2a", name="2-A: First"),
        ]
        refs = [o.exhibit_ref for o in exhibit_options_from_files(files)]
        assert refs == ["2A", "2B", "10A"]
