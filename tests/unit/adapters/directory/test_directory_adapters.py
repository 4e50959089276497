"""Tests for exhibit directory adapters."""
import pytest

from citelink.adapters.directory import InMemoryExhibitDirectory, load_directory_snapshot
from citelink.core.models.exhibit import ExhibitDirectoryEntry, ExhibitType, FileRecord
from citelink.core.ports.directory import ExhibitDirectoryPort

SNAPSHOT = """
exhibits:
  - exhibit_ref: 2B
    title: Contract
    exhibit_type: document
    file_id: f1
    is_key_evidence: true
  - exhibit_ref: 5E
    title: Deposition
    exhibit_type: video
  - title: missing reference
files:
  - id: f1
    name: contract.pdf
    file_type: pdf
    exhibit_ref: 2B
  - id: v1
    name: deposition.mp4
    file_type: video
    exhibit_ref: 5E
  - name: no id
"""


class TestInMemoryExhibitDirectory:

    def test_implements_port(self):
        assert isinstance(InMemoryExhibitDirectory(), ExhibitDirectoryPort)

    def test_returns_copies(self):
        directory = InMemoryExhibitDirectory(exhibits=[ExhibitDirectoryEntry("2B")])
        directory.get_exhibits().clear()
        assert len(directory.get_exhibits()) == 1

    def test_from_files(self):
        directory = InMemoryExhibitDirectory.from_files([
            FileRecord(id="f1", name="2-B: Contract"),
            FileRecord(id="f2", name="scan.pdf"),
        ])
        assert [e.exhibit_ref for e in directory.get_exhibits()] == ["2B"]
        assert len(directory.get_files()) == 2

    def test_replace_snapshot(self):
        directory = InMemoryExhibitDirectory(
            exhibits=[ExhibitDirectoryEntry("2B")], files=[FileRecord(id="f1")]
        )
        directory.replace_snapshot([ExhibitDirectoryEntry("3C")])
        assert [e.exhibit_ref for e in directory.get_exhibits()] == ["3C"]
        assert [f.id for f in directory.get_files()] == ["f1"]


class TestLoadDirectorySnapshot:

    @pytest.fixture
    def snapshot_path(self, tmp_path):
        path = tmp_path / "project.yaml"
        path.write_text(SNAPSHOT, encoding="utf-8")
        return path

    def test_loads_exhibits(self, snapshot_path):
        exhibits = load_directory_snapshot(snapshot_path).get_exhibits()
        assert [e.exhibit_ref for e in exhibits] == ["2B", "5E"]
        assert exhibits[0].is_key_evidence is True
        assert exhibits[0].file_id == "f1"
        assert exhibits[1].exhibit_type is ExhibitType.VIDEO

    def test_loads_files(self, snapshot_path):
        files = load_directory_snapshot(str(snapshot_path)).get_files()
        assert [f.id for f in files] == ["f1", "v1"]
        assert files[1].is_time_based is True
        assert files[0].exhibit_ref == "2B"

    def test_missing_file_gives_empty_directory(self, tmp_path):
        directory = load_directory_snapshot(tmp_path / "nope.yaml")
        assert directory.get_exhibits() == []
        assert directory.get_files() == []

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_directory_snapshot(path).get_exhibits() == []
