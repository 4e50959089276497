"""Abstract interfaces for external dependencies."""
from citelink.core.ports.directory import ExhibitDirectoryPort
from citelink.core.ports.editor import EditorHostPort
from citelink.core.ports.history_storage import HistoryStoragePort

__all__ = [
    "ExhibitDirectoryPort",
    "EditorHostPort",
    "HistoryStoragePort",
]
