"""Exhibit directory adapters."""
from citelink.adapters.directory.in_memory import InMemoryExhibitDirectory
from citelink.adapters.directory.yaml_snapshot import load_directory_snapshot

__all__ = ["InMemoryExhibitDirectory", "load_directory_snapshot"]
