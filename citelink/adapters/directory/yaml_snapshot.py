"""
Project snapshot loader.

Reads a YAML file describing one project's exhibits and files:

    exhibits:
      - exhibit_ref: 2B
        title: Contract
        exhibit_type: document
        file_id: f1
        is_key_evidence: true
    files:
      - id: f1
        name: contract.pdf
        file_type: pdf
        exhibit_ref: 2B
"""
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from citelink.adapters.directory.in_memory import InMemoryExhibitDirectory
from citelink.core.models.exhibit import ExhibitDirectoryEntry, ExhibitType, FileRecord

logger = logging.getLogger(__name__)


def _exhibit_from_dict(data: Dict[str, Any]) -> ExhibitDirectoryEntry:
    return ExhibitDirectoryEntry(
        exhibit_ref=str(data["exhibit_ref"]),
        title=str(data.get("title") or ""),
        exhibit_type=ExhibitType.from_value(data.get("exhibit_type")),
        file_id=data.get("file_id"),
        is_key_evidence=bool(data.get("is_key_evidence", False)),
        description=data.get("description"),
    )


def _file_from_dict(data: Dict[str, Any]) -> FileRecord:
    exhibit_ref = data.get("exhibit_ref")
    return FileRecord(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        file_type=str(data.get("file_type") or "document"),
        exhibit_ref=str(exhibit_ref) if exhibit_ref is not None else None,
    )


def load_directory_snapshot(path: Union[str, Path]) -> InMemoryExhibitDirectory:
    """
    Load a project snapshot into an in-memory directory.

    Args:
        path: YAML snapshot file

    Returns:
        InMemoryExhibitDirectory (empty if the file is missing)
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Project snapshot not found: {path}")
        return InMemoryExhibitDirectory()

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    exhibits = []
    for item in data.get("exhibits") or []:
        if isinstance(item, dict) and item.get("exhibit_ref"):
            exhibits.append(_exhibit_from_dict(item))
        else:
            logger.warning(f"Skipping unrecognized exhibit entry: {item!r}")

    files = []
    for item in data.get("files") or []:
        if isinstance(item, dict) and item.get("id"):
            files.append(_file_from_dict(item))
        else:
            logger.warning(f"Skipping unrecognized file entry: {item!r}")

    logger.info(f"Loaded snapshot {path.name}: {len(exhibits)} exhibits, {len(files)} files")
    return InMemoryExhibitDirectory(exhibits=exhibits, files=files)
