"""Redis implementation of HistoryStoragePort.

Stores the whole history in one hash: field = citation reference,
value = JSON-encoded entry.
"""
import json
import logging
from typing import List

import redis

from citelink.core.exceptions import StorageError
from citelink.core.models.history import CitationHistoryEntry
from citelink.core.ports.history_storage import HistoryStoragePort

logger = logging.getLogger(__name__)


class RedisHistoryStore(HistoryStoragePort):
    """Redis implementation of HistoryStoragePort.

    Args:
        redis_client: Configured redis.Redis instance
        key: Hash key holding the history (default: "citation_history")
    """

    def __init__(self, redis_client, key: str = "citation_history"):
        self._redis = redis_client
        self._key = key

    def load_entries(self) -> List[CitationHistoryEntry]:
        """Load and decode every entry in the hash."""
        try:
            raw = self._redis.hgetall(self._key) or {}
        except redis.RedisError as e:
            raise StorageError(f"Failed to load history from {self._key}: {e}") from e

        entries = []
        for field, value in raw.items():
            try:
                entries.append(CitationHistoryEntry.from_dict(json.loads(value)))
            except (ValueError, KeyError, TypeError) as e:
                logger.warning(f"Skipping corrupt history entry {field!r}: {e}")
        return entries

    def save_entry(self, entry: CitationHistoryEntry) -> None:
        """Write one entry into the hash."""
        try:
            self._redis.hset(self._key, entry.citation_reference, json.dumps(entry.to_dict()))
        except redis.RedisError as e:
            raise StorageError(f"Failed to save history for {entry.citation_reference}: {e}") from e

    def clear(self) -> None:
        """Delete the hash."""
        try:
            self._redis.delete(self._key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to clear history {self._key}: {e}") from e
