"""Citation history storage adapters."""
from citelink.adapters.storage.memory_history import InMemoryHistoryStore
from citelink.adapters.storage.redis_history import RedisHistoryStore

__all__ = ["InMemoryHistoryStore", "RedisHistoryStore"]
