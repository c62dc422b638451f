# persona_core/storage/__init__.py

from .models import TrustRecord, StagedReturnTo
from .namespace import NamespaceStore
from .provider import StorageProvider
from .providers.memory_provider import InMemoryStorage
from .providers.sqlite_provider import SQLiteStorage
from .providers.redis_provider import RedisStorage
import os


def load_storage_provider(config: dict | None = None) -> StorageProvider:
    """
    Factory resolver for selecting the runtime backing store.

        - sqlite (default)
        - memory
        - redis
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("PERSONA_STORAGE_PROVIDER", "sqlite")

    if provider == "memory":
        return InMemoryStorage()

    if provider == "sqlite":
        db_path = config.get("sqlite_path") or os.getenv("PERSONA_DB_PATH", "db/persona_state.db")
        return SQLiteStorage(db_path)

    if provider == "redis":
        url = config.get("redis_url") or os.getenv("PERSONA_REDIS_URL", "redis://localhost:6379/0")
        prefix = config.get("key_prefix") or os.getenv("PERSONA_KEY_PREFIX", "")
        return RedisStorage(url, prefix=prefix)

    raise ValueError(f"Unknown storage provider: {provider}")


__all__ = [
    "TrustRecord",
    "StagedReturnTo",
    "NamespaceStore",
    "StorageProvider",
    "InMemoryStorage",
    "SQLiteStorage",
    "RedisStorage",
    "load_storage_provider",
]
