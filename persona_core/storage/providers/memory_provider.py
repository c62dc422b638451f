from typing import Optional
from persona_core.storage.provider import StorageProvider


class InMemoryStorage(StorageProvider):
    """Process-local fallback used when no persistent store is available."""
    name = "memory"

    def __init__(self, initial=None):
        self.values = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str):
        self.values[key] = value

    def remove(self, key: str):
        self.values.pop(key, None)

    def keys(self):
        return list(self.values)
