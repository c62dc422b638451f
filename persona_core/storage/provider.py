# persona_core/storage/provider.py
from __future__ import annotations
from typing import Iterable, Optional


class StorageProvider:
    """
    Raw backing key-value store capability.

    Keys and values are strings; values are JSON text written by the
    namespace layer. Providers perform no decoding of their own.
    """
    name: str = "base"

    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
    def keys(self) -> Iterable[str]: ...

    def close(self) -> None:
        return
