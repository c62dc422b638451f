"""
persona_core.storage.namespace
------------------------------
Namespace convention over the raw key-value store.

Each recognised namespace is one top-level key holding one JSON-encoded
collection. Readers never observe a missing key, only an empty collection:
defaults are seeded at construction and again after every full clear, since
another context may observe the store before this context's writes land.
"""

from __future__ import annotations
import copy
import functools
import threading
from typing import Any, Dict, Optional, Tuple

from persona_core.constants import CLEARED_NAMESPACES, NAMESPACE_DEFAULTS
from persona_core.logger import get_logger
from persona_core.storage.provider import StorageProvider
from persona_core.utils import decode_or_default, encode

log = get_logger("persona.storage")


def locked(method):
    """Run a registry method under its namespace store's context lock."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.ns.lock:
            return method(self, *args, **kwargs)
    return wrapper


class NamespaceStore:
    def __init__(self, provider: StorageProvider, notifier=None, defaults: Optional[Dict[str, Any]] = None):
        self.provider = provider
        self.notifier = notifier
        self.defaults = dict(NAMESPACE_DEFAULTS if defaults is None else defaults)
        # serialises this context's operations with its watch callbacks
        self.lock = threading.RLock()

    def default_for(self, namespace: str) -> Any:
        return copy.deepcopy(self.defaults.get(namespace, {}))

    def read(self, namespace: str) -> Tuple[Any, bool]:
        """Typed decode: ``(value, was_corrupt)``; object namespaces must hold a dict."""
        default = self.default_for(namespace)
        expected = dict if isinstance(default, dict) else None
        return decode_or_default(self.provider.get(namespace), default, expected)

    def get(self, namespace: str) -> Any:
        value, corrupt = self.read(namespace)
        if corrupt:
            log.warning(f"[NS] corrupt namespace={namespace}; reading as default")
        return value

    def set(self, namespace: str, value: Any) -> None:
        self.provider.set(namespace, encode(value))
        log.debug(f"[NS SET] namespace={namespace}")
        if self.notifier is not None:
            self.notifier.publish(namespace)

    def remove(self, namespace: str) -> None:
        self.provider.remove(namespace)
        log.debug(f"[NS DEL] namespace={namespace}")
        if self.notifier is not None:
            self.notifier.publish(namespace)

    def set_default_values(self) -> None:
        with self.lock:
            for namespace, default in self.defaults.items():
                if not self.provider.get(namespace):
                    self.provider.set(namespace, encode(default))

    def clear(self) -> None:
        # loggedIn, usersComputer, emailToUserID and main_site survive a clear
        with self.lock:
            for namespace in CLEARED_NAMESPACES:
                self.remove(namespace)
            self.set_default_values()
        log.info("[NS] cleared emails, siteInfo, managePage")
