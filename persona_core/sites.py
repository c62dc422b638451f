# persona_core/sites.py
from __future__ import annotations
from typing import Any, Optional

from persona_core.constants import MAIN_SITE, MANAGE_PAGE, SITE_INFO
from persona_core.emails import EmailRegistry
from persona_core.errors import UnknownEmail
from persona_core.storage.namespace import NamespaceStore, locked


class SiteRegistry:
    """Per-site key/value bags. A site's ``email`` must name a known identity."""

    def __init__(self, ns: NamespaceStore, emails: EmailRegistry):
        self.ns = ns
        self.emails = emails

    @locked
    def set(self, site: str, key: str, value: Any) -> None:
        if key == "email" and (not isinstance(value, str) or self.emails.get_email(value) is None):
            raise UnknownEmail(value)

        all_info = self.ns.get(SITE_INFO)
        info = all_info.get(site)
        if not isinstance(info, dict):
            info = all_info[site] = {}
        info[key] = value
        self.ns.set(SITE_INFO, all_info)

    @locked
    def get(self, site: str, key: str) -> Optional[Any]:
        info = self.ns.get(SITE_INFO).get(site)
        if not isinstance(info, dict):
            return None
        return info.get(key)

    @locked
    def remove(self, site: str, key: str) -> None:
        all_info = self.ns.get(SITE_INFO)
        info = all_info.get(site)
        if info is None:
            return
        if isinstance(info, dict):
            info.pop(key, None)
        # no empty bags persist
        if not info:
            del all_info[site]
        self.ns.set(SITE_INFO, all_info)

    @locked
    def count(self) -> int:
        return len(self.ns.get(SITE_INFO))


class TwoKeyStore:
    """Flat key/value bag stored in one namespace."""

    def __init__(self, ns: NamespaceStore, namespace: str):
        self.ns = ns
        self.namespace = namespace

    @locked
    def set(self, key: str, value: Any) -> None:
        all_info = self.ns.get(self.namespace)
        all_info[key] = value
        self.ns.set(self.namespace, all_info)

    @locked
    def get(self, key: str) -> Optional[Any]:
        return self.ns.get(self.namespace).get(key)

    @locked
    def remove(self, key: str) -> None:
        all_info = self.ns.get(self.namespace)
        all_info.pop(key, None)
        self.ns.set(self.namespace, all_info)


class BoundKeyStore:
    """One fixed key inside a namespace, e.g. ``main_site.signInEmail``."""

    def __init__(self, ns: NamespaceStore, namespace: str, key: str):
        self.store = TwoKeyStore(ns, namespace)
        self.key = key

    def set(self, value: Any) -> None:
        self.store.set(self.key, value)

    def get(self) -> Optional[Any]:
        return self.store.get(self.key)

    def remove(self) -> None:
        self.store.remove(self.key)


def manage_page_store(ns: NamespaceStore) -> TwoKeyStore:
    return TwoKeyStore(ns, MANAGE_PAGE)


def sign_in_email_store(ns: NamespaceStore) -> BoundKeyStore:
    return BoundKeyStore(ns, MAIN_SITE, "signInEmail")
