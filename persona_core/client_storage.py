"""
persona_core.client_storage
---------------------------
One object per execution context wiring every registry over a single backing
store. Defaults are seeded as soon as the object exists, before any reader
can run.

    store = ClientStorage.from_config({"provider": "sqlite", "sqlite_path": "db/state.db"})
    store.add_email("a@example.com", {"pub": "..."})
    store.site.set("https://example.com", "email", "a@example.com")
    store.users_computer.set_seen(42)
"""

from __future__ import annotations
import time
from typing import Any, Callable, Dict, Iterable, Optional

from persona_core.emails import EmailRegistry
from persona_core.identity_map import EmailToUserIDMap
from persona_core.login import LoginTracker
from persona_core.notify import BaseNotifier, notifier_factory
from persona_core.return_to import ReturnToStaging
from persona_core.sites import SiteRegistry, manage_page_store, sign_in_email_store
from persona_core.storage import NamespaceStore, StorageProvider, load_storage_provider
from persona_core.trust import DeviceTrustEngine


class ClientStorage:
    def __init__(
        self,
        provider: Optional[StorageProvider] = None,
        notifier: Optional[BaseNotifier] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.provider = provider if provider is not None else load_storage_provider()
        self.notifier = notifier
        self.ns = NamespaceStore(self.provider, notifier=notifier)
        self.ns.set_default_values()

        self.emails = EmailRegistry(self.ns)
        self.site = SiteRegistry(self.ns, self.emails)
        self.manage_page = manage_page_store(self.ns)
        self.sign_in_email = sign_in_email_store(self.ns)
        self.login = LoginTracker(self.ns, notifier)
        self.identities = EmailToUserIDMap(self.ns)
        self.users_computer = DeviceTrustEngine(self.ns, self.identities, clock=clock)
        self.return_to = ReturnToStaging(self.ns, clock=clock)

    @classmethod
    def from_config(cls, config: dict | None = None, clock: Callable[[], float] = time.time) -> "ClientStorage":
        config = config or {}
        return cls(load_storage_provider(config), notifier_factory(config), clock=clock)

    # emails
    def add_email(self, email: str, key_material: Optional[Dict[str, Any]] = None) -> None:
        self.emails.add_email(email, key_material)

    def get_emails(self) -> Dict[str, Any]:
        return self.emails.get_emails()

    def get_email_count(self) -> int:
        return self.emails.get_email_count()

    def get_email(self, email: str) -> Optional[Any]:
        return self.emails.get_email(email)

    def remove_email(self, email: str) -> None:
        self.emails.remove_email(email)

    def invalidate_email(self, email: str) -> None:
        self.emails.invalidate_email(email)

    # identities
    def update_email_to_user_id_mapping(self, identity_id: int, emails: Iterable[str]) -> None:
        self.identities.update_email_to_user_id_mapping(identity_id, emails)

    def map_email_to_user_id(self, value: Any) -> Optional[Any]:
        return self.identities.map_email_to_user_id(value)

    # login state
    def set_logged_in(self, origin: str, email: Optional[str]) -> None:
        self.login.set_logged_in(origin, email)

    def get_logged_in(self, origin: str) -> Optional[str]:
        return self.login.get_logged_in(origin)

    def logged_in_count(self) -> int:
        return self.login.logged_in_count()

    def watch_logged_in(self, origin: str, callback: Callable[[], None]) -> None:
        self.login.watch_logged_in(origin, callback)

    def logout_everywhere(self) -> None:
        self.login.logout_everywhere()

    # return target
    def set_return_to(self, url: str) -> None:
        self.return_to.set_return_to(url)

    def get_return_to(self) -> Optional[str]:
        return self.return_to.get_return_to()

    # lifecycle
    def clear(self) -> None:
        self.ns.clear()

    def set_default_values(self) -> None:
        self.ns.set_default_values()

    def close(self) -> None:
        self.login.close()
        if self.notifier is not None:
            self.notifier.close()
        self.provider.close()
