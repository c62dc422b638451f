"""
persona_core.emails
-------------------
Registry of known email identities and their key material.

Removing an email is the one write that spans three namespaces: the identity
itself, any site association pointing at it, and any login entry naming it.
The cascade completes within the call; it is not atomic across contexts.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from persona_core.constants import EMAILS, KEY_MATERIAL_FIELDS, LOGGED_IN, SITE_INFO
from persona_core.errors import UnknownEmail
from persona_core.logger import get_logger
from persona_core.storage.namespace import NamespaceStore, locked

log = get_logger("persona.emails")


class EmailRegistry:
    def __init__(self, ns: NamespaceStore):
        self.ns = ns

    def _store(self, emails: Dict[str, Any]) -> None:
        self.ns.set(EMAILS, emails)

    @locked
    def get_emails(self) -> Dict[str, Any]:
        emails, corrupt = self.ns.read(EMAILS)
        if corrupt:
            # Other namespaces cannot be trusted to agree with a lost registry.
            log.warning("[EMAILS] corrupt registry; clearing all local state")
            self.ns.clear()
            return {}
        return emails

    @locked
    def get_email_count(self) -> int:
        return len(self.get_emails())

    @locked
    def get_email(self, email: str) -> Optional[Any]:
        return self.get_emails().get(email)

    @locked
    def add_email(self, email: str, key_material: Optional[Dict[str, Any]] = None) -> None:
        emails = self.get_emails()
        emails[email] = key_material if key_material is not None else {}
        self._store(emails)
        log.debug(f"[EMAILS] added {email}")

    @locked
    def remove_email(self, email: str) -> None:
        emails = self.get_emails()
        if email not in emails:
            raise UnknownEmail(email)

        del emails[email]
        self._store(emails)

        site_info = self.ns.get(SITE_INFO)
        for info in site_info.values():
            if isinstance(info, dict) and info.get("email") == email:
                del info["email"]
        self.ns.set(SITE_INFO, site_info)

        logged_in = self.ns.get(LOGGED_IN)
        for origin in [o for o, e in logged_in.items() if e == email]:
            del logged_in[origin]
        self.ns.set(LOGGED_IN, logged_in)

        log.info(f"[EMAILS] removed {email}")

    @locked
    def invalidate_email(self, email: str) -> None:
        """Strip key material but keep the identity known."""
        material = self.get_email(email)
        if material is None:
            raise UnknownEmail(email)
        if isinstance(material, dict):
            for field in KEY_MATERIAL_FIELDS:
                material.pop(field, None)
        self.add_email(email, material)
        log.info(f"[EMAILS] invalidated {email}")
