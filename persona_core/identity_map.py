# persona_core/identity_map.py
from __future__ import annotations
from typing import Any, Iterable, Optional

from persona_core.constants import EMAIL_TO_USER_ID
from persona_core.storage.namespace import NamespaceStore, locked
from persona_core.utils import is_numeric


class EmailToUserIDMap:
    """Email → numeric identity cache, filled by the authentication flow."""

    def __init__(self, ns: NamespaceStore):
        self.ns = ns

    @locked
    def update_email_to_user_id_mapping(self, identity_id: int, emails: Iterable[str]) -> None:
        # corrupt or absent data merges as empty
        all_info = self.ns.get(EMAIL_TO_USER_ID)
        for email in emails:
            all_info[email] = identity_id
        self.ns.set(EMAIL_TO_USER_ID, all_info)

    @locked
    def map_email_to_user_id(self, value: Any) -> Optional[Any]:
        if is_numeric(value):
            return value
        if not isinstance(value, str):
            return None
        return self.ns.get(EMAIL_TO_USER_ID).get(value)
