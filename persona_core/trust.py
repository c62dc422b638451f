"""
persona_core.trust
------------------
Device trust: per identity, is this computer the user's own?

The answer picks the session duration used by callers. Each identity moves
through a small state machine stored in ``usersComputer``:

- no record  → initial; ``seen`` is recorded on first sighting
- ``seen``   → ask once the user has been around for more than a minute
- ``confirmed`` → never ask again
- ``denied`` → ask again after 24 hours; an expired denial is forgotten
- ``ask``    → forced by ``set_user_must_confirm_computer`` only

Unreadable records are never surfaced to callers. A transition treats one as
if the identity had never been seen.
"""

from __future__ import annotations
import time
from typing import Any, Optional

from persona_core.constants import (
    ONE_DAY_S,
    ONE_MINUTE_S,
    STATE_ASK,
    STATE_CONFIRMED,
    STATE_DENIED,
    STATE_SEEN,
    USERS_COMPUTER,
    VALID_STATES,
)
from persona_core.errors import InvalidIdentity, InvalidState
from persona_core.identity_map import EmailToUserIDMap
from persona_core.logger import get_logger
from persona_core.storage.models import TrustRecord
from persona_core.storage.namespace import NamespaceStore, locked
from persona_core.utils import identity_key, is_numeric, now_ts, parse_ts

log = get_logger("persona.trust")


class DeviceTrustEngine:
    def __init__(self, ns: NamespaceStore, identities: EmailToUserIDMap, clock=time.time):
        self.ns = ns
        self.identities = identities
        self.clock = clock

    def _load_all(self) -> dict:
        all_info, corrupt = self.ns.read(USERS_COMPUTER)
        if corrupt:
            log.warning("[TRUST] corrupt usersComputer; starting empty")
        return all_info

    def _age(self, record: TrustRecord) -> float:
        return self.clock() - record.updated_at

    @locked
    def set_confirmation_state(self, identity: Any, state: str) -> None:
        userid = self.identities.map_email_to_user_id(identity)
        if not is_numeric(userid):
            raise InvalidIdentity(identity)
        if state not in VALID_STATES:
            raise InvalidState(state)

        key = identity_key(userid)
        all_info = self._load_all()

        current: Optional[TrustRecord] = None
        raw = all_info.get(key)
        if raw is not None:
            current = TrustRecord.from_dict(raw)
            if current is None:
                log.warning(f"[TRUST] unusable record for {key}; discarding")
                del all_info[key]

        # a stale "not my computer" answer must be asked again
        if current is not None and current.state == STATE_DENIED and self._age(current) > ONE_DAY_S:
            current = None

        # "seen" never overwrites a more specific answer
        if state == STATE_SEEN and current is not None:
            return

        all_info[key] = TrustRecord(state=state, updated=now_ts(self.clock)).to_dict()
        self.ns.set(USERS_COMPUTER, all_info)
        log.debug(f"[TRUST] {key} -> {state}")

    @locked
    def should_ask_user_about_her_computer(self, identity: Any) -> bool:
        # Never ask on behalf of a caller that has no numeric identity.
        if not is_numeric(identity):
            return False

        userid = self.identities.map_email_to_user_id(identity)
        all_info, corrupt = self.ns.read(USERS_COMPUTER)
        if corrupt:
            return True
        record = all_info.get(identity_key(userid))
        if not isinstance(record, dict):
            return True

        state = record.get("state")
        if state == STATE_ASK:
            return True
        if state == STATE_CONFIRMED:
            return False

        # an unparsable timestamp never counts as expired
        updated = parse_ts(record.get("updated"))
        if updated is None:
            return False
        age = self.clock() - updated
        if state == STATE_DENIED and age > ONE_DAY_S:
            return True
        if state == STATE_SEEN and age > ONE_MINUTE_S:
            return True
        return False

    @locked
    def user_confirmed_on_computer(self, identity: Any) -> bool:
        userid = self.identities.map_email_to_user_id(identity)
        if userid is None:
            return False
        all_info, corrupt = self.ns.read(USERS_COMPUTER)
        if corrupt:
            return False
        record = all_info.get(identity_key(userid))
        return isinstance(record, dict) and record.get("state") == STATE_CONFIRMED

    @locked
    def set_user_seen_on_computer(self, identity: Any) -> None:
        self.set_confirmation_state(identity, STATE_SEEN)

    @locked
    def set_user_confirmed_on_computer(self, identity: Any) -> None:
        self.set_confirmation_state(identity, STATE_CONFIRMED)

    @locked
    def set_not_my_computer(self, identity: Any) -> None:
        self.set_confirmation_state(identity, STATE_DENIED)

    @locked
    def set_user_must_confirm_computer(self, identity: Any) -> None:
        """Force the next ``should_ask`` to answer True. Best effort."""
        try:
            userid = self.identities.map_email_to_user_id(identity)
            if not is_numeric(userid):
                log.warning(f"[TRUST] force ask skipped, unresolved identity {identity!r}")
                return
            all_info = self._load_all()
            all_info[identity_key(userid)] = TrustRecord(state=STATE_ASK, updated=now_ts(self.clock)).to_dict()
            self.ns.set(USERS_COMPUTER, all_info)
        except Exception:
            log.exception(f"[TRUST] force ask failed for {identity!r}")

    @locked
    def clear_users_computer_ownership_status(self, identity: Any) -> None:
        """Forget the record stored under ``identity`` as given. Best effort."""
        try:
            all_info, corrupt = self.ns.read(USERS_COMPUTER)
            if corrupt:
                return
            key = identity_key(identity)
            if key in all_info:
                del all_info[key]
                self.ns.set(USERS_COMPUTER, all_info)
        except Exception:
            log.exception(f"[TRUST] clear failed for {identity!r}")

    # names used by the client-facing ``users_computer`` object
    confirmed = user_confirmed_on_computer
    set_confirmed = set_user_confirmed_on_computer
    set_denied = set_not_my_computer
    should_ask = should_ask_user_about_her_computer
    set_seen = set_user_seen_on_computer
    clear = clear_users_computer_ownership_status
    force_ask = set_user_must_confirm_computer
