# persona_core/return_to.py
from __future__ import annotations
import time
from typing import Optional

from persona_core.constants import RETURN_TO, RETURN_TO_TTL_S
from persona_core.logger import get_logger
from persona_core.storage.models import StagedReturnTo
from persona_core.storage.namespace import NamespaceStore, locked
from persona_core.utils import decode_or_default, now_ts, parse_ts

log = get_logger("persona.return_to")


class ReturnToStaging:
    """A single staged redirect URL, honoured for five minutes."""

    def __init__(self, ns: NamespaceStore, clock=time.time):
        self.ns = ns
        self.clock = clock

    @locked
    def set_return_to(self, url: str) -> None:
        staged = StagedReturnTo(url=url, staged_at=now_ts(self.clock))
        self.ns.set(RETURN_TO, staged.to_dict())

    @locked
    def get_return_to(self) -> Optional[str]:
        raw = self.ns.provider.get(RETURN_TO)
        if raw is None or raw == "null":
            # nothing staged
            return None

        value, corrupt = decode_or_default(raw, None, dict)
        reason = None
        if corrupt:
            reason = "unreadable"
        else:
            staged = StagedReturnTo.from_dict(value)
            staged_at = parse_ts(staged.staged_at)
            if staged_at is None or self.clock() - staged_at > RETURN_TO_TTL_S:
                reason = "stale"
            elif not isinstance(staged.url, str):
                reason = "malformed"
            else:
                return staged.url

        log.debug(f"[RETURN_TO] discarding staged value ({reason})")
        self.ns.remove(RETURN_TO)
        return None
