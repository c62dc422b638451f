# persona_core/login.py
from __future__ import annotations
from typing import Callable, Optional

from persona_core.constants import LOGGED_IN
from persona_core.logger import get_logger
from persona_core.notify.notifier_base import BaseNotifier, ChangeEvent
from persona_core.notify.notifier_polling import PollingNotifier
from persona_core.storage.namespace import NamespaceStore, locked

log = get_logger("persona.login")


class LoginTracker:
    """
    Origin → email map of where the user is logged in.

    Watches are driven by the notifier: native change events when the host
    has them, otherwise a 2-second poll of this context's own read.
    """

    def __init__(self, ns: NamespaceStore, notifier: Optional[BaseNotifier] = None):
        self.ns = ns
        self.notifier = notifier
        self._poller: Optional[PollingNotifier] = None

    @locked
    def set_logged_in(self, origin: str, email: Optional[str]) -> None:
        all_info = self.ns.get(LOGGED_IN)
        if email:
            all_info[origin] = email
        else:
            all_info.pop(origin, None)
        self.ns.set(LOGGED_IN, all_info)

    @locked
    def get_logged_in(self, origin: str) -> Optional[str]:
        return self.ns.get(LOGGED_IN).get(origin)

    @locked
    def logged_in_count(self) -> int:
        return len(self.ns.get(LOGGED_IN))

    @locked
    def logout_everywhere(self) -> None:
        self.ns.set(LOGGED_IN, {})
        log.info("[LOGIN] logged out everywhere")

    def _event_source(self) -> BaseNotifier:
        if self.notifier is not None:
            return self.notifier
        if self._poller is None:
            self._poller = PollingNotifier()
        return self._poller

    @locked
    def watch_logged_in(self, origin: str, callback: Callable[[], None]) -> None:
        """
        Call ``callback()`` once for every observed change of ``origin``'s login.

        The re-read and the callback run under the context lock, so a callback
        never interleaves with this context's own operations. The baseline
        moves after the callback returns, or raises.
        """
        last_state = self.get_logged_in(origin)

        def check_state(event: ChangeEvent) -> None:
            nonlocal last_state
            if event.key not in (None, LOGGED_IN):
                return
            with self.ns.lock:
                current_state = self.get_logged_in(origin)
                if current_state == last_state:
                    return
                try:
                    callback()
                finally:
                    last_state = current_state

        self._event_source().subscribe(check_state)
        log.debug(f"[LOGIN] watching origin={origin}")

    def close(self) -> None:
        if self._poller is not None:
            self._poller.close()
