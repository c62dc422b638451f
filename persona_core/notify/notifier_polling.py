# persona_core/notify/notifier_polling.py
from __future__ import annotations
import threading
from typing import Optional

from persona_core.constants import POLL_INTERVAL_S
from persona_core.logger import get_logger
from persona_core.notify.notifier_base import BaseNotifier, ChangeEvent

log = get_logger("persona.notify.polling")


class PollingNotifier(BaseNotifier):
    """
    Fallback for hosts without change events: wakes every ``interval``
    seconds and lets subscribers re-read whatever they watch.
    """
    name = "polling"
    supports_events = False

    def __init__(self, interval: float = POLL_INTERVAL_S):
        super().__init__()
        self.interval = interval
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    def publish(self, key: str) -> None:
        return

    def subscribe(self, handler) -> None:
        super().subscribe(handler)
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
            log.debug(f"[POLL] started interval={self.interval}s")

    def tick(self) -> None:
        self._dispatch(ChangeEvent())

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.tick()

    def close(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
