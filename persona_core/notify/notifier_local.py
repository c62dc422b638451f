# persona_core/notify/notifier_local.py
from __future__ import annotations
from typing import List, Optional

from persona_core.logger import get_logger
from persona_core.notify.notifier_base import BaseNotifier, ChangeEvent
from persona_core.utils import new_id

log = get_logger("persona.notify.local")


class LocalBus:
    """In-process fan-out shared by every context attached to one store."""

    def __init__(self):
        self.members: List["LocalNotifier"] = []

    def attach(self, notifier: "LocalNotifier") -> None:
        self.members.append(notifier)

    def deliver(self, event: ChangeEvent) -> None:
        for member in list(self.members):
            if member.context_id != event.origin:
                member._dispatch(event)


class LocalNotifier(BaseNotifier):
    """
    Delivers change events between contexts living in one process.

    Dispatch is synchronous on the writer's call stack; the writer itself
    never receives its own events.
    """
    name = "local"

    def __init__(self, bus: Optional[LocalBus] = None, context_id: Optional[str] = None):
        super().__init__()
        self.bus = bus or LocalBus()
        self.context_id = context_id or new_id()
        self.bus.attach(self)

    def publish(self, key: str) -> None:
        log.debug(f"LOCAL PUB key={key} origin={self.context_id}")
        self.bus.deliver(ChangeEvent(key=key, origin=self.context_id))
