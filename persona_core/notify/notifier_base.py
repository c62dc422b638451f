from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional
import time

from persona_core.logger import get_logger

log = get_logger("persona.notify")


@dataclass
class ChangeEvent:
    """A backing-store key was written by some execution context."""
    key: Optional[str] = None       # None when the source cannot tell (polling)
    origin: Optional[str] = None    # context id of the writer
    ts_ms: int = field(default_factory=lambda: int(time.time() * 1000))


Handler = Callable[[ChangeEvent], None]


class BaseNotifier:
    """
    Change-notification capability.

    ``publish`` is called by the namespace layer after every write made by
    this context; ``subscribe`` registers a handler that fires when another
    context changes the shared store. Notifiers that cannot observe other
    contexts directly set ``supports_events = False``.
    """
    name: str = "base"
    supports_events: bool = True

    def __init__(self):
        self.handlers: List[Handler] = []

    def publish(self, key: str) -> None:
        raise NotImplementedError

    def subscribe(self, handler: Handler) -> None:
        self.handlers.append(handler)

    def close(self) -> None:
        return

    def _dispatch(self, event: ChangeEvent) -> None:
        for handler in list(self.handlers):
            try:
                handler(event)
            except Exception:
                log.exception(f"[{self.name.upper()}] change handler failed key={event.key}")
