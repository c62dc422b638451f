# persona_core/notify/__init__.py
import os
from persona_core.notify.notifier_base import BaseNotifier, ChangeEvent
from persona_core.notify.notifier_local import LocalBus, LocalNotifier
from persona_core.notify.notifier_polling import PollingNotifier
from persona_core.notify.notifier_redis import RedisNotifier


def notifier_factory(config: dict | None = None) -> BaseNotifier:
    """
    mode:
      - "local"   → in-process bus (contexts sharing one process)
      - "redis"   → pub/sub channel next to a RedisStorage backing store
      - "polling" → no change events; re-read on a fixed interval
    """
    config = config or {}
    mode = (config.get("notifier") or os.getenv("PERSONA_NOTIFIER", "polling")).lower()

    if mode == "local":
        return LocalNotifier(bus=config.get("bus"), context_id=config.get("context_id"))

    if mode == "redis":
        return RedisNotifier(
            url=config.get("redis_url") or os.getenv("PERSONA_REDIS_URL", "redis://localhost:6379/0"),
            channel=config.get("channel") or os.getenv("PERSONA_CHANNEL", "persona:changes"),
            context_id=config.get("context_id"),
        )

    if mode == "polling":
        interval = config.get("poll_interval") or os.getenv("PERSONA_POLL_INTERVAL")
        return PollingNotifier(float(interval)) if interval else PollingNotifier()

    raise ValueError(f"Unknown notifier: {mode}")


__all__ = [
    "BaseNotifier",
    "ChangeEvent",
    "LocalBus",
    "LocalNotifier",
    "PollingNotifier",
    "RedisNotifier",
    "notifier_factory",
]
