# persona_core/notify/notifier_redis.py
from __future__ import annotations
import json
import threading
from typing import Optional

import redis

from persona_core.logger import get_logger
from persona_core.notify.notifier_base import BaseNotifier, ChangeEvent
from persona_core.utils import new_id

log = get_logger("persona.notify.redis")


class RedisNotifier(BaseNotifier):
    """
    Cross-process change events over a Redis pub/sub channel.

    Each write publishes ``{"key", "origin"}``; a daemon thread listens on the
    channel and dispatches events whose origin is another context.
    """
    name = "redis"

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        channel: str = "persona:changes",
        context_id: Optional[str] = None,
        client=None,
        poll_timeout: float = 1.0,
    ):
        super().__init__()
        self.url = url
        self.channel = channel
        self.context_id = context_id or new_id()
        self.client = client or redis.Redis.from_url(url, decode_responses=True)
        self.poll_timeout = poll_timeout
        self._pubsub = None
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    def publish(self, key: str) -> None:
        data = json.dumps({"key": key, "origin": self.context_id})
        try:
            self.client.publish(self.channel, data)
            log.debug(f"[REDIS PUB] channel={self.channel} key={key}")
        except redis.RedisError:
            # Notification is advisory; the write itself already landed.
            log.exception(f"[REDIS PUB ERROR] channel={self.channel} key={key}")

    def subscribe(self, handler) -> None:
        super().subscribe(handler)
        if self._thread is None:
            self._pubsub = self.client.pubsub(ignore_subscribe_messages=True)
            self._pubsub.subscribe(self.channel)
            self._thread = threading.Thread(target=self._listen, daemon=True)
            self._thread.start()
            log.info(f"[REDIS SUB] listening channel={self.channel}")

    def handle_message(self, message) -> None:
        if not message or message.get("type") != "message":
            return
        data = message.get("data")
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        try:
            body = json.loads(data)
        except (TypeError, ValueError):
            log.warning(f"[REDIS SUB] malformed event {data!r}")
            return
        if not isinstance(body, dict) or body.get("origin") == self.context_id:
            return
        self._dispatch(ChangeEvent(key=body.get("key"), origin=body.get("origin")))

    def _listen(self) -> None:
        try:
            while not self._stop.is_set():
                message = self._pubsub.get_message(timeout=self.poll_timeout)
                self.handle_message(message)
        except redis.RedisError:
            log.exception(f"[REDIS SUB] listener failed channel={self.channel}")
        finally:
            log.info(f"[REDIS SUB] listener ended channel={self.channel}")

    def close(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.poll_timeout * 2)
        if self._pubsub is not None:
            self._pubsub.close()
