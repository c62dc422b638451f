# persona_core/storage/providers/redis_provider.py
from typing import Optional, List
import redis
from persona_core.logger import get_logger
from persona_core.storage.provider import StorageProvider

log = get_logger("persona.storage.redis")


class RedisStorage(StorageProvider):
    """
    Backing store on a Redis server, shared by every context that points at
    the same database and key prefix.
    """
    name = "redis"

    def __init__(self, url: str = "redis://localhost:6379/0", prefix: str = "", client=None):
        self.url = url
        self.prefix = prefix
        self.client = client or redis.Redis.from_url(url, decode_responses=True)
        self._test_connection()

    def _test_connection(self):
        try:
            self.client.ping()
            log.info(f"[REDIS] connected url={self.url} prefix={self.prefix!r}")
        except redis.ConnectionError:
            log.exception(f"[REDIS] connection failed url={self.url}")
            raise

    def _k(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.client.get(self._k(key))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self.client.set(self._k(key), value)

    def remove(self, key: str) -> None:
        self.client.delete(self._k(key))

    def keys(self) -> List[str]:
        found = []
        for raw in self.client.scan_iter(match=f"{self.prefix}*"):
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            found.append(raw[len(self.prefix):])
        return sorted(found)

    def close(self):
        self.client.close()
