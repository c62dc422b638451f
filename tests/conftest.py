import fnmatch
import time
import pytest

from persona_core import ClientStorage
from persona_core.storage import InMemoryStorage


class FakeClock:
    """Simulated wall clock in POSIX seconds."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakePubSub:
    def __init__(self, server):
        self.server = server
        self.channels = []
        self.closed = False

    def subscribe(self, channel):
        self.channels.append(channel)

    def get_message(self, timeout=None):
        time.sleep(timeout or 0)
        return None

    def close(self):
        self.closed = True


class FakeRedis:
    """Just enough of redis.Redis for the providers under test."""

    def __init__(self):
        self.data = {}
        self.published = []

    def ping(self):
        return True

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True

    def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    def scan_iter(self, match="*"):
        return [k for k in list(self.data) if fnmatch.fnmatch(k, match)]

    def publish(self, channel, data):
        self.published.append((channel, data))
        return 0

    def pubsub(self, ignore_subscribe_messages=False):
        return FakePubSub(self)

    def close(self):
        return


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backing():
    return InMemoryStorage()


@pytest.fixture
def store(backing, clock):
    return ClientStorage(backing, clock=clock)


@pytest.fixture
def fake_redis():
    return FakeRedis()
