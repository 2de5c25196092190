from __future__ import annotations

import time
from contextlib import contextmanager

import redis

from pebbles.core.errors import GameBusyError

GAME_LOCK_KEY = "lock:pebbles:game"


@contextmanager
def game_lock(*, r: redis.Redis, ttl_ms: int = 5_000):
    """Exclusive possession of the singleton game for one call.

    A second caller does not wait: overlapping calls are a host bug, so we
    report them instead of serializing them. The TTL only guards against a
    crashed holder leaving the key behind.
    """

    acquired = r.set(GAME_LOCK_KEY, "1", nx=True, px=ttl_ms)
    if not acquired:
        raise GameBusyError("Game is busy")
    try:
        yield
    finally:
        # Only safe in our single-holder scenario.
        r.delete(GAME_LOCK_KEY)
        # small yield to avoid tight contention in tests
        time.sleep(0)
