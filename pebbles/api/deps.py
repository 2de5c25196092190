from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

import redis

from pebbles.config import PebblesSettings, settings_from_env
from pebbles.infra.redis_client import create_redis
from pebbles.random_source import RandomSource, random_source_from_settings


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        try:
            client.close()
        except Exception:
            # Some redis client versions don't require explicit close.
            pass


@lru_cache(maxsize=1)
def get_settings() -> PebblesSettings:
    return settings_from_env()


@lru_cache(maxsize=1)
def _process_random_source() -> RandomSource:
    # One source per process so a seeded run keeps advancing instead of replaying the same draws.
    return random_source_from_settings(get_settings())


def get_random_source() -> RandomSource:
    return _process_random_source()
