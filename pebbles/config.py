from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PebblesSettings:
    redis_url: str
    lock_ttl_ms: int
    # None => OS entropy; an int makes every draw reproducible.
    random_seed: int | None
    log_level: str


def _int_from_env(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from e


def settings_from_env() -> PebblesSettings:
    lock_ttl_ms = _int_from_env("PEBBLES_LOCK_TTL_MS")
    return PebblesSettings(
        redis_url=os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
        lock_ttl_ms=5_000 if lock_ttl_ms is None else lock_ttl_ms,
        random_seed=_int_from_env("PEBBLES_RANDOM_SEED"),
        log_level=os.environ.get("PEBBLES_LOG_LEVEL", "INFO").upper(),
    )
