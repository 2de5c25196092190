from __future__ import annotations

import os
from collections import deque
from pathlib import Path

import pytest


class ScriptedRandomSource:
    """Random source that replays queued values, so tests decide who moves first and what easy draws."""

    def __init__(self, *values: int) -> None:
        self._values: deque[int] = deque(values)
        self.draws = 0

    def push(self, *values: int) -> None:
        self._values.extend(values)

    def next_u32(self) -> int:
        if not self._values:
            raise AssertionError("ScriptedRandomSource ran out of values")
        self.draws += 1
        return self._values.popleft()


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    Makes REDIS_URL / PEBBLES_* available to tests without exporting them in your shell.

    In CI, we *don't* auto-load `.env` by default so local overrides can't leak in.
    Opt-in with: PEBBLES_LOAD_DOTENV_FOR_TESTS=1
    """

    if os.environ.get("CI") and os.environ.get("PEBBLES_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def rng() -> ScriptedRandomSource:
    return ScriptedRandomSource()


@pytest.fixture()
def client_and_redis(rng: ScriptedRandomSource):
    """FastAPI TestClient wired to fakeredis and the scripted random source."""

    from collections.abc import Generator

    import fakeredis
    from fastapi.testclient import TestClient

    from pebbles.api.deps import get_random_source, get_redis
    from pebbles.main import app

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    app.dependency_overrides[get_random_source] = lambda: rng
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()


@pytest.fixture()
def redis_client():
    import fakeredis

    return fakeredis.FakeRedis(decode_responses=True)
