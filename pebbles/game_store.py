from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import cast

import redis

from pebbles.api.models import GameState, PebblesEvent
from pebbles.core.errors import GameNotFoundError
from pebbles.streams import EVENTS_STREAM_KEY, event_fields

logger = logging.getLogger(__name__)

GAME_KEY = "pebbles:game"


def _now() -> datetime:
    return datetime.now(tz=UTC)


def get_game(*, r: redis.Redis) -> GameState | None:
    raw = r.get(GAME_KEY)
    if not raw:
        return None
    return GameState.model_validate_json(raw)


def require_game(*, r: redis.Redis) -> GameState:
    state = get_game(r=r)
    if state is None:
        raise GameNotFoundError("Game not found")
    return state


def game_exists(*, r: redis.Redis) -> bool:
    return bool(r.exists(GAME_KEY))


def commit_game(*, r: redis.Redis, state: GameState, events: Sequence[PebblesEvent]) -> list[str]:
    """Persist `state` and append `events` to the event stream in one MULTI/EXEC.

    Either both land or neither does, so a failed notification never leaves a
    half-applied move behind. Returns the stream entry ids.
    """

    state.last_updated_at = _now()
    with r.pipeline(transaction=True) as pipe:
        pipe.set(GAME_KEY, state.model_dump_json())
        for event in events:
            pipe.xadd(EVENTS_STREAM_KEY, event_fields(event=event, round_number=state.round))
        results = pipe.execute()

    ids = [cast(str, sid) for sid in results[1:]]
    logger.debug(
        "committed game round=%s remaining=%s winner=%s events=%s",
        state.round,
        state.pebbles_remaining,
        state.winner,
        ids,
    )
    return ids
