from __future__ import annotations

from datetime import UTC, datetime
from typing import cast

import redis

from pebbles.api.models import CounterTurnEvent, PebblesEvent, StreamEntry, WonEvent

EVENTS_STREAM_KEY = "pebbles:events"


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()


def event_fields(*, event: PebblesEvent, round_number: int) -> dict[str, str]:
    """Flatten an outbound event into Redis Stream fields (strings only)."""

    fields: dict[str, str] = {"type": event.type, "round": str(round_number), "ts": _now_iso()}
    if isinstance(event, WonEvent):
        fields["player"] = event.player.value
    elif isinstance(event, CounterTurnEvent):
        fields["pebbles"] = str(event.pebbles)
    return fields


def read_recent_events(*, r: redis.Redis, count: int) -> list[StreamEntry]:
    """Return the newest `count` events, oldest first."""

    entries = r.xrevrange(EVENTS_STREAM_KEY, max="+", min="-", count=count)
    return [StreamEntry(id=cast(str, mid), fields=dict(fields)) for mid, fields in reversed(entries)]
