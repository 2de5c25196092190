from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
import redis

from pebbles.actions import dispatch_action, initialize_game, query_state
from pebbles.api.deps import get_random_source, get_redis, get_settings
from pebbles.api.models import (
    ActionResponse,
    EventLogResponse,
    GameState,
    GiveUpAction,
    InitResponse,
    PebblesInit,
    RestartAction,
    TurnAction,
)
from pebbles.config import PebblesSettings
from pebbles.core.errors import GameAlreadyInitializedError, GameBusyError, GameNotFoundError
from pebbles.random_source import RandomSource
from pebbles.streams import EVENTS_STREAM_KEY, read_recent_events
from pebbles.websocket_hub import hub

router = APIRouter()


def _http_error(e: ValueError) -> HTTPException:
    if isinstance(e, GameNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, (GameBusyError, GameAlreadyInitializedError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.websocket("/ws/game")
async def game_updates_ws(websocket: WebSocket) -> None:
    await hub.connect(websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(websocket)
    except Exception:
        await hub.disconnect(websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=InitResponse, status_code=status.HTTP_201_CREATED)
async def init_game_route(
    payload: PebblesInit,
    r: redis.Redis = Depends(get_redis),
    rng: RandomSource = Depends(get_random_source),
    settings: PebblesSettings = Depends(get_settings),
) -> InitResponse:
    try:
        result = initialize_game(r=r, init=payload, rng=rng, lock_ttl_ms=settings.lock_ttl_ms)
    except ValueError as e:
        raise _http_error(e) from e

    await hub.broadcast({"type": "game_updated", "round": result.state.round})
    return InitResponse(state=result.state, events=result.events)


@router.get("/game", response_model=GameState)
async def get_game_route(
    r: redis.Redis = Depends(get_redis),
    settings: PebblesSettings = Depends(get_settings),
) -> GameState:
    try:
        return query_state(r=r, lock_ttl_ms=settings.lock_ttl_ms)
    except ValueError as e:
        raise _http_error(e) from e


@router.post("/game/actions", response_model=ActionResponse)
async def action_route(
    payload: Annotated[TurnAction | GiveUpAction | RestartAction, Body(discriminator="action")],
    r: redis.Redis = Depends(get_redis),
    rng: RandomSource = Depends(get_random_source),
    settings: PebblesSettings = Depends(get_settings),
) -> ActionResponse:
    try:
        result = dispatch_action(r=r, action=payload, rng=rng, lock_ttl_ms=settings.lock_ttl_ms)
    except ValueError as e:
        raise _http_error(e) from e

    await hub.broadcast(
        {
            "type": "game_updated",
            "round": result.state.round,
            "event": result.event.model_dump(mode="json") if result.event is not None else None,
        }
    )
    return ActionResponse(event=result.event, state=result.state)


@router.get("/game/events", response_model=EventLogResponse)
async def get_events_route(count: int = 20, r: redis.Redis = Depends(get_redis)) -> EventLogResponse:
    """Outbound events (won / counter_turn) in the order they were emitted."""

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    return EventLogResponse(stream=EVENTS_STREAM_KEY, events=read_recent_events(r=r, count=count))
