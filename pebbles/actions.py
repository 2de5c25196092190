from __future__ import annotations

import logging
from dataclasses import dataclass

import redis

from pebbles.api.models import (
    GameState,
    GiveUpAction,
    PebblesAction,
    PebblesEvent,
    PebblesInit,
    RestartAction,
    TurnAction,
)
from pebbles.core.errors import GameAlreadyInitializedError
from pebbles.fsm import RoundFSM
from pebbles.game_setup import new_game
from pebbles.game_store import commit_game, game_exists, require_game
from pebbles.lock import game_lock
from pebbles.random_source import RandomSource
from pebbles.turn_processing.turns import apply_give_up, apply_user_turn
from pebbles.turn_processing.validators import ValidationContext, pipeline_for_action

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InitResult:
    state: GameState
    events: list[PebblesEvent]
    stream_entry_ids: list[str]


@dataclass(frozen=True, slots=True)
class ActionResult:
    state: GameState
    # None only for a restart where the user moves first.
    event: PebblesEvent | None
    stream_entry_ids: list[str]


def initialize_game(*, r: redis.Redis, init: PebblesInit, rng: RandomSource, lock_ttl_ms: int = 5_000) -> InitResult:
    """Create the singleton game. One-shot: replacing a live game goes through restart."""

    with game_lock(r=r, ttl_ms=lock_ttl_ms):
        if game_exists(r=r):
            raise GameAlreadyInitializedError("Game already initialized; use restart")

        state, events = new_game(
            pebbles_count=init.pebbles_count,
            max_pebbles_per_turn=init.max_pebbles_per_turn,
            difficulty=init.difficulty,
            rng=rng,
        )
        ids = commit_game(r=r, state=state, events=events)

    logger.info(
        "game initialized: pebbles=%s max_per_turn=%s difficulty=%s first_player=%s remaining=%s",
        state.pebbles_count,
        state.max_pebbles_per_turn,
        state.difficulty.value,
        state.first_player.value,
        state.pebbles_remaining,
    )
    return InitResult(state=state, events=events, stream_entry_ids=ids)


def _validation_context(action: PebblesAction) -> ValidationContext:
    if isinstance(action, TurnAction):
        return ValidationContext(action=action.action, pebbles=action.pebbles)
    return ValidationContext(action=action.action)


def dispatch_action(*, r: redis.Redis, action: PebblesAction, rng: RandomSource, lock_ttl_ms: int = 5_000) -> ActionResult:
    """Entry point for every player action.

    Applies an action by:
    - acquiring the game lock
    - loading game state
    - validating the action against the current phase and pile
    - mutating the loaded copy (turn processing / lifecycle)
    - syncing the phase through the FSM
    - committing state + outbound event atomically

    Any exception before the commit leaves the stored game exactly as it was.
    """

    with game_lock(r=r, ttl_ms=lock_ttl_ms):
        state = require_game(r=r)
        ctx = _validation_context(action)
        pipeline_for_action(ctx.action).validate(ctx=ctx, state=state)

        fsm = RoundFSM(state)
        event: PebblesEvent | None

        if isinstance(action, TurnAction):
            event = apply_user_turn(state=state, pebbles=action.pebbles, rng=rng)
            if state.winner is not None:
                fsm.finish()

        elif isinstance(action, GiveUpAction):
            event = apply_give_up(state=state)
            fsm.finish()

        elif isinstance(action, RestartAction):
            fsm.restart()
            state, events = new_game(
                pebbles_count=action.pebbles_count,
                max_pebbles_per_turn=action.max_pebbles_per_turn,
                difficulty=action.difficulty,
                rng=rng,
                round_number=state.round + 1,
            )
            event = events[0] if events else None
            fsm.game = state

        else:
            raise ValueError(f"Unknown action: {action!r}")

        fsm.sync_phase_to_model()
        ids = commit_game(r=r, state=state, events=[event] if event is not None else [])

    logger.info(
        "action=%s round=%s remaining=%s winner=%s event=%s",
        ctx.action,
        state.round,
        state.pebbles_remaining,
        state.winner.value if state.winner else None,
        event.model_dump() if event is not None else None,
    )
    return ActionResult(state=state, event=event, stream_entry_ids=ids)


def query_state(*, r: redis.Redis, lock_ttl_ms: int = 5_000) -> GameState:
    # Reads take the lock too: while another call holds the game it is not observable.
    with game_lock(r=r, ttl_ms=lock_ttl_ms):
        return require_game(r=r)
