from __future__ import annotations

from datetime import UTC, datetime

from pebbles.api.models import CounterTurnEvent, Difficulty, GamePhase, GameState, PebblesEvent, Player
from pebbles.core.errors import InvalidGameConfigError
from pebbles.random_source import RandomSource
from pebbles.turn_processing.strategy import program_pebbles_taken, select_first_player


def _now() -> datetime:
    return datetime.now(tz=UTC)


def validate_game_config(*, pebbles_count: int, max_pebbles_per_turn: int) -> None:
    if pebbles_count <= 0:
        raise InvalidGameConfigError("pebbles_count must be greater than 0")
    if max_pebbles_per_turn <= 0:
        raise InvalidGameConfigError("max_pebbles_per_turn must be greater than 0")


def opening_pebbles_remaining(
    *,
    pebbles_count: int,
    max_pebbles_per_turn: int,
    difficulty: Difficulty,
    first_player: Player,
    rng: RandomSource,
) -> tuple[int, list[PebblesEvent]]:
    """Return the pile size the user faces first, plus the program's opening move (if any)."""

    if first_player == Player.user:
        return pebbles_count, []

    taken = program_pebbles_taken(
        pebbles_remaining=pebbles_count,
        max_pebbles_per_turn=max_pebbles_per_turn,
        difficulty=difficulty,
        rng=rng,
    )
    return pebbles_count - taken, [CounterTurnEvent(pebbles=taken)]


def new_game(
    *,
    pebbles_count: int,
    max_pebbles_per_turn: int,
    difficulty: Difficulty,
    rng: RandomSource,
    round_number: int = 1,
) -> tuple[GameState, list[PebblesEvent]]:
    """Build a fresh round. Used for the initial game and for every restart.

    Nothing is persisted here; the caller decides whether to commit the result.
    """

    validate_game_config(pebbles_count=pebbles_count, max_pebbles_per_turn=max_pebbles_per_turn)

    first_player = select_first_player(rng=rng)
    pebbles_remaining, events = opening_pebbles_remaining(
        pebbles_count=pebbles_count,
        max_pebbles_per_turn=max_pebbles_per_turn,
        difficulty=difficulty,
        first_player=first_player,
        rng=rng,
    )

    now = _now()
    state = GameState(
        pebbles_count=pebbles_count,
        max_pebbles_per_turn=max_pebbles_per_turn,
        pebbles_remaining=pebbles_remaining,
        difficulty=difficulty,
        first_player=first_player,
        winner=None,
        phase=GamePhase.in_progress,
        round=round_number,
        created_at=now,
        last_updated_at=now,
    )
    return state, events
