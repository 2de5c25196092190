from __future__ import annotations

from pebbles.api.models import CounterTurnEvent, GameState, PebblesEvent, Player, WonEvent
from pebbles.random_source import RandomSource
from pebbles.turn_processing.strategy import program_pebbles_taken


def apply_user_turn(*, state: GameState, pebbles: int, rng: RandomSource) -> PebblesEvent:
    """Apply a validated user turn and the program's reply, in place.

    The winner is checked after each half-move: the user emptying the pile wins
    immediately and the program does not move.
    """

    state.pebbles_remaining -= pebbles
    if state.pebbles_remaining == 0:
        state.winner = Player.user
        return WonEvent(player=Player.user)

    taken = program_pebbles_taken(
        pebbles_remaining=state.pebbles_remaining,
        max_pebbles_per_turn=state.max_pebbles_per_turn,
        difficulty=state.difficulty,
        rng=rng,
    )
    state.pebbles_remaining -= taken
    if state.pebbles_remaining == 0:
        state.winner = Player.program
        return WonEvent(player=Player.program)

    return CounterTurnEvent(pebbles=taken)


def apply_give_up(*, state: GameState) -> PebblesEvent:
    # Conceding only decides the outcome; the pile stays as it was.
    state.winner = Player.program
    return WonEvent(player=Player.program)
