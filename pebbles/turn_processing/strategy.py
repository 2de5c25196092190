from __future__ import annotations

from pebbles.api.models import Difficulty, Player
from pebbles.random_source import RandomSource


def program_pebbles_taken(
    *,
    pebbles_remaining: int,
    max_pebbles_per_turn: int,
    difficulty: Difficulty,
    rng: RandomSource,
) -> int:
    """How many pebbles the program removes from a pile of `pebbles_remaining`.

    - easy: uniform draw in 1..max_pebbles_per_turn, capped at what is left.
    - hard: leave the user on a multiple of (max_pebbles_per_turn + 1). From such a
      position there is no winning move, so concede a single pebble.

    Callers only ask with pebbles_remaining > 0; the result is then in 1..pebbles_remaining.
    """

    if difficulty == Difficulty.easy:
        return min(rng.next_u32() % max_pebbles_per_turn + 1, pebbles_remaining)

    optimal = pebbles_remaining % (max_pebbles_per_turn + 1)
    if optimal == 0:
        return 1
    return optimal


def select_first_player(*, rng: RandomSource) -> Player:
    if rng.next_u32() % 2 == 0:
        return Player.user
    return Player.program
