from __future__ import annotations

import pytest

from pebbles.api.models import CounterTurnEvent, Difficulty, GamePhase, Player
from pebbles.core.errors import InvalidGameConfigError
from pebbles.game_setup import new_game


@pytest.mark.parametrize(("pebbles_count", "max_per_turn"), [(0, 3), (10, 0), (0, 0)])
def test_zero_config_is_rejected(rng, pebbles_count: int, max_per_turn: int) -> None:
    with pytest.raises(InvalidGameConfigError):
        new_game(pebbles_count=pebbles_count, max_pebbles_per_turn=max_per_turn, difficulty=Difficulty.hard, rng=rng)

    # Validation happens before the first-player draw.
    assert rng.draws == 0


def test_user_first_keeps_full_pile_and_emits_nothing(rng) -> None:
    rng.push(4)

    state, events = new_game(pebbles_count=15, max_pebbles_per_turn=4, difficulty=Difficulty.easy, rng=rng)

    assert state.first_player == Player.user
    assert state.pebbles_remaining == 15
    assert state.winner is None
    assert state.phase == GamePhase.in_progress
    assert state.round == 1
    assert events == []


def test_program_first_hard_opening_move(rng) -> None:
    rng.push(1)

    state, events = new_game(pebbles_count=13, max_pebbles_per_turn=3, difficulty=Difficulty.hard, rng=rng)

    assert state.first_player == Player.program
    assert state.pebbles_remaining == 12
    assert state.pebbles_count == 13
    assert state.winner is None
    assert events == [CounterTurnEvent(pebbles=1)]


def test_program_first_easy_opening_uses_second_draw(rng) -> None:
    # First draw picks the program, second draw is its move: 7 % 5 + 1 == 3.
    rng.push(3, 7)

    state, events = new_game(pebbles_count=20, max_pebbles_per_turn=5, difficulty=Difficulty.easy, rng=rng)

    assert state.pebbles_remaining == 17
    assert events == [CounterTurnEvent(pebbles=3)]


def test_program_opening_can_empty_a_small_pile_without_declaring_a_winner(rng) -> None:
    rng.push(1, 2)

    state, events = new_game(pebbles_count=2, max_pebbles_per_turn=5, difficulty=Difficulty.easy, rng=rng)

    assert state.pebbles_remaining == 0
    assert state.winner is None
    assert events == [CounterTurnEvent(pebbles=2)]


def test_round_number_is_carried(rng) -> None:
    rng.push(0)

    state, _ = new_game(
        pebbles_count=5,
        max_pebbles_per_turn=2,
        difficulty=Difficulty.hard,
        rng=rng,
        round_number=4,
    )

    assert state.round == 4
