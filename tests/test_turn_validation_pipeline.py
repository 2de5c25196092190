from __future__ import annotations

import pytest

from pebbles.api.models import GamePhase, GameState
from pebbles.core.errors import GameFinishedError, InvalidTurnError
from pebbles.turn_processing.validators import ValidationContext, pipeline_for_action


def _state(**overrides) -> GameState:
    data = {
        "pebbles_count": 10,
        "max_pebbles_per_turn": 3,
        "pebbles_remaining": 2,
        "difficulty": "hard",
        "first_player": "user",
        "created_at": "2025-01-01T00:00:00Z",
        "last_updated_at": "2025-01-01T00:00:00Z",
    }
    data.update(overrides)
    return GameState.model_validate(data)


@pytest.mark.parametrize("pebbles", [0, 4])
def test_turn_outside_one_to_max_is_denied(pebbles: int) -> None:
    gs = _state(pebbles_remaining=10)
    ctx = ValidationContext(action="turn", pebbles=pebbles)

    with pytest.raises(InvalidTurnError) as e:
        pipeline_for_action("turn").validate(ctx=ctx, state=gs)

    assert "Invalid pebbles taken" in str(e.value)


def test_turn_larger_than_pile_is_denied() -> None:
    gs = _state(pebbles_remaining=2)
    ctx = ValidationContext(action="turn", pebbles=3)

    with pytest.raises(InvalidTurnError) as e:
        pipeline_for_action("turn").validate(ctx=ctx, state=gs)

    assert "Not enough pebbles remaining" in str(e.value)


def test_turn_within_bounds_passes() -> None:
    gs = _state(pebbles_remaining=2)
    pipeline_for_action("turn").validate(ctx=ValidationContext(action="turn", pebbles=2), state=gs)


@pytest.mark.parametrize("action", ["turn", "give_up"])
def test_finished_round_denies_play(action: str) -> None:
    gs = _state(pebbles_remaining=0, winner="user", phase=GamePhase.finished)
    ctx = ValidationContext(action=action, pebbles=1)

    with pytest.raises(GameFinishedError) as e:
        pipeline_for_action(action).validate(ctx=ctx, state=gs)

    assert "winner: user" in str(e.value)


def test_restart_allowed_when_finished() -> None:
    gs = _state(pebbles_remaining=0, winner="program", phase=GamePhase.finished)
    pipeline_for_action("restart").validate(ctx=ValidationContext(action="restart"), state=gs)


def test_unknown_action_pipeline_raises() -> None:
    with pytest.raises(ValueError) as e:
        pipeline_for_action("nope")
    assert "Unknown action" in str(e.value)
