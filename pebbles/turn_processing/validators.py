from __future__ import annotations

from dataclasses import dataclass
from abc import ABC, abstractmethod

from pebbles.api.models import GamePhase, GameState
from pebbles.core.errors import GameFinishedError, InvalidTurnError


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Keep this tight and serializable-ish so we can safely log it.
    """

    action: str
    # Only set for "turn".
    pebbles: int | None = None


class TurnValidator(ABC):
    """A small, composable validation unit for an incoming action."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class FinishedGameValidator(TurnValidator):
    """Deny actions once a winner is set; restart stays available."""

    allow_actions: frozenset[str] = frozenset({"restart"})

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if state.phase == GamePhase.finished and ctx.action not in self.allow_actions:
            raise GameFinishedError(f"Game is finished (winner: {state.winner.value if state.winner else 'none'})")


@dataclass(frozen=True, slots=True)
class PebblesTakenValidator(TurnValidator):
    """A turn must take 1..max_pebbles_per_turn and no more than what is left."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        n = ctx.pebbles
        if n is None:
            raise InvalidTurnError("pebbles is required for a turn")
        if n == 0 or n > state.max_pebbles_per_turn:
            raise InvalidTurnError(f"Invalid pebbles taken: {n} (allowed: 1..{state.max_pebbles_per_turn})")
        if n > state.pebbles_remaining:
            raise InvalidTurnError(f"Not enough pebbles remaining: asked for {n}, {state.pebbles_remaining} left")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[TurnValidator, ...]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, state=state)


DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "turn": ValidatorPipeline(
        validators=(
            FinishedGameValidator(),
            PebblesTakenValidator(),
        )
    ),
    "give_up": ValidatorPipeline(validators=(FinishedGameValidator(),)),
    # Restart is valid from any phase; its parameters are checked by the lifecycle.
    "restart": ValidatorPipeline(validators=()),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
