from __future__ import annotations

from statemachine import State, StateMachine

from pebbles.api.models import GamePhase, GameState


class RoundFSM(StateMachine):
    """FSM wrapper around GameState.

    - phases: in_progress -> finished, and back to in_progress on restart
    - actions are applied by the turn processing layer; the FSM only guards transitions.
    """

    in_progress = State(GamePhase.in_progress.value, value=GamePhase.in_progress.value, initial=True)
    finished = State(GamePhase.finished.value, value=GamePhase.finished.value)

    finish = in_progress.to(finished)
    restart = in_progress.to.itself() | finished.to(in_progress)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.phase.value)

    def sync_phase_to_model(self) -> None:
        self.game.phase = GamePhase(str(self.current_state.value))
