from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

U32_MAX = 2**32 - 1

U32 = Annotated[int, Field(ge=0, le=U32_MAX)]


class Difficulty(StrEnum):
    easy = "easy"
    hard = "hard"


class Player(StrEnum):
    user = "user"
    program = "program"


class GamePhase(StrEnum):
    in_progress = "in_progress"
    finished = "finished"


class PebblesInit(BaseModel):
    # Zero is accepted here and rejected by the lifecycle so both init and restart share one check.
    pebbles_count: U32
    max_pebbles_per_turn: U32
    difficulty: Difficulty


class TurnAction(BaseModel):
    action: Literal["turn"] = "turn"
    pebbles: U32


class GiveUpAction(BaseModel):
    action: Literal["give_up"] = "give_up"


class RestartAction(BaseModel):
    action: Literal["restart"] = "restart"
    difficulty: Difficulty
    pebbles_count: U32
    max_pebbles_per_turn: U32


PebblesAction = Annotated[TurnAction | GiveUpAction | RestartAction, Field(discriminator="action")]


class WonEvent(BaseModel):
    type: Literal["won"] = "won"
    player: Player


class CounterTurnEvent(BaseModel):
    type: Literal["counter_turn"] = "counter_turn"
    pebbles: U32


PebblesEvent = Annotated[WonEvent | CounterTurnEvent, Field(discriminator="type")]


class GameState(BaseModel):
    pebbles_count: int = Field(..., gt=0, le=U32_MAX)
    max_pebbles_per_turn: int = Field(..., gt=0, le=U32_MAX)
    pebbles_remaining: U32
    difficulty: Difficulty
    first_player: Player

    # Set once, when pebbles_remaining hits zero or the user gives up.
    winner: Player | None = None

    phase: GamePhase = GamePhase.in_progress

    # 1 on initialize, bumped by every restart.
    round: int = Field(default=1, ge=1)

    created_at: datetime
    last_updated_at: datetime


class InitResponse(BaseModel):
    state: GameState
    events: list[PebblesEvent] = Field(default_factory=list)


class ActionResponse(BaseModel):
    # Restart with the user moving first has nothing to report.
    event: PebblesEvent | None = None
    state: GameState


class StreamEntry(BaseModel):
    id: str
    fields: dict[str, str]


class EventLogResponse(BaseModel):
    stream: str
    events: list[StreamEntry]
