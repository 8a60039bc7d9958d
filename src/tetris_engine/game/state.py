"""Immutable game snapshot plus the status and action vocabularies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Tuple

import numpy as np

from .grid import Board
from .pieces import Piece


class GameStatus(Enum):
    WELCOME = auto()
    RUNNING = auto()
    PAUSED = auto()
    LINE_CLEARING = auto()
    SCREEN_CLEARING = auto()
    GAME_OVER = auto()


class TransformKind(Enum):
    LEFT = auto()
    RIGHT = auto()
    DOWN = auto()
    FAST_DOWN = auto()
    FALL = auto()
    ROTATE = auto()


class ActionType(Enum):
    WELCOME = auto()
    RESET = auto()
    START = auto()
    PAUSE = auto()
    BACKGROUND = auto()
    RESUME = auto()
    TOGGLE_SOUND = auto()
    OPEN_SETTINGS = auto()
    TRANSFORM = auto()


@dataclass(frozen=True)
class Action:
    type: ActionType
    transform_kind: Optional[TransformKind] = None

    def __post_init__(self) -> None:
        if (self.type is ActionType.TRANSFORM) != (self.transform_kind is not None):
            raise ValueError("transform_kind is required for TRANSFORM actions and only for them")

    @classmethod
    def transform(cls, kind: TransformKind) -> "Action":
        return cls(ActionType.TRANSFORM, kind)


WELCOME = Action(ActionType.WELCOME)
RESET = Action(ActionType.RESET)
START = Action(ActionType.START)
PAUSE = Action(ActionType.PAUSE)
BACKGROUND = Action(ActionType.BACKGROUND)
RESUME = Action(ActionType.RESUME)
TOGGLE_SOUND = Action(ActionType.TOGGLE_SOUND)
OPEN_SETTINGS = Action(ActionType.OPEN_SETTINGS)


@dataclass(frozen=True)
class GameSnapshot:
    """Full game state at one point in time.

    `board` holds locked cells only; the falling `piece` is kept apart until it
    locks. `cleared_rows` is non-empty only on the LINE_CLEARING frame and
    lists the full rows about to be removed.
    """

    status: GameStatus
    board: Board
    piece: Optional[Piece] = None
    sound_enabled: bool = True
    cleared_rows: Tuple[int, ...] = field(default=())

    @classmethod
    def initial(cls, width: int, height: int, sound_enabled: bool = True) -> "GameSnapshot":
        return cls(status=GameStatus.WELCOME, board=Board.empty(width, height), sound_enabled=sound_enabled)

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def is_running(self) -> bool:
        return self.status is GameStatus.RUNNING

    @property
    def can_start_game(self) -> bool:
        return self.status in (GameStatus.WELCOME, GameStatus.PAUSED, GameStatus.GAME_OVER)

    def to_array(self) -> np.ndarray:
        """Board cells with the active piece overlaid as -kind (for rendering)."""
        state = self.board.to_array()
        if self.piece is not None:
            for x, y in self.piece.cells():
                if self.board.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.piece.kind)
        return state
