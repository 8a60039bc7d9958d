"""Game module for the tetris engine.

Exports the rules layer, free of timing and I/O:
- Board: Immutable grid with collision and line detection
- Piece: Tetromino piece with rotation mechanics
- TetrominoType: Enum of available piece types
- PieceGenerator: Seeded source of upcoming pieces
- ScoringRules: Points awarded per line clear
- GameSnapshot / GameStatus / Action: State and input vocabulary
- attempt_transform / complete_line_clear: Transformation engine
"""

from .grid import Board
from .pieces import Piece, PieceGenerator, TetrominoType
from .rules import ScoringRules
from .state import Action, ActionType, GameSnapshot, GameStatus, TransformKind
from .transform import attempt_transform, can_place, complete_line_clear

__all__ = [
    "Board",
    "Piece",
    "PieceGenerator",
    "TetrominoType",
    "ScoringRules",
    "Action",
    "ActionType",
    "GameSnapshot",
    "GameStatus",
    "TransformKind",
    "attempt_transform",
    "can_place",
    "complete_line_clear",
]
