from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}

# Distinct orientations per shape; rotating past the last one wraps to 0
ROTATION_COUNTS = {
    TetrominoType.I: 2,
    TetrominoType.O: 1,
    TetrominoType.T: 4,
    TetrominoType.S: 2,
    TetrominoType.Z: 2,
    TetrominoType.J: 4,
    TetrominoType.L: 4,
}


@dataclass(frozen=True)
class Piece:
    """Active tetromino: kind, rotation index and bounding-box origin.

    `x`, `y` locate the top-left corner of the rotated shape's bounding box on
    the board. Pieces are values; moving or rotating returns a new Piece.
    """

    kind: TetrominoType
    rotation: int = 0
    x: int = 0
    y: int = 0

    @property
    def rotation_count(self) -> int:
        return ROTATION_COUNTS[self.kind]

    def shape(self) -> Shape:
        base = BASE_SHAPES[self.kind]
        return _rot90(base, self.rotation)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        return replace(self, rotation=(self.rotation + 1) % self.rotation_count)

    def cells(self) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int, spawn_y: int = 0) -> "Piece":
        w = BASE_SHAPES[kind].shape[1]
        return cls(kind=kind, rotation=0, x=(board_width - w) // 2, y=spawn_y)


class PieceGenerator:
    """Source of upcoming tetromino kinds.

    Draws uniformly from all kinds with a seeded RNG, or replays `sequence`
    (cycling) when one is given.
    """

    def __init__(self, seed: Optional[int] = None, sequence: Optional[Iterable[TetrominoType]] = None) -> None:
        self.rng = random.Random(seed)
        self._sequence: Optional[List[TetrominoType]] = None
        self._position = 0
        if sequence is not None:
            self._sequence = [TetrominoType(kind) for kind in sequence]
            if not self._sequence:
                raise ValueError("Piece sequence must not be empty")

    def next_kind(self) -> TetrominoType:
        if self._sequence is not None:
            kind = self._sequence[self._position % len(self._sequence)]
            self._position += 1
            return kind
        return self.rng.choice(list(TetrominoType))
