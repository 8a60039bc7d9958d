from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

import numpy as np

if TYPE_CHECKING:
    from .pieces import Piece


Coordinate = Tuple[int, int]


class Board:
    """Immutable 2D playfield.

    The board uses 0 for empty cells and 1 for filled cells. Row 0 is the top
    of the field. Every operation that changes cells returns a new Board; the
    backing array is read-only so snapshots can share boards safely.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(self, cells: np.ndarray) -> None:
        cells = np.array(cells, dtype=np.int8, copy=True)
        if cells.ndim != 2:
            raise ValueError(f"Board cells must be 2D, got shape {cells.shape}")
        cells.setflags(write=False)
        self.height, self.width = (int(v) for v in cells.shape)
        self._cells = cells

    @classmethod
    def empty(cls, width: int, height: int) -> "Board":
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        return cls(np.zeros((height, width), dtype=np.int8))

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    @property
    def filled_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_cell_filled(self, x: int, y: int) -> bool:
        """Out-of-bounds positions count as filled."""
        if not self.is_inside(x, y):
            return True
        return bool(self._cells[y, x])

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if self.is_cell_filled(x, y):
                return False
        return True

    def place(self, cells: Iterable[Coordinate]) -> "Board":
        """Return a new board with `cells` filled.

        Placing onto an occupied or out-of-bounds cell means the caller skipped
        the collision check, so it raises instead of producing a corrupt board.
        """
        grid = self.to_array()
        for x, y in cells:
            if self.is_cell_filled(x, y):
                raise ValueError(f"Cannot lock cell ({x}, {y}): out of bounds or occupied")
            grid[y, x] = 1
        return Board(grid)

    def lock_piece(self, piece: "Piece") -> "Board":
        return self.place(piece.cells())

    def find_full_rows(self) -> Tuple[int, ...]:
        full_rows = np.where(np.all(self._cells != 0, axis=1))[0]
        return tuple(int(y) for y in full_rows)

    def clear_rows(self, rows: Iterable[int]) -> "Board":
        rows = sorted(set(rows))
        if not rows:
            return self
        for y in rows:
            if not 0 <= y < self.height:
                raise ValueError(f"Row {y} outside board of height {self.height}")
        # Remove the whole batch at once and pad at the top
        remaining = np.delete(self._cells, rows, axis=0)
        new_rows = np.zeros((len(rows), self.width), dtype=np.int8)
        return Board(np.vstack((new_rows, remaining)))

    def fill_row(self, y: int) -> "Board":
        grid = self.to_array()
        grid[y, :] = 1
        return Board(grid)

    def clear_row(self, y: int) -> "Board":
        grid = self.to_array()
        grid[y, :] = 0
        return Board(grid)

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self._cells.shape, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, filled={self.filled_count})"
