"""Unit tests for src/tetris_engine/game/grid.py"""

import numpy as np
import pytest

from tetris_engine.game import Board, Piece, TetrominoType


def test_empty_board_has_requested_dimensions() -> None:
    board = Board.empty(10, 20)
    assert (board.width, board.height) == (10, 20)
    assert board.filled_count == 0


@pytest.mark.parametrize("width, height", [(0, 20), (10, 0), (-1, 5)])
def test_empty_board_rejects_non_positive_dimensions(width: int, height: int) -> None:
    with pytest.raises(ValueError):
        Board.empty(width, height)


@pytest.mark.parametrize("x, y", [(-1, 0), (4, 0), (0, -1), (0, 3), (10, 10)])
def test_out_of_bounds_counts_as_filled(x: int, y: int) -> None:
    board = Board.empty(4, 3)
    assert board.is_cell_filled(x, y)


def test_is_cell_filled_reads_cells(board_from_rows) -> None:
    board = board_from_rows(
        "....",
        ".#..",
    )
    assert board.is_cell_filled(1, 1)
    assert not board.is_cell_filled(0, 1)
    assert not board.is_cell_filled(1, 0)


def test_cells_are_read_only() -> None:
    board = Board.empty(4, 4)
    with pytest.raises(ValueError):
        board.cells[0, 0] = 1


def test_board_copies_its_input() -> None:
    grid = np.zeros((2, 2), dtype=np.int8)
    board = Board(grid)
    grid[0, 0] = 1
    assert not board.is_cell_filled(0, 0)


def test_lock_piece_returns_new_board() -> None:
    board = Board.empty(6, 4)
    piece = Piece(TetrominoType.O, x=2, y=2)

    locked = board.lock_piece(piece)

    assert board.filled_count == 0
    assert locked.filled_count == 4
    assert all(locked.is_cell_filled(x, y) for x, y in piece.cells())


@pytest.mark.parametrize("piece", [Piece(TetrominoType.O, x=5, y=0), Piece(TetrominoType.O, x=0, y=3)])
def test_lock_piece_out_of_bounds_raises(piece: Piece) -> None:
    with pytest.raises(ValueError):
        Board.empty(6, 4).lock_piece(piece)


def test_lock_piece_onto_filled_cell_raises(board_from_rows) -> None:
    board = board_from_rows(
        "....",
        "#...",
    )
    with pytest.raises(ValueError):
        board.lock_piece(Piece(TetrominoType.O, x=0, y=0))


def test_find_full_rows_ordered_top_to_bottom(board_from_rows) -> None:
    board = board_from_rows(
        "....",
        "####",
        "##.#",
        "####",
    )
    assert board.find_full_rows() == (1, 3)


def test_find_full_rows_none(board_from_rows) -> None:
    assert board_from_rows("#.", ".#").find_full_rows() == ()


def test_clear_rows_shifts_rows_above_down(board_from_rows) -> None:
    board = board_from_rows(
        "#...",
        "####",
        ".#..",
        "####",
    )

    cleared = board.clear_rows(board.find_full_rows())

    assert cleared == board_from_rows(
        "....",
        "....",
        "#...",
        ".#..",
    )


def test_clear_rows_keeps_dimensions_and_removes_mass(board_from_rows) -> None:
    board = board_from_rows(
        "..#..",
        "#####",
        "#####",
        "#.###",
        "#####",
    )
    rows = board.find_full_rows()

    cleared = board.clear_rows(rows)

    assert (cleared.width, cleared.height) == (board.width, board.height)
    assert cleared.filled_count == board.filled_count - board.width * len(rows)
    assert cleared.find_full_rows() == ()


def test_clear_rows_with_no_rows_is_identity(board_from_rows) -> None:
    board = board_from_rows("#.", "..")
    assert board.clear_rows([]) is board


def test_clear_rows_out_of_range_raises() -> None:
    with pytest.raises(ValueError):
        Board.empty(3, 3).clear_rows([3])


def test_fill_and_clear_row() -> None:
    board = Board.empty(3, 2).fill_row(1)
    assert board.find_full_rows() == (1,)
    assert board.clear_row(1).filled_count == 0


def test_equality_and_hash_follow_cells(board_from_rows) -> None:
    a = board_from_rows("#.", ".#")
    b = board_from_rows("#.", ".#")
    assert a == b
    assert hash(a) == hash(b)
    assert a != board_from_rows("..", ".#")
