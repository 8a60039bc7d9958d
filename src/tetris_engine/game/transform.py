"""Move/rotate/drop rules applied to a snapshot.

Nothing here mutates its input: each call returns a new snapshot, or
`None` when the request is rejected.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from .grid import Board
from .pieces import Piece, TetrominoType
from .state import GameSnapshot, GameStatus, TransformKind


logger = logging.getLogger(__name__)

_SHIFTS = {
    TransformKind.LEFT: -1,
    TransformKind.RIGHT: 1,
}


def can_place(board: Board, piece: Piece) -> bool:
    return board.can_place(piece.cells())


def drop_distance(board: Board, piece: Piece) -> int:
    """Number of rows `piece` can fall before it collides."""
    distance = 0
    while can_place(board, piece.moved(0, distance + 1)):
        distance += 1
    return distance


def attempt_transform(
    snapshot: GameSnapshot,
    kind: TransformKind,
    next_kind: Callable[[], TetrominoType],
    spawn_y: int = 0,
) -> Optional[GameSnapshot]:
    """Apply `kind` to the active piece.

    Returns the resulting snapshot, or `None` if the move collides. A blocked
    Down/FastDown/Fall locks the piece: the result is LINE_CLEARING when full
    rows appear, otherwise RUNNING with a fresh piece drawn from `next_kind`, or
    GAME_OVER when that piece has no room to spawn.
    """
    piece = snapshot.piece
    if piece is None or snapshot.status is not GameStatus.RUNNING:
        raise ValueError(f"Cannot transform without a running piece (status={snapshot.status.name})")

    if kind in _SHIFTS:
        moved = piece.moved(_SHIFTS[kind], 0)
        if not can_place(snapshot.board, moved):
            return None
        return replace(snapshot, piece=moved)

    if kind is TransformKind.ROTATE:
        rotated = piece.rotated()
        if not can_place(snapshot.board, rotated):
            return None
        return replace(snapshot, piece=rotated)

    if kind in (TransformKind.DOWN, TransformKind.FAST_DOWN):
        lowered = piece.moved(0, 1)
        if can_place(snapshot.board, lowered):
            return replace(snapshot, piece=lowered)
        return _lock(snapshot, piece, next_kind, spawn_y)

    if kind is TransformKind.FALL:
        landed = piece.moved(0, drop_distance(snapshot.board, piece))
        return _lock(snapshot, landed, next_kind, spawn_y)

    raise ValueError(f"Unhandled transform kind: {kind!r}")


def complete_line_clear(snapshot: GameSnapshot, next_kind: Callable[[], TetrominoType], spawn_y: int = 0) -> GameSnapshot:
    """Remove the rows flagged on a LINE_CLEARING snapshot and spawn the next piece."""
    if snapshot.status is not GameStatus.LINE_CLEARING:
        raise ValueError(f"No line clear in progress (status={snapshot.status.name})")
    board = snapshot.board.clear_rows(snapshot.cleared_rows)
    return _spawn(replace(snapshot, board=board, cleared_rows=()), next_kind, spawn_y)


def _lock(snapshot: GameSnapshot, piece: Piece, next_kind: Callable[[], TetrominoType], spawn_y: int) -> GameSnapshot:
    board = snapshot.board.lock_piece(piece)
    full_rows = board.find_full_rows()
    logger.debug("Locked %s at (%d, %d); full rows: %s", piece.kind.name, piece.x, piece.y, full_rows)
    if full_rows:
        return replace(
            snapshot,
            status=GameStatus.LINE_CLEARING,
            board=board,
            piece=None,
            cleared_rows=full_rows,
        )
    return _spawn(replace(snapshot, board=board), next_kind, spawn_y)


def _spawn(snapshot: GameSnapshot, next_kind: Callable[[], TetrominoType], spawn_y: int) -> GameSnapshot:
    kind = next_kind()
    piece = Piece.spawn(kind, snapshot.width, spawn_y)
    if not can_place(snapshot.board, piece):
        logger.debug("Spawn of %s blocked at (%d, %d)", kind.name, piece.x, piece.y)
        return replace(snapshot, status=GameStatus.GAME_OVER, piece=None)
    return replace(snapshot, status=GameStatus.RUNNING, piece=piece)
