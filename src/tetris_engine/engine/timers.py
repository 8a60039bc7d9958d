from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from tetris_engine.game import Board

from .scheduler import Scheduler, TimerHandle


logger = logging.getLogger(__name__)


class DescentTimer:
    """Single-shot gravity tick.

    `start()` schedules one call to `on_tick` after `interval_ms` and replaces
    any tick still pending. The interval is read when the tick is scheduled.
    """

    def __init__(self, scheduler: Scheduler, interval_ms: int, on_tick: Callable[[], None]) -> None:
        self.scheduler = scheduler
        self.on_tick = on_tick
        self._interval_ms = 0
        self.interval_ms = interval_ms
        self._handle: Optional[TimerHandle] = None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: int) -> None:
        if value <= 0:
            raise ValueError(f"Descent interval must be positive, got {value}")
        self._interval_ms = int(value)

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self.cancel()
        self._handle = self.scheduler.call_later(self._interval_ms, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.on_tick()


class ScreenClearAnimation:
    """Board wipe: fill rows bottom-up, then clear them top-down.

    Each frame is emitted and followed by `frame_ms`; after the last frame a
    further `tail_ms` passes before `on_complete` runs. A cancelled run emits
    nothing more and never completes.
    """

    def __init__(self, scheduler: Scheduler, frame_ms: int = 30, tail_ms: int = 100) -> None:
        self.scheduler = scheduler
        self.frame_ms = frame_ms
        self.tail_ms = tail_ms
        self._handle: Optional[TimerHandle] = None
        self._token: Optional[object] = None

    @property
    def active(self) -> bool:
        return self._token is not None

    @staticmethod
    def frames(board: Board) -> Iterator[Board]:
        for y in range(board.height - 1, -1, -1):
            board = board.fill_row(y)
            yield board
        for y in range(board.height):
            board = board.clear_row(y)
            yield board

    def start(self, board: Board, on_frame: Callable[[Board], None], on_complete: Callable[[], None]) -> None:
        self.cancel()
        token = object()
        self._token = token
        frames = self.frames(board)

        def step() -> None:
            if self._token is not token:
                return
            frame = next(frames, None)
            if frame is None:
                self._handle = self.scheduler.call_later(self.tail_ms, finish)
                return
            on_frame(frame)
            if self._token is token:
                self._handle = self.scheduler.call_later(self.frame_ms, step)

        def finish() -> None:
            if self._token is not token:
                return
            self._token = None
            self._handle = None
            on_complete()

        logger.debug("Screen clear started (%d rows)", board.height)
        step()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._token is not None:
            logger.debug("Screen clear cancelled")
        self._token = None
