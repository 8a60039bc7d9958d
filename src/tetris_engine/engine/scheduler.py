"""Clock abstraction the timers run on.

Delays are in milliseconds. `ManualScheduler` keeps a virtual clock that the
host advances explicitly (tests, frame loops); `AsyncioScheduler` defers to an
asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Prevent the callback from running. Calling it again has no effect."""
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle:
        """Run `callback` once after `delay_ms` milliseconds."""
        ...


class ManualTimer:
    def __init__(self, due: int, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        self.callback()


class ManualScheduler:
    """Deterministic scheduler driven by `advance()`.

    Timers due at the same instant fire in scheduling order. Callbacks may
    schedule further timers; those fire within the same `advance()` call if
    they fall inside the advanced window.
    """

    def __init__(self) -> None:
        self.now = 0
        self._queue: List[Tuple[int, int, ManualTimer]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callback) -> ManualTimer:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        timer = ManualTimer(self.now + int(delay_ms), callback)
        heapq.heappush(self._queue, (timer.due, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled())

    def next_due(self) -> Optional[int]:
        self._drop_cancelled()
        if not self._queue:
            return None
        return self._queue[0][0]

    def advance(self, ms: int) -> int:
        """Move the clock forward by `ms`, firing due timers. Returns the number fired."""
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards ({ms} ms)")
        target = self.now + int(ms)
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            _, _, timer = heapq.heappop(self._queue)
            self.now = timer.due
            timer._run()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self, limit_ms: int = 3_600_000) -> int:
        """Fire timers until none remain or `limit_ms` of virtual time has passed."""
        deadline = self.now + limit_ms
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > deadline:
                break
            fired += self.advance(due - self.now)
        return fired

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled():
            heapq.heappop(self._queue)


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop.

    The returned handles are `asyncio.TimerHandle` objects, whose `cancel()` is
    already idempotent.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.loop = loop or asyncio.get_running_loop()

    def call_later(self, delay_ms: int, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_ms / 1000.0, callback)
