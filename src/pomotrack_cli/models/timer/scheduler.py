"""Event-loop scheduling seam shared by the countdown and cycle engines.

Both engines only ever need "call this later" plus the ability to cancel it.
``AsyncioScheduler`` binds that to a running asyncio loop, ``ManualScheduler``
is a virtual clock that only moves when ``advance()`` is called.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol

# Float slack so 0.5 s gaps and 1 s ticks landing on the same instant fire.
_EPSILON = 1e-9


class TimerHandle(Protocol):
    """Anything returned by ``call_later`` that can be cancelled."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Minimal single-threaded scheduler interface."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Without an explicit ``loop`` the running loop is looked up on every call,
    so an engine built before ``asyncio.run`` schedules on whichever loop is
    driving it, including a later ``asyncio.run`` after the first one closed.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


class ManualHandle:
    """Handle for a callback queued on a ``ManualScheduler``."""

    __slots__ = ("when", "callback", "cancelled")

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic virtual-time scheduler.

    Nothing runs until ``advance()`` is called; callbacks then fire in due-time
    order (insertion order for ties) with ``now`` set to their due time, so a
    callback that schedules more work sees the correct clock.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        handle = ManualHandle(self.now + delay, callback)
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of queued callbacks that have not been cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def next_due(self) -> float | None:
        """Due time of the earliest live callback, or None when idle."""
        self._drop_cancelled()
        if not self._queue:
            return None
        return self._queue[0][0]

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything due on the way.

        Returns the number of callbacks that ran.
        """
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        target = self.now + seconds
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0][0] > target + _EPSILON:
                break
            when, _, handle = heapq.heappop(self._queue)
            self.now = max(self.now, when)
            handle.callback()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self, max_callbacks: int = 100_000) -> int:
        """Fire queued callbacks until nothing is pending."""
        fired = 0
        while fired < max_callbacks:
            due = self.next_due()
            if due is None:
                return fired
            fired += self.advance(max(0.0, due - self.now))
        raise RuntimeError(f"scheduler still busy after {max_callbacks} callbacks")

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
