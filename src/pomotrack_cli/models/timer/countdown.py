"""Single-phase countdown used by the focus-only and break-only modes."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .phases import check_seconds
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle

TICK_SECONDS = 1.0

logger = logging.getLogger(__name__)


class SingleCountdown:
    """One-phase countdown ticking once per second.

    ``start`` resumes from whatever ``remaining_seconds`` holds, so a paused
    countdown continues where it stopped. ``on_complete`` fires once, on the
    first tick that finds nothing left.
    """

    def __init__(
        self,
        total_seconds: int = 25 * 60,
        scheduler: Scheduler | None = None,
        log: logging.Logger | None = None,
    ):
        total_seconds = check_seconds(total_seconds, "total_seconds")
        self._scheduler = scheduler or AsyncioScheduler()
        self._log = log or logger

        self._remaining = total_seconds
        self._saved = total_seconds
        self._running = False
        self._paused = False

        self._handle: TimerHandle | None = None
        # Bumped whenever ticking stops; a tick queued under an older value is ignored.
        self._generation = 0

        self._on_tick: Callable[[int], None] | None = None
        self._on_complete: Callable[[], None] | None = None

    # ----- Getters -----
    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def saved_seconds(self) -> int:
        return self._saved

    # ----- Setters -----
    def set_total_seconds(self, seconds: int) -> bool:
        """Configure a new full duration and load it as the remaining time."""
        seconds = check_seconds(seconds)
        if self._running:
            return False
        self._remaining = seconds
        self._saved = seconds
        return True

    def set_saved_seconds(self, seconds: int) -> None:
        """Change only the value ``reset()`` falls back to."""
        self._saved = check_seconds(seconds)

    # ----- Controls -----
    def start(
        self,
        on_tick: Callable[[int], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        if self._running:
            return
        self._stop_ticking()
        self._on_tick = on_tick
        self._on_complete = on_complete
        self._running = True
        self._paused = False
        self._log.debug("countdown started at %ss", self._remaining)
        self._schedule_tick()

    def pause(self) -> None:
        if not self._running:
            return
        self._stop_ticking()
        self._running = False
        self._paused = True
        self._log.debug("countdown paused at %ss", self._remaining)

    def suspend_for_external_switch(self) -> None:
        """Pause because the caller is leaving this mode, not because the user asked."""
        if not self._running:
            return
        self.pause()
        self._log.debug("countdown suspended for mode switch")

    def reset(self, explicit_seconds: int | None = None) -> int:
        """Stop and reload the countdown; returns the new remaining value."""
        if explicit_seconds is not None:
            self._saved = check_seconds(explicit_seconds, "explicit_seconds")
        self._stop_ticking()
        self._running = False
        self._paused = False
        self._remaining = self._saved
        self._log.debug("countdown reset to %ss", self._remaining)
        return self._remaining

    # ----- Internals -----
    def _schedule_tick(self) -> None:
        generation = self._generation
        self._handle = self._scheduler.call_later(
            TICK_SECONDS, lambda: self._tick(generation)
        )

    def _stop_ticking(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self, generation: int) -> None:
        if generation != self._generation or not self._running:
            return
        self._handle = None

        if self._remaining <= 0:
            self._running = False
            self._paused = False
            self._log.debug("countdown complete")
            if self._on_complete:
                self._on_complete()
            return

        self._remaining -= 1
        self._schedule_tick()
        if self._on_tick:
            self._on_tick(self._remaining)
