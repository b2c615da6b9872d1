"""Cycle mode: alternating focus/break countdowns for N repetitions.

State machine
-------------
IDLE -> RUNNING(focus) -> INTER_PHASE_GAP -> RUNNING(break) -> INTER_PHASE_GAP
     -> RUNNING(focus) -> ... -> IDLE (all cycles complete)

PAUSED is reachable from any RUNNING state and resumes into the same phase.
The gap between phases is a fixed 500 ms; it is not pausable, but it can be
suspended when the caller switches away from cycle mode.

Every deferred callback (the 1 Hz tick and the gap transition) captures the
session token when it is scheduled. ``reset()`` bumps the token, so anything
queued before the reset turns into a no-op even if the underlying timer
handle still fires.
"""

from __future__ import annotations

import logging

from .phases import (
    CycleCallbacks,
    CycleSession,
    CycleSnapshot,
    Phase,
    RunState,
    check_seconds,
)
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle

TICK_SECONDS = 1.0
GAP_SECONDS = 0.5
MIN_CYCLES = 1
MAX_CYCLES = 99

logger = logging.getLogger(__name__)


def clamp_cycles(value: int) -> int:
    """Clamp a requested cycle count into [MIN_CYCLES, MAX_CYCLES]."""
    return max(MIN_CYCLES, min(MAX_CYCLES, int(value)))


class CycleEngine:
    """Drives N focus/break repetitions on a single-threaded scheduler."""

    def __init__(
        self,
        focus_seconds: int = 25 * 60,
        break_seconds: int = 5 * 60,
        total_cycles: int = 4,
        scheduler: Scheduler | None = None,
        log: logging.Logger | None = None,
    ):
        self._focus_seconds = check_seconds(focus_seconds, "focus_seconds")
        self._break_seconds = check_seconds(break_seconds, "break_seconds")
        self._scheduler = scheduler or AsyncioScheduler()
        self._log = log or logger

        self._session = CycleSession(
            remaining_seconds=self._focus_seconds,
            total_cycles=clamp_cycles(total_cycles),
        )
        self._callbacks = CycleCallbacks()

        self._tick_handle: TimerHandle | None = None
        self._gap_handle: TimerHandle | None = None
        # Bumped whenever scheduled work is stopped (pause, suspend, reset).
        self._generation = 0
        # A gap was suspended before its transition ran.
        self._pending_transition = False

    # ----- Getters -----
    @property
    def is_running(self) -> bool:
        return self._session.run_state is RunState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._session.run_state is RunState.PAUSED

    @property
    def run_state(self) -> RunState:
        return self._session.run_state

    @property
    def current_seconds(self) -> int:
        return self._session.remaining_seconds

    @property
    def current_phase(self) -> Phase:
        return self._session.phase

    @property
    def current_cycle(self) -> int:
        return self._session.current_cycle

    @property
    def completed_cycles(self) -> int:
        return self._session.completed_cycles

    @property
    def total_cycles(self) -> int:
        return self._session.total_cycles

    @property
    def session_token(self) -> int:
        return self._session.session_token

    @property
    def focus_seconds(self) -> int:
        return self._focus_seconds

    @property
    def break_seconds(self) -> int:
        return self._break_seconds

    def snapshot(self) -> CycleSnapshot:
        s = self._session
        return CycleSnapshot(
            phase=s.phase,
            remaining_seconds=s.remaining_seconds,
            current_cycle=s.current_cycle,
            completed_cycles=s.completed_cycles,
            total_cycles=s.total_cycles,
            run_state=s.run_state,
            focus_seconds=self._focus_seconds,
            break_seconds=self._break_seconds,
        )

    # ----- Setters -----
    def set_focus_seconds(self, seconds: int) -> bool:
        """Set the focus duration used from the next focus phase on.

        Rejected while ticking. While idle before a session the remaining
        time follows the new value so the display shows it.
        """
        seconds = check_seconds(seconds, "focus_seconds")
        s = self._session
        if s.run_state is RunState.RUNNING:
            return False
        self._focus_seconds = seconds
        if s.run_state is RunState.IDLE and s.phase is Phase.FOCUS:
            s.remaining_seconds = seconds
        return True

    def set_break_seconds(self, seconds: int) -> bool:
        """Set the break duration used from the next break phase on."""
        seconds = check_seconds(seconds, "break_seconds")
        if self._session.run_state is RunState.RUNNING:
            return False
        self._break_seconds = seconds
        return True

    def set_total_cycles(self, count: int) -> int:
        """Clamp and store the cycle count; returns the value now in effect."""
        s = self._session
        if s.run_state is RunState.RUNNING:
            return s.total_cycles
        count = clamp_cycles(count)
        if s.run_state is not RunState.IDLE:
            # Never drop below the cycle already underway.
            count = max(count, s.current_cycle, s.completed_cycles + 1)
        s.total_cycles = count
        return s.total_cycles

    # ----- Controls -----
    def start(self, callbacks: CycleCallbacks | None = None) -> None:
        s = self._session
        if s.run_state is RunState.RUNNING:
            return
        if callbacks is not None:
            self._callbacks = callbacks
        if s.run_state is RunState.INTER_PHASE_GAP:
            # The pending transition restarts ticking on its own.
            return

        if s.run_state is RunState.PAUSED:
            self._log.debug(
                "resuming cycle %s/%s %s at %ss",
                s.current_cycle,
                s.total_cycles,
                s.phase.value,
                s.remaining_seconds,
            )
            if self._pending_transition:
                self._pending_transition = False
                self._enter_gap()
                return
            s.run_state = RunState.RUNNING
            self._schedule_tick()
            return

        s.current_cycle = 1
        s.completed_cycles = 0
        s.phase = Phase.FOCUS
        s.remaining_seconds = self._focus_seconds
        s.run_state = RunState.RUNNING
        token = s.session_token
        generation = self._generation
        self._log.info(
            "cycle session started: %s x (%ss focus / %ss break)",
            s.total_cycles,
            self._focus_seconds,
            self._break_seconds,
        )
        self._callbacks.cycle_progress(1, s.total_cycles, Phase.FOCUS.label)
        if not self._still_running(token, generation):
            return
        self._schedule_tick()

    def resume(self, callbacks: CycleCallbacks | None = None) -> None:
        """Continue a paused session without touching cycle or phase."""
        if self._session.run_state is not RunState.PAUSED:
            return
        self.start(callbacks)

    def pause(self) -> None:
        s = self._session
        if s.run_state is not RunState.RUNNING:
            return
        self._cancel_scheduled()
        s.run_state = RunState.PAUSED
        self._log.debug("paused at %ss (%s)", s.remaining_seconds, s.phase.value)

    def suspend_for_external_switch(self) -> None:
        """Freeze the session because the caller switched away from cycle mode.

        Unlike ``pause()`` this also works mid-gap; the interrupted transition
        runs after ``resume()``.
        """
        s = self._session
        if s.run_state is RunState.RUNNING:
            self.pause()
        elif s.run_state is RunState.INTER_PHASE_GAP:
            self._cancel_scheduled()
            self._pending_transition = True
            s.run_state = RunState.PAUSED
            self._log.debug("suspended during inter-phase gap")

    def reset(self) -> tuple[int, int]:
        """Abandon the session; returns (focus_seconds, break_seconds)."""
        s = self._session
        self._cancel_scheduled()
        self._pending_transition = False
        s.session_token += 1
        s.run_state = RunState.IDLE
        s.current_cycle = 1
        s.completed_cycles = 0
        s.phase = Phase.FOCUS
        s.remaining_seconds = self._focus_seconds
        self._log.debug("reset, session token now %s", s.session_token)
        return self._focus_seconds, self._break_seconds

    # ----- Internals -----
    def _still_running(self, token: int, generation: int) -> bool:
        """True while no reset, pause or suspend happened since ``token`` was taken."""
        s = self._session
        return (
            s.session_token == token
            and generation == self._generation
            and s.run_state is RunState.RUNNING
        )

    def _schedule_tick(self) -> None:
        token = self._session.session_token
        generation = self._generation
        self._tick_handle = self._scheduler.call_later(
            TICK_SECONDS, lambda: self._tick(token, generation)
        )

    def _cancel_scheduled(self) -> None:
        self._generation += 1
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        if self._gap_handle is not None:
            self._gap_handle.cancel()
            self._gap_handle = None

    def _tick(self, token: int, generation: int) -> None:
        if not self._still_running(token, generation):
            return
        self._tick_handle = None
        s = self._session

        if s.remaining_seconds > 0:
            s.remaining_seconds -= 1
            self._schedule_tick()
            self._callbacks.tick(s.remaining_seconds, s.phase)
            return

        self._cancel_scheduled()
        self._complete_phase()

    def _complete_phase(self) -> None:
        s = self._session
        if s.phase is Phase.FOCUS:
            self._log.debug("focus %s/%s finished", s.current_cycle, s.total_cycles)
            self._enter_gap()
            return

        s.completed_cycles += 1
        self._log.debug("break %s/%s finished", s.current_cycle, s.total_cycles)
        if s.completed_cycles >= s.total_cycles:
            s.run_state = RunState.IDLE
            self._log.info("all %s cycles complete", s.total_cycles)
            self._callbacks.all_complete()
            return
        self._enter_gap()

    def _enter_gap(self) -> None:
        s = self._session
        s.run_state = RunState.INTER_PHASE_GAP
        token = s.session_token
        generation = self._generation
        self._gap_handle = self._scheduler.call_later(
            GAP_SECONDS, lambda: self._finish_gap(token, generation)
        )

    def _finish_gap(self, token: int, generation: int) -> None:
        s = self._session
        if token != s.session_token:
            self._log.debug("dropping transition from stale session %s", token)
            return
        if generation != self._generation or s.run_state is not RunState.INTER_PHASE_GAP:
            return
        self._gap_handle = None

        if s.phase is Phase.FOCUS:
            s.phase = Phase.BREAK
            s.remaining_seconds = self._break_seconds
        else:
            s.current_cycle += 1
            s.phase = Phase.FOCUS
            s.remaining_seconds = self._focus_seconds
        s.run_state = RunState.RUNNING
        self._log.debug(
            "cycle %s/%s entering %s (%ss)",
            s.current_cycle,
            s.total_cycles,
            s.phase.value,
            s.remaining_seconds,
        )

        self._callbacks.phase_change(
            s.phase, s.remaining_seconds, s.current_cycle, s.total_cycles
        )
        # The transition has happened; only a reset cancels its progress event.
        if s.session_token != token:
            return
        self._callbacks.cycle_progress(s.current_cycle, s.total_cycles, s.phase.label)
        if not self._still_running(token, generation):
            return
        self._schedule_tick()
