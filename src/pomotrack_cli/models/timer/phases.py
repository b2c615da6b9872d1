"""Phase, run-state and session types for the timer engines."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    """The two alternating countdown segments of a cycle."""

    FOCUS = "focus"
    BREAK = "break"

    @property
    def label(self) -> str:
        """Display label used in cycle progress ("Focus" / "Break")."""
        return self.value.capitalize()


class RunState(str, Enum):
    """Lifecycle of a cycle session."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    INTER_PHASE_GAP = "inter_phase_gap"


@dataclass
class CycleSession:
    """Live, mutable state of a CycleEngine.

    Created once per engine and reinitialised in place on reset.
    """

    remaining_seconds: int
    total_cycles: int
    phase: Phase = Phase.FOCUS
    current_cycle: int = 1
    completed_cycles: int = 0
    run_state: RunState = RunState.IDLE
    session_token: int = 0


@dataclass(frozen=True)
class CycleSnapshot:
    """Read-only view of a cycle engine handed to renderers."""

    phase: Phase
    remaining_seconds: int
    current_cycle: int
    completed_cycles: int
    total_cycles: int
    run_state: RunState
    focus_seconds: int
    break_seconds: int

    @property
    def progress_text(self) -> str:
        return f"Cycle {self.current_cycle} of {self.total_cycles} - {self.phase.label}"


TickCallback = Callable[[int, Phase], None]
PhaseChangeCallback = Callable[[Phase, int, int, int], None]
CycleProgressCallback = Callable[[int, int, str], None]
CompleteCallback = Callable[[], None]


@dataclass
class CycleCallbacks:
    """Callback bundle registered with ``CycleEngine.start``.

    Every slot is optional; an empty slot is simply not called.
    """

    on_tick: TickCallback | None = None
    on_phase_change: PhaseChangeCallback | None = None
    on_cycle_progress: CycleProgressCallback | None = None
    on_all_complete: CompleteCallback | None = None

    def tick(self, seconds: int, phase: Phase) -> None:
        if self.on_tick:
            self.on_tick(seconds, phase)

    def phase_change(self, phase: Phase, seconds: int, cycle: int, total: int) -> None:
        if self.on_phase_change:
            self.on_phase_change(phase, seconds, cycle, total)

    def cycle_progress(self, cycle: int, total: int, label: str) -> None:
        if self.on_cycle_progress:
            self.on_cycle_progress(cycle, total, label)

    def all_complete(self) -> None:
        if self.on_all_complete:
            self.on_all_complete()


def check_seconds(value: int, name: str = "seconds") -> int:
    """Reject negative or non-integer durations handed to an engine."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value
