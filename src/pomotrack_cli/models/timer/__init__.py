"""Timer engines for pomotrack: single countdown and focus/break cycles."""

from .countdown import SingleCountdown
from .cycle import GAP_SECONDS, MAX_CYCLES, MIN_CYCLES, CycleEngine
from .durations import DurationError, format_duration, parse_duration
from .phases import CycleCallbacks, CycleSnapshot, Phase, RunState
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    "SingleCountdown",
    "CycleEngine",
    "CycleCallbacks",
    "CycleSnapshot",
    "Phase",
    "RunState",
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "DurationError",
    "parse_duration",
    "format_duration",
    "GAP_SECONDS",
    "MIN_CYCLES",
    "MAX_CYCLES",
]
