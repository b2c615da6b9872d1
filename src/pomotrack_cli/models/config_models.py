"""Configuration models for pomotrack.

Durations are stored the way the user types them (``MM:SS``) and normalised
on load, so a hand-edited config file with ``5:0`` or ``25`` still works.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from pomotrack_cli.models.timer.cycle import MAX_CYCLES, MIN_CYCLES
from pomotrack_cli.models.timer.durations import format_duration, parse_duration


class TimerDefaults(BaseModel):
    """Default durations and cycle count used when no CLI override is given."""

    focus_time: str = Field(default="25:00", description="Focus duration (MM:SS)")
    break_time: str = Field(default="05:00", description="Break duration (MM:SS)")
    cycles: int = Field(default=4, ge=MIN_CYCLES, le=MAX_CYCLES)

    @field_validator("focus_time")
    @classmethod
    def validate_focus_time(cls, v: str) -> str:
        return format_duration(parse_duration(str(v)))

    @field_validator("break_time")
    @classmethod
    def validate_break_time(cls, v: str) -> str:
        # A 00:00 break is allowed in cycle mode.
        return format_duration(parse_duration(str(v), allow_zero=True))

    @property
    def focus_seconds(self) -> int:
        return parse_duration(self.focus_time)

    @property
    def break_seconds(self) -> int:
        return parse_duration(self.break_time, allow_zero=True)


class UIConfig(BaseModel):
    """UI configuration."""

    theme: Literal["light", "dark"] = Field(default="light")
    refresh_per_second: int = Field(default=4, ge=1, le=30)


class AppConfig(BaseModel):
    """Main pomotrack configuration"""

    timer: TimerDefaults = Field(default_factory=TimerDefaults)
    ui: UIConfig = Field(default_factory=UIConfig)
