"""Pomodoro timer commands: single focus/break countdowns and cycle mode."""

import typer

from pomotrack_cli.commands.decorators import AppError, command_wrapper
from pomotrack_cli.models.config_models import AppConfig
from pomotrack_cli.models.timer.countdown import SingleCountdown
from pomotrack_cli.models.timer.cycle import MAX_CYCLES, MIN_CYCLES, CycleEngine
from pomotrack_cli.models.timer.durations import (
    DurationError,
    format_duration,
    parse_duration,
    validate_seconds,
)
from pomotrack_cli.models.timer.scheduler import AsyncioScheduler
from pomotrack_cli.models.timer.ui import (
    TimerDisplay,
    show_completion_message,
    show_stopped_message,
)
from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.utils.exit_codes import ERROR_CONFIG, ERROR_INVALID_ARGS
from pomotrack_cli.utils.ui.console import get_console

console = get_console()


def _load_config() -> AppConfig:
    try:
        return get_config_service().config
    except RuntimeError as e:
        raise AppError(str(e), exit_code=ERROR_CONFIG) from e


def _resolve_seconds(value: str | None, default_seconds: int, allow_zero: bool = False) -> int:
    """Turn a CLI duration (or the configured default) into validated seconds."""
    try:
        if value is None:
            return validate_seconds(default_seconds, allow_zero=allow_zero)
        return parse_duration(value, allow_zero=allow_zero)
    except DurationError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e


def _get_display(config: AppConfig) -> TimerDisplay:
    return TimerDisplay(
        console,
        theme=config.ui.theme,
        refresh_per_second=config.ui.refresh_per_second,
    )


def _run_single(label: str, seconds: int, config: AppConfig) -> str:
    countdown = SingleCountdown(seconds, scheduler=AsyncioScheduler())
    console.print(f"\n[bold]{label} timer:[/bold] {format_duration(seconds)}\n")

    result = _get_display(config).run_countdown(countdown, label)

    if result == "completed":
        show_completion_message(
            f"{label} complete!", f"Duration: {format_duration(seconds)}", console
        )
    else:
        show_stopped_message(f"{label} stopped", countdown.remaining_seconds, console)
    return result


@command_wrapper
def focus_command(
    duration: str | None = typer.Argument(
        None, help="Focus duration as MM:SS (default from config)"
    ),
) -> None:
    """Start a single focus countdown."""
    config = _load_config()
    seconds = _resolve_seconds(duration, config.timer.focus_seconds)
    _run_single("Focus", seconds, config)


@command_wrapper
def break_command(
    duration: str | None = typer.Argument(
        None, help="Break duration as MM:SS (default from config)"
    ),
) -> None:
    """Start a single break countdown."""
    config = _load_config()
    seconds = _resolve_seconds(duration, config.timer.break_seconds)
    _run_single("Break", seconds, config)


@command_wrapper
def cycle_command(
    focus: str | None = typer.Option(
        None, "--focus", "-f", help="Focus duration as MM:SS"
    ),
    break_time: str | None = typer.Option(
        None, "--break", "-b", help="Break duration as MM:SS (00:00 allowed)"
    ),
    cycles: int | None = typer.Option(
        None,
        "--cycles",
        "-c",
        min=MIN_CYCLES,
        max=MAX_CYCLES,
        clamp=True,
        help=f"Number of focus/break cycles ({MIN_CYCLES}-{MAX_CYCLES})",
    ),
) -> None:
    """Alternate focus and break phases for a number of cycles."""
    config = _load_config()
    focus_seconds = _resolve_seconds(focus, config.timer.focus_seconds)
    break_seconds = _resolve_seconds(
        break_time, config.timer.break_seconds, allow_zero=True
    )
    total = cycles if cycles is not None else config.timer.cycles

    engine = CycleEngine(
        focus_seconds, break_seconds, total, scheduler=AsyncioScheduler()
    )
    console.print(
        f"\n[bold]Cycle mode:[/bold] {engine.total_cycles} x "
        f"({format_duration(focus_seconds)} focus / {format_duration(break_seconds)} break)\n"
    )

    result = _get_display(config).run_cycle(engine)

    if result == "completed":
        show_completion_message(
            "All cycles completed! Great work! 🎉",
            f"Cycles: {engine.completed_cycles} of {engine.total_cycles}",
            console,
        )
    else:
        show_stopped_message(
            f"Cycle mode stopped ({engine.snapshot().progress_text})",
            engine.current_seconds,
            console,
        )
