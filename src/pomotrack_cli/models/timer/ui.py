"""Full-screen timer UI for the focus, break and cycle modes."""

import asyncio
from collections.abc import Awaitable, Callable

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .countdown import SingleCountdown
from .cycle import CycleEngine
from .durations import format_duration
from .keyboard import create_keyboard_handler
from .phases import CycleCallbacks, CycleSnapshot, Phase, RunState

KEY_POLL_SECONDS = 0.1
COMPLETION_HOLD_SECONDS = 2

THEMES: dict[str, dict[str, str]] = {
    "light": {
        "focus": "red",
        "break": "green",
        "paused": "yellow",
        "gap": "magenta",
        "accent": "cyan",
        "muted": "dim",
    },
    "dark": {
        "focus": "bright_red",
        "break": "bright_green",
        "paused": "bright_yellow",
        "gap": "bright_magenta",
        "accent": "bright_cyan",
        "muted": "grey50",
    },
}


def progress_bar(total_seconds: int, remaining: int, width: int = 40) -> str:
    """Render elapsed time as a block bar followed by a percentage."""
    elapsed = total_seconds - remaining
    pct = min(100, int((elapsed / total_seconds) * 100)) if total_seconds > 0 else 0
    filled = int(width * pct / 100)
    return "▓" * filled + "░" * (width - filled) + f"  {pct}%"


class TimerDisplay:
    """Renders the timer engines and feeds them keyboard controls."""

    def __init__(
        self,
        console: Console | None = None,
        theme: str = "light",
        refresh_per_second: int = 4,
    ):
        self.console = console or Console()
        self.theme = theme if theme in THEMES else "light"
        self.colors = THEMES[self.theme]
        self.refresh_per_second = refresh_per_second
        self.status_line = ""

    # ----- Layouts -----
    def create_countdown_layout(self, label: str, countdown: SingleCountdown) -> Layout:
        """Layout for the single focus/break countdown."""
        phase_color = self.colors["break" if label.lower() == "break" else "focus"]
        if countdown.is_paused:
            title, color = "PAUSED", self.colors["paused"]
        else:
            title, color = f"{label} Mode", phase_color

        body = Group(
            Text(
                format_duration(countdown.remaining_seconds),
                style=f"bold {color}",
                justify="center",
            ),
            Text(""),
            Text(
                progress_bar(countdown.saved_seconds, countdown.remaining_seconds),
                style=self.colors["muted"],
                justify="center",
            ),
        )
        return self._frame(title, color, body, paused=countdown.is_paused)

    def create_cycle_layout(self, snapshot: CycleSnapshot) -> Layout:
        """Layout for cycle mode: both durations plus cycle progress."""
        state = snapshot.run_state
        if state is RunState.PAUSED:
            title, color = "PAUSED", self.colors["paused"]
        elif state is RunState.INTER_PHASE_GAP:
            title, color = "Switching...", self.colors["gap"]
        else:
            title = f"Cycle Mode - {snapshot.phase.label}"
            color = self.colors[snapshot.phase.value]

        components = [
            self._phase_clock(snapshot, Phase.FOCUS),
            self._phase_clock(snapshot, Phase.BREAK),
            Text(""),
            Text(snapshot.progress_text, style=f"bold {self.colors['accent']}", justify="center"),
        ]
        if self.status_line:
            components.append(Text(self.status_line, style=self.colors["muted"], justify="center"))
        return self._frame(title, color, Group(*components), paused=state is RunState.PAUSED)

    def _phase_clock(self, snapshot: CycleSnapshot, phase: Phase) -> Text:
        if phase is Phase.FOCUS:
            configured = snapshot.focus_seconds
        else:
            configured = snapshot.break_seconds
        # Only the active phase counts down; the other shows its configured value.
        active = snapshot.phase is phase and snapshot.run_state is not RunState.IDLE
        seconds = snapshot.remaining_seconds if active else configured
        style = f"bold {self.colors[phase.value]}" if active else self.colors["muted"]
        return Text(f"{phase.label:<6} {format_duration(seconds)}", style=style, justify="center")

    def _frame(self, title: str, color: str, body: Group, paused: bool) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )
        layout["header"].update(
            Align.center(Text(title, style=f"bold {color}", justify="center"), vertical="middle")
        )
        layout["body"].update(Align.center(body, vertical="middle"))
        layout["footer"].update(Align.center(self._footer_text(paused), vertical="middle"))
        return layout

    def _footer_text(self, paused: bool) -> Text:
        """Create footer with keyboard hints."""
        if paused:
            hints = "Press 'r' to resume  •  'x' to reset  •  'q' to quit"
        else:
            hints = "Press 'p' to pause  •  'x' to reset  •  'q' to quit"
        return Text(hints, style="dim", justify="center")

    # ----- Runners -----
    def run_countdown(self, countdown: SingleCountdown, label: str) -> str:
        """
        Run a single countdown full screen.

        Returns the final status: 'completed', 'stopped', or 'interrupted'.
        """

        async def _run() -> str:
            done = asyncio.Event()
            countdown.start(on_complete=done.set)

            def handle_key(key: str) -> str | None:
                if key == "p":
                    countdown.pause()
                elif key == "r":
                    countdown.start(on_complete=done.set)
                elif key == "x":
                    countdown.reset()
                elif key in ("q", "s"):
                    countdown.suspend_for_external_switch()
                    return "stopped"
                return None

            return await self._drive(
                lambda: self.create_countdown_layout(label, countdown), handle_key, done
            )

        return self._run_loop(_run, countdown.suspend_for_external_switch)

    def run_cycle(self, engine: CycleEngine) -> str:
        """
        Run cycle mode full screen until every cycle completes or the user quits.

        Returns the final status: 'completed', 'stopped', or 'interrupted'.
        """

        async def _run() -> str:
            done = asyncio.Event()

            def on_phase_change(phase: Phase, seconds: int, cycle: int, total: int) -> None:
                self.status_line = f"{phase.label} started ({format_duration(seconds)})"

            callbacks = CycleCallbacks(
                on_phase_change=on_phase_change,
                on_all_complete=done.set,
            )
            engine.start(callbacks)

            def handle_key(key: str) -> str | None:
                if key == "p":
                    engine.pause()
                elif key == "r":
                    if engine.is_paused:
                        engine.resume(callbacks)
                    elif engine.run_state is RunState.IDLE:
                        engine.start(callbacks)
                elif key == "x":
                    engine.reset()
                    self.status_line = "Reset"
                elif key in ("q", "s"):
                    engine.suspend_for_external_switch()
                    return "stopped"
                return None

            return await self._drive(
                lambda: self.create_cycle_layout(engine.snapshot()), handle_key, done
            )

        return self._run_loop(_run, engine.suspend_for_external_switch)

    def _run_loop(
        self, coro_factory: Callable[[], Awaitable[str]], on_interrupt: Callable[[], None]
    ) -> str:
        try:
            return asyncio.run(coro_factory())
        except KeyboardInterrupt:
            on_interrupt()
            return "interrupted"

    async def _drive(
        self,
        render: Callable[[], Layout],
        handle_key: Callable[[str], str | None],
        done: asyncio.Event,
    ) -> str:
        keyboard = create_keyboard_handler()
        try:
            with Live(
                render(),
                console=self.console,
                refresh_per_second=self.refresh_per_second,
                screen=True,
            ) as live:
                while not done.is_set():
                    key = keyboard.get_key()
                    if key:
                        result = handle_key(key)
                        if result:
                            return result
                    live.update(render())
                    await asyncio.sleep(KEY_POLL_SECONDS)

                # Show completion briefly
                live.update(render())
                await asyncio.sleep(COMPLETION_HOLD_SECONDS)
                return "completed"
        finally:
            keyboard.stop()


def show_completion_message(title: str, detail: str, console: Console | None = None):
    """Show a completion panel after a timer ends."""
    console = console or Console()
    panel = Panel(
        f"[bold green]{title}[/bold green]\n\n{detail}",
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)


def show_stopped_message(title: str, remaining: int, console: Console | None = None):
    """Show a message when a timer is stopped early."""
    console = console or Console()
    panel = Panel(
        f"[yellow]{title}[/yellow]\n\nRemaining: {format_duration(remaining)}",
        border_style="yellow",
        padding=(1, 2),
    )
    console.print(panel)
