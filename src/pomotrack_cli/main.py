"""Main entry point for pomotrack CLI."""

import typer

from pomotrack_cli import __version__
from pomotrack_cli.commands import config, timer
from pomotrack_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomotrack",
    help="A Pomodoro timer for the terminal: focus, break and cycle modes",
    no_args_is_help=True,
)

console = get_console()


# Timer modes
app.command("focus")(timer.focus_command)
app.command("break")(timer.break_command)
app.command("cycle")(timer.cycle_command)

# Add subcommands
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]pomotrack[/bold] version [cyan]{__version__}[/cyan]")


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
