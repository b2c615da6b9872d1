"""Configuration management commands."""

from typing import Optional

import typer

from pomotrack_cli.commands.decorators import AppError, command_wrapper
from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.utils.exit_codes import ERROR_CONFIG, ERROR_INVALID_ARGS
from pomotrack_cli.utils.ui.console import get_console
from pomotrack_cli.utils.ui.formatters import (
    format_config_table,
    format_success,
    format_warning,
)

app = typer.Typer(help="Configuration management commands")
console = get_console()


def _service():
    try:
        service = get_config_service()
        service.load_config()
        return service
    except RuntimeError as e:
        raise AppError(str(e), exit_code=ERROR_CONFIG) from e


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the current configuration."""
    service = _service()
    format_config_table(service.config.model_dump())
    console.print(f"[dim]{service.config_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.focus_time)"),
) -> None:
    """Get a configuration value."""
    try:
        value = _service().get(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_CONFIG
        ) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., ui.theme)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    service = _service()
    try:
        stored = service.set(key, value)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_CONFIG
        ) from e
    except ValueError as e:
        raise AppError(
            f"Invalid value for '{key}': {value}", exit_code=ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{stored}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_warning("Cancelled")
            raise typer.Exit(0)

    service = _service()
    try:
        service.reset_config(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_CONFIG
        ) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
