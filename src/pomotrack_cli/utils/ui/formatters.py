"""Output formatters for CLI messages and config tables."""

from typing import Any

from rich.table import Table

from .console import get_console


def _flatten(data: dict, prefix: str = "") -> list[tuple[str, Any]]:
    rows: list[tuple[str, Any]] = []
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            rows.extend(_flatten(value, path))
        else:
            rows.append((path, value))
    return rows


def format_config_table(data: dict, title: str = "Configuration") -> None:
    """Print a nested settings dict as a two-column key/value table."""
    table = Table(title=title, show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in _flatten(data):
        table.add_row(key, str(value))
    get_console().print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an informational message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")
