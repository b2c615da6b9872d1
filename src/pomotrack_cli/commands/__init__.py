"""CLI commands for pomotrack."""
