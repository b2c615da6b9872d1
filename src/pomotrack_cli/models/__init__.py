"""Models package for pomotrack CLI."""
