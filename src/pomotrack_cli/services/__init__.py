"""Service layer for pomotrack CLI."""
