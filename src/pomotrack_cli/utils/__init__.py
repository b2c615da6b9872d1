"""Utility helpers for pomotrack CLI."""
