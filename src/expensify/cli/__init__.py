"""CLI layer for expensify application."""
