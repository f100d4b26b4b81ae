"""Persistence of the bank and card directory and of extracted transactions."""

from expensify.database.base import Database
from expensify.database.factories import create_sqlite_database, resolve_database_path

__all__ = ["Database", "create_sqlite_database", "resolve_database_path"]
