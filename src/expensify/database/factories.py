"""Database factory functions."""

import os
from pathlib import Path
from typing import Optional

from expensify.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "EXPENSIFY_DB_PATH"
DEFAULT_DB_PATH = Path("~/.expensify/expensify.db")


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file: explicit path, then EXPENSIFY_DB_PATH, then ~/.expensify/expensify.db.

    The parent directory is created when missing.
    """
    path = Path(database_path or os.environ.get(DB_PATH_ENV) or DEFAULT_DB_PATH).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed database.

    Args:
        database_path: Path to the database file; see resolve_database_path

    Returns:
        SQLAlchemyDatabase bound to the file
    """
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
