"""Repository factory functions."""

import os
from pathlib import Path
from typing import Optional

from ledgerbooks.database.sqlalchemy_db import SQLAlchemyBookRepository

DB_PATH_ENV = "LEDGERBOOKS_DB_PATH"


def default_database_path() -> Path:
    """Return ~/.ledgerbooks/books.db, creating the directory if needed."""
    db_dir = Path.home() / ".ledgerbooks"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "books.db"


def create_sqlite_repository(database_path: Optional[str] = None) -> SQLAlchemyBookRepository:
    """Create a SQLite-backed repository.

    Args:
        database_path: Path to SQLite database file. If None, checks
            LEDGERBOOKS_DB_PATH environment variable, then defaults to
            ~/.ledgerbooks/books.db

    Returns:
        SQLAlchemyBookRepository instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(default_database_path())

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyBookRepository(database_url)
