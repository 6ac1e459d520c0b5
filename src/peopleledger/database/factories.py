"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from peopleledger.database.sqlalchemy_db import SQLAlchemyDatabase


def default_database_path() -> str:
    """Return the database path from PEOPLELEDGER_DB_PATH or ~/.peopleledger."""
    database_path = os.environ.get("PEOPLELEDGER_DB_PATH")
    if database_path is None:
        db_dir = Path.home() / ".peopleledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "peopleledger.db")
    return database_path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks PEOPLELEDGER_DB_PATH
            environment variable, then defaults to ~/.peopleledger/peopleledger.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = default_database_path()

    database_url = f"sqlite:///{database_path}"
    db = SQLAlchemyDatabase(database_url)
    db.database_path = database_path
    return db


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database from an explicit URL, falling back to SQLite.

    Args:
        database_url: Any SQLAlchemy URL. If None, checks PEOPLELEDGER_DB_URL.
        database_path: SQLite file path used when no URL is configured
    """
    if database_url is None:
        database_url = os.environ.get("PEOPLELEDGER_DB_URL")
    if database_url is None:
        return create_sqlite_database(database_path)
    return SQLAlchemyDatabase(database_url)
