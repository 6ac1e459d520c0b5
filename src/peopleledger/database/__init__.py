"""Database layer for peopleledger application."""

from peopleledger.database.base import Database
from peopleledger.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
