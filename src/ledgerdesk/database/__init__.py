"""Database layer for ledgerdesk application."""

from ledgerdesk.database.base import Database
from ledgerdesk.database.factories import create_sqlite_database, create_session_store

__all__ = ["Database", "create_sqlite_database", "create_session_store"]
