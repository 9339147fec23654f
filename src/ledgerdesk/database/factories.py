"""Factory functions for creating the database and session stores."""

import os
from pathlib import Path
from typing import Optional

from ledgerdesk.database.sqlalchemy_db import SQLAlchemyDatabase
from ledgerdesk.domain.session import SessionStore

DB_PATH_ENV = "LEDGERDESK_DB_PATH"
SESSION_PATH_ENV = "LEDGERDESK_SESSION_PATH"


def default_data_dir() -> Path:
    """Return ~/.ledgerdesk, creating it if needed."""
    data_dir = Path.home() / ".ledgerdesk"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERDESK_DB_PATH
            environment variable, then defaults to ~/.ledgerdesk/ledgerdesk.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(default_data_dir() / "ledgerdesk.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_session_store(session_path: Optional[str] = None) -> SessionStore:
    """Create the session store.

    Args:
        session_path: Path to the session file. If None, checks LEDGERDESK_SESSION_PATH
            environment variable, then defaults to ~/.ledgerdesk/session.json
    """
    if session_path is None:
        session_path = os.environ.get(SESSION_PATH_ENV)

    if session_path is None:
        session_path = str(default_data_dir() / "session.json")

    return SessionStore(Path(session_path))
