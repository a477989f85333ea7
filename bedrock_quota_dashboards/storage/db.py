"""
Database connection management.

Provides the SQLite connection backing the local metrics store.
"""

import sqlite3
from pathlib import Path

DEFAULT_DB_PATH = "bedrock-quota-metrics.db"


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Create and return a SQLite database connection.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLite connection
    """
    path = Path(db_path)
    conn = sqlite3.connect(str(path))
    return conn
