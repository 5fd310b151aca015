import sqlite3
import os
from contextlib import contextmanager
from pathlib import Path
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def get_schema_path() -> str:
    """Get the path to schema.sql file."""
    return os.path.join(os.path.dirname(__file__), "schema.sql")


def init_database() -> None:
    """Initialize database and create tables if they don't exist."""
    db_path = Path(settings.db_path)
    
    # Create directory if it doesn't exist
    db_path.parent.mkdir(parents=True, exist_ok=True)
    
    # Read schema
    schema_path = get_schema_path()
    with open(schema_path, 'r') as f:
        schema_sql = f.read()
    
    # Execute schema
    with get_db_connection() as conn:
        # WAL lets readers proceed while a ranking transaction holds the write lock
        conn.execute("PRAGMA journal_mode = WAL")
        conn.executescript(schema_sql)
        conn.commit()
    
    logger.info(f"Database initialized at {settings.db_path}")


def _connect(**kwargs) -> sqlite3.Connection:
    conn = sqlite3.connect(
        settings.db_path, timeout=settings.db_timeout_seconds, **kwargs)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db_connection():
    """Context manager for database connections."""
    conn = _connect()
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def immediate_transaction():
    """
    Context manager for a write transaction that takes the database
    write lock up front (BEGIN IMMEDIATE).

    Reads performed inside the block cannot be invalidated by another
    writer before the block commits, so read-then-insert sequences run
    as one atomic unit. Rolls back on any exception.
    """
    conn = _connect(isolation_level=None)
    try:
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")
    finally:
        conn.close()
