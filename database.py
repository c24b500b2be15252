import logging
import sqlite3
from typing import List, Tuple

from config import settings

logger = logging.getLogger(__name__)

# Sample books the legacy service carried in memory. They only reach the
# table through seed_books(), and only while the table is empty.
SEED_BOOKS: List[Tuple[str, str]] = [
    ("Geeta", "Krishna"),
    ("Life Journey", "Steve Smith"),
]


class DatabaseInitError(RuntimeError):
    """Raised when the database cannot be opened or the schema cannot be created."""


def get_db_connection(db_file: str | None = None) -> sqlite3.Connection:
    """Establishes a connection to the SQLite database."""
    conn = sqlite3.connect(db_file or settings.db_file)
    conn.row_factory = sqlite3.Row
    return conn


def create_tables(db_file: str | None = None) -> None:
    """Creates the books table if it doesn't exist."""
    conn = get_db_connection(db_file)
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                author TEXT NOT NULL
            )
        """)
        conn.commit()
    finally:
        conn.close()


def seed_books(db_file: str | None = None) -> int:
    """Inserts the sample books into an empty table.

    Returns the number of rows inserted, 0 when the table already has data.
    """
    conn = get_db_connection(db_file)
    try:
        book_count = conn.execute("SELECT COUNT(*) FROM books").fetchone()[0]
        if book_count > 0:
            return 0
        conn.executemany("INSERT INTO books (name, author) VALUES (?, ?)", SEED_BOOKS)
        conn.commit()
        logger.info("Seeded %d books into %s", len(SEED_BOOKS), db_file or settings.db_file)
        return len(SEED_BOOKS)
    finally:
        conn.close()


def initialize_database(db_file: str | None = None, seed: bool = False) -> None:
    """Initializes the database, creating the table and seeding if asked.

    Any failure is fatal for the caller: it is re-raised as DatabaseInitError.
    """
    target = db_file or settings.db_file
    try:
        create_tables(target)
        if seed:
            seed_books(target)
    except sqlite3.Error as e:
        logger.error("Database initialization failed for %s: %s", target, e)
        raise DatabaseInitError(f"Could not initialize database {target}: {e}") from e
    logger.info("Database ready at %s", target)
