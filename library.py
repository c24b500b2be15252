import logging
import sqlite3
from typing import List, Optional

from book import Book
from config import settings
from database import get_db_connection, initialize_database

logger = logging.getLogger(__name__)


class BookNotFoundError(LookupError):
    pass


class StorageError(Exception):
    """A statement against the books table failed."""


class Library:
    """Data access for the books table.

    Constructing a Library runs the schema initializer, so a Library that
    exists is backed by a usable table. Each operation opens its own
    connection and issues exactly one parameterized statement.
    """

    def __init__(self, db_file: Optional[str] = None, seed: bool = False) -> None:
        self.db_file = db_file or settings.db_file
        initialize_database(self.db_file, seed=seed)

    def _connect(self, error_message: str) -> sqlite3.Connection:
        try:
            return get_db_connection(self.db_file)
        except sqlite3.Error as e:
            logger.error("Opening %s failed: %s", self.db_file, e)
            raise StorageError(error_message) from e

    def fetch_books(self) -> List[Book]:
        """All books, in whatever order storage returns them."""
        conn = self._connect("Error fetching books")
        try:
            rows = conn.execute("SELECT id, name, author FROM books").fetchall()
            return [Book.from_row(row) for row in rows]
        except sqlite3.Error as e:
            logger.error("Fetching books failed: %s", e)
            raise StorageError("Error fetching books") from e
        finally:
            conn.close()

    def fetch_book(self, book_id: int) -> Book:
        conn = self._connect("Error retrieving book")
        try:
            row = conn.execute(
                "SELECT id, name, author FROM books WHERE id = ?", (book_id,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.error("Fetching book %s failed: %s", book_id, e)
            raise StorageError("Error retrieving book") from e
        finally:
            conn.close()
        if row is None:
            raise BookNotFoundError(f"Book with ID {book_id} not found.")
        return Book.from_row(row)

    def insert_book(self, book: Book) -> Book:
        """Insert a book; storage assigns the id, any id on ``book`` is ignored."""
        conn = self._connect("Error creating book")
        try:
            cursor = conn.execute(
                "INSERT INTO books (name, author) VALUES (?, ?)",
                (book.name, book.author),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error("Inserting book %r failed: %s", book.name, e)
            raise StorageError("Error creating book") from e
        finally:
            conn.close()
        return Book(id=cursor.lastrowid, name=book.name, author=book.author)

    def update_book(self, book: Book) -> Book:
        """Overwrite name and author of ``book.id``.

        Updating an id with no row is not an error: zero rows change.
        """
        conn = self._connect("Error updating book")
        try:
            conn.execute(
                "UPDATE books SET name = ?, author = ? WHERE id = ?",
                (book.name, book.author, book.id),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error("Updating book %s failed: %s", book.id, e)
            raise StorageError("Error updating book") from e
        finally:
            conn.close()
        return book

    def delete_book(self, book_id: int) -> None:
        """Delete by id. Deleting a missing id is a no-op."""
        conn = self._connect("Error deleting book")
        try:
            conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
            conn.commit()
        except sqlite3.Error as e:
            logger.error("Deleting book %s failed: %s", book_id, e)
            raise StorageError("Error deleting book") from e
        finally:
            conn.close()
