import pytest

from database import (
    SEED_BOOKS,
    DatabaseInitError,
    create_tables,
    get_db_connection,
    initialize_database,
    seed_books,
)


def _columns(db_file):
    conn = get_db_connection(db_file)
    try:
        return {row["name"]: row for row in conn.execute("PRAGMA table_info(books)")}
    finally:
        conn.close()


def test_create_tables_defines_books(db_file):
    create_tables(db_file)
    columns = _columns(db_file)
    assert set(columns) == {"id", "name", "author"}
    assert columns["id"]["pk"] == 1
    assert columns["name"]["notnull"] == 1
    assert columns["author"]["notnull"] == 1


def test_initialize_is_idempotent(db_file):
    initialize_database(db_file)
    conn = get_db_connection(db_file)
    conn.execute("INSERT INTO books (name, author) VALUES (?, ?)", ("Dune", "Herbert"))
    conn.commit()
    conn.close()

    initialize_database(db_file)

    conn = get_db_connection(db_file)
    try:
        assert conn.execute("SELECT COUNT(*) FROM books").fetchone()[0] == 1
    finally:
        conn.close()


def test_seed_books_only_fills_empty_table(db_file):
    create_tables(db_file)
    assert seed_books(db_file) == len(SEED_BOOKS)
    assert seed_books(db_file) == 0

    conn = get_db_connection(db_file)
    try:
        rows = conn.execute("SELECT name, author FROM books ORDER BY id").fetchall()
    finally:
        conn.close()
    assert [(r["name"], r["author"]) for r in rows] == SEED_BOOKS


def test_initialize_with_seed(db_file):
    initialize_database(db_file, seed=True)
    initialize_database(db_file, seed=True)
    conn = get_db_connection(db_file)
    try:
        assert conn.execute("SELECT COUNT(*) FROM books").fetchone()[0] == len(SEED_BOOKS)
    finally:
        conn.close()


def test_initialize_failure_is_fatal(tmp_path):
    with pytest.raises(DatabaseInitError):
        initialize_database(str(tmp_path / "no" / "such" / "dir.db"))
