import json
from unittest.mock import patch, MagicMock

import pytest
from typer.testing import CliRunner

from book import Book
from main import app
from ui_helpers import OUTPUT_MODE_ENV

runner = CliRunner()


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)


def test_list_no_books(db_file):
    result = runner.invoke(app, ["list", "--db-file", db_file])
    assert result.exit_code == 0
    assert "No books found." in result.stdout


def test_list_books_plain(lib, db_file):
    lib.insert_book(Book("Dune", "Herbert"))
    result = runner.invoke(app, ["list", "--db-file", db_file])
    assert result.exit_code == 0
    assert "1 - Dune by Herbert" in result.stdout


def test_list_books_json(lib, db_file):
    lib.insert_book(Book("Dune", "Herbert"))
    result = runner.invoke(app, ["--output", "json", "list", "--db-file", db_file])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [{"id": "1", "name": "Dune", "author": "Herbert"}]


def test_list_bad_database(tmp_path):
    result = runner.invoke(app, ["list", "--db-file", str(tmp_path / "missing" / "x.db")])
    assert result.exit_code == 1


def test_init_db_with_seed(db_file):
    result = runner.invoke(app, ["init-db", "--seed", "--db-file", db_file])
    assert result.exit_code == 0
    assert f"Database ready: {db_file}" in result.stdout
    assert "Seeded 2 books." in result.stdout

    result = runner.invoke(app, ["list", "--db-file", db_file])
    assert "Geeta by Krishna" in result.stdout
    assert "Life Journey by Steve Smith" in result.stdout


def test_init_db_failure(tmp_path):
    result = runner.invoke(app, ["init-db", "--db-file", str(tmp_path / "missing" / "x.db")])
    assert result.exit_code == 1


@patch("subprocess.run")
def test_serve_command(mock_subprocess_run, db_file):
    mock_subprocess_run.return_value = MagicMock(returncode=0)
    result = runner.invoke(app, ["serve", "--port", "9090", "--db-file", db_file])
    assert result.exit_code == 0
    assert "Starting server at port 9090" in result.stdout
    mock_subprocess_run.assert_called_once()
    # Check if uvicorn is called with correct arguments
    args = mock_subprocess_run.call_args[0][0]
    assert "uvicorn" in args
    assert "api:app" in args
    assert args[args.index("--port") + 1] == "9090"
    assert mock_subprocess_run.call_args[1]["env"]["BOOKS_DB_FILE"] == db_file
