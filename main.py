import os
import sqlite3
import subprocess
import sys
from typing import Optional

import typer
from rich.console import Console

from config import settings
from database import DatabaseInitError, initialize_database, seed_books
from library import Library, StorageError
from ui_helpers import print_list_result, set_output_mode

console = Console()

app = typer.Typer(help="Books API command line")

DB_FILE_OPTION = typer.Option(None, "--db-file", help="SQLite database file (default: BOOKS_DB_FILE)")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global options for the CLI (e.g. output mode)."""
    if output:
        set_output_mode(output)


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on (default: API_PORT)"),
    db_file: Optional[str] = DB_FILE_OPTION,
):
    """Start the HTTP API under uvicorn."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    env = dict(os.environ)
    if db_file:
        env["BOOKS_DB_FILE"] = db_file
    print(f"Starting server at port {port}")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    try:
        result = subprocess.run(args, env=env)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] could not launch uvicorn. Make sure it is installed.")
        raise typer.Exit(code=1)
    if result.returncode:
        raise typer.Exit(code=result.returncode)


@app.command("init-db")
def cli_init_db(
    seed: bool = typer.Option(False, "--seed", help="Insert the sample books when the table is empty"),
    db_file: Optional[str] = DB_FILE_OPTION,
):
    """Create the books table if it does not exist."""
    target = db_file or settings.db_file
    try:
        initialize_database(target)
        inserted = seed_books(target) if seed else 0
    except DatabaseInitError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1)
    except sqlite3.Error as e:
        console.print(f"[bold red]Seeding failed:[/] {e}")
        raise typer.Exit(code=1)
    print(f"Database ready: {target}")
    if seed:
        print(f"Seeded {inserted} books.")


@app.command("list")
def cli_list(db_file: Optional[str] = DB_FILE_OPTION):
    """List all stored books."""
    try:
        books = Library(db_file=db_file).fetch_books()
    except (DatabaseInitError, StorageError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1)
    print_list_result(books)


if __name__ == "__main__":
    app()
