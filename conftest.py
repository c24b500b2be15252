import pytest
from fastapi.testclient import TestClient

from api import create_app
from library import Library


@pytest.fixture
def db_file(tmp_path):
    # tmp_path is already unique per test, parametrized cases included
    return str(tmp_path / "books.db")


@pytest.fixture
def lib(db_file):
    return Library(db_file=db_file)


@pytest.fixture
def client(db_file):
    # Entering the client runs the lifespan hook, which creates the schema
    with TestClient(create_app(db_file=db_file, seed=False)) as test_client:
        yield test_client
