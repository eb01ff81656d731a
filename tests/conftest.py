"""Shared pytest fixtures for the invoicing backend tests."""

import pytest
from fastapi.testclient import TestClient

from db import JsonStore, SqlStore, get_store
from main import app


@pytest.fixture
def db_path(tmp_path):
  return tmp_path / "db.json"


@pytest.fixture
def json_store(db_path):
  """A JSON document store in a temporary directory."""
  return JsonStore(str(db_path))


@pytest.fixture
def sql_store(tmp_path):
  """A SQLite backed store in a temporary directory."""
  store = SqlStore(f"sqlite:///{tmp_path / 'invoices.db'}")
  yield store
  store.engine.dispose()


@pytest.fixture(params=["json", "sql"])
def store(request):
  """Each store backend in turn."""
  return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(json_store):
  """API client wired to a temporary JSON store."""
  app.dependency_overrides[get_store] = lambda: json_store
  with TestClient(app) as c:
    yield c
  app.dependency_overrides.clear()
