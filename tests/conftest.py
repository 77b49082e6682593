"""Shared pytest fixtures.

The store is pointed at a throwaway SQLite file before any application
module is imported, so tests never touch a developer database.
"""
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="meal_planner_tests_")
os.environ["WRITE_DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ.pop("READ_DATABASE_URL", None)
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["SEED_DEMO_DATA"] = "false"

import pytest

from database import models
from database.database import WriteSessionLocal, write_engine

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "..", "data", "fixtures")


@pytest.fixture()
def db():
    """Fresh schema and a write session for each test."""
    models.Base.metadata.drop_all(bind=write_engine)
    models.Base.metadata.create_all(bind=write_engine)
    session = WriteSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def meals_csv():
    return os.path.join(FIXTURES_DIR, "meals.csv")
