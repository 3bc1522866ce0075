"""Shared test setup: a throwaway SQLite database migrated to head."""
import os
import tempfile
from pathlib import Path

# Must be set before friends_api is imported anywhere
_db_dir = tempfile.mkdtemp(prefix="friends-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_db_dir) / 'test.db'}"

import pytest
import sqlalchemy
from alembic import command
from alembic.config import Config

from friends_api import database as db

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


@pytest.fixture(scope="session", autouse=True)
def migrated_database():
    cfg = Config(str(ALEMBIC_INI))
    cfg.attributes["configure_logger"] = False
    command.upgrade(cfg, "head")
    yield
    db.engine.dispose()


@pytest.fixture(autouse=True)
def clean_tables(migrated_database):
    yield
    with db.engine.begin() as connection:
        connection.execute(sqlalchemy.text("DELETE FROM friendships"))
        connection.execute(sqlalchemy.text("DELETE FROM users"))
