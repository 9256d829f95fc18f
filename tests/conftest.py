import sys
from pathlib import Path

# Ensure project root is on sys.path so `recipe_server` imports without an install
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from recipe_server import app as app_module
from recipe_server.db import init_db
from recipe_server.store import RecordStore


@pytest.fixture
def db_engine():
    # StaticPool keeps one in-memory database shared across connections
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(db_engine):
    return RecordStore(db_engine)


@pytest.fixture
def client(store):
    app_module.app.dependency_overrides[app_module.get_store] = lambda: store
    yield TestClient(app_module.app)
    app_module.app.dependency_overrides.clear()
