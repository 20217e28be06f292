import os
import tempfile

# settings are read at import time, keep tests off the real database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "bondgraph-test-errors.log"))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bondgraph import models  # noqa: F401
from bondgraph.core.database import Base
from bondgraph.schemas import PieceType
from bondgraph.services import ProgressStore

FIXED_NOW = 1_700_000_000_000


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def store(db_session):
    return ProgressStore(db_session, store_key="test_progress", clock=lambda: FIXED_NOW)


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from bondgraph.core.database import get_db
    from bondgraph.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def corner_type():
    return PieceType(key="corner", required_degree=1, available_count=4)
