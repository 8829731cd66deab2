from __future__ import annotations

import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECURITY_HEADERS_ENABLED", "true")

import pytest
from fastapi.testclient import TestClient

from accounting_api.database import Base, SessionLocal, engine
from accounting_api.main import app


@pytest.fixture(autouse=True)
def fresh_schema() -> None:
    # Every test starts from empty tables on the shared in-memory database
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api() -> str:
    return "/api/v1"
