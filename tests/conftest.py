import os

os.environ.setdefault("DB_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from family_expenses.core.auth import AuthContext
from family_expenses.core.db import get_db
from family_expenses.main import app
from family_expenses.models.base import Base
from family_expenses.models import entities  # noqa: F401


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def alice():
    return AuthContext(user_id="alice", email="alice@example.com", name="Alice")


@pytest.fixture
def bob():
    return AuthContext(user_id="bob", email="bob@example.com", name="Bob")


@pytest.fixture
def carol():
    return AuthContext(user_id="carol", email="carol@example.com", name="Carol")
