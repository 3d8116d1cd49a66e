import itertools
import os

# must be set before app modules read their config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SEED_SAMPLE_DATA"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import Base, get_db
from app.main import app
from app.schemas.user import UserCreateRequest
from app.services.users import create_user


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def _get_test_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "username": f"dev{n}",
            "email": f"dev{n}@example.com",
            "password": "secret123",
            "first_name": "Dev",
            "last_name": f"Number{n}",
            "title": "Software Engineer",
            "experience_level": "intermediate",
            "skills": ["Python"],
        }
        data.update(overrides)
        return create_user(db, UserCreateRequest(**data))

    return _make


@pytest.fixture
def session_factory(db):
    """Open extra sessions on the test database, e.g. to act as a second request."""
    return TestingSessionLocal
