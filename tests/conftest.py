import itertools
import os

# Must be set before the application modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_RETRY_DELAY"] = "0"

import pytest
from fastapi.testclient import TestClient

from alumniconnect.database import Base, SessionLocal, engine
from alumniconnect.main import app
from alumniconnect.models import User, UserRole


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    """Inserts a directory user straight into the database."""
    counter = itertools.count(1)

    def _make(role=UserRole.STUDENT, username=None, **fields):
        n = next(counter)
        user = User(
            username=username or f"{role.value}_{n}",
            email=f"{role.value}_{n}@example.edu",
            role=role.value,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def student(make_user):
    return make_user(UserRole.STUDENT, username="sam")


@pytest.fixture
def mentor(make_user):
    return make_user(UserRole.ALUMNI, username="maria", industry="Software", availability=2)


@pytest.fixture
def api_user(client):
    """Registers a user through the HTTP API and returns the JSON body."""
    def _register(username, role, **fields):
        payload = {"username": username, "email": f"{username}@example.edu", "role": role, **fields}
        response = client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register
