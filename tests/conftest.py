"""Shared fixtures: a throwaway SQLite database, the app client, token helpers."""

import base64
import json
import os
import tempfile
import uuid

# Point settings at a temp SQLite file before anything imports subscore
_TMP_DIR = tempfile.mkdtemp(prefix="subscore-tests-")
DB_PATH = os.path.join(_TMP_DIR, "test.db")
os.environ["DATABASE_URL"] = f"sqlite:///{DB_PATH}"
os.environ["AUTH_MODE"] = "unverified"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from subscore.app import create_app
from subscore.models import Base
from subscore.models.category import Category

DATABASE_URL = f"sqlite:///{DB_PATH}"


def _b64url(data: dict) -> str:
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def make_token(claims: dict) -> str:
    """Unsigned JWT-shaped token carrying the given claims."""
    return f"{_b64url({'alg': 'none', 'typ': 'JWT'})}.{_b64url(claims)}.signature"


def auth_headers(email: str = "jane@example.com", name: str = "Jane", picture: str = "http://img/jane.png") -> dict:
    token = make_token({"email": email, "name": name, "picture": picture})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session")
def sync_engine():
    engine = create_engine(DATABASE_URL)
    yield engine
    engine.dispose()


@pytest.fixture(autouse=True)
def reset_db(sync_engine):
    """Fresh schema for every test."""
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)
    yield


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def seed_category(sync_engine):
    """Insert a category and return its id."""

    def _seed(name: str = "Video") -> uuid.UUID:
        with Session(sync_engine) as session:
            category = Category(id=uuid.uuid4(), name=name)
            session.add(category)
            session.commit()
            return category.id

    return _seed


@pytest.fixture
def registered_user(client):
    """Register jane@example.com and return the API's user record."""
    response = client.post(
        "/api/users/register",
        json={"email": "jane@example.com", "name": "Jane", "image": "http://img/jane.png"},
    )
    assert response.status_code == 201
    return response.json()
