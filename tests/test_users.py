"""Tests for user registration (upsert by email)."""

import asyncio
from unittest.mock import patch

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from conftest import DATABASE_URL
from subscore.db.session import build_engine
from subscore.schemas.user import UserRegister
from subscore.services import user_service


def test_register_creates_user(client):
    response = client.post(
        "/api/users/register",
        json={"email": "jane@example.com", "name": "Jane", "image": "http://img/jane.png"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["email"] == "jane@example.com"
    assert data["name"] == "Jane"
    assert data["image"] == "http://img/jane.png"
    assert data["emailVerified"] is not None
    assert data["createdAt"] and data["updatedAt"]


def test_reregister_updates_profile_and_keeps_id(client, registered_user):
    response = client.post(
        "/api/users/register",
        json={"email": "jane@example.com", "name": "Jane Doe", "image": "http://img/new.png"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == registered_user["id"]
    assert data["name"] == "Jane Doe"
    assert data["image"] == "http://img/new.png"


def test_different_emails_get_different_ids(client, registered_user):
    response = client.post("/api/users/register", json={"email": "john@example.com"})
    assert response.status_code == 201
    assert response.json()["id"] != registered_user["id"]


def test_register_without_email_is_400(client):
    response = client.post("/api/users/register", json={"name": "Nobody"})
    assert response.status_code == 400


def test_register_with_malformed_email_is_400(client):
    response = client.post("/api/users/register", json={"email": "not-an-email"})
    assert response.status_code == 400


def test_concurrent_first_registration_takes_update_path(registered_user):
    """Insert loses the race on the unique email: the existing row is updated instead."""
    real_lookup = user_service.get_user_by_email
    lookups = []

    async def missing_on_first_lookup(db, email):
        lookups.append(email)
        if len(lookups) == 1:
            return None
        return await real_lookup(db, email)

    async def register():
        engine = build_engine(DATABASE_URL)
        try:
            session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
            async with session_factory() as db:
                payload = UserRegister(email="jane@example.com", name="Jane Again")
                return await user_service.register_user(db, payload)
        finally:
            await engine.dispose()

    with patch.object(user_service, "get_user_by_email", side_effect=missing_on_first_lookup):
        user = asyncio.run(register())

    assert len(lookups) == 2
    assert str(user.id) == registered_user["id"]
    assert user.name == "Jane Again"
    assert user.image is None
