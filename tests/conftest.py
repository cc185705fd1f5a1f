"""Test configuration and fixtures for Broker Shop.

This module provides isolated test environments:
- Temporary SQLite database per test
- Demo accounts and catalogue seeded into it
- Test clients signed in as different roles
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

ADMIN = {"username": "admin", "password": "AdminPassword1", "id": 1}
USER = {"username": "one", "password": "UserPassword1", "id": 2}
OTHER_USER = {"username": "two", "password": "UserPassword2", "id": 3}


@pytest.fixture(scope="function")
def db_path(tmp_path: Path, monkeypatch) -> Path:
    """Point the application at a throwaway database file."""
    import brokershop.database as db_module

    path = tmp_path / "test.db"
    monkeypatch.setattr(db_module, "DATABASE_PATH", path)
    return path


@pytest.fixture(scope="function")
def db_connection(db_path: Path):
    """Connection to a fresh database with the schema created."""
    from brokershop.database import create_connection, init_db

    db = create_connection()
    init_db(db)
    yield db
    db.close()


@pytest.fixture(scope="function")
def seeded_db(db_connection):
    """Database holding the demo accounts and catalogue."""
    from brokershop.demo import seed_demo

    seed_demo(db_connection)
    return db_connection


@pytest.fixture(scope="function")
def client(seeded_db) -> Generator[TestClient, None, None]:
    """Anonymous test client over the seeded database.

    Usage:
        def test_something(client):
            response = client.get("/api/products")
            assert response.status_code == 200
    """
    from brokershop.main import app

    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, username: str, password: str):
    """Submit the login form and return the response."""
    return client.post(
        "/login",
        data={"username": username, "password": password},
        follow_redirects=False
    )


@pytest.fixture(scope="function")
def admin_client(client: TestClient) -> TestClient:
    """Client signed in as the admin."""
    response = login(client, ADMIN["username"], ADMIN["password"])
    assert response.status_code == 200, "Admin login should succeed"
    assert "shop_session" in response.cookies, "Session cookie should be set"
    return client


@pytest.fixture(scope="function")
def user_client(client: TestClient) -> TestClient:
    """Client signed in as a regular user."""
    response = login(client, USER["username"], USER["password"])
    assert response.status_code == 200, "User login should succeed"
    return client


@contextmanager
def login_as(client: TestClient, username: str, password: str):
    """Context manager to temporarily login as different user.

    Usage:
        with login_as(client, "two", "UserPassword2"):
            response = client.delete("/api/auth/users/3")
    """
    client.cookies.clear()

    response = login(client, username, password)
    assert response.status_code == 200

    try:
        yield client
    finally:
        client.get("/logout")
        client.cookies.clear()
