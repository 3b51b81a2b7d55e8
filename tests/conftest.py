"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shoplist.database import Base, get_db
from shoplist.main import app
from shoplist.models.enums import Role
from shoplist.services.auth import create_access_token, create_user


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Separate test database, SQLite unless overridden
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from shoplist import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _register(client, email: str, pseudo: str) -> AuthHeaders:
    response = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": "testpass123", "pseudo": pseudo},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return _register(client, "test@example.com", "Test User")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return _register(client, "other@example.com", "Other User")


@pytest.fixture
def superuser_headers(client, db):
    """Create a superuser directly in the database and return its auth headers."""
    user = create_user(db, "admin@example.com", "adminpass123", "Admin", role=Role.SUPERUSER)
    token = create_access_token(user.id, user.email, user.role)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id, email=user.email)


@pytest.fixture
def catalog(client, auth_headers):
    """Ingredients and dishes shared by the list tests."""

    def ingredient(name, aisle=None):
        response = client.post(
            "/api/v1/ingredients", headers=auth_headers, json={"name": name, "aisle": aisle}
        )
        assert response.status_code == 201
        return response.json()["id"]

    def dish(name, refs):
        response = client.post(
            "/api/v1/dishes", headers=auth_headers, json={"name": name, "ingredients": refs}
        )
        assert response.status_code == 201
        return response.json()["id"]

    flour = ingredient("Farine", "Épicerie")
    eggs = ingredient("Œufs", "Frais")
    butter = ingredient("beurre", "Frais")
    sugar = ingredient("Sucre", "Épicerie")

    crepes = dish(
        "Crêpes",
        [
            {"ingredient_id": flour, "quantity": 250, "unit": "g"},
            {"ingredient_id": eggs, "quantity": 4, "unit": "paquet"},
            {"ingredient_id": butter, "quantity": 50, "unit": "g"},
        ],
    )
    cake = dish(
        "Gâteau",
        [
            {"ingredient_id": flour, "quantity": 200, "unit": "G"},
            {"ingredient_id": sugar, "quantity": 150, "unit": "g"},
            {"ingredient_id": butter, "quantity": 1, "unit": "kg"},
        ],
    )

    return {
        "flour": flour,
        "eggs": eggs,
        "butter": butter,
        "sugar": sugar,
        "crepes": crepes,
        "cake": cake,
    }
