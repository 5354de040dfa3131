# tests/conftest.py

from __future__ import annotations

import os

os.environ.setdefault("RATE_LIMIT", "10000/minute")
os.environ.setdefault("LOGIN_RATE_LIMIT", "10000/minute")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from taskflow.database.supabase_client import get_supabase
from taskflow.main import app
from taskflow.modules.users.schemas import LoginRequest
from taskflow.modules.users.service import UserService

from .fakes import FakeSupabase


@pytest.fixture()
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def make_user(supabase: FakeSupabase) -> Callable[[str], dict[str, Any]]:
    """Create (or log in) a user by name and return the stored row."""
    users = UserService(supabase)

    def _make(name: str) -> dict[str, Any]:
        login = users.login(LoginRequest(username=name))
        return users.get_user_by_id(login.user_id)

    return _make


@pytest.fixture()
def fresh(supabase: FakeSupabase) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """
    Re-read a user row, the way each request re-resolves its caller.
    """
    users = UserService(supabase)
    return lambda user: users.get_user_by_id(user["id"])


@pytest.fixture()
def client(supabase: FakeSupabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def login(client: TestClient) -> Callable[[str], tuple[dict[str, str], str]]:
    """Log in over HTTP; returns (auth headers, user id)."""

    def _login(name: str) -> tuple[dict[str, str], str]:
        response = client.post("/api/users/login", json={"username": name})
        assert response.status_code == 200
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["userId"]

    return _login
