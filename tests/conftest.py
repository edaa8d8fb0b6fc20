"""Shared fixtures for DBConnector tests."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from sqlalchemy import create_engine as real_create_engine

from dbconnector.config.models import ROLE_ENV_VARS

SERVER_ENV = {
    "DB_HOST": "h",
    "DB_PORT_PGSQL": "5432",
    "DB_PORT_MYSQL": "3306",
}


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable the connector reads."""
    for name in SERVER_ENV:
        monkeypatch.delenv(name, raising=False)
    for user_var, password_var in ROLE_ENV_VARS.values():
        monkeypatch.delenv(user_var, raising=False)
        monkeypatch.delenv(password_var, raising=False)
    return monkeypatch


@pytest.fixture
def db_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Set the server location and credentials for all four roles."""
    for name, value in SERVER_ENV.items():
        clean_env.setenv(name, value)
    for role, (user_var, password_var) in ROLE_ENV_VARS.items():
        clean_env.setenv(user_var, f"{role.value}_user")
        clean_env.setenv(password_var, f"{role.value}_secret")
    return clean_env


@pytest.fixture
def engine_calls(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    """Replace engine creation with an in-memory SQLite database.

    Each call records the URL and options the adapter asked for.
    """
    calls: List[Dict[str, Any]] = []

    def fake_create_engine(url: Any, **kwargs: Any):
        calls.append({"url": url, "kwargs": kwargs})
        return real_create_engine("sqlite://")

    monkeypatch.setattr("dbconnector.db.base.create_engine", fake_create_engine)
    return calls
