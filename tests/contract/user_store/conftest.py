"""Fixtures for user store contract tests."""

from collections.abc import Iterator

import pytest

from capable.adapters.users import InMemoryUserStore, SqlAlchemyUserStore


@pytest.fixture(params=["memory", "sqlite_memory", "sqlite_file", "postgres"])
def user_store(request: pytest.FixtureRequest) -> Iterator[object]:
    """Return a fresh, empty provider of every user capability.

    Supported params:
      - `"memory"` → InMemoryUserStore
      - `"sqlite_memory"` → SqlAlchemyUserStore on in-memory SQLite (create_all)
      - `"sqlite_file"` → SqlAlchemyUserStore on a migrated SQLite file
      - `"postgres"` → SqlAlchemyUserStore on migrated Postgres (skipped without Docker)
    """
    match request.param:
        case "memory":
            yield InMemoryUserStore()
        case "sqlite_memory":
            yield SqlAlchemyUserStore(request.getfixturevalue("sqlite_engine_memory"))
        case "sqlite_file":
            yield SqlAlchemyUserStore(request.getfixturevalue("sqlite_engine_file"))
        case "postgres":
            yield SqlAlchemyUserStore(request.getfixturevalue("postgres_engine"))
        case _:
            raise ValueError(f"unknown user store type: {request.param}")
