"""SqlAlchemyUserStore behaviour that depends on the database itself."""

import pytest
from sqlalchemy import delete, func, select

from capable.adapters.db.dialects import DialectName
from capable.adapters.users import SqlAlchemyUserStore
from capable.adapters.users.schema import profiles, users

ENGINES = ["sqlite_engine_file", "postgres_engine"]


@pytest.mark.parametrize(
    "engine, expected",
    [("sqlite_engine_file", DialectName.SQLITE), ("postgres_engine", DialectName.POSTGRES)],
    indirect=["engine"],
)
def test_dialect_is_detected(engine, expected):
    """The store picks its insert flavour from the engine."""
    assert SqlAlchemyUserStore(engine).dialect is expected


@pytest.mark.parametrize("engine", ENGINES, indirect=True)
def test_conflicts_leave_no_partial_rows(engine):
    """A refused insert writes nothing."""
    store = SqlAlchemyUserStore(engine)
    user_id = store.create_user("a@example.com")
    store.create_user("a@example.com")
    store.save_profile(user_id, "alice")
    store.save_profile(user_id, "alice-again")

    with engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(users)).scalar_one() == 1
        assert conn.execute(select(profiles.c.nickname)).scalars().all() == ["alice"]


@pytest.mark.parametrize("engine", ENGINES, indirect=True)
def test_deleting_a_user_removes_its_profile(engine):
    """Profiles cascade with their user."""
    store = SqlAlchemyUserStore(engine)
    user_id = store.create_user("a@example.com")
    store.save_profile(user_id, "alice")

    with engine.begin() as conn:
        conn.execute(delete(users).where(users.c.id == user_id))

    with engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(profiles)).scalar_one() == 0


@pytest.mark.parametrize("engine", ENGINES, indirect=True)
def test_refused_operations_are_logged(engine, caplog):
    """Sentinel returns are explained at DEBUG."""
    store = SqlAlchemyUserStore(engine)
    store.create_user("a@example.com")
    with caplog.at_level("DEBUG", logger="capable.adapters.users.sqlalchemy_store"):
        store.create_user("a@example.com")
        store.save_profile(999_999, "ghost")
    assert "create_user: email already registered" in caplog.messages
    assert "save_profile: user 999999 does not exist" in caplog.messages
