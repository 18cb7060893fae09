"""User storage backed by SQLAlchemy Core (PostgreSQL and SQLite)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from capable.adapters.db.dialects import DialectName, UnsupportedDialect
from capable.domain.entities import User
from capable.interfaces.storage_errors import EmailTakenError, UserNotFoundError

from .schema import profiles, users

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Engine
    from sqlalchemy.sql.dml import Insert

logger = logging.getLogger(__name__)


class SqlAlchemyUserStore:
    """Production provider of every user capability.

    Each operation runs in its own transaction on a connection from `engine`.
    Transactions spanning several operations are out of its hands; an action
    sees each operation either fully applied or not at all.

    Contract (shared with `InMemoryUserStore`):
        - `create_user` returns ``None`` when the email is already registered.
        - `save_profile` returns ``False`` when the user already has a
          profile, the nickname is taken, or the user does not exist.
        - `get_user` returns ``None`` for an unknown id.
        - `save_user` raises `UserNotFoundError` for an unknown id.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.dialect = DialectName.from_sqlalchemy(engine)

    # --- queries ---

    def get_user(self, user_id: int) -> User | None:
        stmt = select(users).where(users.c.id == user_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().fetchone()
        if row is None:
            return None
        return User(
            id=int(row["id"]),
            email=row["email"],
            admin=bool(row["admin"]),
            active=bool(row["active"]),
            created_at=row["created_at"],
        )

    # --- commands ---

    def create_user(self, email: str) -> int | None:
        stmt = self._build_no_throw_insert(users, {"email": email}).returning(
            users.c.id
        )
        with self.engine.begin() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            logger.debug("create_user: email already registered")
            return None
        return int(row.id)

    def save_profile(self, user_id: int, nickname: str) -> bool:
        stmt = self._build_no_throw_insert(
            profiles, {"user_id": user_id, "nickname": nickname}
        ).returning(profiles.c.user_id)
        try:
            with self.engine.begin() as conn:
                row = conn.execute(stmt).first()
        except IntegrityError:
            # ON CONFLICT does not cover foreign keys: the user does not exist
            logger.debug("save_profile: user %s does not exist", user_id)
            return False
        if row is None:
            logger.debug("save_profile: profile exists or nickname taken")
            return False
        return True

    def save_user(self, user: User) -> None:
        stmt = (
            update(users)
            .where(users.c.id == user.id)
            .values(email=user.email, admin=user.admin, active=user.active)
        )
        try:
            with self.engine.begin() as conn:
                matched = conn.execute(stmt).rowcount
        except IntegrityError as e:
            # the only constraint an update of these columns can break
            raise EmailTakenError(user.email) from e
        if matched == 0:
            raise UserNotFoundError(user.id)

    # --- dialect-specific insert builders ---

    def _build_no_throw_insert(self, table: Table, values: dict[str, Any]) -> Insert:
        if self.dialect is DialectName.POSTGRES:
            return pg_insert(table).values(**values).on_conflict_do_nothing()
        if self.dialect is DialectName.SQLITE:
            return sqlite_insert(table).values(**values).on_conflict_do_nothing()
        # Unreachable: DialectName.from_sqlalchemy already rejected it
        raise UnsupportedDialect(f"Unsupported dialect: {self.dialect}")  # pragma: no cover
