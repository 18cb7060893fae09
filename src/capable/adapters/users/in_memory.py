"""In-memory user storage.

Same contract as `SqlAlchemyUserStore`; used for demos and to run the
provider contract suite without a database.

Note: not thread-safe; intended for single-threaded use.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from capable.domain.entities import Profile, User
from capable.interfaces.storage_errors import EmailTakenError, UserNotFoundError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserStore:
    """Dictionary-backed provider of every user capability."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self.users: dict[int, User] = {}
        self.profiles: dict[int, Profile] = {}
        self._ids = itertools.count(1)
        self._clock = clock

    # --- queries ---

    def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    # --- commands ---

    def create_user(self, email: str) -> int | None:
        if any(u.email == email for u in self.users.values()):
            return None
        user_id = next(self._ids)
        self.users[user_id] = User(id=user_id, email=email, created_at=self._clock())
        return user_id

    def save_profile(self, user_id: int, nickname: str) -> bool:
        if user_id not in self.users or user_id in self.profiles:
            return False
        if any(p.nickname == nickname for p in self.profiles.values()):
            return False
        self.profiles[user_id] = Profile(user_id=user_id, nickname=nickname)
        return True

    def save_user(self, user: User) -> None:
        if (stored := self.users.get(user.id)) is None:
            raise UserNotFoundError(user.id)
        if any(u.email == user.email and u.id != user.id for u in self.users.values()):
            raise EmailTakenError(user.email)
        # created_at is storage-owned, as with the SQL store
        self.users[user.id] = replace(user, created_at=stored.created_at)
