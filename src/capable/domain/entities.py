"""Production entities.

These are the full records storage hands back. Actions never require all of
their fields; they narrow to a shape from `capable.domain.shapes`.
"""

from dataclasses import dataclass
from datetime import datetime

# pylint: disable=too-few-public-methods


@dataclass(frozen=True, slots=True)
class User:
    """A registered user account."""

    id: int
    email: str
    admin: bool = False
    active: bool = True
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Profile:
    """Public profile of a user. At most one per user; nicknames are unique."""

    user_id: int
    nickname: str
