"""User storage schema.

| Table      | Constraint                  | Purpose                              |
|------------|-----------------------------|--------------------------------------|
| `users`    | UNIQUE(email)               | one account per email                |
| `profiles` | PK(user_id) + FK -> users   | at most one profile per user         |
| `profiles` | UNIQUE(nickname)            | nicknames are unique                 |

The Alembic revision under `capable/adapters/db/alembic/versions` creates the
same tables; keep the two in step.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    String,
    Table,
    UniqueConstraint,
    false,
    text,
    true,
)

from capable.adapters.db.metadata import metadata
from capable.adapters.db.sa_types import BIGINT_PK, UTCDateTime

__all__ = ["profiles", "users"]

users = Table(
    "users",
    metadata,
    Column("id", BIGINT_PK, primary_key=True, autoincrement=True),
    Column("email", String(320), nullable=False, comment="Login email, unique."),
    Column(
        "admin",
        Boolean,
        nullable=False,
        server_default=false(),
        comment="Whether the user has admin rights.",
    ),
    Column(
        "active",
        Boolean,
        nullable=False,
        server_default=true(),
        comment="Inactive users keep their data but cannot act.",
    ),
    Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Server-assigned UTC creation time.",
    ),
    UniqueConstraint("email"),
    comment="Registered user accounts.",
)

profiles = Table(
    "profiles",
    metadata,
    Column(
        "user_id",
        BIGINT_PK,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("nickname", String(64), nullable=False, comment="Public nickname, unique."),
    UniqueConstraint("nickname"),
    comment="Public user profiles; one per user.",
)
