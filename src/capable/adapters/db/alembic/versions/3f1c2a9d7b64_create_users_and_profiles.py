"""create users and profiles tables

Revision ID: 3f1c2a9d7b64
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from capable.adapters.db.sa_types import BIGINT_PK, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b64"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "users",
        sa.Column("id", BIGINT_PK, nullable=False, autoincrement=True),
        sa.Column(
            "email",
            sa.String(length=320),
            nullable=False,
            comment="Login email, unique.",
        ),
        sa.Column(
            "admin",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
            comment="Whether the user has admin rights.",
        ),
        sa.Column(
            "active",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
            comment="Inactive users keep their data but cannot act.",
        ),
        sa.Column(
            "created_at",
            UTCDateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="Server-assigned UTC creation time.",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
        comment="Registered user accounts.",
    )
    op.create_table(
        "profiles",
        sa.Column("user_id", BIGINT_PK, nullable=False),
        sa.Column(
            "nickname",
            sa.String(length=64),
            nullable=False,
            comment="Public nickname, unique.",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_profiles_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_profiles")),
        sa.UniqueConstraint("nickname", name=op.f("uq_profiles_nickname")),
        comment="Public user profiles; one per user.",
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("profiles")
    op.drop_table("users")
