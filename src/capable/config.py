"""Configuration helpers for CAPABLE.

Everything the application reads from its environment goes through here.
"""

import os
import sys
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV_VAR = "CAPABLE_DB_URL"
ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """Raised when the CAPABLE_DB_URL environment variable is not set."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `CAPABLE_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `CAPABLE_DB_URL` is unset or empty.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR)):
        raise DatabaseUrlNotSetError
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build a programmatic Alembic `Config` for the packaged user schema.

    Args:
        db_url: SQLAlchemy database URL. May be `None` for commands that never
            connect (e.g. `heads`).
        stdout: Stream Alembic writes status lines to; override in tests.

    Returns:
        An `alembic.config.Config` pointing at CAPABLE's migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("capable.adapters.db.alembic")),
    )
    return cfg
