"""CAPABLE users CLI: run user actions against the configured database.

Each command builds one command object, dispatches it through the message
bus and reports the result:

- on success, the payload goes to **stdout** (the new user id, or the
  updated user), so it can be piped;
- on failure, the reason goes to **stderr** and the exit code is 1.

Requirements
- ``CAPABLE_DB_URL`` must be set, and the schema upgraded
  (``capable db upgrade``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import click
import click_extra as clickx

from capable import config
from capable.bootstrap import bootstrap
from capable.service_layer import commands
from capable.service_layer.results import Failure, Success

from .db import MISSING_DB_URL_MSG
from .helpers import error

if TYPE_CHECKING:
    from capable.domain.entities import User

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1


def _dispatch(cmd: commands.Command) -> Any:
    """Send `cmd` through a freshly bootstrapped bus; return the success payload.

    Raises:
        click.ClickException: If the database URL is not configured.
        click.exceptions.Exit: With status 1 when the action fails.
    """
    try:
        app = bootstrap()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e

    logger.debug("Dispatching %s", cmd)
    match app.message_bus.handle(cmd):
        case Success(value=value):
            return value
        case Failure(reason=reason):
            error(reason)
            raise click.exceptions.Exit(EXIT_FAILURE)


def _render_user(user: User) -> str:
    flags = [name for name in ("admin", "active") if getattr(user, name)]
    return f"{user.id}\t{user.email}\t{','.join(flags) or '-'}"


@click.group(cls=clickx.ExtraGroup)
def users() -> None:
    """User management commands."""


@users.command()
@click.argument("email")
@click.argument("nickname")
def register(email: str, nickname: str) -> None:
    """Register a user with EMAIL and public NICKNAME; print the new user id."""
    user_id = _dispatch(commands.RegisterUser(email=email, nickname=nickname))
    click.echo(user_id)


@users.command()
@click.argument("user_id", type=int)
def promote(user_id: int) -> None:
    """Grant admin rights to USER_ID; print the updated user."""
    user = _dispatch(commands.PromoteUser(user_id=user_id))
    click.echo(_render_user(user))


@users.command()
@click.argument("user_id", type=int)
def deactivate(user_id: int) -> None:
    """Deactivate USER_ID; print the updated user."""
    user = _dispatch(commands.DeactivateUser(user_id=user_id))
    click.echo(_render_user(user))
