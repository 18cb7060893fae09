"""Register a user: create the account, then its profile.

Capability calls, in order:

1. ``create_user(email)`` returns the new user's id, or ``None`` when no user
   was created (e.g. the email is already registered).
2. ``save_profile(user_id, nickname)`` returns ``True`` once the profile is
   stored, ``False`` when it was not (e.g. the nickname is taken).

A failed step ends the action; nothing after it is called.
"""

from __future__ import annotations

import logging
from typing import Protocol

from capable.service_layer import commands
from capable.service_layer.results import ActionResult, Failure, Success

from .base import action

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class RegisterUserStore(Protocol):
    """What `register_user` needs from storage."""

    def create_user(self, email: str) -> int | None:
        """Create a user; return its id, or ``None`` if none was created."""

    def save_profile(self, user_id: int, nickname: str) -> bool:
        """Store the profile of a user; return whether it was stored."""


@action
def register_user(
    cmd: commands.RegisterUser, store: RegisterUserStore
) -> ActionResult[int]:
    """Register a user and their profile; succeed with the new user id."""

    if (user_id := store.create_user(cmd.email)) is None:
        logger.debug("RegisterUser: user not created; profile skipped")
        return Failure("user not created")

    if not store.save_profile(user_id, cmd.nickname):
        logger.debug("RegisterUser: profile for user %s not created", user_id)
        return Failure("profile not created")

    return Success(user_id)
