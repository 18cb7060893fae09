"""Promote a user to admin.

Works with any user type that has an ``admin`` flag; the same type goes back
to storage with every other field preserved.

Capability calls, in order:

1. ``get_user(user_id)`` returns the user, or ``None`` if there is none.
2. ``save_user(user)`` stores the promoted user. Raises `UserNotFoundError`
   if the user vanished in between. Skipped when the user is already an admin.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

from capable.domain.shapes import AdminFlag
from capable.domain.utils import evolve
from capable.interfaces.capability import check_entity
from capable.service_layer import commands
from capable.service_layer.results import ActionResult, Failure, Success

from .base import action

# pylint: disable=too-few-public-methods

E = TypeVar("E", bound=AdminFlag)


class PromoteUserStore(Protocol[E]):
    """What `promote_user` needs from storage, for users of type `E`."""

    def get_user(self, user_id: int) -> E | None:
        """Return the user with this id, or ``None``."""

    def save_user(self, user: E) -> None:
        """Store the user, replacing the stored record with the same id."""


@action
def promote_user(
    cmd: commands.PromoteUser, store: PromoteUserStore[E]
) -> ActionResult[E]:
    """Grant admin rights; succeed with the promoted user."""

    if (user := store.get_user(cmd.user_id)) is None:
        return Failure("user not found")
    check_entity(user, E.__bound__)

    if user.admin:
        return Success(user)

    promoted = evolve(user, admin=True)
    store.save_user(promoted)
    return Success(promoted)
