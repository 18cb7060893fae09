"""Deactivate a user.

Capability calls, in order:

1. ``get_user(user_id)`` returns the user, or ``None`` if there is none.
2. ``save_user(user)`` stores the deactivated user; skipped when the user is
   already inactive. Raises `UserNotFoundError` if the user vanished.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

from capable.domain.shapes import ActiveFlag
from capable.domain.utils import evolve
from capable.interfaces.capability import check_entity
from capable.service_layer import commands
from capable.service_layer.results import ActionResult, Failure, Success

from .base import action

# pylint: disable=too-few-public-methods

E = TypeVar("E", bound=ActiveFlag)


class DeactivateUserStore(Protocol[E]):
    """What `deactivate_user` needs from storage, for users of type `E`."""

    def get_user(self, user_id: int) -> E | None:
        """Return the user with this id, or ``None``."""

    def save_user(self, user: E) -> None:
        """Store the user, replacing the stored record with the same id."""


@action
def deactivate_user(
    cmd: commands.DeactivateUser, store: DeactivateUserStore[E]
) -> ActionResult[E]:
    """Deactivate a user; succeed with the deactivated user."""

    if (user := store.get_user(cmd.user_id)) is None:
        return Failure("user not found")
    check_entity(user, E.__bound__)

    if not user.active:
        return Success(user)

    deactivated = evolve(user, active=False)
    store.save_user(deactivated)
    return Success(deactivated)
