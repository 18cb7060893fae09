"""Actions, and the routing table from command type to action."""

from collections.abc import Callable

from capable.service_layer import commands

from .base import action
from .deactivation import DeactivateUserStore, deactivate_user
from .promotion import PromoteUserStore, promote_user
from .registration import RegisterUserStore, register_user

__all__ = [
    "COMMAND_HANDLERS",
    "DeactivateUserStore",
    "PromoteUserStore",
    "RegisterUserStore",
    "action",
    "deactivate_user",
    "promote_user",
    "register_user",
]

COMMAND_HANDLERS: dict[type[commands.Command], Callable[..., object]] = {
    commands.RegisterUser: register_user,
    commands.PromoteUser: promote_user,
    commands.DeactivateUser: deactivate_user,
}
