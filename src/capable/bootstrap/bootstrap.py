"""Bootstrap the message bus with actions and their storage provider."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from capable import config
from capable.adapters.db.engine import make_engine
from capable.adapters.users import SqlAlchemyUserStore
from capable.interfaces.capability import DEPENDENCY_ATTR, check_capability
from capable.service_layer.actions import COMMAND_HANDLERS
from capable.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from capable.service_layer.commands import Command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus


def build_user_store(url: str) -> SqlAlchemyUserStore:
    """Build the production user store for the database at `url`."""
    return SqlAlchemyUserStore(make_engine(url))


def build_message_bus(
    dependencies: Mapping[str, object],
    command_handlers: Mapping[type[Command], Callable[..., Any]],
) -> MessageBus:
    """Build a message bus with injected dependencies.

    Args:
        dependencies: Providers by the parameter name actions receive them as.
        command_handlers: Actions by the command type they handle.

    Raises:
        CapabilityContractError: If a provider does not satisfy the capability
            of an action it is injected into.
    """
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }
    return MessageBus(command_handlers=injected_command_handlers)


def bootstrap() -> AppContainer:
    """Bootstrap the message bus with actions and the SQL user store.

    Raises:
        DatabaseUrlNotSetError: If `CAPABLE_DB_URL` is not set.
    """
    store = build_user_store(config.get_db_url())
    message_bus = build_message_bus({"store": store}, COMMAND_HANDLERS)

    return AppContainer(
        message_bus=message_bus,
    )


def inject_dependencies(
    handler: Callable[..., Any], dependencies: Mapping[str, object]
) -> Callable[..., Any]:
    """Inject dependencies into a handler function based on its parameters.

    For actions, each injected provider is checked against the action's
    capability here, so a provider that cannot serve an action is rejected at
    startup rather than on the first command.
    """
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }

    if (spec := getattr(handler, DEPENDENCY_ATTR, None)) is not None and (
        provider := deps.get(spec.parameter)
    ) is not None:
        check_capability(provider, spec.annotation)
        logger.debug(
            "%s satisfies the capability of %s",
            type(provider).__name__,
            getattr(handler, "__name__", repr(handler)),
        )

    return functools.partial(handler, **deps)
