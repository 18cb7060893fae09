"""Message bus routing commands to actions."""

import logging
from collections.abc import Callable
from typing import Any

from .commands import Command

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """Route each command to the action registered for its type.

    Args:
        command_handlers: A mapping of command types to handlers. A handler is
            a callable taking the command as its only argument and returning
            the action's result; providers are bound beforehand (see
            `capable.bootstrap.inject_dependencies`).

    Note:
        Dispatch is synchronous, like every capability in this application.
        The bus is the single entrypoint into the service layer.
    """

    def __init__(self, command_handlers: dict[type[Command], Callable[..., Any]]) -> None:
        self._command_handlers = command_handlers

    def handle(self, cmd: Command) -> Any:
        """Dispatch a command to its handler and return the handler's result.

        Args:
            cmd: The command to handle.

        Returns:
            Whatever the handler returns; for actions, an `ActionResult`.

        Raises:
            NoHandlerForCommand: If no handler is registered for the command type.
            Exception: Anything the handler raises, after logging it.
        """

        if handler := self._command_handlers.get(type(cmd)):
            handler_name = self._get_handler_name(handler)
            logger.debug("Handling command %s with handler %s", cmd, handler_name)
            try:
                result = handler(cmd)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling command %s with handler %s", cmd, handler_name
                )
                raise
            if getattr(result, "ok", True) is False:
                logger.info(
                    "Command %s did not succeed: %s",
                    type(cmd).__name__,
                    getattr(result, "reason", result),
                )
            return result

        logger.error("No handler found for command %s", type(cmd).__name__)
        raise NoHandlerForCommand(cmd)

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
