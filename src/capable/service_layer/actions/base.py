"""The `@action` decorator.

Marks a function as an action: one business operation of the form
``(command, provider) -> ActionResult``, where the provider's type is the
capability protocol the action declares for itself.

At call time the decorator:

1. checks the supplied provider against the declared capability, so a
   mismatched provider fails where it is handed over, before any operation
   runs;
2. turns a `CapabilityError` raised by the provider into a `Failure`, which
   also skips every operation after the one that failed;
3. logs every `Failure` the action ends with at WARNING, whether the action
   returned it or it came from a `CapabilityError`.

Any other exception propagates unchanged.
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar, overload

from capable.interfaces.capability import (
    DEPENDENCY_ATTR,
    CapabilityError,
    check_capability,
    default_instantiation,
    dependency_of,
)
from capable.service_layer.results import Failure

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


@overload
def action(fn: Callable[P, R], /) -> Callable[P, R]: ...


@overload
def action(
    *, dependency: str | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]: ...


def action(
    fn: Callable[P, R] | None = None, /, *, dependency: str | None = None
) -> Any:
    """Declare `fn` an action.

    Args:
        fn: The action function.
        dependency: Name of the parameter receiving the provider. Defaults to
            the last parameter.

    Usable bare (``@action``) or with arguments (``@action(dependency="repo")``).
    """

    def decorate(fn: Callable[P, R]) -> Callable[P, R]:
        spec = dependency_of(fn, dependency)
        capability = default_instantiation(spec.annotation)
        signature = inspect.signature(fn)
        name = fn.__name__

        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            provider = signature.bind(*args, **kwargs).arguments[spec.parameter]
            check_capability(provider, capability)

            logger.debug("Running action %s with %s", name, type(provider).__name__)
            try:
                result = fn(*args, **kwargs)
            except CapabilityError as exc:
                logger.warning("Action %s failed: %s", name, exc)
                return Failure(reason=str(exc), cause=exc)  # type: ignore[return-value]

            if isinstance(result, Failure):
                logger.warning("Action %s failed: %s", name, result.reason)
            else:
                logger.debug("Action %s returned %s", name, type(result).__name__)
            return result

        setattr(wrapper, DEPENDENCY_ATTR, spec)
        return wrapper

    if fn is None:
        return decorate
    return decorate(fn)
