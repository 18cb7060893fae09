"""Recording stub: a test-double provider for any capability protocol.

A `RecordingStub` exposes one `OperationStub` per operation the protocol
declares. Each operation is configured on its own and records every call:

```py
store = RecordingStub.for_action(register_user)
store.create_user.returns(42)
store.save_profile.returns(True)

result = register_user(RegisterUser("user123@gmail.com", "user_123"), store)

store.save_profile.assert_called_once_with(42, "user_123")
```

Unconfigured operations never guess. An operation returns its entry in the
``defaults`` mapping given to the stub; with no entry there it raises
`UnconfiguredOperationError`. ``defaults={"save_user": None}`` is how a test
says "returning None is fine".

Arguments are recorded after binding them to the protocol's signature, so a
call made positionally matches an expectation written with keywords and vice
versa. A call that does not bind raises `TypeError`, as a real method would.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from capable.interfaces.capability import (
    default_capability,
    default_instantiation,
    operations,
)

# pylint: disable=too-few-public-methods


class UnconfiguredOperationError(AssertionError):
    """Raised when a stubbed operation with no behaviour and no default is called."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"{operation}() was called but has no configured behaviour and no default"
        )
        self.operation = operation


class StubExhaustedError(AssertionError):
    """Raised when an operation configured with a sequence is called once too often."""

    def __init__(self, operation: str, length: int) -> None:
        super().__init__(f"{operation}() was called more than {length} time(s)")
        self.operation = operation
        self.length = length


_NO_DEFAULT: Any = object()
_RESERVED = frozenset({"capability", "call_log"})


@dataclass(frozen=True)
class Call:
    """One recorded call: the operation and its bound arguments by parameter name."""

    operation: str
    arguments: dict[str, Any]


class OperationStub:
    """A configurable, recording stand-in for a single operation."""

    def __init__(
        self,
        name: str,
        signature: inspect.Signature,
        call_log: list[Call],
        default: Any = _NO_DEFAULT,
    ) -> None:
        self.name = name
        self.signature = signature
        self.calls: list[Call] = []
        self._call_log = call_log
        self._respond: Callable[[], Any] = self._fallback(default)

    # --- configuration ---

    def returns(self, value: Any) -> OperationStub:
        """Return `value` on every call."""
        self._respond = lambda: value
        return self

    def returns_sequence(self, *values: Any) -> OperationStub:
        """Return `values` one per call, then raise `StubExhaustedError`."""
        remaining: Iterator[Any] = iter(values)

        def respond() -> Any:
            try:
                return next(remaining)
            except StopIteration:
                raise StubExhaustedError(self.name, len(values)) from None

        self._respond = respond
        return self

    def raises(self, exc: BaseException | type[BaseException]) -> OperationStub:
        """Raise `exc` (an instance, or a class instantiated per call) on every call."""

        def respond() -> Any:
            raise exc() if isinstance(exc, type) else exc

        self._respond = respond
        return self

    # --- calling ---

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        call = Call(self.name, self._bind(args, kwargs))
        self.calls.append(call)
        self._call_log.append(call)
        return self._respond()

    # --- inspection ---

    @property
    def call_count(self) -> int:
        """Number of recorded calls."""
        return len(self.calls)

    @property
    def called(self) -> bool:
        """True once the operation has been called at least once."""
        return bool(self.calls)

    def assert_not_called(self) -> None:
        """Assert the operation was never called."""
        if self.calls:
            raise AssertionError(
                f"expected {self.name}() not to be called; called {self.call_count} "
                f"time(s): {self._render_calls()}"
            )

    def assert_call_count(self, expected: int) -> None:
        """Assert the operation was called exactly `expected` times."""
        if self.call_count != expected:
            raise AssertionError(
                f"expected {self.name}() to be called {expected} time(s); called "
                f"{self.call_count} time(s): {self._render_calls()}"
            )

    def assert_called_with(self, *args: Any, **kwargs: Any) -> None:
        """Assert the most recent call had these arguments."""
        if not self.calls:
            raise AssertionError(f"expected {self.name}() to be called; it was not")
        expected = self._bind(args, kwargs)
        if self.calls[-1].arguments != expected:
            raise AssertionError(
                f"expected {self.name}({_render(expected)}); "
                f"last call was {self.name}({_render(self.calls[-1].arguments)})"
            )

    def assert_called_once_with(self, *args: Any, **kwargs: Any) -> None:
        """Assert the operation was called exactly once, with these arguments."""
        self.assert_call_count(1)
        self.assert_called_with(*args, **kwargs)

    # --- helpers ---

    def _bind(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
        try:
            bound = self.signature.bind(*args, **kwargs)
        except TypeError as e:
            raise TypeError(f"{self.name}(): {e}") from e
        bound.apply_defaults()
        return dict(bound.arguments)

    def _fallback(self, default: Any) -> Callable[[], Any]:
        if default is _NO_DEFAULT:

            def unconfigured() -> Any:
                raise UnconfiguredOperationError(self.name)

            return unconfigured
        return lambda: default

    def _render_calls(self) -> str:
        return ", ".join(f"{self.name}({_render(c.arguments)})" for c in self.calls)

    def __repr__(self) -> str:
        return f"<OperationStub {self.name}{self.signature} calls={self.call_count}>"


class RecordingStub:
    """A provider satisfying `capability` with one `OperationStub` per operation.

    Args:
        capability: A capability protocol. Generic protocols are stubbed at
            their default instantiation.
        defaults: Return value of each operation while it is unconfigured.
            Operations without an entry raise `UnconfiguredOperationError`.

    Raises:
        ValueError: If `defaults` names an operation the capability does not
            declare, or an operation name clashes with the stub's own API.
    """

    def __init__(self, capability: Any, defaults: Mapping[str, Any] | None = None) -> None:
        self.capability = default_instantiation(capability)
        self.call_log: list[Call] = []
        declared = operations(self.capability)
        defaults = dict(defaults or {})

        if unknown := sorted(set(defaults) - set(declared)):
            raise ValueError(f"defaults for undeclared operations: {', '.join(unknown)}")
        if clashing := sorted(
            name for name in declared if name in _RESERVED or hasattr(type(self), name)
        ):
            raise ValueError(f"operation names clash with RecordingStub: {', '.join(clashing)}")

        self._operations = {
            name: OperationStub(
                name, signature, self.call_log, defaults.get(name, _NO_DEFAULT)
            )
            for name, signature in declared.items()
        }

    @classmethod
    def for_action(
        cls, fn: Callable[..., Any], defaults: Mapping[str, Any] | None = None
    ) -> RecordingStub:
        """Build a stub for whatever capability the action `fn` declares."""
        return cls(default_capability(fn), defaults)

    def __getattr__(self, name: str) -> OperationStub:
        try:
            return self.__dict__["_operations"][name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} for {self._capability_name()} has no operation {name!r}"
            ) from None

    def operation(self, name: str) -> OperationStub:
        """Return the stub for operation `name`."""
        return getattr(self, name)

    @property
    def operation_names(self) -> tuple[str, ...]:
        """Names of the stubbed operations, in declaration order."""
        return tuple(self._operations)

    def assert_call_order(self, *names: str) -> None:
        """Assert the operations were called in exactly this order, and nothing else."""
        actual = tuple(call.operation for call in self.call_log)
        if actual != names:
            raise AssertionError(f"expected calls {names}; got {actual}")

    def reset(self) -> None:
        """Forget every recorded call; configured behaviour is kept."""
        self.call_log.clear()
        for op in self._operations.values():
            op.calls.clear()

    def _capability_name(self) -> str:
        return getattr(self.__dict__.get("capability"), "__name__", None) or repr(
            self.__dict__.get("capability")
        )

    def __repr__(self) -> str:
        return f"<RecordingStub for {self._capability_name()}>"


def _render(arguments: Mapping[str, Any]) -> str:
    return ", ".join(f"{k}={v!r}" for k, v in arguments.items())
