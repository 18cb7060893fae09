"""Exceptions for capability providers and the checks that guard them."""

from __future__ import annotations

from collections.abc import Sequence


class CapabilityError(Exception):
    """Base class for failures a provider signals by raising.

    Operations whose contract says they raise (rather than return a sentinel
    such as ``None``) raise a subclass of this. Actions turn it into a
    `Failure` result; it never escapes an action.
    """


class ContractViolationError(TypeError):
    """Base class for a provider or entity that does not match what an action declared."""


class CapabilityContractError(ContractViolationError):
    """A provider does not satisfy the capability protocol it was supplied for.

    Attributes:
        provider (str): Type name of the offending provider.
        capability (str): Name of the capability protocol.
        missing (tuple[str, ...]): Operations absent or not callable on the provider.
        reason (str | None): Extra detail when operations exist but mismatch.
    """

    def __init__(
        self,
        provider: str,
        capability: str,
        missing: Sequence[str] = (),
        reason: str | None = None,
    ) -> None:
        detail = reason or f"missing operations: {', '.join(missing)}"
        super().__init__(f"{provider} does not satisfy {capability} ({detail})")
        self.provider = provider
        self.capability = capability
        self.missing = tuple(missing)
        self.reason = reason


class EntityShapeError(ContractViolationError):
    """An entity value lacks fields its declared shape requires.

    Attributes:
        entity (str): Type name of the rejected value.
        shape (str): Name of the required shape.
        missing (tuple[str, ...]): Fields absent from the value.
        mistyped (tuple[str, ...]): Fields present but of the wrong type.
    """

    def __init__(
        self,
        entity: str,
        shape: str,
        missing: Sequence[str] = (),
        mistyped: Sequence[str] = (),
    ) -> None:
        problems = []
        if missing:
            problems.append(f"missing {', '.join(missing)}")
        if mistyped:
            problems.append(f"wrong type for {', '.join(mistyped)}")
        super().__init__(f"{entity} does not fit {shape} ({'; '.join(problems)})")
        self.entity = entity
        self.shape = shape
        self.missing = tuple(missing)
        self.mistyped = tuple(mistyped)
