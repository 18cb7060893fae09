"""Entity shapes: the minimal slice of an entity an action reads or writes.

A shape lists annotated attributes only. Any value carrying those attributes
fits, including a full `User`, and keeps all of its other fields when it is
handed back to storage.
"""

from typing import Protocol

# pylint: disable=too-few-public-methods


class AdminFlag(Protocol):
    """Anything with an ``admin`` flag."""

    admin: bool


class ActiveFlag(Protocol):
    """Anything with an ``active`` flag."""

    active: bool
