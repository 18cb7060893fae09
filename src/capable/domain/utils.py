"""Domain layer utilities."""

import copy
from dataclasses import is_dataclass, replace
from typing import Any, TypeVar

D = TypeVar("D")


def evolve(entity: D, **changes: Any) -> D:
    """Return a copy of `entity` with `changes` applied.

    Every field not named in `changes` is carried over unchanged, including
    fields the caller's type does not know about. Dataclass instances go
    through `dataclasses.replace`, named tuples through ``_replace``; any
    other object is shallow-copied and the changed attributes are set on the
    copy.

    Raises:
        TypeError: If `entity` is a class or a plain tuple, a change names an
            unknown field, or the copy refuses the new value.
    """
    name = type(entity).__name__
    if is_dataclass(entity) and not isinstance(entity, type):
        return replace(entity, **changes)
    if isinstance(entity, tuple) and hasattr(entity, "_replace"):
        try:
            return entity._replace(**changes)
        except ValueError as e:
            raise TypeError(str(e)) from e
    if isinstance(entity, (type, tuple)):
        raise TypeError(f"cannot evolve {name}: not an entity instance")

    if unknown := sorted(field for field in changes if not hasattr(entity, field)):
        raise TypeError(f"cannot evolve {name}: no field {', '.join(unknown)}")
    evolved = copy.copy(entity)
    try:
        for field, value in changes.items():
            setattr(evolved, field, value)
    except AttributeError as e:
        raise TypeError(f"cannot evolve {name}: {e}") from e
    return evolved
