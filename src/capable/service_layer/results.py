"""Results returned by actions.

An action returns either `Success` carrying its payload, or `Failure` carrying
a reason. Both expose `ok` so callers can branch without a type check, and
both work with `match`:

```py
match register_user(cmd, store):
    case Success(value=user_id):
        ...
    case Failure(reason=reason):
        ...
```
"""

from dataclasses import dataclass, field
from typing import ClassVar, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """The action completed; `value` is its payload, unmodified."""

    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    """The action did not complete.

    Attributes:
        reason: Short, human-readable explanation.
        cause: The provider failure that triggered it, if one was raised.
            Not part of equality.
    """

    reason: str
    cause: Exception | None = field(default=None, compare=False)
    ok: ClassVar[bool] = False


ActionResult = Success[T] | Failure
