"""Per-action capability protocols: derivation and boundary checks.

An action declares the storage operations it calls as a `typing.Protocol`
and uses that protocol as the annotation of its dependency parameter. When
the action only needs a slice of an entity, the protocol is generic and the
annotation reuses the action's own `TypeVar`:

```py
E = TypeVar("E", bound=AdminFlag)


class PromoteUserStore(Protocol[E]):
    def get_user(self, user_id: int) -> E | None: ...
    def save_user(self, user: E) -> None: ...


@action
def promote_user(cmd: PromoteUser, store: PromoteUserStore[E]) -> ActionResult[E]: ...
```

The helpers below read that declaration back, so factories and test builders
never restate the generic signature: `default_capability(promote_user)` is
`PromoteUserStore[AdminFlag]`, and changing the bound of `E` changes it too.

`check_capability` and `check_entity` are the runtime half of the contract.
They run where a provider is handed to an action, and where an entity comes
back from one.
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import (
    Any,
    Generic,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from .errors import CapabilityContractError, EntityShapeError

logger = logging.getLogger(__name__)

DEPENDENCY_ATTR = "__capability__"
"""Attribute under which `@action` stores the `DependencySpec` of the wrapped function."""

_RETURN = "return"
_SKIPPED_BASES = (object, Protocol, Generic)
_UNION_TYPES = (Union, types.UnionType)


@dataclass(frozen=True)
class DependencySpec:
    """Where and how an action declares its capability."""

    parameter: str
    annotation: Any


# ============================================================================
#                         Reading the declaration
# ============================================================================


def dependency_of(fn: Callable[..., Any], parameter: str | None = None) -> DependencySpec:
    """Return the dependency declaration of an action.

    Functions decorated with `@action` carry it already. For plain functions
    the dependency is `parameter` if given, else the last parameter.

    Raises:
        TypeError: If the parameter does not exist or has no annotation.
    """
    if parameter is None and (spec := getattr(fn, DEPENDENCY_ATTR, None)) is not None:
        return spec

    target = inspect.unwrap(fn)
    name = getattr(target, "__qualname__", repr(target))
    params = list(inspect.signature(target).parameters)
    if not params:
        raise TypeError(f"{name} takes no dependency parameter")
    parameter = parameter or params[-1]
    if parameter not in params:
        raise TypeError(f"{name} has no parameter {parameter!r}")

    hints = get_type_hints(target)
    if parameter not in hints:
        raise TypeError(f"dependency parameter {parameter!r} of {name} is not annotated")
    return DependencySpec(parameter=parameter, annotation=hints[parameter])


def capability_of(fn: Callable[..., Any]) -> Any:
    """Return the capability an action declares, exactly as annotated.

    For a generic action this still contains the action's `TypeVar`s.
    """
    return dependency_of(fn).annotation


def default_capability(fn: Callable[..., Any]) -> Any:
    """Return the most general concrete capability an action accepts."""
    return default_instantiation(capability_of(fn))


def entity_shape_of(fn: Callable[..., Any]) -> Any | None:
    """Return the default entity shape a generic action works with.

    Returns ``None`` for actions whose capability is not generic.

    Raises:
        TypeError: If the capability is generic over more than one type.
    """
    capability = capability_of(fn)
    params = getattr(capability, "__parameters__", ())
    if not params:
        return None
    if len(params) > 1:
        raise TypeError(
            f"{_name(capability)} has several type parameters; use default_capability()"
        )
    return default_type_argument(params[0])


def default_instantiation(tp: Any) -> Any:
    """Substitute every free type parameter of `tp` with its default argument.

    `PromoteUserStore[E]` and the bare generic `PromoteUserStore` both become
    `PromoteUserStore[AdminFlag]` when `E` is bound to `AdminFlag`.
    Non-generic and fully parametrised types are returned unchanged.
    """
    params = getattr(tp, "__parameters__", ())
    if not params:
        return tp
    return tp[tuple(default_type_argument(p) for p in params)]


def default_type_argument(param: Any) -> Any:
    """Return the type a lone type parameter stands for by default.

    In order of preference: its PEP 696 default, its bound, the union of its
    constraints, `object`.
    """
    if not isinstance(param, TypeVar):
        raise TypeError(f"only TypeVar parameters are supported, got {param!r}")
    if getattr(param, "has_default", lambda: False)():
        return param.__default__
    if param.__bound__ is not None:
        return param.__bound__
    if param.__constraints__:
        return Union[param.__constraints__]
    return object


def operations(capability: Any) -> Mapping[str, inspect.Signature]:
    """Return the operations a capability protocol declares, name -> signature.

    Signatures exclude ``self``. Private names are not operations.
    """
    return _operations(_origin(capability))


@functools.cache
def _operations(protocol: type) -> Mapping[str, inspect.Signature]:
    ops: dict[str, inspect.Signature] = {}
    for klass in reversed(protocol.__mro__):
        if klass in _SKIPPED_BASES:
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or not inspect.isfunction(member):
                continue
            signature = inspect.signature(member)
            ops[name] = signature.replace(
                parameters=tuple(signature.parameters.values())[1:]
            )
    return types.MappingProxyType(ops)


# ============================================================================
#                               Entity shapes
# ============================================================================


def shape_fields(shape: Any) -> dict[str, Any]:
    """Return the attributes an entity shape requires, with their annotations."""
    if shape is object or shape is Any:
        return {}
    return {
        name: hint
        for name, hint in get_type_hints(shape).items()
        if not name.startswith("_")
    }


def covers(entity_type: type, shape: Any) -> bool:
    """Return True if instances of `entity_type` structurally fit `shape`.

    Every field of the shape must be declared (or present) on the entity type,
    and where both sides annotate a plain class the entity's must be a subclass.
    """
    if get_origin(shape) in _UNION_TYPES:
        return any(covers(entity_type, alt) for alt in get_args(shape))
    try:
        provided = get_type_hints(entity_type)
    except NameError:
        provided = {}
    for name, expected in shape_fields(shape).items():
        if name not in provided and not hasattr(entity_type, name):
            return False
        actual = provided.get(name)
        if _is_plain_class(expected) and _is_plain_class(actual):
            if not issubclass(actual, expected):
                return False
    return True


def check_entity(value: Any, shape: Any) -> None:
    """Reject an entity value that does not fit `shape`.

    Raises:
        EntityShapeError: If a required field is missing or holds a value of
            the wrong plain class.
    """
    if get_origin(shape) in _UNION_TYPES:
        errors = []
        for alt in get_args(shape):
            try:
                check_entity(value, alt)
            except EntityShapeError as exc:
                errors.append(exc)
            else:
                return
        raise errors[0]

    missing: list[str] = []
    mistyped: list[str] = []
    for name, expected in shape_fields(shape).items():
        if not hasattr(value, name):
            missing.append(name)
        elif _is_plain_class(expected) and not isinstance(getattr(value, name), expected):
            mistyped.append(name)
    if missing or mistyped:
        raise EntityShapeError(type(value).__name__, _name(shape), missing, mistyped)


# ============================================================================
#                               Providers
# ============================================================================


def check_capability(provider: object, capability: Any) -> None:
    """Reject a provider that does not satisfy `capability`.

    Generic capabilities are checked at their default instantiation. Every
    declared operation must be callable on the provider. Where the provider's
    class annotates an entity-typed operation, the entity class it names must
    fit the shape the capability is instantiated with.

    Raises:
        CapabilityContractError: On a missing operation or an entity class
            that does not fit.
    """
    capability = default_instantiation(capability)
    missing = [
        name
        for name in operations(capability)
        if not callable(getattr(provider, name, None))
    ]
    if missing:
        raise CapabilityContractError(
            type(provider).__name__, _name(capability), missing=missing
        )
    _check_entity_coverage(type(provider), capability)


@functools.cache
def _check_entity_coverage(provider_type: type, capability: Any) -> None:
    protocol = _origin(capability)
    bindings = dict(zip(protocol.__parameters__, get_args(capability)))
    if not bindings:
        return

    for op_name, slots in _entity_slots(protocol).items():
        method = getattr(provider_type, op_name, None)
        if not inspect.isfunction(method):
            continue  # instance-level or dynamic operation; checked per entity at runtime
        try:
            hints = get_type_hints(method)
        except NameError:
            logger.debug(
                "Unresolvable hints on %s.%s; entity shape checked at runtime only",
                provider_type.__name__,
                op_name,
            )
            continue
        params = list(inspect.signature(method).parameters)[1:]
        for slot, typevar in slots:
            if (shape := bindings.get(typevar)) is None:
                continue
            key = slot if slot == _RETURN else _param_at(params, slot)
            if key is None or key not in hints:
                continue
            for entity_type in _classes_in(hints[key]):
                if not covers(entity_type, shape):
                    raise CapabilityContractError(
                        provider_type.__name__,
                        _name(capability),
                        reason=(
                            f"{op_name}() handles {entity_type.__name__}, "
                            f"which does not fit {_name(shape)}"
                        ),
                    )


@functools.cache
def _entity_slots(protocol: type) -> dict[str, list[tuple[Any, TypeVar]]]:
    """Map each operation to the (slot, TypeVar) pairs where an entity flows.

    A slot is a parameter index (``self`` excluded) or ``"return"``.
    """
    slots: dict[str, list[tuple[Any, TypeVar]]] = {}
    for name in _operations(protocol):
        member = getattr(protocol, name)
        hints = get_type_hints(member)
        params = list(_operations(protocol)[name].parameters)
        found: list[tuple[Any, TypeVar]] = []
        for key, hint in hints.items():
            slot: Any = _RETURN if key == _RETURN else params.index(key)
            found.extend((slot, tv) for tv in _typevars_in(hint))
        if found:
            slots[name] = found
    return slots


# ============================================================================
#                               Helpers
# ============================================================================


def _origin(capability: Any) -> type:
    origin = get_origin(capability) or capability
    if not isinstance(origin, type):
        raise TypeError(f"{capability!r} is not a capability protocol")
    return origin


def _typevars_in(hint: Any) -> list[TypeVar]:
    if isinstance(hint, TypeVar):
        return [hint]
    return [tv for arg in get_args(hint) for tv in _typevars_in(arg)]


def _classes_in(hint: Any) -> list[type]:
    if get_origin(hint) in _UNION_TYPES:
        return [cls for arg in get_args(hint) for cls in _classes_in(arg)]
    if _is_plain_class(hint) and hint is not type(None):
        return [hint]
    return []


def _param_at(params: list[str], index: int) -> str | None:
    return params[index] if index < len(params) else None


def _is_plain_class(hint: Any) -> bool:
    return isinstance(hint, type) and get_origin(hint) is None


def _name(tp: Any) -> str:
    origin = get_origin(tp)
    if isinstance(origin, type):
        return f"{origin.__name__}[{', '.join(_name(arg) for arg in get_args(tp))}]"
    return getattr(tp, "__name__", repr(tp))
