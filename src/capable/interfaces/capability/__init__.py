"""Capability interface package: declaring, deriving and checking per-action protocols."""

from .capability import (
    DEPENDENCY_ATTR,
    DependencySpec,
    capability_of,
    check_capability,
    check_entity,
    covers,
    default_capability,
    default_instantiation,
    default_type_argument,
    dependency_of,
    entity_shape_of,
    operations,
    shape_fields,
)
from .errors import (
    CapabilityContractError,
    CapabilityError,
    ContractViolationError,
    EntityShapeError,
)

__all__ = [
    "DEPENDENCY_ATTR",
    "CapabilityContractError",
    "CapabilityError",
    "ContractViolationError",
    "DependencySpec",
    "EntityShapeError",
    "capability_of",
    "check_capability",
    "check_entity",
    "covers",
    "default_capability",
    "default_instantiation",
    "default_type_argument",
    "dependency_of",
    "entity_shape_of",
    "operations",
    "shape_fields",
]
