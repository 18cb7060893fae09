"""Bootstrap (composition root) for CAPABLE.

Assembles the application at runtime: builds the production provider, binds
it to every action's dependency parameter, and composes the message bus.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `capable.adapters`, `capable.service_layer`,
  `capable.interfaces`, `capable.domain`, and `capable.config`.
- Inner layers must not import `capable.bootstrap`.

No business rules live here; this is assembly only.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    build_message_bus,
    build_user_store,
    inject_dependencies,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "build_message_bus",
    "build_user_store",
    "inject_dependencies",
]
