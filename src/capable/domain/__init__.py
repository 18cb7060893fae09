"""Domain layer for CAPABLE.

The full production entities and the narrow shapes actions work with.
Technology-agnostic: nothing here knows about storage or transport.

Dependency rule: do not import from `capable.adapters`, `capable.service_layer`
or `capable.entrypoints`.
"""
