"""Service layer for CAPABLE.

Actions (one business operation each), the commands that carry their input,
the results they return, and the message bus that routes commands to them.

Dependency rule: may import `capable.domain` and `capable.interfaces`; must not
import `capable.adapters`, `capable.bootstrap` or `capable.entrypoints`.
"""
