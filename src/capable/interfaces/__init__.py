"""Interfaces (application boundary) for CAPABLE.

Framework-free contracts shared by actions and providers: the machinery for
declaring and checking per-action capability protocols, and the failures a
provider may signal.

Dependency rule: this package is independent; do not import from any other
`capable.*` module. It may be imported by `capable.domain`,
`capable.service_layer`, `capable.adapters` and `capable.bootstrap`.
"""
