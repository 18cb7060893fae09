"""Adapters (infrastructure) for CAPABLE.

Concrete providers of the capabilities actions declare: SQLAlchemy-backed
storage, an in-memory store, and the recording stub used in tests. Also the
persistence wiring they need (engines, metadata, migrations).

Dependency rule: may import `capable.domain` and `capable.interfaces`; neither
may import this package.
"""
