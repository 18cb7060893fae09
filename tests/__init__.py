"""CAPABLE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Behavior every user storage provider must share, run against each one.
- integration/  : Real interactions with databases and migrations.
- e2e/          : The ``capable`` CLI invoked as a user would.
- fixtures/     : Shared pytest fixtures (loaded via ``pytest_plugins``).
- helpers/      : Shared utilities (no tests here).

General guidance
- Keep unit fast and deterministic; use `RecordingStub` or the in-memory store
  at the storage boundary.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
