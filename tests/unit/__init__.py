"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real I/O (DB/FS/network); an in-memory SQLite engine is the one exception,
  used to unit test the engine factory.
- Prefer behavior-centric assertions over implementation details.
"""
