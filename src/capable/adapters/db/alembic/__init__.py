"""Alembic migration scripts for the CAPABLE schema."""
