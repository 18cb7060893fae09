"""SQLAlchemy engine, metadata, types and migrations shared by SQL adapters."""
