"""User storage providers."""

from .in_memory import InMemoryUserStore
from .sqlalchemy_store import SqlAlchemyUserStore

__all__ = ["InMemoryUserStore", "SqlAlchemyUserStore"]
