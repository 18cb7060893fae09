"""Module defining Commands: the plain-data input of every action."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class RegisterUser(Command):
    """Command to register a new user with a profile."""

    email: str
    nickname: str


@dataclass(frozen=True)
class PromoteUser(Command):
    """Command to grant admin rights to an existing user."""

    user_id: int


@dataclass(frozen=True)
class DeactivateUser(Command):
    """Command to deactivate an existing user."""

    user_id: int
