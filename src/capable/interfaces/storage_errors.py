"""Failures that user storage providers signal by raising.

Every provider of an operation documented to raise one of these raises it
under the same condition, so actions branch the same way whichever provider
they are given.
"""

from .capability import CapabilityError


class UserNotFoundError(CapabilityError):
    """Raised when an operation targets a user id that is not stored.

    Attributes:
        user_id (int): The id that was not found.
    """

    def __init__(self, user_id: int) -> None:
        super().__init__(f"user {user_id} not found")
        self.user_id = user_id


class EmailTakenError(CapabilityError):
    """Raised when saving a user would give it an email another user has.

    Attributes:
        email (str): The email already in use.
    """

    def __init__(self, email: str) -> None:
        super().__init__(f"email {email} is already registered")
        self.email = email
