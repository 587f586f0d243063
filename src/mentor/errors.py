"""Error types shared across the mentor packages.

Every error is caught at an operation boundary and turned into
user-visible state; none of them is fatal to the process.
"""


class MentorError(Exception):
    """Base class for all mentor errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class CompletionError(MentorError):
    """Transport or upstream failure while calling the completion service."""


class MalformedArchive(MentorError):
    """An imported archive payload is not a JSON array of archive entries."""


class AuthError(MentorError):
    """Signup or login failed."""


class AccountExists(AuthError):
    """Signup for an email that is already registered."""

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class AccountNotFound(AuthError):
    """Login for an email that is not registered."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class InvalidCredentials(AuthError):
    """Login with a wrong password, or an invalid/expired token."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)
