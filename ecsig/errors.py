"""Exceptions raised while signing a request."""

from typing import Optional


class SigningError(Exception):
    """Base class for every signing failure."""


class MissingHeader(SigningError, KeyError):
    """A header that must be signed is absent from the header set."""

    def __init__(self, name: str) -> None:
        self.name = name.lower()
        super().__init__(self.name)

    def __str__(self) -> str:
        return f"Missing required header: {self.name}"


class MissingCredentials(SigningError):
    """The access key id or secret key is empty or was not supplied."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "AWS credentials are missing or empty")


class InvalidTimestampFormat(SigningError, ValueError):
    """The request timestamp is not basic ISO-8601 (YYYYMMDDTHHMMSSZ)."""

    def __init__(self, timestamp: object) -> None:
        self.timestamp = timestamp
        super().__init__(timestamp)

    def __str__(self) -> str:
        return f"Invalid timestamp {self.timestamp!r}, expected YYYYMMDDTHHMMSSZ"
