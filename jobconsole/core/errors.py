from __future__ import annotations


class ConsoleError(Exception):
    """Base class for failures reported to the operator."""


class ParseError(ConsoleError):
    """Raised when an uploaded file is structurally malformed."""


class ValidationError(ConsoleError):
    """Raised when a mapping or form payload is incomplete or invalid."""


class NetworkError(ConsoleError):
    """Raised on transport failures or non-2xx responses from the remote API."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFound(NetworkError):
    """Raised when the referenced record does not exist on the remote side."""


class SubmissionError(ConsoleError):
    """Raised when a CSV batch could not be handed to the remote importer."""
