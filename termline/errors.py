# errors.py

from typing import Optional


class TermlineError(Exception):
    """Base class for all termline errors."""


class TransportError(TermlineError):
    """A call to the remote terminal failed (timeout, HTTP status, connection, bad body)."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.status_code = status_code


class ConfigError(TermlineError):
    """Raised when client configuration is invalid."""
