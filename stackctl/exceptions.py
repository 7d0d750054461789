"""
stackctl Exception Hierarchy

Clean exception hierarchy for consistent error handling across the client
and the CLI.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of failure kinds produced at the transport boundary."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CLIENT = "client"
    SERVER = "server"
    TRANSPORT = "transport"

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        """Map an HTTP status code to its error kind."""
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code == 401:
            return cls.UNAUTHORIZED
        if status_code == 403:
            return cls.FORBIDDEN
        if 400 <= status_code < 500:
            return cls.CLIENT
        return cls.SERVER


class StackCtlError(Exception):
    """Base exception for all stackctl errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(StackCtlError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(StackCtlError):
    """Raised when caller input is invalid."""

    pass


class ParseError(StackCtlError):
    """Raised when a response payload cannot be decoded."""

    pass


class UnsupportedError(StackCtlError):
    """Raised when a feature has no equivalent on the resolved stack kind."""

    pass


class TransportError(StackCtlError):
    """Raised when the HTTP request itself fails (connection, DNS, TLS)."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message, context=f"URL: {url}" if url else None)


class StatusError(StackCtlError):
    """Raised when the server answers with an unexpected status code."""

    def __init__(self, status_code: int, body: str = "", url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        self.kind = ErrorKind.from_status(status_code)
        super().__init__(self._status_message())

    def _status_message(self) -> str:
        if not self.body:
            return f"api returned status {self.status_code}"
        return f"api returned status {self.status_code}: {self.body}"


class StackOperationError(StackCtlError):
    """Raised when a stack operation fails; wraps the underlying cause."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        text = f"{message}: {cause}" if cause is not None else message
        super().__init__(text)


class DualPathError(StackOperationError):
    """Raised when both the regular and the edge path failed."""

    def __init__(self, message: str, regular_error: Exception, edge_error: Exception):
        self.regular_error = regular_error
        self.edge_error = edge_error
        super().__init__(
            f"{message}: {regular_error} (edge stack also failed: {edge_error})"
        )
        self.cause = regular_error
