"""
Exceptions for BioStar 2 API operations.

Every failure of the request pipeline maps to exactly one of these classes,
so callers can branch on the exception type.
"""
from enum import Enum
from typing import Optional


class BioStarException(Exception):
    """Base exception for all BioStar-related errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(BioStarException):
    """Input rejected locally before any request was sent."""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            field: Name of the offending field
            message: Human readable reason
        """
        self.field = field
        super().__init__(message or f"Invalid value for '{field}'")


class AuthFailure(Enum):
    """Reason for an AuthError."""
    NOT_AUTHENTICATED = 'not-authenticated'
    REJECTED = 'rejected'
    MISSING_TOKEN = 'missing-token'


class AuthError(BioStarException):
    """Exception raised for authentication-related errors."""

    def __init__(
        self,
        reason: AuthFailure,
        message: Optional[str] = None,
        status: Optional[int] = None,
        body: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            reason: Which authentication step failed
            message: Error message
            status: HTTP status of the login response (if any)
            body: Raw response body (if any)
        """
        self.reason = reason
        self.status = status
        self.body = body
        super().__init__(message or f"Authentication failed: {reason.value}")


class SessionExpiredError(BioStarException):
    """The server answered 401; the local session has been cleared."""

    def __init__(self, body: Optional[str] = None, status: int = 401) -> None:
        self.status = status
        self.body = body
        super().__init__("Session expired or was revoked, login again")


class NetworkError(BioStarException):
    """The transport could not complete the exchange."""
    pass


class ServerError(BioStarException):
    """Exception raised for non-success statuses other than 401."""

    def __init__(
        self,
        status: int,
        body: Optional[str] = None,
        code: Optional[str] = None,
        message: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            status: HTTP status code
            body: Raw response body
            code: Error code from the server's Response envelope (if present)
            message: Error message from the server's Response envelope (if present)
        """
        self.status = status
        self.body = body
        self.code = code
        text = f"Server returned {status}"
        if message:
            text += f": {message}"
        super().__init__(text)
        self.server_message = message


class DecodeError(BioStarException):
    """A response body did not match the expected schema."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        self.body = body
        super().__init__(message)
